import asyncio
import base64
import hashlib
import uuid
from datetime import datetime, timezone

from smartdoc.ingestion.exceptions import FileReadError, SizeExceededError
from smartdoc.ingestion.models import Document, RawFile
from smartdoc.logging.logger import Log

MAX_FILE_SIZE_BYTES = 20 * 1024 * 1024


class FileIngestor:
    """Reads a submitted file and produces a transferable Document."""

    def __init__(self, max_size_bytes: int = MAX_FILE_SIZE_BYTES) -> None:
        self._max_size_bytes = max_size_bytes

    def check_size(self, raw_file: RawFile) -> None:
        """Reject oversized files before any bytes are read.

        Raises:
            SizeExceededError: if the declared size is above the limit.
        """
        if raw_file.size_bytes > self._max_size_bytes:
            raise SizeExceededError(
                f"File '{raw_file.name}' is {raw_file.size_bytes} bytes, "
                f"exceeds {self._describe_limit()} limit"
            )

    async def ingest(self, raw_file: RawFile) -> Document:
        """Read the file fully and encode it as base64.

        Raises:
            SizeExceededError: if the file is above the limit.
            FileReadError: if the file cannot be read.
        """
        self.check_size(raw_file)
        try:
            raw_bytes = await asyncio.to_thread(raw_file.path.read_bytes)
        except OSError as exc:
            raise FileReadError(f"Failed to read '{raw_file.name}': {exc}") from exc

        # The file may have grown between stat and read.
        if len(raw_bytes) > self._max_size_bytes:
            raise SizeExceededError(
                f"File '{raw_file.name}' is {len(raw_bytes)} bytes, exceeds limit"
            )

        document = Document(
            id=str(uuid.uuid4()),
            name=raw_file.name,
            byte_size=len(raw_bytes),
            mime_type=raw_file.mime_type,
            encoded_bytes=base64.b64encode(raw_bytes).decode("ascii"),
            file_hash_sha256=hashlib.sha256(raw_bytes).hexdigest(),
            ingested_at=datetime.now(timezone.utc),
        )
        Log.info(f"Ingested '{document.name}' ({document.byte_size} bytes) as {document.id}")
        return document

    def _describe_limit(self) -> str:
        mib = 1024 * 1024
        if self._max_size_bytes % mib == 0:
            return f"{self._max_size_bytes // mib}MB"
        return f"{self._max_size_bytes} bytes"
