import mimetypes
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class RawFile:
    """A file submitted for analysis, before any bytes are read."""

    name: str
    size_bytes: int
    mime_type: str
    path: Path

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "RawFile":
        """Describe a file on disk using its stat size and guessed MIME type."""
        if mime_type is None:
            guessed, _ = mimetypes.guess_type(path.name)
            mime_type = guessed or "application/octet-stream"
        return cls(
            name=path.name,
            size_bytes=path.stat().st_size,
            mime_type=mime_type,
            path=path,
        )


@dataclass(frozen=True)
class Document:
    """An ingested file: identifying metadata plus base64-encoded content."""

    id: str
    name: str
    byte_size: int
    mime_type: str
    encoded_bytes: str
    file_hash_sha256: str
    ingested_at: datetime
