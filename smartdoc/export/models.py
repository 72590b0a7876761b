from dataclasses import dataclass
from enum import Enum


class ExportFormat(str, Enum):
    DOCUMENT = "document"
    MARKDOWN = "markdown"
    JSON = "json"
    PLAIN_TEXT = "plainText"


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable rendering of an analysis result."""

    data: bytes
    extension: str
    mime_type: str
    file_name: str
