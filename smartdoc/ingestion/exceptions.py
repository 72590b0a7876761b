from smartdoc.exceptions import SmartDocError


class IngestionError(SmartDocError):
    """Base exception for file ingestion errors."""


class SizeExceededError(IngestionError):
    """Raised when a submitted file is larger than the configured limit."""


class FileReadError(IngestionError):
    """Raised when a submitted file cannot be read."""
