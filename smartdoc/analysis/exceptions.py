from smartdoc.exceptions import SmartDocError


class AnalysisError(SmartDocError):
    """Base exception for analysis service errors."""


class ServiceUnavailableError(AnalysisError):
    """Raised when the analysis or chat provider call fails."""


class SchemaMismatchError(AnalysisError):
    """Raised when a provider response fails structural validation."""
