from smartdoc.exceptions import SmartDocError


class ProcessorError(SmartDocError):
    """Base exception for pipeline orchestration errors."""


class AlreadyInFlightError(ProcessorError):
    """Raised when a pipeline run or chat request is already in progress."""


class IllegalTransitionError(ProcessorError):
    """Raised when a pipeline phase change is not allowed."""
