from smartdoc.exceptions import SmartDocError


class ChatError(SmartDocError):
    """Base exception for chat session errors."""


class NoActiveAnalysisError(ChatError):
    """Raised when a question is asked before any analysis has completed."""
