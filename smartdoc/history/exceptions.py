from smartdoc.exceptions import SmartDocError


class HistoryError(SmartDocError):
    """Base exception for history ledger errors."""


class PersistenceCorruptError(HistoryError):
    """Raised when persisted history cannot be decoded."""
