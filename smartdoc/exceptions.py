class SmartDocError(Exception):
    """Base exception for all smartdoc errors."""
