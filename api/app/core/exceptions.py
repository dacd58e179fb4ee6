"""
Custom exceptions for the localization core.

The transport layer alone maps these to protocol responses.
"""


class LocalizationException(Exception):
    """Base exception for all localization application exceptions."""
    pass


class ValidationError(LocalizationException):
    """Raised when input is malformed (wrong code length, bad key pattern, blank fields)."""
    pass


class NotFoundError(LocalizationException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(LocalizationException):
    """Raised when there's a conflict (e.g., duplicate language code or key)."""
    pass


class StorageFailure(LocalizationException):
    """Raised when the backing store is unavailable or a transaction was aborted."""
    pass
