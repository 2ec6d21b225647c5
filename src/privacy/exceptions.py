"""
Custom exceptions for raw data anonymization.
"""


class PrivacyError(Exception):
    """Base exception for all anonymization errors."""
    pass


class InvalidPeriod(PrivacyError):
    """Raised when a date or date range cannot be resolved."""
    pass


class ConfigError(PrivacyError):
    """Raised for configuration errors."""
    pass


class ColumnError(PrivacyError):
    """Base exception for column validation errors."""
    pass


class UnknownColumnError(ColumnError):
    """Raised when a column to unset does not exist in the log table."""
    pass


class ProtectedColumnError(ColumnError):
    """Raised when a key, site or time column is requested to be unset."""
    pass


class MutationFailure(PrivacyError):
    """Raised when the record store rejects an anonymization update."""
    pass
