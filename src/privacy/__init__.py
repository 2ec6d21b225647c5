"""
Raw Data Anonymization Package

Models, period resolution and the mutation engine used to anonymize or
unset stored raw log data.
"""

from .base import Base
from .logs import LogLinkVisitAction, LogVisit
from .exceptions import (
    ConfigError,
    InvalidPeriod,
    MutationFailure,
    PrivacyError,
    ProtectedColumnError,
    UnknownColumnError,
)
from .period import Period, resolve_period
