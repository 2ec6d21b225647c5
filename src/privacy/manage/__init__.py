"""
Log data management functions.

Write operations that irreversibly modify stored raw log data.
"""

from .log_data import LogDataAnonymizer
from .transaction import management_transaction
