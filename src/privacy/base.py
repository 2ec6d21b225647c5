#-------------------------------------------------------------------------bh-
#-------------------------------------------------------------------------eh-

from typing import Dict, List, Optional
from sqlalchemy import (
    Column, Integer, String, Float, DateTime, BigInteger, LargeBinary,
    SmallInteger, Text, Index
)
from sqlalchemy.orm import declarative_base


#-------------------------------------------------------------------------bm-
Base = declarative_base()

# ============================================================================
# Mixins - Common patterns extracted
# ============================================================================
class SiteScopedMixin:
    """Provides the site and visitor identifiers every log row carries."""

    idsite = Column(Integer, nullable=False)
    idvisitor = Column(LargeBinary(8), nullable=False)


class CustomVariableMixin:
    """Provides the first custom variable slot."""

    custom_var_k1 = Column(String(200), nullable=True)
    custom_var_v1 = Column(String(200), nullable=True)


class LogTableMixin:
    """Common behaviour of raw log tables.

    Subclasses name the primary key and the time column that places a row
    in a date range. Those columns, together with the site and visitor
    identifiers, can never be unset.
    """

    __time_column__: str = None

    @classmethod
    def id_column(cls) -> Column:
        return cls.__table__.primary_key.columns.values()[0]

    @classmethod
    def time_column(cls) -> Column:
        return cls.__table__.columns[cls.__time_column__]

    @classmethod
    def protected_columns(cls) -> List[str]:
        """Columns that can never be unset.

        Key, site, visitor and time columns, plus NOT NULL columns that have
        no default to reset to.
        """
        protected = [cls.id_column().name, 'idsite', 'idvisitor', cls.__time_column__]
        for column in cls.__table__.columns:
            if column.name not in protected and not column.nullable and column.default is None:
                protected.append(column.name)
        return protected

    @classmethod
    def column_defaults(cls) -> Dict[str, Optional[object]]:
        """Reset value for every column that may be unset."""
        protected = set(cls.protected_columns())
        defaults = {}
        for column in cls.__table__.columns:
            if column.name in protected:
                continue
            default = column.default.arg if column.default is not None and column.default.is_scalar else None
            defaults[column.name] = default
        return defaults
#-------------------------------------------------------------------------em-
