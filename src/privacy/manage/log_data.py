"""
Raw log data anonymization.

Irreversible bulk updates of the log_visit and log_link_visit_action tables,
restricted to a time window and optionally to a set of sites. Rows are
processed in primary key batches so that long ranges never lock a whole
table at once; each public call still commits as one transaction.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from privacy.config import DEFAULT_BATCH_SIZE, DEFAULT_IP_MASK_LENGTH
from privacy.exceptions import ProtectedColumnError, UnknownColumnError
from privacy.geo import DisabledLocationProvider, LocationProvider, location_values
from privacy.ip import anonymize_ip as mask_ip, effective_mask_length, ip_to_string
from privacy.logs import LogLinkVisitAction, LogVisit
from privacy.manage.transaction import management_transaction


__all__ = [
    'LogDataAnonymizer',
]

logger = logging.getLogger(__name__)


def _to_utc_naive(value: datetime) -> datetime:
    """Log tables store naive UTC datetimes."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class LogDataAnonymizer:
    """Anonymize or unset stored raw log data."""

    def __init__(self, session: Session,
                 ip_mask_length: int = DEFAULT_IP_MASK_LENGTH,
                 location_provider: Optional[LocationProvider] = None,
                 batch_size: int = DEFAULT_BATCH_SIZE):
        """
        Initialize anonymizer.

        Args:
            session: SQLAlchemy session bound to the record store
            ip_mask_length: Configured IP mask in bytes; at least 2 is applied
            location_provider: Used to re-evaluate locations from masked IPs
            batch_size: Primary key range processed per statement
        """
        self.session = session
        self.ip_mask_length = effective_mask_length(ip_mask_length)
        self.location_provider = location_provider or DisabledLocationProvider()
        self.batch_size = batch_size

    @classmethod
    def from_config(cls, session: Session, config, location_provider: Optional[LocationProvider] = None):
        """Build an anonymizer from a PrivacyConfig."""
        return cls(
            session,
            ip_mask_length=config.ip_mask_length,
            location_provider=location_provider,
            batch_size=config.batch_size,
        )

    # ------------------------------------------------------------------
    # Column metadata
    # ------------------------------------------------------------------

    def get_available_visit_columns_to_unset(self) -> Dict[str, Optional[object]]:
        """Columns of log_visit that may be unset, with their reset value."""
        return LogVisit.column_defaults()

    def get_available_link_visit_action_columns_to_unset(self) -> Dict[str, Optional[object]]:
        """Columns of log_link_visit_action that may be unset, with their reset value."""
        return LogLinkVisitAction.column_defaults()

    # ------------------------------------------------------------------
    # Public mutation operations
    # ------------------------------------------------------------------

    def anonymize_visit_information(self, id_sites: Optional[Iterable[int]],
                                    start_date: datetime, end_date: datetime,
                                    anonymize_ip: bool, anonymize_location: bool) -> int:
        """
        Mask visit IPs and/or re-evaluate visit locations.

        The location is always looked up with the masked IP, even when the
        masked IP itself is not stored.

        Args:
            id_sites: Site ids to restrict to, None for all sites
            start_date: Window start (inclusive)
            end_date: Window end (inclusive)
            anonymize_ip: Store the masked IP
            anonymize_location: Overwrite location columns

        Returns:
            int: Number of log_visit rows anonymized
        """
        if not anonymize_ip and not anonymize_location:
            return 0

        table = LogVisit.__table__
        conditions = self._window_conditions(LogVisit, id_sites, start_date, end_date)
        num_anonymized = 0

        with management_transaction(self.session, 'anonymize visit information'):
            for lower, upper in self._id_ranges(LogVisit, conditions):
                rows = self.session.execute(
                    select(table.c.idvisit, table.c.location_ip)
                    .where(*conditions, table.c.idvisit.between(lower, upper))
                ).all()

                for idvisit, location_ip in rows:
                    values = self._anonymized_visit_values(idvisit, location_ip, anonymize_ip, anonymize_location)
                    if not values:
                        continue
                    self.session.execute(
                        update(table).where(table.c.idvisit == idvisit).values(**values)
                    )
                    num_anonymized += 1

                logger.debug(f"Anonymized log_visit rows {lower}-{upper} ({len(rows)} visits)")

        logger.info(f"Anonymized {num_anonymized} log_visit rows "
                    f"(ip={anonymize_ip}, location={anonymize_location})")
        return num_anonymized

    def unset_log_visit_table_columns(self, id_sites: Optional[Iterable[int]],
                                      start_date: datetime, end_date: datetime,
                                      columns: Iterable[str]) -> int:
        """
        Reset log_visit columns to their default value.

        Returns:
            int: Number of log_visit rows updated
        """
        return self._unset_columns(LogVisit, id_sites, start_date, end_date, columns)

    def unset_log_link_visit_action_columns(self, id_sites: Optional[Iterable[int]],
                                            start_date: datetime, end_date: datetime,
                                            columns: Iterable[str]) -> int:
        """
        Reset log_link_visit_action columns to their default value.

        Returns:
            int: Number of log_link_visit_action rows updated
        """
        return self._unset_columns(LogLinkVisitAction, id_sites, start_date, end_date, columns)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _anonymized_visit_values(self, idvisit: int, location_ip: Optional[bytes],
                                 anonymize_ip: bool, anonymize_location: bool) -> Dict:
        try:
            masked_ip = mask_ip(location_ip, self.ip_mask_length)
        except ValueError:
            logger.warning(f"Skipping visit {idvisit}: stored IP is not a valid address")
            return {}

        values = {}
        if anonymize_ip and masked_ip is not None:
            values['location_ip'] = masked_ip
        if anonymize_location:
            location = self.location_provider.get_location(ip_to_string(masked_ip))
            values.update(location_values(location))
        return values

    def _validate_columns(self, model, columns: Iterable[str]) -> List[str]:
        """
        Check requested columns against the table.

        Raises:
            UnknownColumnError: If a column does not exist
            ProtectedColumnError: If a column may not be unset
        """
        table = model.__table__
        protected = model.protected_columns()
        validated = []

        for column in columns:
            name = column.strip()
            if not name:
                continue
            if name not in table.columns:
                raise UnknownColumnError(f"Column '{name}' does not exist in {table.name}")
            if name in protected:
                raise ProtectedColumnError(f"Column '{name}' of {table.name} cannot be unset")
            if name not in validated:
                validated.append(name)

        return validated

    def _unset_columns(self, model, id_sites, start_date, end_date, columns) -> int:
        columns = self._validate_columns(model, columns)
        if not columns:
            return 0

        table = model.__table__
        id_column = model.id_column()
        defaults = model.column_defaults()
        values = {name: defaults[name] for name in columns}
        conditions = self._window_conditions(model, id_sites, start_date, end_date)
        num_updated = 0

        with management_transaction(self.session, f"unset {table.name} columns"):
            for lower, upper in self._id_ranges(model, conditions):
                result = self.session.execute(
                    update(table)
                    .where(*conditions, id_column.between(lower, upper))
                    .values(**values)
                )
                num_updated += max(result.rowcount, 0)
                logger.debug(f"Unset {', '.join(columns)} in {table.name} rows {lower}-{upper}")

        logger.info(f"Unset {', '.join(columns)} in {num_updated} {table.name} rows")
        return num_updated

    def _window_conditions(self, model, id_sites, start_date: datetime, end_date: datetime) -> list:
        table = model.__table__
        time_column = model.time_column()
        conditions = [
            time_column >= _to_utc_naive(start_date),
            time_column <= _to_utc_naive(end_date),
        ]
        if id_sites is not None:
            conditions.append(table.c.idsite.in_(sorted(set(id_sites))))
        return conditions

    def _id_ranges(self, model, conditions) -> Iterator[Tuple[int, int]]:
        """Yield inclusive primary key ranges covering the matching rows."""
        id_column = model.id_column()
        min_id, max_id = self.session.execute(
            select(func.min(id_column), func.max(id_column)).where(*conditions)
        ).one()

        if min_id is None:
            return

        for lower in range(min_id, max_id + 1, self.batch_size):
            yield lower, min(lower + self.batch_size - 1, max_id)
