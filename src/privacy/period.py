"""
Date and date range resolution for raw data anonymization.

A date token is either a single day (``2015-01-03``) or a comma separated
range (``2015-01-05,2015-02-12``). Both resolve to a :class:`Period` whose
bounds are UTC instants, start of the first day to end of the last day.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from privacy.exceptions import InvalidPeriod


__all__ = [
    'DATETIME_FORMAT',
    'DEFAULT_START_DATE',
    'Period',
    'default_date_range',
    'parse_date',
    'resolve_period',
]


DATE_FORMAT = '%Y-%m-%d'
DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'

# First day any tracked data can exist.
DEFAULT_START_DATE = '2008-01-01'

END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class Period:
    """Resolved time window; both bounds inclusive, in UTC."""

    start: datetime
    end: datetime

    @property
    def start_string(self) -> str:
        return self.start.strftime(DATETIME_FORMAT)

    @property
    def end_string(self) -> str:
        return self.end.strftime(DATETIME_FORMAT)

    def __str__(self):
        return f"{self.start_string} - {self.end_string}"


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def default_date_range(today: Optional[date] = None) -> str:
    """Return the default token covering all data up to and including today."""
    today = today or _utc_today()
    return f"{DEFAULT_START_DATE},{today.strftime(DATE_FORMAT)}"


def parse_date(value: str, today: Optional[date] = None) -> date:
    """
    Parse one date part of a token.

    Accepts ``YYYY-MM-DD`` and the keywords ``today``, ``now`` and
    ``yesterday``.

    Raises:
        InvalidPeriod: If the value is not a recognised date
    """
    today = today or _utc_today()
    keyword = value.strip().lower()

    if keyword in ('today', 'now'):
        return today
    if keyword == 'yesterday':
        return today - timedelta(days=1)

    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidPeriod(f"Invalid date '{value}'. Use YYYY-MM-DD, 'today' or 'yesterday'")


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _day_end(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY, tzinfo=timezone.utc)


def resolve_period(token: str, today: Optional[date] = None) -> Period:
    """
    Resolve a date token into a :class:`Period`.

    A token without a comma is a single day, a token with one comma is a
    ``start,end`` range.

    Args:
        token: Date or date range
        today: Reference day for keywords (defaults to the current UTC day)

    Returns:
        Period: Start of the first day to end of the last day, in UTC

    Raises:
        InvalidPeriod: If the token cannot be resolved, or the range ends
            before it starts
    """
    if token is None or not token.strip():
        raise InvalidPeriod("No date given")

    if ',' not in token:
        day = parse_date(token, today)
        return Period(_day_start(day), _day_end(day))

    parts = token.split(',')
    if len(parts) != 2:
        raise InvalidPeriod(f"Invalid date range '{token}'. Use 'start,end'")

    first = parse_date(parts[0], today)
    last = parse_date(parts[1], today)
    if last < first:
        raise InvalidPeriod(f"Invalid date range '{token}': end date is before start date")

    return Period(_day_start(first), _day_end(last))
