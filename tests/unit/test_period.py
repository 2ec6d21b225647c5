"""
Unit tests for date and date range resolution.
"""

import pytest
from datetime import date, datetime, timezone

from privacy.exceptions import InvalidPeriod
from privacy.period import default_date_range, parse_date, resolve_period


TODAY = date(2015, 3, 10)


class TestResolveSingleDay:
    """A token without a comma resolves to one calendar day."""

    def test_day_bounds(self):
        period = resolve_period('2015-01-03')
        assert period.start == datetime(2015, 1, 3, 0, 0, 0, tzinfo=timezone.utc)
        assert period.end == datetime(2015, 1, 3, 23, 59, 59, tzinfo=timezone.utc)

    @pytest.mark.parametrize('token', ['2008-01-01', '2015-02-28', '2016-02-29', '2024-12-31'])
    def test_start_and_end_on_same_day(self, token):
        period = resolve_period(token)
        assert period.start.date() == period.end.date()
        assert period.start <= period.end

    def test_formatted_bounds(self):
        period = resolve_period('2015-01-03')
        assert period.start_string == '2015-01-03 00:00:00'
        assert period.end_string == '2015-01-03 23:59:59'

    def test_keywords(self):
        assert resolve_period('today', today=TODAY).start.date() == TODAY
        assert resolve_period('now', today=TODAY).start.date() == TODAY
        assert resolve_period('yesterday', today=TODAY).start.date() == date(2015, 3, 9)


class TestResolveRange:
    """A 'start,end' token spans from the start of one day to the end of another."""

    def test_range_bounds(self):
        period = resolve_period('2015-01-05,2015-02-12')
        assert period.start == datetime(2015, 1, 5, 0, 0, 0, tzinfo=timezone.utc)
        assert period.end == datetime(2015, 2, 12, 23, 59, 59, tzinfo=timezone.utc)

    def test_same_day_range(self):
        assert resolve_period('2015-01-03,2015-01-03') == resolve_period('2015-01-03')

    def test_range_with_keyword_end(self):
        period = resolve_period('2015-03-01,today', today=TODAY)
        assert period.end == datetime(2015, 3, 10, 23, 59, 59, tzinfo=timezone.utc)

    def test_default_range_covers_everything_up_to_today(self):
        token = default_date_range(today=TODAY)
        assert token == '2008-01-01,2015-03-10'
        period = resolve_period(token, today=TODAY)
        assert period.start_string == '2008-01-01 00:00:00'
        assert period.end_string == '2015-03-10 23:59:59'


class TestInvalidPeriod:
    """Unparsable tokens raise InvalidPeriod."""

    @pytest.mark.parametrize('token', [
        '', '   ', 'not-a-date', '2015-13-01', '2015-02-30', '03/01/2015',
        '2015-01-01,', ',2015-01-01', '2015-01-01,2015-01-02,2015-01-03',
    ])
    def test_unparsable(self, token):
        with pytest.raises(InvalidPeriod):
            resolve_period(token)

    def test_none(self):
        with pytest.raises(InvalidPeriod):
            resolve_period(None)

    def test_range_ending_before_start(self):
        with pytest.raises(InvalidPeriod, match="end date is before start date"):
            resolve_period('2015-02-12,2015-01-05')

    def test_parse_date_message_names_value(self):
        with pytest.raises(InvalidPeriod, match="'tomorrowish'"):
            parse_date('tomorrowish')
