"""Tests for reporting window parsing."""

from datetime import UTC, date, datetime, time, timedelta, timezone

import pytest

from ledger_kernel.domain.time_range import parse_time_range
from ledger_kernel.exceptions import InvalidTimeRangeError


class TestDateOnlyBounds:
    """A date-only bound covers its whole day."""

    def test_date_strings_span_full_days(self):
        lower, upper = parse_time_range("2020-08-15", "2020-08-17")

        assert lower == datetime(2020, 8, 15, 0, 0, tzinfo=UTC)
        assert upper == datetime.combine(date(2020, 8, 17), time.max, tzinfo=UTC)

    def test_same_day_window(self):
        lower, upper = parse_time_range("2020-08-15", "2020-08-15")
        assert lower < upper
        assert upper - lower > timedelta(hours=23, minutes=59)

    @pytest.mark.parametrize(
        "start, end", [("20200815", "20200817"), (" 2020-08-15 ", "20200817")]
    )
    def test_compact_dates_span_full_days(self, start, end):
        lower, upper = parse_time_range(start, end)

        assert lower == datetime(2020, 8, 15, 0, 0, tzinfo=UTC)
        assert upper == datetime.combine(date(2020, 8, 17), time.max, tzinfo=UTC)

    def test_date_objects(self):
        lower, upper = parse_time_range(date(2020, 8, 15), date(2020, 8, 16))
        assert lower.date() == date(2020, 8, 15)
        assert upper.date() == date(2020, 8, 16)
        assert upper.time() == time.max


class TestDatetimeBounds:
    def test_iso_datetime_strings_are_exact(self):
        lower, upper = parse_time_range("2020-08-15T10:00:00", "2020-08-15T11:30:00")
        assert lower == datetime(2020, 8, 15, 10, 0, tzinfo=UTC)
        assert upper == datetime(2020, 8, 15, 11, 30, tzinfo=UTC)

    def test_naive_datetime_read_as_utc(self):
        lower, _ = parse_time_range(datetime(2020, 1, 1, 8), datetime(2020, 1, 2))
        assert lower.tzinfo is UTC

    def test_offset_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        lower, _ = parse_time_range(
            datetime(2020, 1, 1, 10, tzinfo=plus_two), "2020-01-02"
        )
        assert lower == datetime(2020, 1, 1, 8, tzinfo=UTC)

    def test_equal_bounds_allowed(self):
        lower, upper = parse_time_range("2020-08-15T10:00:00", "2020-08-15T10:00:00")
        assert lower == upper


class TestInvalidRanges:
    @pytest.mark.parametrize(
        "start, end",
        [
            (None, "2020-08-17"),
            ("2020-08-15", None),
            ("", "2020-08-17"),
            ("yesterday", "2020-08-17"),
            ("2020-08-15", "2020-13-45"),
            (12345, "2020-08-17"),
        ],
    )
    def test_missing_or_unparseable(self, start, end):
        with pytest.raises(InvalidTimeRangeError) as exc_info:
            parse_time_range(start, end)
        assert exc_info.value.http_status == 400

    def test_start_after_end(self):
        with pytest.raises(InvalidTimeRangeError, match="start is after end"):
            parse_time_range("2020-08-18", "2020-08-17")
