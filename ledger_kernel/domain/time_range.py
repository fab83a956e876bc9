"""
Reporting window parsing.

Bounds may be datetimes, dates, or ISO 8601 strings.  A date-only bound
covers the whole day: ``start`` is the first instant of its day and ``end``
the last, so ``("2020-08-15", "2020-08-17")`` spans three full days.  Naive
values are read as UTC.
"""

from datetime import UTC, date, datetime, time

from ledger_kernel.exceptions import InvalidTimeRangeError

_END_OF_DAY = time.max


def _parse_bound(value: object, *, is_end: bool, start: object, end: object) -> datetime:
    if value is None or value == "":
        which = "end" if is_end else "start"
        raise InvalidTimeRangeError(start, end, f"{which} is required")

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, _END_OF_DAY if is_end else time.min)
    elif isinstance(value, str):
        text = value.strip()
        try:
            day = date.fromisoformat(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                raise InvalidTimeRangeError(start, end, f"cannot parse {value!r}") from None
        else:
            parsed = datetime.combine(day, _END_OF_DAY if is_end else time.min)
    else:
        raise InvalidTimeRangeError(start, end, f"unsupported bound {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_time_range(start: object, end: object) -> tuple[datetime, datetime]:
    """
    Parse an inclusive reporting window.

    Raises:
        InvalidTimeRangeError: If a bound is missing or unparseable, or
            start is after end.
    """
    lower = _parse_bound(start, is_end=False, start=start, end=end)
    upper = _parse_bound(end, is_end=True, start=start, end=end)
    if lower > upper:
        raise InvalidTimeRangeError(start, end, "start is after end")
    return lower, upper
