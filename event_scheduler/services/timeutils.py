"""Wall-clock and calendar-day helpers used for overlap comparisons."""

from __future__ import annotations

import re
from datetime import date, datetime, time

import dateparser

from event_scheduler.domain.errors import ValidationError, ValidationErrorKind

_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

_DATEPARSER_SETTINGS = {
    "RETURN_AS_TIMEZONE_AWARE": False,
    "PREFER_DAY_OF_MONTH": "first",
}


def time_to_minutes(hhmm: str) -> int:
    """Convert ``HH:MM`` to minutes since midnight."""
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def normalize_time(raw: str, field: str = "time") -> str:
    """Validate a ``HH:MM`` string and return it with a two-digit hour.

    Single-digit hours (``9:05``) are accepted on input. Stored values are
    always zero-padded so lexical ordering matches chronological ordering.
    """
    match = _TIME_PATTERN.match(raw.strip())
    if match is None:
        raise ValidationError(
            ValidationErrorKind.INVALID_TIME_FORMAT,
            f"Please provide valid time format (HH:MM) for {field}",
        )
    hours, minutes = match.groups()
    return f"{int(hours):02d}:{minutes}"


def parse_calendar_date(raw: str | date | datetime) -> date:
    """Return the calendar day named by *raw*, ignoring any time of day.

    ISO dates and datetimes are read directly; anything else goes through
    ``dateparser`` (e.g. ``"Jan 10 2024"``). No timezone conversion is
    applied: the local calendar fields of the value are kept as given.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = raw.strip()
    if not text:
        raise ValidationError(
            ValidationErrorKind.INVALID_DATE, "Please provide a valid event date"
        )

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    parsed = dateparser.parse(text, languages=["en"], settings=_DATEPARSER_SETTINGS)
    if parsed is None:
        raise ValidationError(
            ValidationErrorKind.INVALID_DATE, f"Invalid date: {raw!r}"
        )
    return parsed.date()


def day_window(day: date) -> tuple[datetime, datetime]:
    """Return ``(00:00:00.000, 23:59:59.999)`` bounds for *day*."""
    start = datetime.combine(day, time(0, 0, 0, 0))
    end = datetime.combine(day, time(23, 59, 59, 999000))
    return start, end
