"""Input validation applied once before every event write."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from event_scheduler.domain.errors import ValidationError, ValidationErrorKind
from event_scheduler.services.timeutils import (
    normalize_time,
    parse_calendar_date,
    time_to_minutes,
)

MAX_TEXT_LENGTH = 100

REQUIRED_FIELDS = ("title", "date", "start_time", "end_time")

_WIRE_NAMES = {
    "title": "title",
    "description": "description",
    "date": "date",
    "start_time": "startTime",
    "end_time": "endTime",
}


@dataclass(frozen=True)
class ValidatedFields:
    """Normalized values ready to be persisted."""

    title: str
    description: str | None
    date: date
    start_time: str
    end_time: str

    def as_changes(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


def require_fields(fields: dict[str, Any]) -> None:
    """Raise if any create-time field is absent or blank."""
    missing = [
        _WIRE_NAMES[name]
        for name in REQUIRED_FIELDS
        if not str(fields.get(name) or "").strip()
    ]
    if missing:
        raise ValidationError(
            ValidationErrorKind.MISSING_REQUIRED_FIELD,
            "Please provide title, date, startTime, and endTime "
            f"(missing: {', '.join(missing)})",
        )


def check_title_not_empty(fields: dict[str, Any]) -> None:
    """On update, an explicitly provided title may not be blank."""
    if "title" in fields and not fields["title"].strip():
        raise ValidationError(
            ValidationErrorKind.EMPTY_TITLE, "Title field cannot be empty"
        )


def _check_length(value: str, field: str) -> None:
    if len(value) > MAX_TEXT_LENGTH:
        raise ValidationError(
            ValidationErrorKind.TOO_LONG,
            f"{field} cannot be more than {MAX_TEXT_LENGTH} characters",
        )


def validate_event_fields(
    *,
    title: str,
    description: str | None,
    date: str | date,
    start_time: str,
    end_time: str,
) -> ValidatedFields:
    """Run the full rule set over the effective field values of one event."""
    clean_title = title.strip()
    if not clean_title:
        raise ValidationError(
            ValidationErrorKind.EMPTY_TITLE, "Title field cannot be empty"
        )
    _check_length(clean_title, "title")

    clean_description = description.strip() if description is not None else None
    if clean_description:
        _check_length(clean_description, "description")
    else:
        clean_description = None

    day = parse_calendar_date(date)
    start = normalize_time(start_time, "startTime")
    end = normalize_time(end_time, "endTime")

    if time_to_minutes(end) <= time_to_minutes(start):
        raise ValidationError(
            ValidationErrorKind.END_BEFORE_START, "End time must be after start time"
        )

    return ValidatedFields(
        title=clean_title,
        description=clean_description,
        date=day,
        start_time=start,
        end_time=end,
    )
