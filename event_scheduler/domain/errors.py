"""Domain errors raised by the scheduling core and mapped to HTTP statuses."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from event_scheduler.domain.models import Event


class ValidationErrorKind(StrEnum):
    MISSING_REQUIRED_FIELD = "missing-required-field"
    EMPTY_TITLE = "empty-title"
    INVALID_TIME_FORMAT = "invalid-time-format"
    INVALID_DATE = "invalid-date"
    END_BEFORE_START = "end-before-start"
    TOO_LONG = "too-long"


class SchedulingError(Exception):
    """Base class for errors surfaced directly to the caller."""

    status_code: int = 500
    code: str = "scheduling-error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(SchedulingError):
    """Malformed or missing input."""

    status_code = 400

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        self.kind = kind
        self.code = kind.value
        super().__init__(message)


class NotFoundError(SchedulingError):
    """No matching record, including a record owned by someone else."""

    status_code = 404
    code = "not-found"

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__(f"No event with id {event_id}")


class ConflictError(SchedulingError):
    """The proposed interval overlaps an existing event on the same day."""

    status_code = 409
    code = "conflict"

    def __init__(self, conflicting_event: Event) -> None:
        self.conflicting_event = conflicting_event
        super().__init__(
            f'Event overlaps with existing event "{conflicting_event.title} '
            f'({conflicting_event.start_time} - {conflicting_event.end_time})"'
        )
