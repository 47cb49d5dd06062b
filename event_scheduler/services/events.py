"""Event service: orchestrates validation, overlap checks and store mutations.

Create and update hold a lock across the overlap check and the write so two
requests in the same process cannot both pass the check for the same slot.
Update and delete only ever touch a record matching ``(id, owner)``; a record
owned by someone else is reported exactly like a missing one.
"""

from __future__ import annotations

import logging
import threading
from datetime import date

from event_scheduler.config import OverlapScope
from event_scheduler.domain.errors import ConflictError, NotFoundError
from event_scheduler.domain.models import (
    Creator,
    Event,
    EventPayload,
    EventWithCreator,
)
from event_scheduler.repos.base import EventStore, UserStore
from event_scheduler.services.conflicts import check_overlap
from event_scheduler.services.timeutils import day_window, time_to_minutes
from event_scheduler.services.validation import (
    ValidatedFields,
    check_title_not_empty,
    require_fields,
    validate_event_fields,
)

logger = logging.getLogger(__name__)


def _sort_key(event: Event) -> tuple[date, int]:
    return event.date, time_to_minutes(event.start_time)


class EventService:
    """CRUD operations over events that preserve the no-overlap invariant."""

    def __init__(
        self,
        store: EventStore,
        users: UserStore,
        overlap_scope: OverlapScope = OverlapScope.GLOBAL,
    ) -> None:
        self._store = store
        self._users = users
        self._overlap_scope = overlap_scope
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_event(self, event_id: str) -> EventWithCreator:
        event = self._store.get(event_id)
        if event is None:
            raise NotFoundError(event_id)
        return self._with_creator(event)

    def list_events(self, day: date | None = None) -> list[EventWithCreator]:
        """All events, or only those on *day*, ordered by date then start."""
        if day is None:
            events = self._store.list_all()
        else:
            events = self._store.list_in_range(*day_window(day))
        return [self._with_creator(e) for e in sorted(events, key=_sort_key)]

    def list_user_events(self, owner_id: str) -> list[Event]:
        return sorted(self._store.list_by_owner(owner_id), key=_sort_key)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_event(self, payload: EventPayload, owner_id: str) -> Event:
        fields = payload.provided()
        require_fields(fields)
        validated = validate_event_fields(
            title=fields["title"],
            description=fields.get("description"),
            date=fields["date"],
            start_time=fields["start_time"],
            end_time=fields["end_time"],
        )

        with self._write_lock:
            self._ensure_no_overlap(validated, owner_id)
            event = self._store.add(Event(created_by=owner_id, **validated.as_changes()))

        logger.info(
            "Created event %s on %s (%s - %s) for %s",
            event.id,
            event.date,
            event.start_time,
            event.end_time,
            owner_id,
        )
        return event

    def update_event(
        self, event_id: str, payload: EventPayload, owner_id: str
    ) -> Event:
        fields = payload.provided()
        check_title_not_empty(fields)

        with self._write_lock:
            existing = self._store.find_owned(event_id, owner_id)
            if existing is None:
                logger.info("Update of event %s by %s matched nothing", event_id, owner_id)
                raise NotFoundError(event_id)

            validated = validate_event_fields(
                title=fields.get("title", existing.title),
                description=fields.get("description", existing.description),
                date=fields.get("date", existing.date),
                start_time=fields.get("start_time", existing.start_time),
                end_time=fields.get("end_time", existing.end_time),
            )
            self._ensure_no_overlap(validated, owner_id, exclude_event_id=event_id)

            event = self._store.update_owned(event_id, owner_id, validated.as_changes())
            if event is None:
                raise NotFoundError(event_id)

        logger.info("Updated event %s for %s", event_id, owner_id)
        return event

    def delete_event(self, event_id: str, owner_id: str) -> Event:
        deleted = self._store.delete_owned(event_id, owner_id)
        if deleted is None:
            logger.info("Delete of event %s by %s matched nothing", event_id, owner_id)
            raise NotFoundError(event_id)
        logger.info("Deleted event %s for %s", event_id, owner_id)
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_no_overlap(
        self,
        fields: ValidatedFields,
        owner_id: str,
        exclude_event_id: str | None = None,
    ) -> None:
        result = check_overlap(
            self._store,
            fields.date,
            fields.start_time,
            fields.end_time,
            exclude_event_id=exclude_event_id,
            created_by=owner_id if self._overlap_scope == OverlapScope.OWNER else None,
        )
        if result.has_overlap:
            conflicting = result.conflicting_event
            logger.warning(
                "Rejected %s - %s on %s: overlaps event %s",
                fields.start_time,
                fields.end_time,
                fields.date,
                conflicting.id,
            )
            raise ConflictError(conflicting)

    def _with_creator(self, event: Event) -> EventWithCreator:
        user = self._users.get(event.created_by)
        creator = Creator(id=event.created_by, name=user.name if user else None)
        return EventWithCreator(**{**event.model_dump(), "created_by": creator})
