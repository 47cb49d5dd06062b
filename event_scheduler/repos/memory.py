"""In-memory repositories for events and users."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from event_scheduler.domain.models import Event, User
from event_scheduler.repos.base import EventStore, UserStore

_IMMUTABLE_FIELDS = frozenset({"id", "created_by", "created_at"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


class EventRepository(EventStore):
    """Dict-backed store for Event instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, Event] = {}

    def add(self, event: Event) -> Event:
        now = _utcnow()
        stored = event.model_copy(update={"created_at": now, "updated_at": now})
        self._store[stored.id] = stored
        return stored

    def get(self, event_id: str) -> Event | None:
        return self._store.get(event_id)

    def find_owned(self, event_id: str, owner_id: str) -> Event | None:
        event = self._store.get(event_id)
        if event is None or event.created_by != owner_id:
            return None
        return event

    def list_all(self) -> list[Event]:
        return list(self._store.values())

    def list_in_range(
        self,
        start: datetime,
        end: datetime,
        exclude_id: str | None = None,
        created_by: str | None = None,
    ) -> list[Event]:
        return [
            e
            for e in self._store.values()
            if start <= _day_start(e.date) <= end
            and e.id != exclude_id
            and (created_by is None or e.created_by == created_by)
        ]

    def list_by_owner(self, owner_id: str) -> list[Event]:
        return [e for e in self._store.values() if e.created_by == owner_id]

    def update_owned(
        self, event_id: str, owner_id: str, changes: dict[str, Any]
    ) -> Event | None:
        current = self.find_owned(event_id, owner_id)
        if current is None:
            return None
        allowed = {k: v for k, v in changes.items() if k not in _IMMUTABLE_FIELDS}
        updated = current.model_copy(update={**allowed, "updated_at": _utcnow()})
        self._store[event_id] = updated
        return updated

    def delete_owned(self, event_id: str, owner_id: str) -> Event | None:
        if self.find_owned(event_id, owner_id) is None:
            return None
        return self._store.pop(event_id)


class UserRepository(UserStore):
    """Dict-backed user directory, keyed by id."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def upsert(self, user: User) -> User:
        existing = self._users.get(user.id)
        if existing is not None and user.name is None:
            return existing
        self._users[user.id] = user
        return user

    def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)


# ---------------------------------------------------------------------------
# Seed data – a few same-day events useful for trying out conflict checks
# ---------------------------------------------------------------------------

DEMO_USER = User(id="demo-user", name="Demo User")

_DEMO_EVENTS = (
    ("Standup", "Daily team sync", "09:00", "09:15"),
    ("Design review", None, "10:00", "11:00"),
    ("Lunch", None, "12:00", "13:00"),
    ("1:1", "Weekly check-in", "15:30", "16:00"),
)


def seed_demo_events(
    events: EventRepository, users: UserRepository, day: date
) -> list[Event]:
    """Load non-overlapping demo events for *day*, owned by ``DEMO_USER``."""
    users.upsert(DEMO_USER)
    seeded: list[Event] = []
    for title, description, start, end in _DEMO_EVENTS:
        seeded.append(
            events.add(
                Event(
                    title=title,
                    description=description,
                    date=day,
                    start_time=start,
                    end_time=end,
                    created_by=DEMO_USER.id,
                )
            )
        )
    return seeded
