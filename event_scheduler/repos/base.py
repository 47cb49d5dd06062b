"""Store interfaces (repository pattern).

Stores are swappable and return domain models. Mutations that must respect
ownership take the owner as part of the match predicate and report a miss
as ``None``; they never distinguish "absent" from "owned by someone else".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from event_scheduler.domain.models import Event, User


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def add(self, event: Event) -> Event:
        """Persist a new event and return the stored record."""
        ...

    @abstractmethod
    def get(self, event_id: str) -> Event | None:
        """Return an event by id, or None if not found."""
        ...

    @abstractmethod
    def find_owned(self, event_id: str, owner_id: str) -> Event | None:
        """Return the event matching both id and owner, or None."""
        ...

    @abstractmethod
    def list_all(self) -> list[Event]:
        ...

    @abstractmethod
    def list_in_range(
        self,
        start: datetime,
        end: datetime,
        exclude_id: str | None = None,
        created_by: str | None = None,
    ) -> list[Event]:
        """Return events whose date falls within ``[start, end]``."""
        ...

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Event]:
        ...

    @abstractmethod
    def update_owned(
        self, event_id: str, owner_id: str, changes: dict[str, Any]
    ) -> Event | None:
        """Apply *changes* where id and owner match; None if nothing matched."""
        ...

    @abstractmethod
    def delete_owned(self, event_id: str, owner_id: str) -> Event | None:
        """Delete where id and owner match and return the removed record."""
        ...


class UserStore(ABC):
    """Interface for the user directory used to resolve display names."""

    @abstractmethod
    def upsert(self, user: User) -> User:
        ...

    @abstractmethod
    def get(self, user_id: str) -> User | None:
        ...
