"""Domain models for the event scheduling service."""

from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class _CamelModel(BaseModel):
    """Serializes with camelCase keys on the wire, accepts either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class User(_CamelModel):
    id: str
    name: str | None = None


class Creator(_CamelModel):
    """Owner reference resolved for display on public reads."""

    id: str
    name: str | None = None


class Event(_CamelModel):
    id: str = Field(default_factory=_new_id)
    title: str
    description: str | None = None
    date: dt.date
    start_time: str
    end_time: str
    created_by: str
    created_at: dt.datetime = Field(default_factory=_utcnow)
    updated_at: dt.datetime = Field(default_factory=_utcnow)


class EventWithCreator(Event):
    created_by: Creator


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class EventPayload(_CamelModel):
    """Body of create and update requests.

    Every field is optional at this layer so that missing or blank values
    surface as domain validation errors rather than framework errors.
    Unknown keys such as ``createdBy`` are ignored.
    """

    title: str | None = None
    description: str | None = None
    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None

    def provided(self) -> dict[str, str]:
        """Fields the client actually sent with a non-null value."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class EventResponse(BaseModel):
    event: Event


class EventDetailResponse(BaseModel):
    event: EventWithCreator


class EventListResponse(BaseModel):
    events: list[Event]
    count: int


class EventDetailListResponse(BaseModel):
    events: list[EventWithCreator]
    count: int


class MessageResponse(BaseModel):
    msg: str
