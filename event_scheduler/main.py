"""FastAPI application: entry point for the event scheduling service."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, FastAPI

from event_scheduler.config import load_settings
from event_scheduler.deps import CurrentUser
from event_scheduler.domain.models import (
    EventDetailListResponse,
    EventDetailResponse,
    EventListResponse,
    EventPayload,
    EventResponse,
    MessageResponse,
    User,
)
from event_scheduler.logging_config import configure_logging
from event_scheduler.middleware import register_error_handlers
from event_scheduler.repos.memory import EventRepository, UserRepository, seed_demo_events
from event_scheduler.services.events import EventService
from event_scheduler.services.timeutils import parse_calendar_date

settings = load_settings()
configure_logging(settings.log_level, settings.log_format)

app = FastAPI(title=settings.app_title)
register_error_handlers(app)

# ── Singletons (created at import time for simplicity) ────────────────
event_repo = EventRepository()
user_repo = UserRepository()
event_service = EventService(event_repo, user_repo, overlap_scope=settings.overlap_scope)
current_user = CurrentUser(user_repo)

if settings.seed_demo_data:
    seed_demo_events(event_repo, user_repo, date.today())


# ── Routes ────────────────────────────────────────────────────────────

router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("", response_model=EventDetailListResponse)
def list_events(date: str | None = None) -> EventDetailListResponse:
    """Return all events, or only those on the calendar day given by ``?date=``."""
    day = parse_calendar_date(date) if date and date.strip() else None
    events = event_service.list_events(day)
    return EventDetailListResponse(events=events, count=len(events))


# Registered before "/{event_id}" so the literal path wins.
@router.get("/my-events", response_model=EventListResponse)
def list_my_events(user: User = Depends(current_user)) -> EventListResponse:
    """Return the caller's own events."""
    events = event_service.list_user_events(user.id)
    return EventListResponse(events=events, count=len(events))


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(event_id: str) -> EventDetailResponse:
    """Return a single event by id, with its creator resolved."""
    return EventDetailResponse(event=event_service.get_event(event_id))


@router.post("", response_model=EventResponse, status_code=201)
def create_event(
    payload: EventPayload, user: User = Depends(current_user)
) -> EventResponse:
    """Create an event owned by the caller, rejecting same-day overlaps."""
    return EventResponse(event=event_service.create_event(payload, user.id))


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str, payload: EventPayload, user: User = Depends(current_user)
) -> EventResponse:
    """Partially update one of the caller's events."""
    return EventResponse(event=event_service.update_event(event_id, payload, user.id))


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(event_id: str, user: User = Depends(current_user)) -> MessageResponse:
    """Delete one of the caller's events."""
    event_service.delete_event(event_id, user.id)
    return MessageResponse(msg="Event deleted successfully")


app.include_router(router)
