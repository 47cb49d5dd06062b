"""Tests for EventService orchestration and the in-memory stores behind it."""

from __future__ import annotations

import logging
import threading
from datetime import date

import pytest

from event_scheduler.config import OverlapScope
from event_scheduler.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    ValidationErrorKind,
)
from event_scheduler.domain.models import EventPayload, User
from event_scheduler.repos.memory import (
    DEMO_USER,
    EventRepository,
    UserRepository,
    seed_demo_events,
)
from event_scheduler.services.events import EventService

_DAY = date(2024, 1, 10)


@pytest.fixture()
def repos():
    return EventRepository(), UserRepository()


@pytest.fixture()
def service(repos):
    events, users = repos
    return EventService(events, users)


def _payload(**overrides) -> EventPayload:
    fields = dict(title="Standup", date="2024-01-10", startTime="09:00", endTime="09:15")
    fields.update(overrides)
    return EventPayload.model_validate(fields)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


def test_create_persists_normalized_event(service, repos):
    """Created events are trimmed, zero-padded and owned by the caller."""
    event = service.create_event(_payload(startTime="9:00", title=" Standup "), "alice")

    assert event.created_by == "alice"
    assert event.title == "Standup"
    assert event.date == _DAY
    assert event.start_time == "09:00"
    assert repos[0].get(event.id) == event


def test_create_rejects_overlap_with_message(service):
    """The conflict message names the existing event and its time range."""
    service.create_event(_payload(), "alice")

    with pytest.raises(ConflictError) as exc_info:
        service.create_event(_payload(title="Sync", startTime="09:10", endTime="09:30"), "bob")

    assert exc_info.value.message == (
        'Event overlaps with existing event "Standup (09:00 - 09:15)"'
    )


def test_create_logs_rejected_conflict(service, caplog):
    """A rejected overlap is logged at WARNING."""
    service.create_event(_payload(), "alice")

    with caplog.at_level(logging.WARNING, logger="event_scheduler.services.events"):
        with pytest.raises(ConflictError):
            service.create_event(_payload(startTime="09:05"), "alice")

    assert any("overlaps event" in r.getMessage() for r in caplog.records)


def test_create_requires_fields(service):
    """Create without date and times fails as missing-required-field."""
    with pytest.raises(ValidationError) as exc_info:
        service.create_event(EventPayload(title="Standup"), "alice")
    assert exc_info.value.kind == ValidationErrorKind.MISSING_REQUIRED_FIELD


def test_end_before_start_rejected_even_without_overlap(service):
    """An inverted interval on an empty day is still rejected."""
    with pytest.raises(ValidationError) as exc_info:
        service.create_event(_payload(startTime="10:00", endTime="09:00"), "alice")
    assert exc_info.value.kind == ValidationErrorKind.END_BEFORE_START


def test_owner_scope_allows_other_users_to_overlap(repos):
    """With per-owner scope only the caller's own events can conflict."""
    events, users = repos
    service = EventService(events, users, overlap_scope=OverlapScope.OWNER)
    service.create_event(_payload(), "alice")

    other = service.create_event(_payload(startTime="09:05"), "bob")
    assert other.created_by == "bob"

    with pytest.raises(ConflictError):
        service.create_event(_payload(startTime="09:05"), "alice")


def test_concurrent_creates_for_same_slot_admit_one(service, repos):
    """Racing creates of one slot by different owners store exactly one event."""
    workers = 16
    barrier = threading.Barrier(workers)
    created: list[str] = []
    conflicts: list[str] = []
    results_lock = threading.Lock()

    def book(owner: str) -> None:
        barrier.wait()
        try:
            service.create_event(_payload(startTime="09:00", endTime="10:00"), owner)
        except ConflictError:
            with results_lock:
                conflicts.append(owner)
        else:
            with results_lock:
                created.append(owner)

    threads = [
        threading.Thread(target=book, args=(f"user-{i}",)) for i in range(workers)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert len(created) == 1
    assert len(conflicts) == workers - 1
    assert len(repos[0].list_all()) == 1


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------


def test_update_unchanged_times_never_self_conflicts(service):
    """Re-saving an event's own interval does not conflict with itself."""
    event = service.create_event(_payload(), "alice")

    updated = service.update_event(event.id, _payload(), "alice")

    assert updated.start_time == "09:00"
    assert updated.end_time == "09:15"


def test_update_merges_with_stored_fields(service):
    """Omitted fields keep their stored values."""
    event = service.create_event(_payload(description="daily"), "alice")

    updated = service.update_event(event.id, EventPayload(endTime="09:10"), "alice")

    assert updated.title == "Standup"
    assert updated.description == "daily"
    assert updated.start_time == "09:00"
    assert updated.end_time == "09:10"
    assert updated.created_at == event.created_at
    assert updated.updated_at >= event.updated_at


def test_update_checks_effective_times_against_other_events(service):
    """A partial time change is checked using the merged interval."""
    standup = service.create_event(_payload(), "alice")
    service.create_event(_payload(title="Sync", startTime="09:15", endTime="09:30"), "bob")

    with pytest.raises(ConflictError) as exc_info:
        service.update_event(standup.id, EventPayload(endTime="09:20"), "alice")
    assert "Sync (09:15 - 09:30)" in exc_info.value.message


def test_update_effective_end_before_start(service):
    """Moving only the start past the stored end is rejected."""
    event = service.create_event(_payload(), "alice")
    with pytest.raises(ValidationError) as exc_info:
        service.update_event(event.id, EventPayload(startTime="09:30"), "alice")
    assert exc_info.value.kind == ValidationErrorKind.END_BEFORE_START


def test_update_empty_title_rejected(service):
    """An explicitly empty title is rejected on update."""
    event = service.create_event(_payload(), "alice")
    with pytest.raises(ValidationError) as exc_info:
        service.update_event(event.id, EventPayload(title=""), "alice")
    assert exc_info.value.kind == ValidationErrorKind.EMPTY_TITLE


def test_update_by_non_owner_is_not_found(service, repos):
    """Another user's event looks missing and stays unchanged."""
    event = service.create_event(_payload(), "alice")

    with pytest.raises(NotFoundError):
        service.update_event(event.id, EventPayload(title="Hijacked"), "mallory")

    assert repos[0].get(event.id).title == "Standup"


def test_update_cannot_change_owner(service):
    """A createdBy key in the body is ignored."""
    event = service.create_event(_payload(), "alice")
    payload = EventPayload.model_validate({"title": "Renamed", "createdBy": "mallory"})

    updated = service.update_event(event.id, payload, "alice")

    assert updated.created_by == "alice"
    assert updated.title == "Renamed"


# ---------------------------------------------------------------------------
# Delete / reads
# ---------------------------------------------------------------------------


def test_delete_by_non_owner_is_not_found(service, repos):
    """Only the owner can delete; anyone else gets not-found."""
    event = service.create_event(_payload(), "alice")

    with pytest.raises(NotFoundError):
        service.delete_event(event.id, "mallory")
    assert repos[0].get(event.id) is not None

    service.delete_event(event.id, "alice")
    assert repos[0].get(event.id) is None


def test_get_event_resolves_creator_name(service, repos):
    """Single reads carry the creator's display name."""
    repos[1].upsert(User(id="alice", name="Alice"))
    event = service.create_event(_payload(), "alice")

    found = service.get_event(event.id)

    assert found.created_by.id == "alice"
    assert found.created_by.name == "Alice"


def test_get_event_unknown_creator_has_no_name(service):
    """A creator missing from the directory resolves with a null name."""
    event = service.create_event(_payload(), "ghost")
    assert service.get_event(event.id).created_by.name is None


def test_list_events_sorted_and_filtered_by_day(service):
    """Listing sorts by date then start and can be limited to one day."""
    service.create_event(_payload(title="Late", startTime="14:00", endTime="15:00"), "alice")
    service.create_event(_payload(title="Early", startTime="8:00", endTime="8:30"), "bob")
    service.create_event(_payload(title="Tomorrow", date="2024-01-11"), "alice")

    same_day = service.list_events(_DAY)
    everything = service.list_events()

    assert [e.title for e in same_day] == ["Early", "Late"]
    assert [e.title for e in everything] == ["Early", "Late", "Tomorrow"]


def test_list_user_events_scoped_to_owner(service):
    """The caller's own list excludes other users' events."""
    service.create_event(_payload(title="Mine later", date="2024-01-12"), "alice")
    service.create_event(_payload(title="Mine first"), "alice")
    service.create_event(_payload(title="Theirs", date="2024-01-11"), "bob")

    mine = service.list_user_events("alice")

    assert [e.title for e in mine] == ["Mine first", "Mine later"]


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


def test_user_repository_keeps_name_when_header_omits_it():
    """An upsert without a name keeps the previously known one."""
    users = UserRepository()
    users.upsert(User(id="alice", name="Alice"))

    assert users.upsert(User(id="alice")).name == "Alice"
    assert users.upsert(User(id="alice", name="Alice B.")).name == "Alice B."


def test_seed_demo_events_are_conflict_free(repos):
    """Seeded demo events can each be re-saved without conflicts."""
    events, users = repos
    seeded = seed_demo_events(events, users, _DAY)
    service = EventService(events, users)

    assert len(service.list_events(_DAY)) == len(seeded)
    assert users.get(DEMO_USER.id).name == "Demo User"
    for event in seeded:
        service.update_event(event.id, EventPayload(), DEMO_USER.id)
