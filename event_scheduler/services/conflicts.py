"""Service for detecting scheduling conflicts between events on the same day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from event_scheduler.domain.models import Event
from event_scheduler.repos.base import EventStore
from event_scheduler.services.timeutils import day_window, time_to_minutes


@dataclass(frozen=True)
class OverlapResult:
    has_overlap: bool
    conflicting_event: Event | None = None


def find_conflicts(
    new_start: str,
    new_end: str,
    existing_events: list[Event],
) -> list[Event]:
    """Return existing events whose time range overlaps ``[new_start, new_end)``.

    Overlap rule: conflict if new_start < existing.end_time AND existing.start_time < new_end.
    Exact boundary touches (end == start) are NOT considered conflicts.
    """
    start = time_to_minutes(new_start)
    end = time_to_minutes(new_end)
    return [
        event
        for event in existing_events
        if start < time_to_minutes(event.end_time)
        and time_to_minutes(event.start_time) < end
    ]


def check_overlap(
    store: EventStore,
    day: date,
    start_time: str,
    end_time: str,
    exclude_event_id: str | None = None,
    created_by: str | None = None,
) -> OverlapResult:
    """Check a proposed interval against every event on the same calendar day.

    Candidates are scanned earliest-first, so when several events overlap the
    one reported is the one that starts first.
    """
    start_of_day, end_of_day = day_window(day)
    same_day = store.list_in_range(
        start_of_day, end_of_day, exclude_id=exclude_event_id, created_by=created_by
    )
    same_day.sort(
        key=lambda e: (time_to_minutes(e.start_time), time_to_minutes(e.end_time), e.id)
    )

    conflicts = find_conflicts(start_time, end_time, same_day)
    if conflicts:
        return OverlapResult(has_overlap=True, conflicting_event=conflicts[0])
    return OverlapResult(has_overlap=False)
