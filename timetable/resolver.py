"""Arrival window resolution.

Turns schedule-of-day times into the ordered list of upcoming arrivals
for the next 24 hours. GTFS allows times past ``24:00:00`` for trips that
start on one service day and run past midnight; those are kept as they
are and only re-windowed relative to "now".

Nothing in here reads the wall clock. Callers pass ``now_minutes``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .route_keys import NO_HEADSIGN, normalize_headsign

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440
DEFAULT_WINDOW_MINUTES = MINUTES_PER_DAY
DEFAULT_MAX_RESULTS = 200
TOMORROW_SUFFIX = " (tomorrow)"


class MalformedTimeValue(ValueError):
    """A schedule time string that cannot be read as HH:MM[:SS]."""


@dataclass(frozen=True)
class ScheduleEntry:
    time_of_day: int  # minutes since service-day midnight, may exceed 1439
    route_id: str = ""
    headsign: str = NO_HEADSIGN


@dataclass(frozen=True)
class ResolvedArrival:
    minutes_from_now: int
    display_time: str
    crosses_midnight: bool

    @property
    def label(self) -> str:
        if self.crosses_midnight:
            return self.display_time + TOMORROW_SUFFIX
        return self.display_time


def parse_time_of_day(value) -> int:
    """Return minutes since midnight for a ``HH:MM`` or ``HH:MM:SS`` string.

    Hours are not capped at 23 and minutes carry over, so ``"08:75"`` is
    555. Seconds are ignored.
    """
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        raise MalformedTimeValue(f"not a time of day: {value!r}")
    hours, minutes = parts[0].strip(), parts[1].strip()
    if not (hours.isdecimal() and minutes.isdecimal()):
        raise MalformedTimeValue(f"non-numeric time of day: {value!r}")
    return int(hours) * 60 + int(minutes)


def format_minutes(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def schedule_entries(
    times: Iterable,
    route_id: str = "",
    headsign: Optional[str] = None,
) -> List[ScheduleEntry]:
    """Build entries from raw store values, dropping the ones that don't parse."""
    headsign = normalize_headsign(headsign)
    entries: List[ScheduleEntry] = []
    for value in times:
        try:
            minutes = parse_time_of_day(value)
        except MalformedTimeValue as exc:
            logger.debug("Dropping schedule row for route %s: %s", route_id, exc)
            continue
        entries.append(ScheduleEntry(time_of_day=minutes, route_id=route_id, headsign=headsign))
    return entries


def resolve_arrivals(
    entries: Iterable[ScheduleEntry],
    now_minutes: int,
    *,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> List[ResolvedArrival]:
    """Resolve schedule entries into upcoming arrivals, earliest first.

    A same-day time strictly before ``now_minutes`` has already passed and
    is moved to the next calendar day. A time equal to ``now_minutes`` is
    still upcoming. Entries further out than ``window_minutes`` are left
    out; exactly ``window_minutes`` away is kept.

    Duplicate entries are not collapsed.
    """
    if not 0 <= now_minutes < MINUTES_PER_DAY:
        raise ValueError(f"now_minutes must be within 0..{MINUTES_PER_DAY - 1}, got {now_minutes}")

    resolved = []
    for entry in entries:
        raw = entry.time_of_day
        adjusted = raw
        if raw < MINUTES_PER_DAY and raw < now_minutes:
            adjusted = raw + MINUTES_PER_DAY

        diff = adjusted - now_minutes
        if diff < 0 or diff > window_minutes:
            continue

        resolved.append(
            ResolvedArrival(
                minutes_from_now=diff,
                display_time=format_minutes(adjusted),
                crosses_midnight=adjusted >= MINUTES_PER_DAY,
            )
        )

    # list.sort is stable; equal times keep their source order
    resolved.sort(key=lambda arrival: arrival.minutes_from_now)
    return resolved[:max_results]


def render_labels(arrivals: Iterable[ResolvedArrival]) -> List[str]:
    return [arrival.label for arrival in arrivals]


def resolve_departure_labels(
    times: Iterable,
    now_minutes: int,
    *,
    route_id: str = "",
    headsign: Optional[str] = None,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> List[str]:
    entries = schedule_entries(times, route_id=route_id, headsign=headsign)
    arrivals = resolve_arrivals(
        entries,
        now_minutes,
        window_minutes=window_minutes,
        max_results=max_results,
    )
    return render_labels(arrivals)
