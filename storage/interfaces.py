from __future__ import annotations

from typing import Any, List, Optional, Protocol, TypedDict, runtime_checkable


class RouteListing(TypedDict):
    route_short_name: str
    trip_headsign: str  # "none" when the trip has no headsign


@runtime_checkable
class ScheduleRepository(Protocol):
    """Abstract interface for reading scheduled service at a stop."""

    def get_route_listing(self, *, stop_id: str) -> List[RouteListing]:
        """Return the distinct route/headsign pairs of trips calling at a stop."""
        ...

    def get_departure_times(
        self,
        *,
        stop_id: str,
        route_short_name: str,
        headsign: Optional[str] = None,
        limit: int = 500,
    ) -> List[str]:
        """Return distinct raw departure times (GTFS ``HH:MM:SS``) at a stop.

        Notes:
        - ``headsign="none"`` selects trips without a headsign; ``None`` or
          an empty string selects every direction of the route.
        - Times may exceed ``24:00:00``; no window is applied here.
        """
        ...


@runtime_checkable
class CacheProvider(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ...
