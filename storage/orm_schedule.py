from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from django.db.models import Q

from gtfs.models import Route, StopTime, Trip
from timetable.resolver import MalformedTimeValue, parse_time_of_day
from timetable.route_keys import NO_HEADSIGN, normalize_headsign
from .interfaces import RouteListing, ScheduleRepository


def _chronological(value: str) -> Tuple[int, int, str]:
    try:
        return 0, parse_time_of_day(value), value
    except MalformedTimeValue:
        return 1, 0, value


class OrmScheduleRepository(ScheduleRepository):
    """Schedule repository on top of the Django ORM (PostgreSQL or SQLite).

    NOTE: service calendars are not applied; every trip calling at the stop
    counts, whatever day it runs on.
    """

    def get_route_listing(self, *, stop_id: str) -> List[RouteListing]:
        trip_ids = StopTime.objects.filter(stop_id=stop_id).values("trip_id")
        pairs = list(
            Trip.objects.filter(trip_id__in=trip_ids)
            .values_list("route_id", "trip_headsign")
            .distinct()
        )

        short_names: Dict[str, str] = dict(
            Route.objects.filter(route_id__in={route_id for route_id, _ in pairs})
            .values_list("route_id", "route_short_name")
        )

        seen = set()
        for route_id, headsign in pairs:
            # Fall back to route_id when the feed leaves short names empty
            name = short_names.get(route_id) or route_id
            seen.add((name, normalize_headsign(headsign)))

        return [
            {"route_short_name": name, "trip_headsign": headsign}
            for name, headsign in sorted(seen)
        ]

    def get_departure_times(
        self,
        *,
        stop_id: str,
        route_short_name: str,
        headsign: Optional[str] = None,
        limit: int = 500,
    ) -> List[str]:
        route_ids = Route.objects.filter(
            Q(route_short_name=route_short_name)
            | Q(route_short_name="", route_id=route_short_name)
        ).values("route_id")
        trips = Trip.objects.filter(route_id__in=route_ids)

        if headsign == NO_HEADSIGN:
            trips = trips.filter(Q(trip_headsign__isnull=True) | Q(trip_headsign=""))
        elif headsign:
            trips = trips.filter(trip_headsign=headsign)

        times = (
            StopTime.objects.filter(
                stop_id=stop_id,
                trip_id__in=trips.values("trip_id"),
            )
            .exclude(departure_time="")
            .order_by()
            .values_list("departure_time", flat=True)
            .distinct()
        )
        # Text order puts "5:30:00" after "23:00:00"; order by minutes before
        # truncating. Unparseable values go last.
        return sorted(times, key=_chronological)[:limit]
