from .pagination import Page, PaginationCursor
from .resolver import (
    MalformedTimeValue,
    ResolvedArrival,
    ScheduleEntry,
    parse_time_of_day,
    render_labels,
    resolve_arrivals,
    resolve_departure_labels,
    schedule_entries,
)
from .route_keys import RouteKey, compare_route_ids, compare_routes, sort_routes

__all__ = [
    "MalformedTimeValue",
    "Page",
    "PaginationCursor",
    "ResolvedArrival",
    "RouteKey",
    "ScheduleEntry",
    "compare_route_ids",
    "compare_routes",
    "parse_time_of_day",
    "render_labels",
    "resolve_arrivals",
    "resolve_departure_labels",
    "schedule_entries",
    "sort_routes",
]
