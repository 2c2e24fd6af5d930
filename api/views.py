import logging
from datetime import datetime

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Count, Exists, F, OuterRef
from django.db.models.functions import Power
from django.utils import timezone as dj_timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from gtfs.models import Stop, StopTime
from storage.factory import get_cache_provider, get_schedule_repository
from storage.redis_cache import RedisCacheProvider
from timetable import PaginationCursor, resolve_departure_labels, sort_routes
from timetable.resolver import format_minutes

from .filters import StopFilter
from .serializers import (
    ArrivalsPageResponseSerializer,
    ArrivalsResponseSerializer,
    NearestStopSerializer,
    RegionsResponseSerializer,
    RouteListingResponseSerializer,
    StopSerializer,
    StopStatsSerializer,
)

logger = logging.getLogger(__name__)

REGIONS_LIMIT = 1000
STOPS_LIMIT = 2000
SESSION_CURSOR_KEY = "arrivals_cursor"

SELECTION_PARAMETERS = [
    OpenApiParameter(name="stop_id", type=OpenApiTypes.STR, required=True, description="Stop identifier"),
    OpenApiParameter(name="route", type=OpenApiTypes.STR, required=True, description="Route short name, e.g. 12A"),
    OpenApiParameter(name="headsign", type=OpenApiTypes.STR, required=False, description="Trip headsign; 'none' for trips without one, omit for all directions"),
    OpenApiParameter(name="time", type=OpenApiTypes.STR, required=False, description="Reference time (HH:MM or HH:MM:SS, defaults to now)"),
]


def has_stop_times():
    return Exists(StopTime.objects.filter(stop_id=OuterRef("stop_id")))


def parse_now_minutes(time_str):
    """Minutes since midnight for an explicit time, or for the local time now."""
    if time_str:
        fmt = "%H:%M:%S" if len(time_str.split(":")) == 3 else "%H:%M"
        now = datetime.strptime(time_str, fmt).time()
    else:
        now = dj_timezone.localtime().time()
    return now.hour * 60 + now.minute


def read_selection(request):
    """Return ``(selection, error_response)`` for the arrivals endpoints."""
    stop_id = request.query_params.get("stop_id")
    route = request.query_params.get("route")
    if not stop_id or not route:
        return None, Response({"error": "stop_id and route are required"}, status=status.HTTP_400_BAD_REQUEST)

    try:
        now_minutes = parse_now_minutes(request.query_params.get("time"))
    except ValueError:
        return None, Response({"error": "Invalid time format. Use HH:MM or HH:MM:SS"}, status=status.HTTP_400_BAD_REQUEST)

    selection = {
        "stop_id": stop_id,
        "route": route,
        "headsign": request.query_params.get("headsign") or "",
        "now_minutes": now_minutes,
    }
    return selection, None


def resolve_selection(selection):
    repo = get_schedule_repository(use_cache=True)
    times = repo.get_departure_times(
        stop_id=selection["stop_id"],
        route_short_name=selection["route"],
        headsign=selection["headsign"] or None,
        limit=settings.ARRIVALS_QUERY_LIMIT,
    )
    return resolve_departure_labels(
        times,
        selection["now_minutes"],
        route_id=selection["route"],
        headsign=selection["headsign"] or None,
        window_minutes=settings.ARRIVALS_WINDOW_MINUTES,
        max_results=settings.ARRIVALS_MAX_RESULTS,
    )


def could_not_load(what):
    return Response({"error": f"Could not load {what}"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class HealthView(APIView):
    """Liveness probe."""

    @extend_schema(responses={200: None}, tags=["status"])
    def get(self, request):
        return Response({"status": "ok", "timestamp": dj_timezone.now()})


class StatusView(APIView):
    """Simple health/status endpoint for core dependencies."""

    @extend_schema(
        responses={200: None},
        description="Service status for core dependencies (database, route listing cache).",
        tags=["status"],
    )
    def get(self, request):
        checks = {
            "database_ok": False,
            "cache_ok": False,
        }

        try:
            Stop.objects.exists()
            checks["database_ok"] = True
        except DatabaseError:
            logger.exception("Database check failed")

        cache = get_cache_provider()
        if isinstance(cache, RedisCacheProvider):
            checks["cache_ok"] = cache.ping()
        else:
            checks["cache_ok"] = True

        overall = "ok" if all(checks.values()) else ("degraded" if checks["database_ok"] else "error")

        return Response(
            {
                "status": overall,
                **checks,
                "cache_backend": settings.CACHE_BACKEND,
                "time": dj_timezone.now(),
            }
        )


class RegionsView(APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter(name="q", type=OpenApiTypes.STR, required=False, description="Region name prefix"),
        ],
        responses={200: RegionsResponseSerializer},
        description="Regions (stop authorities) whose name starts with the given prefix.",
        tags=["stops"],
    )
    def get(self, request):
        q = request.query_params.get("q", "").strip()
        regions = (
            Stop.objects.exclude(authority="")
            .filter(authority__istartswith=q)
            .order_by("authority")
            .values_list("authority", flat=True)
            .distinct()[:REGIONS_LIMIT]
        )
        serializer = RegionsResponseSerializer({"query": q, "regions": list(regions)})
        return Response(serializer.data)


class StopSearchView(generics.ListAPIView):
    """Stops in a region that have scheduled service, by name prefix."""

    serializer_class = StopSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = StopFilter

    def get_queryset(self):
        return Stop.objects.filter(has_stop_times()).order_by("stop_name")

    @extend_schema(tags=["stops"])
    def get(self, request, *args, **kwargs):
        if not request.query_params.get("region"):
            return Response({"error": "region is required"}, status=status.HTTP_400_BAD_REQUEST)
        queryset = self.filter_queryset(self.get_queryset())[:STOPS_LIMIT]
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)


class NearestStopView(APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter(name="lat", type=OpenApiTypes.FLOAT, required=True, description="Latitude"),
            OpenApiParameter(name="lon", type=OpenApiTypes.FLOAT, required=True, description="Longitude"),
        ],
        responses={200: NearestStopSerializer},
        description="Closest stop with scheduled service (planar distance in degrees).",
        tags=["stops"],
    )
    def get(self, request):
        lat = request.query_params.get("lat")
        lon = request.query_params.get("lon")
        if not lat or not lon:
            return Response({"error": "lat and lon are required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            lat, lon = float(lat), float(lon)
        except ValueError:
            return Response({"error": "lat and lon must be numbers"}, status=status.HTTP_400_BAD_REQUEST)

        stop = (
            Stop.objects.filter(has_stop_times())
            .annotate(distance=Power(F("stop_lat") - lat, 2) + Power(F("stop_lon") - lon, 2))
            .order_by("distance")
            .first()
        )
        if stop is None:
            return Response({"error": "No stops with scheduled service"}, status=status.HTTP_404_NOT_FOUND)
        return Response(NearestStopSerializer(stop).data)


class RouteListingView(APIView):
    """Routes and directions serving a stop, cached per stop."""

    @extend_schema(
        parameters=[
            OpenApiParameter(name="stop_id", type=OpenApiTypes.STR, required=True, description="Stop identifier"),
        ],
        responses={200: RouteListingResponseSerializer},
        description="Route/headsign pairs calling at a stop, in route number order.",
        tags=["schedule"],
    )
    def get(self, request):
        stop_id = request.query_params.get("stop_id")
        if not stop_id:
            return Response({"error": "stop_id is required"}, status=status.HTTP_400_BAD_REQUEST)

        repo = get_schedule_repository(use_cache=True)
        try:
            if not Stop.objects.filter(stop_id=stop_id).exists():
                return Response({"error": f"stop_id '{stop_id}' not found"}, status=status.HTTP_404_NOT_FOUND)
            routes = repo.get_route_listing(stop_id=stop_id)
        except DatabaseError:
            logger.exception("Route listing failed for stop %s", stop_id)
            return could_not_load("routes for this stop")

        serializer = RouteListingResponseSerializer({"stop_id": stop_id, "routes": sort_routes(routes)})
        return Response(serializer.data)


class ArrivalsView(APIView):
    """Every scheduled arrival of a route at a stop within the next 24 hours."""

    @extend_schema(
        parameters=SELECTION_PARAMETERS,
        responses={200: ArrivalsResponseSerializer},
        description="Upcoming arrival times, earliest first; times after midnight are marked '(tomorrow)'.",
        tags=["schedule"],
    )
    def get(self, request):
        selection, error = read_selection(request)
        if error is not None:
            return error

        try:
            labels = resolve_selection(selection)
        except DatabaseError:
            logger.exception("Arrivals lookup failed for %s", selection)
            return could_not_load("arrivals")

        payload = {
            "stop_id": selection["stop_id"],
            "route": selection["route"],
            "headsign": selection["headsign"],
            "now": format_minutes(selection["now_minutes"]),
            "window_minutes": settings.ARRIVALS_WINDOW_MINUTES,
            "count": len(labels),
            "arrivals": labels,
        }
        return Response(ArrivalsResponseSerializer(payload).data)


class NextArrivalsView(APIView):
    """Next page of arrivals for the selection held in the session.

    Arrivals are resolved once per selection and then revealed page by
    page. Choosing another stop, route or headsign (or passing reset)
    starts over with freshly resolved arrivals.
    """

    @extend_schema(
        parameters=SELECTION_PARAMETERS + [
            OpenApiParameter(name="page_size", type=OpenApiTypes.INT, required=False, description="Arrivals per page (default 5, max 100)"),
            OpenApiParameter(name="reset", type=OpenApiTypes.BOOL, required=False, description="Resolve again and restart from the first page"),
        ],
        responses={200: ArrivalsPageResponseSerializer},
        tags=["schedule"],
    )
    def get(self, request):
        selection, error = read_selection(request)
        if error is not None:
            return error

        try:
            page_size = int(request.query_params.get("page_size", settings.ARRIVALS_PAGE_SIZE))
            if page_size <= 0 or page_size > 100:
                return Response({"error": "page_size must be between 1 and 100"}, status=status.HTTP_400_BAD_REQUEST)
        except ValueError:
            return Response({"error": "page_size must be an integer"}, status=status.HTTP_400_BAD_REQUEST)

        key = [selection["stop_id"], selection["route"], selection["headsign"]]
        reset = request.query_params.get("reset", "").lower() in ("1", "true", "yes")
        stored = request.session.get(SESSION_CURSOR_KEY)

        if stored and stored.get("selection") == key and not reset:
            cursor = PaginationCursor.from_dict(stored["cursor"])
        else:
            try:
                labels = resolve_selection(selection)
            except DatabaseError:
                logger.exception("Arrivals lookup failed for %s", selection)
                return could_not_load("arrivals")
            cursor = PaginationCursor(labels)

        page = cursor.next_page(page_size)
        request.session[SESSION_CURSOR_KEY] = {"selection": key, "cursor": cursor.to_dict()}

        payload = {
            "stop_id": selection["stop_id"],
            "route": selection["route"],
            "headsign": selection["headsign"],
            "arrivals": page.items,
            "shown": cursor.shown,
            "total": cursor.total,
            "exhausted": page.exhausted,
        }
        return Response(ArrivalsPageResponseSerializer(payload).data)


class StopStatsView(APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter(name="stop_id", type=OpenApiTypes.STR, required=True, description="Stop identifier"),
        ],
        responses={200: StopStatsSerializer},
        description="Row counts behind a stop, for debugging empty route listings.",
        tags=["stops"],
    )
    def get(self, request):
        stop_id = request.query_params.get("stop_id")
        if not stop_id:
            return Response({"error": "stop_id is required"}, status=status.HTTP_400_BAD_REQUEST)

        stats = StopTime.objects.filter(stop_id=stop_id).aggregate(
            stop_times_rows=Count("id"),
            distinct_trips=Count("trip_id", distinct=True),
        )
        return Response(StopStatsSerializer({"stop_id": stop_id, **stats}).data)
