from rest_framework import serializers

from gtfs.models import Stop
from timetable.route_keys import NO_HEADSIGN


class StopSerializer(serializers.ModelSerializer):
    class Meta:
        model = Stop
        fields = ["stop_id", "stop_name", "stop_lat", "stop_lon", "stop_desc"]


class NearestStopSerializer(serializers.ModelSerializer):
    region = serializers.CharField(source="authority")

    class Meta:
        model = Stop
        fields = ["stop_id", "stop_name", "stop_lat", "stop_lon", "region"]


class RegionsResponseSerializer(serializers.Serializer):
    query = serializers.CharField(allow_blank=True)
    regions = serializers.ListField(child=serializers.CharField())


class RouteListingSerializer(serializers.Serializer):
    route_short_name = serializers.CharField()
    trip_headsign = serializers.CharField()
    label = serializers.SerializerMethodField()

    def get_label(self, obj) -> str:
        if obj["trip_headsign"] == NO_HEADSIGN:
            return f"{obj['route_short_name']} (no direction)"
        return f"{obj['route_short_name']} → {obj['trip_headsign']}"


class RouteListingResponseSerializer(serializers.Serializer):
    stop_id = serializers.CharField()
    routes = RouteListingSerializer(many=True)


class ArrivalsResponseSerializer(serializers.Serializer):
    stop_id = serializers.CharField()
    route = serializers.CharField()
    headsign = serializers.CharField(allow_blank=True)
    now = serializers.CharField()
    window_minutes = serializers.IntegerField()
    count = serializers.IntegerField()
    arrivals = serializers.ListField(child=serializers.CharField())


class ArrivalsPageResponseSerializer(serializers.Serializer):
    stop_id = serializers.CharField()
    route = serializers.CharField()
    headsign = serializers.CharField(allow_blank=True)
    arrivals = serializers.ListField(child=serializers.CharField())
    shown = serializers.IntegerField()
    total = serializers.IntegerField()
    exhausted = serializers.BooleanField()


class StopStatsSerializer(serializers.Serializer):
    stop_id = serializers.CharField()
    stop_times_rows = serializers.IntegerField()
    distinct_trips = serializers.IntegerField()
