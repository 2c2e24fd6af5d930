from django.contrib import admin

from .models import Route, Stop, StopTime, Trip


@admin.register(Stop)
class StopAdmin(admin.ModelAdmin):
    list_display = ["stop_id", "stop_name", "authority", "stop_lat", "stop_lon"]
    list_filter = ["authority"]
    search_fields = ["stop_id", "stop_name"]


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    list_display = ["route_id", "route_short_name", "route_long_name", "route_type"]
    search_fields = ["route_id", "route_short_name", "route_long_name"]


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ["trip_id", "route_id", "trip_headsign", "direction_id"]
    search_fields = ["trip_id", "route_id", "trip_headsign"]


@admin.register(StopTime)
class StopTimeAdmin(admin.ModelAdmin):
    list_display = ["trip_id", "stop_id", "stop_sequence", "arrival_time", "departure_time"]
    search_fields = ["trip_id", "stop_id"]
