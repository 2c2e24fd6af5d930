from django.db import models


class Stop(models.Model):
    """A boarding location, as listed in GTFS ``stops.txt``."""

    stop_id = models.CharField(max_length=255, unique=True)
    stop_code = models.CharField(max_length=255, blank=True, default="")
    stop_name = models.CharField(max_length=255, db_index=True)
    stop_desc = models.TextField(blank=True, default="")
    stop_lat = models.FloatField()
    stop_lon = models.FloatField()
    authority = models.CharField(
        max_length=255,
        blank=True,
        default="",
        db_index=True,
        help_text="Region or transport authority the stop belongs to",
    )

    class Meta:
        ordering = ["stop_name"]

    def __str__(self):
        return f"{self.stop_name} ({self.stop_id})"


class Route(models.Model):
    route_id = models.CharField(max_length=255, unique=True)
    route_short_name = models.CharField(max_length=64, blank=True, default="", db_index=True)
    route_long_name = models.CharField(max_length=255, blank=True, default="")
    route_type = models.PositiveSmallIntegerField(default=3)

    def __str__(self):
        return self.route_short_name or self.route_id


class Trip(models.Model):
    trip_id = models.CharField(max_length=255, unique=True)
    route_id = models.CharField(max_length=255, db_index=True)
    service_id = models.CharField(max_length=255, blank=True, default="")
    trip_headsign = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Destination shown on the vehicle; blank when the feed has none",
    )
    direction_id = models.PositiveSmallIntegerField(null=True, blank=True)

    def save(self, *args, **kwargs):
        self.trip_headsign = (self.trip_headsign or "").strip()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.trip_id


class StopTime(models.Model):
    """Scheduled call of a trip at a stop.

    Times are kept as GTFS strings because hours may run past 23 for
    trips that continue after midnight.
    """

    trip_id = models.CharField(max_length=255, db_index=True)
    stop_id = models.CharField(max_length=255, db_index=True)
    stop_sequence = models.PositiveIntegerField()
    arrival_time = models.CharField(max_length=8, blank=True, default="")
    departure_time = models.CharField(max_length=8, blank=True, default="")

    class Meta:
        ordering = ["trip_id", "stop_sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["trip_id", "stop_sequence"], name="unique_trip_stop_sequence"
            ),
        ]

    def __str__(self):
        return f"{self.trip_id} @ {self.stop_id} {self.departure_time}"
