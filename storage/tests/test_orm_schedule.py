from __future__ import annotations

from django.test import TestCase

from gtfs.models import Route, Stop, StopTime, Trip
from storage.orm_schedule import OrmScheduleRepository


class OrmScheduleRepositoryTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        Stop.objects.create(stop_id="S1", stop_name="Central", stop_lat=59.43, stop_lon=24.75, authority="Harju")
        Route.objects.bulk_create(
            [
                Route(route_id="R12", route_short_name="12"),
                Route(route_id="R5", route_short_name="5"),
                Route(route_id="NIGHT", route_short_name=""),
            ]
        )
        Trip.objects.bulk_create(
            [
                Trip(trip_id="T1", route_id="R12", trip_headsign="Centre"),
                Trip(trip_id="T2", route_id="R12", trip_headsign="Centre"),
                Trip(trip_id="T3", route_id="R12", trip_headsign="Airport"),
                Trip(trip_id="T4", route_id="R5", trip_headsign=""),
                Trip(trip_id="T5", route_id="NIGHT", trip_headsign="Port"),
                Trip(trip_id="T6", route_id="R5", trip_headsign="Elsewhere"),
            ]
        )
        StopTime.objects.bulk_create(
            [
                StopTime(trip_id="T1", stop_id="S1", stop_sequence=1, departure_time="08:00:00"),
                StopTime(trip_id="T2", stop_id="S1", stop_sequence=1, departure_time="08:00:00"),
                StopTime(trip_id="T2", stop_id="S2", stop_sequence=2, departure_time="08:10:00"),
                StopTime(trip_id="T3", stop_id="S1", stop_sequence=1, departure_time="25:15:00"),
                StopTime(trip_id="T4", stop_id="S1", stop_sequence=1, departure_time="09:30:00"),
                StopTime(trip_id="T5", stop_id="S1", stop_sequence=1, departure_time="01:00:00"),
                StopTime(trip_id="T6", stop_id="S2", stop_sequence=1, departure_time="10:00:00"),
            ]
        )

    def setUp(self):
        self.repo = OrmScheduleRepository()

    def test_route_listing_is_distinct_per_route_and_headsign(self):
        listing = self.repo.get_route_listing(stop_id="S1")
        self.assertEqual(
            listing,
            [
                {"route_short_name": "12", "trip_headsign": "Airport"},
                {"route_short_name": "12", "trip_headsign": "Centre"},
                {"route_short_name": "5", "trip_headsign": "none"},
                {"route_short_name": "NIGHT", "trip_headsign": "Port"},
            ],
        )

    def test_route_listing_for_unserved_stop_is_empty(self):
        self.assertEqual(self.repo.get_route_listing(stop_id="NOPE"), [])

    def test_departure_times_for_headsign(self):
        times = self.repo.get_departure_times(stop_id="S1", route_short_name="12", headsign="Centre")
        self.assertEqual(times, ["08:00:00"])

    def test_departure_times_for_all_directions(self):
        times = self.repo.get_departure_times(stop_id="S1", route_short_name="12")
        self.assertEqual(times, ["08:00:00", "25:15:00"])

    def test_departure_times_without_headsign(self):
        times = self.repo.get_departure_times(stop_id="S1", route_short_name="5", headsign="none")
        self.assertEqual(times, ["09:30:00"])

    def test_route_without_short_name_is_found_by_id(self):
        times = self.repo.get_departure_times(stop_id="S1", route_short_name="NIGHT")
        self.assertEqual(times, ["01:00:00"])

    def test_limit(self):
        times = self.repo.get_departure_times(stop_id="S1", route_short_name="12", limit=1)
        self.assertEqual(times, ["08:00:00"])

    def test_unpadded_early_time_survives_the_limit(self):
        Route.objects.create(route_id="R7", route_short_name="7")
        Trip.objects.bulk_create(
            [
                Trip(trip_id="E1", route_id="R7", trip_headsign="Harbour"),
                Trip(trip_id="E2", route_id="R7", trip_headsign="Harbour"),
                Trip(trip_id="E3", route_id="R7", trip_headsign="Harbour"),
            ]
        )
        StopTime.objects.bulk_create(
            [
                StopTime(trip_id="E1", stop_id="S1", stop_sequence=1, departure_time="23:00:00"),
                StopTime(trip_id="E2", stop_id="S1", stop_sequence=1, departure_time="24:10:00"),
                StopTime(trip_id="E3", stop_id="S1", stop_sequence=1, departure_time="5:30:00"),
            ]
        )
        times = self.repo.get_departure_times(stop_id="S1", route_short_name="7", limit=2)
        self.assertEqual(times, ["5:30:00", "23:00:00"])
