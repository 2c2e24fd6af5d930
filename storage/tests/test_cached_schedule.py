from __future__ import annotations

import json
from unittest import TestCase
from unittest.mock import Mock

from storage.cached_schedule import CachedScheduleRepository
from storage.memory_cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class CachedScheduleRepositoryTests(TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = TTLCache(300, clock=self.clock)
        self.repo = Mock()
        self.repo.get_route_listing.return_value = [{"route_short_name": "12", "trip_headsign": "Centre"}]
        self.repo.get_departure_times.return_value = ["08:00:00"]
        self.cached = CachedScheduleRepository(self.repo, self.cache)

    def test_route_listing_is_fetched_once_within_ttl(self):
        first = self.cached.get_route_listing(stop_id="S1")
        second = self.cached.get_route_listing(stop_id="S1")
        self.assertEqual(first, second)
        self.repo.get_route_listing.assert_called_once_with(stop_id="S1")

    def test_route_listing_is_refetched_after_ttl(self):
        self.cached.get_route_listing(stop_id="S1")
        self.clock.now += 301
        self.cached.get_route_listing(stop_id="S1")
        self.assertEqual(self.repo.get_route_listing.call_count, 2)

    def test_empty_listing_is_cached_too(self):
        self.repo.get_route_listing.return_value = []
        self.assertEqual(self.cached.get_route_listing(stop_id="S2"), [])
        self.assertEqual(self.cached.get_route_listing(stop_id="S2"), [])
        self.repo.get_route_listing.assert_called_once()

    def test_keys_are_per_stop(self):
        self.cached.get_route_listing(stop_id="S1")
        self.cached.get_route_listing(stop_id="S2")
        self.assertEqual(self.repo.get_route_listing.call_count, 2)

    def test_unreadable_cache_entry_falls_back_to_repository(self):
        self.cache.set(CachedScheduleRepository._key(stop_id="S1"), "{not json")
        result = self.cached.get_route_listing(stop_id="S1")
        self.assertEqual(result, [{"route_short_name": "12", "trip_headsign": "Centre"}])
        self.assertEqual(json.loads(self.cache.get(CachedScheduleRepository._key(stop_id="S1"))), result)

    def test_departure_times_are_never_cached(self):
        for _ in range(2):
            self.cached.get_departure_times(stop_id="S1", route_short_name="12", headsign="Centre")
        self.assertEqual(self.repo.get_departure_times.call_count, 2)
        self.repo.get_departure_times.assert_called_with(
            stop_id="S1", route_short_name="12", headsign="Centre", limit=500
        )
