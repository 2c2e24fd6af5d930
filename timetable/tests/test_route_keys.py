from __future__ import annotations

import math
from unittest import TestCase

from timetable.route_keys import RouteKey, compare_route_ids, compare_routes, sort_routes


class RouteKeyTests(TestCase):
    def test_parse_splits_number_and_suffix(self):
        self.assertEqual(RouteKey.parse("12a "), RouteKey(12, "A"))
        self.assertEqual(RouteKey.parse("101"), RouteKey(101, ""))
        self.assertEqual(RouteKey.parse("7 express"), RouteKey(7, "EXPRESS"))

    def test_parse_without_leading_digits(self):
        self.assertEqual(RouteKey.parse("express"), RouteKey(math.inf, "EXPRESS"))
        self.assertEqual(RouteKey.parse(""), RouteKey(math.inf, ""))
        self.assertEqual(RouteKey.parse(None), RouteKey(math.inf, ""))


class CompareRouteIdsTests(TestCase):
    def test_suffix_sorts_after_bare_number(self):
        self.assertLess(compare_route_ids("12", "12A"), 0)

    def test_numbers_compare_numerically(self):
        self.assertLess(compare_route_ids("2", "10"), 0)
        self.assertGreater(compare_route_ids("101", "12A"), 0)

    def test_letters_only_sort_after_digits(self):
        self.assertGreater(compare_route_ids("A", "1"), 0)
        self.assertGreater(compare_route_ids("EXPRESS", "999Z"), 0)

    def test_equal_keys_compare_equal(self):
        self.assertEqual(compare_route_ids("12a", "12A"), 0)
        self.assertEqual(compare_route_ids("", ""), 0)
        self.assertEqual(compare_route_ids("012", "12"), 0)

    def test_is_antisymmetric(self):
        ids = ["1", "2", "10", "10A", "10B", "A", "B", ""]
        for a in ids:
            for b in ids:
                with self.subTest(a=a, b=b):
                    self.assertEqual(compare_route_ids(a, b), -compare_route_ids(b, a))


class SortRoutesTests(TestCase):
    def test_sorts_by_route_then_headsign(self):
        listing = [
            {"route_short_name": "EXPRESS", "trip_headsign": "Airport"},
            {"route_short_name": "12A", "trip_headsign": "Port"},
            {"route_short_name": "2", "trip_headsign": "none"},
            {"route_short_name": "12", "trip_headsign": "Zoo"},
            {"route_short_name": "12", "trip_headsign": "Centre"},
            {"route_short_name": "10", "trip_headsign": "Market"},
        ]
        ordered = [(r["route_short_name"], r["trip_headsign"]) for r in sort_routes(listing)]
        self.assertEqual(
            ordered,
            [
                ("2", "none"),
                ("10", "Market"),
                ("12", "Centre"),
                ("12", "Zoo"),
                ("12A", "Port"),
                ("EXPRESS", "Airport"),
            ],
        )

    def test_missing_headsign_compares_as_none(self):
        a = {"route_short_name": "5", "trip_headsign": None}
        b = {"route_short_name": "5", "trip_headsign": "none"}
        self.assertEqual(compare_routes(a, b), 0)
        self.assertLess(compare_routes({"route_short_name": "5", "trip_headsign": ""}, {"route_short_name": "5", "trip_headsign": "zoo"}), 0)

    def test_headsigns_ignore_accents_and_case(self):
        listing = [
            {"route_short_name": "3", "trip_headsign": headsign}
            for headsign in ["Viru", "Ülemiste", "Õismäe", "Pirita"]
        ]
        headsigns = [r["trip_headsign"] for r in sort_routes(listing)]
        self.assertEqual(headsigns, ["Õismäe", "Pirita", "Ülemiste", "Viru"])

        airport = {"route_short_name": "12", "trip_headsign": "airport"}
        bay = {"route_short_name": "12", "trip_headsign": "Bay"}
        self.assertEqual(compare_routes(airport, bay), -1)
        self.assertEqual(compare_routes(bay, airport), 1)
