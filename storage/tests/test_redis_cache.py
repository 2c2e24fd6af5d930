from __future__ import annotations

from unittest.mock import Mock

import redis
from django.test import SimpleTestCase

from storage.redis_cache import RedisCacheProvider


class RedisCacheProviderTests(SimpleTestCase):
    def setUp(self):
        self.client = Mock(spec=redis.Redis)
        self.cache = RedisCacheProvider(ttl_seconds=300, client=self.client)

    def test_set_uses_ttl_in_seconds(self):
        self.cache.set("k", "v")
        self.client.setex.assert_called_once_with("k", 300, "v")

    def test_fractional_ttl_is_rounded_up(self):
        self.cache.set("k", "v", ttl_seconds=0.2)
        self.client.setex.assert_called_once_with("k", 1, "v")

    def test_get_returns_client_value(self):
        self.client.get.return_value = "[]"
        self.assertEqual(self.cache.get("k"), "[]")

    def test_errors_are_reported_as_misses(self):
        self.client.get.side_effect = redis.ConnectionError("down")
        self.client.setex.side_effect = redis.ConnectionError("down")
        self.client.ping.side_effect = redis.ConnectionError("down")
        with self.assertLogs("storage.redis_cache", level="WARNING"):
            self.assertIsNone(self.cache.get("k"))
            self.cache.set("k", "v")
        self.assertFalse(self.cache.ping())
