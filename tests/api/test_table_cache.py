"""Tests for the in-process table cache in front of the session store."""

import time
from unittest.mock import patch

import pytest

from api.routes.round import TableCache, _open_table
from engine.scenarios import TrainingLevel
from engine.table import PayoutConfig


@pytest.fixture
def table(rng):
    return _open_table(TrainingLevel.FUNDAMENTALS, PayoutConfig.THREE_TO_TWO, 2, rng)


class TestTableCache:
    """Tests for TableCache eviction."""

    def test_put_and_get(self, table):
        cache = TableCache(max_tables=4, ttl=60)
        cache.put("s1", table)

        assert cache.get("s1") is table
        assert "s1" in cache

    def test_idle_table_expires(self, table):
        """Test that a table unused for the session TTL is dropped."""
        cache = TableCache(max_tables=4, ttl=60)
        cache.put("s1", table)

        later = time.time() + 60
        with patch("api.routes.round.time.time", return_value=later):
            assert cache.get("s1") is None

        assert len(cache) == 0

    def test_least_recently_used_evicted(self, table):
        """Test that the cache never holds more than max_tables."""
        cache = TableCache(max_tables=2, ttl=60)
        cache.put("s1", table)
        cache.put("s2", table)
        cache.get("s1")
        cache.put("s3", table)

        assert len(cache) == 2
        assert "s1" in cache
        assert "s2" not in cache
        assert "s3" in cache

    def test_clear(self, table):
        cache = TableCache(max_tables=2, ttl=60)
        cache.put("s1", table)
        cache.clear()
        assert len(cache) == 0
