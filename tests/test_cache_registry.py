"""
Cache, Registry and SingleFlight Tests

Tests for the shared stores used by the resolution engine.
"""

import threading
import time
import unittest
from typing import List

from refinjection import CacheRecord, Definition, ServiceRegistry, SingletonCache, create_service
from refinjection.single_flight import SingleFlight


class TestCacheRecord(unittest.TestCase):
    """Test CacheRecord.unwrap()."""

    def test_value(self):
        self.assertEqual(CacheRecord(value=1).unwrap(), 1)

    def test_error_reraised_identically(self):
        error = ValueError("boom")
        record = CacheRecord(error=error)

        with self.assertRaises(ValueError) as ctx:
            record.unwrap()
        self.assertIs(ctx.exception, error)


class TestSingletonCache(unittest.TestCase):
    """Test SingletonCache operations."""

    def setUp(self):
        self.cache = SingletonCache()

    def test_get_missing(self):
        self.assertIsNone(self.cache.get("db"))
        self.assertNotIn("db", self.cache)

    def test_put_and_get(self):
        record = CacheRecord(value="db")
        self.cache.put("db", record)

        self.assertIs(self.cache.get("db"), record)
        self.assertIn("db", self.cache)
        self.assertEqual(len(self.cache), 1)

    def test_last_write_wins(self):
        self.cache.put("db", CacheRecord(value=1))
        self.cache.put("db", CacheRecord(value=2))
        self.assertEqual(self.cache.get("db").value, 2)

    def test_evict(self):
        self.cache.put("db", CacheRecord(value=1))
        self.assertTrue(self.cache.evict("db"))
        self.assertFalse(self.cache.evict("db"))
        self.assertIsNone(self.cache.get("db"))

    def test_clear(self):
        self.cache.put("a", CacheRecord(value=1))
        self.cache.put("b", CacheRecord(value=2))
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)


class TestServiceRegistry(unittest.TestCase):
    """Test ServiceRegistry operations."""

    def setUp(self):
        self.registry = ServiceRegistry()

    def test_lookup_missing(self):
        self.assertIsNone(self.registry.lookup("db"))

    def test_register_and_lookup(self):
        service = create_service(Definition(name="db", value="db"))
        self.registry.register(service)

        self.assertIs(self.registry.lookup("db"), service)
        self.assertIn("db", self.registry)

    def test_replace(self):
        old = create_service(Definition(name="db", value="old"))
        new = create_service(Definition(name="db", constructor=lambda: "new"))
        self.registry.register(old)
        self.registry.register(new)

        self.assertIs(self.registry.lookup("db"), new)
        self.assertEqual(len(self.registry), 1)

    def test_names_sorted(self):
        for name in ("port", "host", "conn"):
            self.registry.register(create_service(Definition(name=name, value=name)))
        self.assertEqual(self.registry.names(), ["conn", "host", "port"])


class TestSingleFlight(unittest.TestCase):
    """Test SingleFlight deduplication."""

    def test_single_caller(self):
        group = SingleFlight()
        self.assertEqual(group.do("key", lambda: 1), (1, False))

    def test_sequential_calls_run_again(self):
        """Nothing is memoized once a call completes."""
        group = SingleFlight()
        calls: List[int] = []

        def fn():
            calls.append(1)
            return len(calls)

        self.assertEqual(group.do("key", fn), (1, False))
        self.assertEqual(group.do("key", fn), (2, False))

    def test_concurrent_callers_share_result(self):
        group = SingleFlight()
        calls: List[int] = []
        results: List[tuple] = []
        lock = threading.Lock()
        started = threading.Event()

        def fn():
            calls.append(1)
            started.set()
            time.sleep(0.1)
            return object()

        def leader():
            outcome = group.do("key", fn)
            with lock:
                results.append(outcome)

        def follower():
            started.wait()
            outcome = group.do("key", fn)
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=leader)]
        threads.extend(threading.Thread(target=follower) for _ in range(5))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(calls), 1)
        self.assertEqual(len(results), 6)
        values = {id(value) for value, _ in results}
        self.assertEqual(len(values), 1)
        self.assertEqual(sorted(shared for _, shared in results), [False] + [True] * 5)

    def test_exception_propagates(self):
        group = SingleFlight()

        def fail():
            raise KeyError("boom")

        with self.assertRaises(KeyError):
            group.do("key", fail)
        # The key is released after a failure
        self.assertEqual(group.do("key", lambda: 1), (1, False))

    def test_keys_independent(self):
        group = SingleFlight()
        self.assertEqual(group.do("a", lambda: "a")[0], "a")
        self.assertEqual(group.do("b", lambda: "b")[0], "b")


if __name__ == '__main__':
    unittest.main()
