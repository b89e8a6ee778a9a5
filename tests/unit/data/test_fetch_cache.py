"""Fetch Cache tests: TTL expiry, copy isolation, and batch fan-out."""

from __future__ import annotations

import threading
import unittest

from multiflexi_tui.data.adapter import FetchRequest
from multiflexi_tui.data.cache import BatchRequest, FetchCache
from multiflexi_tui.data.errors import RemoteExecutionError
from multiflexi_tui.data.records import Company, Job


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingSource:
    """Returns fresh Job lists and counts how often each command is fetched."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.calls: list[str] = []
        self.failing = failing or set()
        self._lock = threading.Lock()

    def fetch(self, request, target, timeout=None):
        with self._lock:
            self.calls.append(request.signature())
        if request.command in self.failing:
            raise RemoteExecutionError(f"{request.command} failed", reason="exit_status", returncode=1)
        return [Job(id=request.offset + idx, command=request.command) for idx in range(request.limit)]


class RendezvousSource(CountingSource):
    """Blocks every fetch on a barrier so overlapping calls can be observed."""

    def __init__(self, barrier: threading.Barrier, failing: set[str] | None = None) -> None:
        super().__init__(failing)
        self.barrier = barrier
        self.active = 0
        self.peak = 0
        self.timeouts: dict[str, float | None] = {}

    def fetch(self, request, target, timeout=None):
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
            self.timeouts[request.command] = timeout
        try:
            self.barrier.wait()
        finally:
            with self._lock:
                self.active -= 1
        return super().fetch(request, target, timeout)


class FetchCacheTests(unittest.TestCase):
    def test_second_fetch_within_ttl_is_served_from_cache(self) -> None:
        clock = FakeClock()
        source = CountingSource()
        cache = FetchCache(source, clock=clock)
        request = FetchRequest(command="job", limit=3)

        first = cache.fetch(request, (Job,), ttl=30)
        clock.now += 10
        second = cache.fetch(request, (Job,), ttl=30)

        self.assertFalse(first.cached)
        self.assertTrue(second.cached)
        self.assertEqual(len(source.calls), 1)
        self.assertEqual(first.data, second.data)
        self.assertEqual(second.total_count, 3)

    def test_fetch_after_ttl_goes_back_to_source(self) -> None:
        clock = FakeClock()
        source = CountingSource()
        cache = FetchCache(source, clock=clock)
        request = FetchRequest(command="job", limit=2)

        cache.fetch(request, (Job,), ttl=15)
        clock.now += 15
        result = cache.fetch(request, (Job,), ttl=15)

        self.assertFalse(result.cached)
        self.assertEqual(len(source.calls), 2)

    def test_mutating_a_cached_copy_does_not_change_the_entry(self) -> None:
        cache = FetchCache(CountingSource(), clock=FakeClock())
        request = FetchRequest(command="job", limit=1)

        original = cache.fetch(request, (Job,))
        original.data[0].command = "edited"
        hit = cache.fetch(request, (Job,))
        hit.data[0].command = "edited again"
        again = cache.fetch(request, (Job,))

        self.assertEqual(again.data[0].command, "job")

    def test_errors_propagate_and_are_not_cached(self) -> None:
        source = CountingSource(failing={"job"})
        cache = FetchCache(source, clock=FakeClock())
        request = FetchRequest(command="job", limit=1)

        for _ in range(2):
            with self.assertRaises(RemoteExecutionError):
                cache.fetch(request, (Job,))

        self.assertEqual(len(source.calls), 2)
        self.assertEqual(cache.stats().total_entries, 0)

    def test_clear_forces_next_fetch_to_miss(self) -> None:
        source = CountingSource()
        cache = FetchCache(source, clock=FakeClock())
        request = FetchRequest(command="job", limit=1)

        cache.fetch(request, (Job,))
        cache.clear()
        result = cache.fetch(request, (Job,))

        self.assertFalse(result.cached)
        self.assertEqual(len(source.calls), 2)

    def test_sweep_expired_removes_only_dead_entries(self) -> None:
        clock = FakeClock()
        cache = FetchCache(CountingSource(), clock=clock)
        cache.fetch(FetchRequest(command="job", limit=1), (Job,), ttl=5)
        cache.fetch(FetchRequest(command="company", limit=1), (Company,), ttl=60)
        clock.now += 10

        stats = cache.stats()
        removed = cache.sweep_expired()

        self.assertEqual((stats.total_entries, stats.expired_entries, stats.active_entries), (2, 1, 1))
        self.assertEqual(removed, 1)
        self.assertEqual(cache.stats().total_entries, 1)

    def test_batch_reports_each_outcome_by_key(self) -> None:
        source = CountingSource(failing={"company"})
        cache = FetchCache(source, clock=FakeClock())

        results = cache.fetch_batch(
            [
                BatchRequest(key="jobs", request=FetchRequest(command="job", limit=2), target=(Job,)),
                BatchRequest(key="companies", request=FetchRequest(command="company", limit=2), target=(Company,)),
            ]
        )

        self.assertEqual(set(results), {"jobs", "companies"})
        self.assertTrue(results["jobs"].ok)
        self.assertEqual(len(results["jobs"].result.data), 2)
        self.assertFalse(results["companies"].ok)
        self.assertIsInstance(results["companies"].error, RemoteExecutionError)

    def test_batch_runs_three_requests_in_flight_together(self) -> None:
        barrier = threading.Barrier(3, timeout=5)
        source = RendezvousSource(barrier, failing={"company"})
        cache = FetchCache(source, clock=FakeClock())

        results = cache.fetch_batch(
            [
                BatchRequest(key="jobs", request=FetchRequest(command="job", limit=2), target=(Job,), timeout=4.0),
                BatchRequest(key="companies", request=FetchRequest(command="company", limit=2), target=(Company,)),
                BatchRequest(key="templates", request=FetchRequest(command="runtemplate", limit=1), target=(Job,)),
            ]
        )

        self.assertFalse(barrier.broken)
        self.assertEqual(source.peak, 3)
        self.assertEqual(set(results), {"jobs", "companies", "templates"})
        self.assertTrue(results["jobs"].ok)
        self.assertTrue(results["templates"].ok)
        self.assertEqual(len(results["templates"].result.data), 1)
        self.assertIsInstance(results["companies"].error, RemoteExecutionError)
        self.assertEqual(source.timeouts["job"], 4.0)
        self.assertIsNone(source.timeouts["company"])

    def test_empty_batch_returns_empty_mapping(self) -> None:
        cache = FetchCache(CountingSource(), clock=FakeClock())

        self.assertEqual(cache.fetch_batch([]), {})
