import threading
import unittest

from trending_dashboard.exceptions import SourceUnavailable
from trending_dashboard.models import FilterState
from trending_dashboard.service import (
    NO_DATA_MESSAGE,
    NO_MATCH_MESSAGE,
    DashboardService,
)


def raw(video_id, region_name="Japan", **fields):
    return {"video_id": video_id, "region_name": region_name, **fields}


class FakeSource:
    """Returns queued payloads; an exception in the queue is raised."""

    def __init__(self, *payloads):
        self.payloads = list(payloads)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else self.payloads[0]
        if isinstance(payload, Exception):
            raise payload
        return payload


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestRefresh(unittest.TestCase):
    def test_refresh_normalizes(self):
        source = FakeSource([raw("v1", video_rank=2), raw("v1", video_rank=1), raw("")])
        service = DashboardService(source, cache_ttl_seconds=60)
        snapshot = service.refresh()
        self.assertEqual(len(snapshot.records), 1)
        self.assertEqual(snapshot.records[0].video_rank, 1)
        self.assertIsNone(snapshot.error)
        self.assertIsNotNone(snapshot.fetched_on)

    def test_unavailable_source_is_empty_with_error(self):
        service = DashboardService(FakeSource(SourceUnavailable("HTTP 500")))
        with self.assertLogs("trending_dashboard.service", level="WARNING"):
            snapshot = service.refresh()
        self.assertEqual(snapshot.records, ())
        self.assertEqual(snapshot.error, "HTTP 500")

    def test_superseded_fetch_is_discarded(self):
        service = None

        class SlowSource:
            def __init__(self):
                self.calls = 0

            def fetch(self):
                self.calls += 1
                if self.calls == 1:
                    # A newer refresh starts and completes while this one waits
                    service.refresh()
                    return [raw("stale")]
                return [raw("fresh")]

        service = DashboardService(SlowSource())
        returned = service.refresh()

        self.assertEqual([r.video_id for r in returned.records], ["fresh"])
        self.assertEqual([r.video_id for r in service.records()], ["fresh"])
        self.assertEqual(returned.generation, 2)


class TestConcurrentRefresh(unittest.TestCase):
    def test_concurrent_cold_start_shares_one_fetch(self):
        started = threading.Event()
        release = threading.Event()

        class BlockingSource:
            def __init__(self):
                self.calls = 0

            def fetch(self):
                self.calls += 1
                started.set()
                release.wait(timeout=5)
                return [raw("v1", video_rank=1)]

        source = BlockingSource()
        service = DashboardService(source, cache_ttl_seconds=60)
        views = {}

        def render(name):
            views[name] = service.view()

        first = threading.Thread(target=render, args=("first",))
        first.start()
        self.assertTrue(started.wait(timeout=5))

        second = threading.Thread(target=render, args=("second",))
        second.start()
        second.join(timeout=0.2)
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        self.assertFalse(first.is_alive() or second.is_alive())
        for name in ("first", "second"):
            self.assertEqual(views[name].total_records, 1)
            self.assertIsNone(views[name].message)
            self.assertIsNone(views[name].error)
        self.assertEqual(source.calls, 1)

    def test_waiting_caller_gets_failed_result(self):
        started = threading.Event()
        release = threading.Event()

        class FailingSource:
            def fetch(self):
                started.set()
                release.wait(timeout=5)
                raise SourceUnavailable("HTTP 503")

        service = DashboardService(FailingSource(), cache_ttl_seconds=60)
        views = {}

        def render(name):
            views[name] = service.view()

        with self.assertLogs("trending_dashboard.service", level="WARNING"):
            first = threading.Thread(target=render, args=("first",))
            first.start()
            self.assertTrue(started.wait(timeout=5))
            second = threading.Thread(target=render, args=("second",))
            second.start()
            second.join(timeout=0.2)
            release.set()
            first.join(timeout=5)
            second.join(timeout=5)

        self.assertEqual(views["second"].error, "HTTP 503")
        self.assertEqual(views["second"].message, NO_DATA_MESSAGE)
        self.assertEqual(views["first"].error, "HTTP 503")


class TestCaching(unittest.TestCase):
    def test_snapshot_reused_within_ttl(self):
        clock = FakeClock()
        source = FakeSource([raw("v1")])
        service = DashboardService(source, cache_ttl_seconds=60, clock=clock)

        service.records()
        service.records()
        self.assertEqual(source.calls, 1)

        clock.now += 60
        service.records()
        self.assertEqual(source.calls, 2)

    def test_failed_snapshot_retried_next_time(self):
        source = FakeSource(SourceUnavailable("down"), [raw("v1")])
        service = DashboardService(source, cache_ttl_seconds=60, clock=FakeClock())
        with self.assertLogs("trending_dashboard.service", level="WARNING"):
            self.assertEqual(service.records(), ())
        self.assertEqual(len(service.records()), 1)
        self.assertEqual(source.calls, 2)


class TestView(unittest.TestCase):
    def setUp(self):
        self.source = FakeSource([
            raw("a", video_title="Alpha", published_at="2024-01-01",
                scrape_timestamp="2024-01-05T00:00:00Z", matched_type="Trailer"),
            raw("b", region_name="Taiwan", video_title="Beta", published_at="2024-02-01",
                scrape_timestamp="2024-02-05T00:00:00Z"),
        ])
        self.service = DashboardService(self.source, cache_ttl_seconds=60, region_policy="data")

    def test_default_view(self):
        view = self.service.view()
        self.assertEqual([r.video_id for r in view.videos], ["b", "a"])
        self.assertEqual(view.heading, "Current Data Trends")
        self.assertEqual(view.total_records, 2)
        self.assertIsNone(view.message)
        self.assertEqual(view.options.regions, ("Japan", "Taiwan"))
        self.assertEqual(view.options.months, ("2024-01", "2024-02"))

    def test_filtered_view(self):
        view = self.service.view(FilterState(month="2024-01"))
        self.assertEqual([r.video_id for r in view.videos], ["a"])
        self.assertEqual(view.heading, "2024-01 Trends")

    def test_no_match_message(self):
        view = self.service.view(FilterState(search_term="gamma"))
        self.assertEqual(view.videos, ())
        self.assertEqual(view.message, NO_MATCH_MESSAGE)

    def test_no_data_message(self):
        service = DashboardService(FakeSource([]))
        view = service.view()
        self.assertEqual(view.message, NO_DATA_MESSAGE)

    def test_view_memoized_per_filters(self):
        filters = FilterState(region="Taiwan")
        first = self.service.view(filters)
        second = self.service.view(FilterState(region="Taiwan"))
        self.assertIs(first.videos, second.videos)

        other = self.service.view(FilterState(region="Japan"))
        self.assertEqual([r.video_id for r in other.videos], ["a"])

    def test_memo_cleared_on_refresh(self):
        first = self.service.view()
        self.service.refresh()
        second = self.service.view()
        self.assertIsNot(first.videos, second.videos)
        self.assertEqual(first.videos, second.videos)

    def test_reference_region_policy(self):
        service = DashboardService(self.source, region_policy="reference")
        self.assertEqual(len(service.filter_options().regions), 18)


if __name__ == "__main__":
    unittest.main()
