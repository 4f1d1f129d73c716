"""Dashboard Service - refresh cycle and view assembly."""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from .config import settings
from .display import view_heading
from .exceptions import SourceUnavailable
from .ingestion.fetcher import HttpRecordSource
from .ingestion.normalizer import normalize
from .interfaces import RecordSource
from .models import FilterOptions, FilterState, VideoRecord
from .search.options import RegionPolicy, build_filter_options
from .search.pipeline import apply_filters

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Could not load data. Check the source URL or the JSON format."
NO_MATCH_MESSAGE = "No videos match the current filters. Try adjusting them."


@dataclass(frozen=True)
class Snapshot:
    """One normalized record set and where it came from."""

    records: tuple[VideoRecord, ...] = ()
    generation: int = 0
    loaded_at: float | None = None  # service clock
    fetched_on: datetime | None = None
    error: str | None = None


@dataclass(frozen=True)
class DashboardView:
    """Everything the presentation layer needs for one render."""

    videos: tuple[VideoRecord, ...]
    options: FilterOptions
    filters: FilterState
    heading: str
    total_records: int
    message: str | None = None
    error: str | None = None


class DashboardService:
    """Service layer owning the record snapshot and its refresh cycle."""

    def __init__(
        self,
        source: RecordSource,
        cache_ttl_seconds: int | None = None,
        region_policy: RegionPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.cache_ttl_seconds = (
            cache_ttl_seconds if cache_ttl_seconds is not None else settings.cache_ttl_seconds
        )
        self.region_policy = region_policy or settings.region_options
        self._clock = clock
        self._lock = threading.Lock()
        self._refresh_lock = threading.RLock()
        self._generation = 0
        self._snapshot = Snapshot()
        self._view_cache: tuple[tuple[int, FilterState], tuple[VideoRecord, ...]] | None = None

    def refresh(self) -> Snapshot:
        """
        Fetch and normalize a fresh record set.

        Refreshes run one at a time; a caller arriving while another fetch is
        in flight waits for it and then fetches again, so the last refresh
        to complete is the one served. A refresh started from inside a fetch
        (same thread) supersedes the outer one, whose result is dropped.

        Returns:
            The snapshot now being served
        """
        with self._refresh_lock:
            with self._lock:
                self._generation += 1
                generation = self._generation

            error = None
            try:
                raw = self.source.fetch()
            except SourceUnavailable as e:
                logger.warning(f"Record source unavailable: {e}")
                raw = []
                error = str(e)

            snapshot = Snapshot(
                records=tuple(normalize(raw)),
                generation=generation,
                loaded_at=self._clock(),
                fetched_on=datetime.now(timezone.utc),
                error=error,
            )

            with self._lock:
                if generation != self._generation:
                    # The newer refresh has already completed
                    logger.info(
                        f"Discarding fetch #{generation}, superseded by #{self._generation}"
                    )
                    return self._snapshot
                self._snapshot = snapshot
                self._view_cache = None

        logger.info(f"Loaded {len(snapshot.records)} records (fetch #{generation})")
        return snapshot

    def snapshot(self) -> Snapshot:
        """
        Current snapshot, refreshed first when missing, failed or expired.

        Concurrent callers that find the snapshot stale share one fetch: the
        first refreshes, the rest wait and take its result.
        """
        with self._lock:
            current = self._snapshot
        if not self._is_stale(current):
            return current

        with self._refresh_lock:
            with self._lock:
                latest = self._snapshot
            if latest.generation != current.generation:
                return latest
            return self.refresh()

    def records(self) -> tuple[VideoRecord, ...]:
        return self.snapshot().records

    def filter_options(self) -> FilterOptions:
        return build_filter_options(self.records(), self.region_policy)

    def view(self, filters: FilterState | None = None) -> DashboardView:
        """Build the filtered, sorted view for one filter state."""
        filters = filters or FilterState()
        snapshot = self.snapshot()
        videos = self._filtered(snapshot, filters)

        message = None
        if not snapshot.records:
            message = NO_DATA_MESSAGE
        elif not videos:
            message = NO_MATCH_MESSAGE

        return DashboardView(
            videos=videos,
            options=build_filter_options(snapshot.records, self.region_policy),
            filters=filters,
            heading=view_heading(filters),
            total_records=len(snapshot.records),
            message=message,
            error=snapshot.error,
        )

    # --- Private helper methods ---

    def _is_stale(self, snapshot: Snapshot) -> bool:
        if snapshot.loaded_at is None or snapshot.error is not None:
            return True
        return self._clock() - snapshot.loaded_at >= self.cache_ttl_seconds

    def _filtered(
        self, snapshot: Snapshot, filters: FilterState
    ) -> tuple[VideoRecord, ...]:
        """Filter pipeline memoized on (snapshot generation, filters)."""
        key = (snapshot.generation, filters)
        with self._lock:
            cached = self._view_cache
        if cached is not None and cached[0] == key:
            return cached[1]

        videos = tuple(apply_filters(snapshot.records, filters))
        with self._lock:
            if snapshot.generation == self._snapshot.generation:
                self._view_cache = (key, videos)
        return videos


# Singleton service instance
_service: DashboardService | None = None


def get_service() -> DashboardService:
    """Get or create the dashboard service for the configured source."""
    global _service

    if _service is None:
        _service = DashboardService(HttpRecordSource())

    return _service


def reset_service() -> None:
    """Reset the service (useful when the source URL changes)."""
    global _service
    _service = None
