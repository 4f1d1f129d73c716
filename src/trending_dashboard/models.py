"""Value types shared by ingestion, the filter pipeline and presentation."""

import math
from dataclasses import dataclass, replace

ALL = "All"
NO_MONTH = "N/A"


@dataclass(frozen=True)
class VideoRecord:
    """One appearance of a video in a region's trending list."""

    video_id: str
    region_name: str
    video_rank: int | None = None
    published_at: str = ""
    video_title: str = ""
    channel_id: str = ""
    scrape_timestamp: str | None = None
    video_thumbnail_url: str = ""
    video_url: str = ""
    matched_type: str = ""
    scrape_month: str = NO_MONTH

    # Passthrough fields some sources include
    localized_title: str = ""
    video_language: str = ""
    tag: str = ""
    project_code: str = ""
    video_view_count: int | None = None
    video_comment_count: int | None = None

    @property
    def identity(self) -> tuple[str, str]:
        """Deduplication key: one record per video per region."""
        return (self.video_id, self.region_name)

    @property
    def key(self) -> str:
        """Card key for the presentation layer."""
        return f"{self.video_id}_{self.region_name}"

    @property
    def effective_rank(self) -> float:
        """Rank used for comparison; a missing rank loses to any real one."""
        return self.video_rank if self.video_rank else math.inf


@dataclass(frozen=True)
class FilterState:
    """User-driven filter selections for one viewing session."""

    month: str = ALL
    region: str = ALL
    match_type: str = ALL
    search_term: str = ""

    def update(self, name: str, value: str) -> "FilterState":
        """Return a new state with one field changed."""
        return replace(self, **{name: value})


@dataclass(frozen=True)
class FilterOptions:
    """Selectable values for the month, region and match type dropdowns."""

    months: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    match_types: tuple[str, ...] = ()
