"""Search, filter and sort normalized records for display."""

from datetime import datetime, timezone
from typing import Iterable

from ..models import ALL, FilterState, VideoRecord


def parse_published_at(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or date-time; None when missing or invalid.

    Values without an offset are taken as UTC so every parsed value compares.
    """
    if not value:
        return None
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def matches_search(record: VideoRecord, term: str) -> bool:
    """Case-insensitive substring match on title, region and channel.

    ``term`` must already be trimmed and lower-cased.
    """
    return (
        term in record.video_title.lower()
        or term in record.region_name.lower()
        or term in record.channel_id.lower()
    )


def matches_filters(record: VideoRecord, filters: FilterState) -> bool:
    """Exact, case-sensitive match on every categorical filter not set to All."""
    if filters.month != ALL and record.scrape_month != filters.month:
        return False
    if filters.region != ALL and record.region_name != filters.region:
        return False
    if filters.match_type != ALL and (record.matched_type or "") != filters.match_type:
        return False
    return True


def _published_sort_key(record: VideoRecord) -> tuple[int, float]:
    published = parse_published_at(record.published_at)
    if published is None:
        return (1, 0.0)
    return (0, -published.timestamp())


def sort_by_published(records: Iterable[VideoRecord]) -> list[VideoRecord]:
    """Newest first; records without a usable date go last in input order."""
    return sorted(records, key=_published_sort_key)


def apply_filters(
    records: Iterable[VideoRecord], filters: FilterState
) -> list[VideoRecord]:
    """
    Produce the display list for one filter state.

    Pure: the input is never mutated and identical inputs give identical
    output.

    Args:
        records: Normalized records
        filters: Current filter selections

    Returns:
        New list of matching records sorted by published_at descending
    """
    results = list(records)

    term = filters.search_term.strip().lower()
    if term:
        results = [r for r in results if matches_search(r, term)]

    results = [r for r in results if matches_filters(r, filters)]

    return sort_by_published(results)
