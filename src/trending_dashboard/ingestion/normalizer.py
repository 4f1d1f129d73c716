"""Normalize raw trending records and keep the best rank per video and region."""

import logging
import math
from typing import Any, Iterable

from ..exceptions import MalformedRecord
from ..models import NO_MONTH, VideoRecord

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _coerce_rank(value: Any) -> int | None:
    """Positive integer rank, or None for anything that cannot rank."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rank = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rank) or rank < 1:
        return None
    return int(rank)


def _coerce_count(value: Any) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        count = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(count) or count < 0:
        return None
    return int(count)


def derive_scrape_month(scrape_timestamp: str | None) -> str:
    """Month bucket (YYYY-MM) of a scrape timestamp, or N/A when absent."""
    if not scrape_timestamp:
        return NO_MONTH
    return scrape_timestamp[:7]


def parse_record(raw: Any) -> VideoRecord:
    """Build a VideoRecord from one element of the fetched JSON array.

    Raises:
        MalformedRecord: If the element is not an object or lacks
            ``video_id`` / ``region_name``.
    """
    if not isinstance(raw, dict):
        raise MalformedRecord(f"Expected an object, got {type(raw).__name__}")

    video_id = _text(raw.get("video_id"))
    region_name = _text(raw.get("region_name"))
    if not video_id or not region_name:
        raise MalformedRecord(
            f"Missing identity fields (video_id={video_id!r}, region_name={region_name!r})"
        )

    scrape_timestamp = _text(raw.get("scrape_timestamp")) or None

    return VideoRecord(
        video_id=video_id,
        region_name=region_name,
        video_rank=_coerce_rank(raw.get("video_rank")),
        published_at=_text(raw.get("published_at")),
        video_title=_text(raw.get("video_title")),
        channel_id=_text(raw.get("channel_id")),
        scrape_timestamp=scrape_timestamp,
        video_thumbnail_url=_text(raw.get("video_thumbnail_url")),
        video_url=_text(raw.get("video_url")),
        matched_type=_text(raw.get("matched_type")),
        scrape_month=derive_scrape_month(scrape_timestamp),
        localized_title=_text(raw.get("localized_title")),
        video_language=_text(raw.get("video_language")),
        tag=_text(raw.get("tag")),
        project_code=_text(raw.get("project_code")),
        video_view_count=_coerce_count(raw.get("video_view_count")),
        video_comment_count=_coerce_count(raw.get("video_comment_count")),
    )


def normalize(raw_records: Iterable[Any]) -> list[VideoRecord]:
    """
    Parse raw records and resolve duplicates to the best rank.

    Records sharing a (video_id, region_name) key collapse to the one with
    the lowest rank; a missing rank loses to any present rank and ties keep
    the first record seen. Unidentifiable records are skipped.

    Args:
        raw_records: Decoded JSON array from the record source

    Returns:
        One record per key, in no guaranteed order
    """
    best: dict[tuple[str, str], VideoRecord] = {}
    skipped = 0

    for raw in raw_records:
        try:
            record = parse_record(raw)
        except MalformedRecord as e:
            skipped += 1
            logger.debug(f"Skipping record: {e}")
            continue

        current = best.get(record.identity)
        if current is None or record.effective_rank < current.effective_rank:
            best[record.identity] = record

    if skipped:
        logger.info(f"Skipped {skipped} records without video_id or region_name")

    return list(best.values())
