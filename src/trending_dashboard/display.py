"""Display helpers for rendering records as cards."""

from dataclasses import asdict, dataclass

from .models import ALL, FilterState, VideoRecord
from .regions import region_code, region_tag
from .search.pipeline import parse_published_at


@dataclass(frozen=True)
class VideoCard:
    """A record with its resolved display values."""

    record: VideoRecord
    key: str
    region_code: str
    region_tag: str
    published_display: str

    def to_dict(self) -> dict:
        data = asdict(self.record)
        data.update(
            key=self.key,
            region_code=self.region_code,
            region_tag=self.region_tag,
            published_display=self.published_display,
        )
        return data


def format_published_date(published_at: str | None) -> str:
    """Format as e.g. ``May 1, 2024``; raw text when it does not parse."""
    if not published_at:
        return ""
    parsed = parse_published_at(published_at)
    if parsed is None:
        return published_at
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def view_heading(filters: FilterState) -> str:
    label = "Current Data" if filters.month == ALL else filters.month
    return f"{label} Trends"


def to_card(record: VideoRecord) -> VideoCard:
    code = region_code(record.region_name)
    return VideoCard(
        record=record,
        key=record.key,
        region_code=code,
        region_tag=region_tag(code),
        published_display=format_published_date(record.published_at),
    )
