from pydantic import BaseModel


class VideoCardResponse(BaseModel):
    key: str
    video_id: str
    region_name: str
    region_code: str
    region_tag: str
    video_rank: int | None
    video_title: str
    video_url: str
    video_thumbnail_url: str
    channel_id: str
    published_at: str
    published_display: str
    matched_type: str
    scrape_month: str


class VideoPageResponse(BaseModel):
    heading: str
    total: int
    total_records: int
    message: str | None
    videos: list[VideoCardResponse]


class FilterOptionsResponse(BaseModel):
    months: list[str]
    regions: list[str]
    match_types: list[str]


class RegionResponse(BaseModel):
    code: str
    name: str
    tag: str


class RefreshResponse(BaseModel):
    count: int
    status: str
    error: str | None
    fetched_on: str | None
