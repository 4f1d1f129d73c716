"""FastAPI routes for trending dashboard API."""

from fastapi import FastAPI, Query

from trending_dashboard.api.schemas import (
    FilterOptionsResponse,
    RefreshResponse,
    RegionResponse,
    VideoCardResponse,
    VideoPageResponse,
)

from .. import __version__
from ..display import to_card
from ..models import ALL, FilterState
from ..regions import REGION_LIST, region_tag
from ..service import get_service

app = FastAPI(
    title="Trending Dashboard API",
    description="Deduplicated, filterable YouTube trending records per region",
    version=__version__,
)


@app.get("/")
async def root():
    """API root endpoint."""
    return {"message": "Trending Dashboard API", "version": __version__}


@app.get("/videos", response_model=VideoPageResponse)
def list_videos(
    month: str = Query(ALL, description="YYYY-MM or All"),
    region: str = Query(ALL, description="Region name or All"),
    match_type: str = Query(ALL, description="Match type (may be empty) or All"),
    q: str = Query("", description="Search title, region and channel"),
    limit: int | None = Query(None, ge=1, description="Maximum cards returned"),
):
    """
    Filtered, searched and sorted trending videos.

    Runs sync so the upstream fetch happens in the worker thread pool.
    """
    filters = FilterState(month=month, region=region, match_type=match_type, search_term=q)
    view = get_service().view(filters)
    videos = view.videos[:limit] if limit else view.videos

    return VideoPageResponse(
        heading=view.heading,
        total=len(view.videos),
        total_records=view.total_records,
        message=view.message,
        videos=[VideoCardResponse(**to_card(v).to_dict()) for v in videos],
    )


@app.get("/filters", response_model=FilterOptionsResponse)
def filter_options():
    """Selectable values for the month, region and match type filters."""
    options = get_service().filter_options()
    return FilterOptionsResponse(
        months=list(options.months),
        regions=list(options.regions),
        match_types=list(options.match_types),
    )


@app.get("/regions", response_model=list[RegionResponse])
async def regions():
    """Region reference table."""
    return [
        RegionResponse(code=code, name=name, tag=region_tag(code))
        for code, name in REGION_LIST
    ]


@app.post("/refresh", response_model=RefreshResponse)
def refresh():
    """Refetch the source now, bypassing the cache."""
    snapshot = get_service().refresh()
    return RefreshResponse(
        count=len(snapshot.records),
        status="error" if snapshot.error else "ok",
        error=snapshot.error,
        fetched_on=snapshot.fetched_on.isoformat() if snapshot.fetched_on else None,
    )
