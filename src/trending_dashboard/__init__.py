"""Trending Dashboard - deduplicated, filterable YouTube trending records."""

__version__ = "0.1.0"

from .models import FilterOptions, FilterState, VideoRecord
from .service import DashboardService, DashboardView, Snapshot

__all__ = [
    "FilterOptions",
    "FilterState",
    "VideoRecord",
    "DashboardService",
    "DashboardView",
    "Snapshot",
]
