"""Search module for filtering, sorting and dropdown options."""

from .options import build_filter_options
from .pipeline import apply_filters, parse_published_at, sort_by_published

__all__ = [
    "apply_filters",
    "build_filter_options",
    "parse_published_at",
    "sort_by_published",
]
