"""Ingestion module for fetching and normalizing trending records."""

from .fetcher import HttpRecordSource
from .normalizer import derive_scrape_month, normalize, parse_record

__all__ = [
    "HttpRecordSource",
    "derive_scrape_month",
    "normalize",
    "parse_record",
]
