"""Filter dropdown options derived from the normalized record set."""

from typing import Iterable, Literal

from ..models import NO_MONTH, FilterOptions, VideoRecord
from ..regions import REGION_NAMES

RegionPolicy = Literal["data", "reference"]


def build_filter_options(
    records: Iterable[VideoRecord], region_policy: RegionPolicy = "data"
) -> FilterOptions:
    """
    Collect the selectable month, region and match type values.

    Args:
        records: Normalized records
        region_policy: "data" lists regions present in the records,
            "reference" lists the fixed reference table in its declared order

    Returns:
        FilterOptions with sorted months (N/A excluded) and sorted match
        types (the empty type included)
    """
    records = list(records)

    months = sorted({r.scrape_month for r in records} - {NO_MONTH})
    match_types = sorted({r.matched_type or "" for r in records})

    if region_policy == "reference":
        regions = list(REGION_NAMES)
    else:
        regions = sorted({r.region_name for r in records if r.region_name})

    return FilterOptions(
        months=tuple(months),
        regions=tuple(regions),
        match_types=tuple(match_types),
    )
