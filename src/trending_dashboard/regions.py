"""Static region reference data: codes, display names and colour tags."""

from types import MappingProxyType

# (code, display name)
REGION_LIST: tuple[tuple[str, str], ...] = (
    ("US", "United States"),
    ("DE", "Germany"),
    ("FR", "France"),
    ("MX", "Mexico"),
    ("BR", "Brazil"),
    ("ID", "Indonesia"),
    ("JP", "Japan"),
    ("KR", "South Korea"),
    ("TW", "Taiwan"),
    ("VN", "Vietnam"),
    ("GB", "United Kingdom"),
    ("TH", "Thailand"),
    ("AE", "United Arab Emirates"),
    ("SA", "Saudi Arabia"),
    ("QA", "Qatar"),
    ("SG", "Singapore"),
    ("PH", "Philippines"),
    ("HK", "Hong Kong"),
)

REGION_NAMES: tuple[str, ...] = tuple(name for _, name in REGION_LIST)

REGION_MAP = MappingProxyType(
    {"N/A": "N/A", **{name: code for code, name in REGION_LIST}}
)

DEFAULT_TAG = "grey50"

# Tags are rich colour names
REGION_COLORS = MappingProxyType({
    "US": "blue",
    "JP": "red",
    "KR": "yellow",
    "TW": "green",
    "SG": "purple",
    "TH": "dark_cyan",
    "DE": "hot_pink",
    "FR": "slate_blue1",
    "MX": "dark_orange",
    "BR": "cyan",
    "ID": "chartreuse1",
    "VN": "spring_green2",
    "GB": "sky_blue1",
    "AE": "deep_pink2",
    "SA": "magenta",
    "QA": "gold1",
    "PH": "blue3",
    "HK": "yellow4",
    "": DEFAULT_TAG,
    "N/A": DEFAULT_TAG,
})


def region_code(region_name: str) -> str:
    """Short code for a region name; unknown names pass through unchanged."""
    return REGION_MAP.get(region_name, region_name)


def region_tag(code: str) -> str:
    """Colour tag for a region code."""
    return REGION_COLORS.get(code or "", DEFAULT_TAG)
