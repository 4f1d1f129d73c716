class SourceUnavailable(Exception):
    """Raised when the record source cannot be fetched or decoded."""

    pass


class MalformedRecord(ValueError):
    """Raised when a raw record lacks its identity fields."""

    pass
