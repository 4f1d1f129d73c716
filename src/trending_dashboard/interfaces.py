"""Interfaces (Protocols) for dependency injection and testing."""

from typing import Any, Protocol


class RecordSource(Protocol):
    """Protocol for fetching raw trending records from an external source."""

    def fetch(self) -> list[Any]:
        """Return the decoded JSON array.

        Raises:
            SourceUnavailable: If the source cannot be reached or decoded.
        """
        ...
