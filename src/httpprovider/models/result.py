"""FetchResult - the normalized output of a fetch."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FetchResult:
    """
    Normalized response of one fetch.

    A result is created whole on every fetch and replaces any earlier
    result for the same object; it is never merged or partially updated.

    Attributes:
        identity: The requested URL, used as the stable object id
        status_code: HTTP status code of the final response
        response_headers: Folded headers, one entry per header name
        response_body: Full body decoded as text
    """

    identity: str
    status_code: int
    response_headers: dict[str, str] = field(default_factory=dict)
    response_body: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "id": self.identity,
            "status_code": self.status_code,
            "response_headers": dict(self.response_headers),
            "response_body": self.response_body,
        }
