"""RequestSpec - the declarative inputs of a fetch."""

from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

ALLOWED_METHODS = ("GET", "POST", "HEAD")
ALLOWED_SCHEMES = frozenset({"http", "https"})
DEFAULT_METHOD = "GET"


class RequestSpec(BaseModel):
    """
    Inputs to a single fetch.

    An empty or missing method defaults to GET. Methods are matched
    case-sensitively against GET, POST and HEAD.

    Example:
        spec = RequestSpec(
            url="https://example.com/search",
            method="POST",
            request_headers={"Accept": "application/json"},
            request_body='{"q": "docs"}',
        )
    """

    url: str = Field(..., description="Absolute http or https URL")
    method: str = Field(DEFAULT_METHOD, description="HTTP method (GET, POST or HEAD)")
    request_headers: dict[str, str] = Field(default_factory=dict, description="Request header names and values")
    request_body: str = Field("", description="Request body sent with every method")

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        if not v:
            raise ValueError("URL must not be empty")
        parsed = urlparse(v)
        if parsed.scheme.lower() not in ALLOWED_SCHEMES:
            raise ValueError(f"URL scheme must be http or https, got '{parsed.scheme}'")
        if not parsed.netloc:
            raise ValueError("URL must be absolute and include a host")
        return v

    @field_validator("method", mode="before")
    @classmethod
    def _default_method(cls, v: Optional[str]) -> str:
        if v is None or v == "":
            return DEFAULT_METHOD
        return v

    @field_validator("method")
    @classmethod
    def _check_method(cls, v: str) -> str:
        if v not in ALLOWED_METHODS:
            raise ValueError(f"method must be one of {', '.join(ALLOWED_METHODS)}, got '{v}'")
        return v

    @field_validator("request_headers", mode="before")
    @classmethod
    def _default_headers(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("request_body", mode="before")
    @classmethod
    def _default_body(cls, v: Any) -> Any:
        return "" if v is None else v

    def with_method(self, method: str) -> "RequestSpec":
        """Return a copy of this spec using a different method."""
        return self.model_copy(update={"method": method})
