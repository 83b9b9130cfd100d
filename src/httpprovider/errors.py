"""Exception hierarchy for fetch and provider failures."""

from __future__ import annotations

from .models.diagnostics import Diagnostic, Severity


class ProviderError(Exception):
    """
    Base class for recoverable errors raised by a fetch.

    Each error aborts only the operation that raised it. The provider
    layer converts it into an error diagnostic for the host.

    Attributes:
        summary: Short, human-readable description
        detail: Longer explanation (may be empty)
        attribute: Attribute path the error relates to, if any
    """

    def __init__(self, summary: str, detail: str = "", attribute: str | None = None) -> None:
        super().__init__(summary if not detail else f"{summary}: {detail}")
        self.summary = summary
        self.detail = detail
        self.attribute = attribute

    def to_diagnostic(self) -> Diagnostic:
        """Convert this error into an error diagnostic."""
        return Diagnostic(
            severity=Severity.ERROR,
            summary=self.summary,
            detail=self.detail,
            attribute=self.attribute,
        )


class ValidationError(ProviderError):
    """Inputs were rejected before any network call was attempted."""


class TransportError(ProviderError):
    """The request could not be built, sent, or answered within the deadline."""


class BodyReadError(ProviderError):
    """The response body could not be read completely."""
