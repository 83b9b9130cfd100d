"""Diagnostics reported back to the orchestration host."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single error or warning attached to an operation.

    Attributes:
        severity: ERROR aborts the operation, WARNING is advisory
        summary: Short description shown by the host
        detail: Longer explanation
        attribute: Attribute path the diagnostic relates to, if any
    """

    severity: Severity
    summary: str
    detail: str = ""
    attribute: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """Check if this diagnostic is an error."""
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert diagnostic to a dictionary for serialization."""
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "summary": self.summary,
            "detail": self.detail,
        }
        if self.attribute is not None:
            data["attribute"] = self.attribute
        return data


class Diagnostics:
    """
    Ordered collection of diagnostics for one operation.

    Passed explicitly into operations as their diagnostics sink.

    Example:
        diags = Diagnostics()
        diags.add_warning("Content-Type is not text", "...")
        if diags.has_error():
            return
    """

    def __init__(self, items: Optional[Iterable[Diagnostic]] = None) -> None:
        self._items: list[Diagnostic] = list(items or [])

    def append(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._items.extend(diagnostics)

    def add_error(self, summary: str, detail: str = "", attribute: Optional[str] = None) -> None:
        self.append(Diagnostic(Severity.ERROR, summary, detail, attribute))

    def add_warning(self, summary: str, detail: str = "", attribute: Optional[str] = None) -> None:
        self.append(Diagnostic(Severity.WARNING, summary, detail, attribute))

    def has_error(self) -> bool:
        """Check if any diagnostic is an error."""
        return any(d.is_error for d in self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.WARNING]

    def to_list(self) -> list[dict[str, Any]]:
        return [d.to_dict() for d in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
