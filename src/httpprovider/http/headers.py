"""Folding of multi-valued response headers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Union

# RFC 2616 section 4.2: repeated fields combine into one comma-separated value
HEADER_VALUE_SEPARATOR = ", "

HeaderInput = Union[Mapping[str, Union[str, Sequence[str]]], Iterable[tuple[str, str]]]


def _iter_pairs(headers: Any) -> Iterable[tuple[str, str]]:
    # aiohttp's CIMultiDictProxy repeats a name once per received field
    if hasattr(headers, "getall"):
        return headers.items()
    if isinstance(headers, Mapping):
        return (
            (name, value)
            for name, values in headers.items()
            for value in ([values] if isinstance(values, str) else values)
        )
    return headers


def fold_headers(headers: HeaderInput) -> dict[str, str]:
    """
    Fold a multi-valued header collection into one value per name.

    Values of a repeated header are joined with ", " in the order they
    were received. HTTP field names are case-insensitive, so names that
    differ only by case (e.g. "Set-Cookie" and "set-cookie") are merged
    into one entry under the casing seen first. The output keeps
    first-occurrence order; nothing is sorted.

    Args:
        headers: A multidict (e.g. aiohttp response headers), a mapping of
            name to list of values, or an iterable of (name, value) pairs

    Returns:
        Mapping of header name to folded value

    Example:
        >>> fold_headers({"X-A": ["1", "2"]})
        {'X-A': '1, 2'}
    """
    names: dict[str, str] = {}
    values: dict[str, list[str]] = {}

    for name, value in _iter_pairs(headers):
        key = name.lower()
        if key not in names:
            names[key] = name
            values[key] = []
        values[key].append(value)

    return {names[key]: HEADER_VALUE_SEPARATOR.join(vals) for key, vals in values.items()}
