"""Content-Type parsing and text/binary classification."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# RFC 2045 tspecials; a token is any visible ASCII char outside this set.
TSPECIALS = frozenset('()<>@,;:\\"/[]?=')

# Media types whose bodies are safe to surface as strings
TEXT_MEDIA_TYPES = (
    re.compile(r"^text/.+"),
    re.compile(r"^application/json$"),
    re.compile(r"^application/samlmetadata\+xml"),
)

TEXT_CHARSETS = frozenset({"", "utf-8", "us-ascii"})


class MediaTypeError(ValueError):
    """Raised when a Content-Type value is not a valid media type."""


def _is_token_char(c: str) -> bool:
    return 0x20 < ord(c) < 0x7F and c not in TSPECIALS


def _consume_token(v: str) -> tuple[str, str]:
    i = 0
    while i < len(v) and _is_token_char(v[i]):
        i += 1
    return v[:i], v[i:]


def _consume_value(v: str) -> tuple[str, str]:
    """Consume a token or a quoted-string; returns ("", v) on failure."""
    if not v:
        return "", v
    if v[0] != '"':
        return _consume_token(v)

    chars: list[str] = []
    i = 1
    while i < len(v):
        c = v[i]
        if c == '"':
            return "".join(chars), v[i + 1 :]
        if c == "\\" and i + 1 < len(v) and v[i + 1] in TSPECIALS:
            chars.append(v[i + 1])
            i += 2
            continue
        if c == "\r" or c == "\n":
            return "", v
        chars.append(c)
        i += 1
    # Unterminated quoted-string
    return "", v


def _consume_param(v: str) -> tuple[str, str, str]:
    """Consume one ';name=value' parameter; returns ("", "", v) on failure."""
    rest = v.lstrip()
    if not rest.startswith(";"):
        return "", "", v
    rest = rest[1:].lstrip()
    name, rest = _consume_token(rest)
    if not name:
        return "", "", v
    rest = rest.lstrip()
    if not rest.startswith("="):
        return "", "", v
    rest = rest[1:].lstrip()
    value, after = _consume_value(rest)
    if value == "" and after == rest:
        return "", "", v
    return name.lower(), value, after


def parse_media_type(value: str) -> tuple[str, dict[str, str]]:
    """
    Parse a Content-Type value into a media type and its parameters.

    The media type is lower-cased, as are parameter names. Trailing
    semicolons are tolerated; anything else that does not follow the
    RFC 2045 grammar is rejected.

    Args:
        value: Raw Content-Type header value

    Returns:
        Tuple of (media type, parameters)

    Raises:
        MediaTypeError: If the value cannot be parsed
    """
    base, sep, rest = value.partition(";")
    media_type = base.strip().lower()

    main, remainder = _consume_token(media_type)
    if not main:
        raise MediaTypeError("no media type")
    if remainder:
        if not remainder.startswith("/"):
            raise MediaTypeError("expected slash after first token")
        sub, remainder = _consume_token(remainder[1:])
        if not sub:
            raise MediaTypeError("expected token after slash")
        if remainder:
            raise MediaTypeError("unexpected content after media subtype")

    params: dict[str, str] = {}
    v = sep + rest
    while v:
        v = v.lstrip()
        if not v:
            break
        name, param_value, after = _consume_param(v)
        if not name:
            if v.strip() == ";":
                break
            raise MediaTypeError("invalid media parameter")
        if name in params:
            raise MediaTypeError(f"duplicate parameter name '{name}'")
        params[name] = param_value
        v = after

    return media_type, params


@dataclass(frozen=True)
class Classification:
    """
    Result of classifying a Content-Type value.

    Attributes:
        is_text: True if the body can be surfaced as a string safely
        media_type: Parsed media type ("" if unparsable)
        params: Parsed parameters
    """

    is_text: bool
    media_type: str = ""
    params: dict[str, str] = field(default_factory=dict)


class ContentClassifier:
    """
    Decides whether a response body is text or opaque binary.

    A body is text when its media type is text/*, application/json or
    application/samlmetadata+xml and its charset is absent, utf-8 or
    us-ascii. Classification never blocks a fetch; it only decides
    whether a warning is attached.

    Example:
        classifier = ContentClassifier()
        if not classifier.classify("application/octet-stream").is_text:
            print("binary body")
    """

    def __init__(
        self,
        text_media_types: tuple[re.Pattern[str], ...] = TEXT_MEDIA_TYPES,
        text_charsets: frozenset[str] = TEXT_CHARSETS,
    ) -> None:
        self._text_media_types = text_media_types
        self._text_charsets = text_charsets

    def classify(self, content_type: str) -> Classification:
        """
        Classify a Content-Type header value.

        Args:
            content_type: Raw header value (may be empty)

        Returns:
            Classification; unparsable values classify as non-text
        """
        try:
            media_type, params = parse_media_type(content_type)
        except MediaTypeError:
            return Classification(is_text=False)

        for pattern in self._text_media_types:
            if pattern.match(media_type):
                charset = params.get("charset", "").lower()
                return Classification(
                    is_text=charset in self._text_charsets,
                    media_type=media_type,
                    params=params,
                )

        return Classification(is_text=False, media_type=media_type, params=params)


def is_content_type_text(content_type: str) -> bool:
    """Check if a Content-Type value denotes a text body."""
    return ContentClassifier().classify(content_type).is_text
