"""HTTP transport, content classification and header folding."""

from .client import USE_DEFAULT_TIMEOUT, HttpFetcher
from .content_type import (
    Classification,
    ContentClassifier,
    MediaTypeError,
    is_content_type_text,
    parse_media_type,
)
from .headers import HEADER_VALUE_SEPARATOR, fold_headers

__all__ = [
    "Classification",
    "ContentClassifier",
    "HEADER_VALUE_SEPARATOR",
    "HttpFetcher",
    "MediaTypeError",
    "USE_DEFAULT_TIMEOUT",
    "fold_headers",
    "is_content_type_text",
    "parse_media_type",
]
