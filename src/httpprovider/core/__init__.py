"""Core fetch operation."""

from .operation import FetchOperation, decode_body, fetch_blocking

__all__ = ["FetchOperation", "decode_body", "fetch_blocking"]
