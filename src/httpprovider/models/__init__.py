"""httpprovider configuration, request, result and diagnostic models."""

from .config import DEFAULT_USER_AGENT, ProviderConfig
from .diagnostics import Diagnostic, Diagnostics, Severity
from .request import ALLOWED_METHODS, DEFAULT_METHOD, RequestSpec
from .result import FetchResult

__all__ = [
    # Config
    "DEFAULT_USER_AGENT",
    "ProviderConfig",
    # Diagnostics
    "Diagnostic",
    "Diagnostics",
    "Severity",
    # Request / result
    "ALLOWED_METHODS",
    "DEFAULT_METHOD",
    "RequestSpec",
    "FetchResult",
]
