"""
httpprovider - Expose a single HTTP request as declarative, read-only state.

Usage:
    from httpprovider import FetchOperation, HttpFetcher, RequestSpec

    spec = RequestSpec(url="https://example.com/health")

    async with HttpFetcher() as fetcher:
        result = await FetchOperation(fetcher).run(spec)
        print(result.status_code, result.response_body)
"""

__version__ = "1.0.0"

from .core.operation import FetchOperation, fetch_blocking
from .errors import BodyReadError, ProviderError, TransportError, ValidationError
from .http.client import HttpFetcher
from .http.content_type import ContentClassifier, is_content_type_text
from .http.headers import fold_headers
from .models.config import ProviderConfig
from .models.diagnostics import Diagnostic, Diagnostics, Severity
from .models.request import RequestSpec
from .models.result import FetchResult
from .provider import HttpDataSource, HttpProvider, HttpResource

__all__ = [
    "__version__",
    # Core
    "FetchOperation",
    "fetch_blocking",
    "HttpFetcher",
    "ContentClassifier",
    "is_content_type_text",
    "fold_headers",
    # Models
    "ProviderConfig",
    "RequestSpec",
    "FetchResult",
    "Diagnostic",
    "Diagnostics",
    "Severity",
    # Errors
    "ProviderError",
    "ValidationError",
    "TransportError",
    "BodyReadError",
    # Provider
    "HttpProvider",
    "HttpDataSource",
    "HttpResource",
]
