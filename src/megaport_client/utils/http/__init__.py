"""HTTP utilities public API (barrel module).

This package provides:
- Construction of the shared httpx client
- The authenticated single-request executor
- The response classifier

Recommended import pattern for consumers:
    from megaport_client.utils.http import RequestExecutor, classify_response
"""

from .classifier import classify_response
from .client_factory import create_http_client, create_timeout
from .executor import RequestExecutor

__all__ = [
    "RequestExecutor",
    "classify_response",
    "create_http_client",
    "create_timeout",
]
