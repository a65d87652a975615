"""HTTP transport for reqpipe.

The pipeline only needs an async callable ``resource -> result``. HttpGet is
the real one, backed by httpx.
"""

from reqpipe.clients.http import HttpClient, HttpGet

__all__ = [
    "HttpClient",
    "HttpGet",
]
