"""aiohttp transport dispatching Requests."""

from .body import build_body
from .client import AsyncHttpTransport, TaskAbortHandle
from .protocols import HttpResponse, Transport

__all__ = [
    "AsyncHttpTransport",
    "HttpResponse",
    "TaskAbortHandle",
    "Transport",
    "build_body",
]
