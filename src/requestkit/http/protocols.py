"""Protocol definitions for the transport consuming a Request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..request import Request


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by a Transport.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes = field(repr=False)
    content_type: str
    headers: dict[str, str]
    url: str

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class Transport(Protocol):
    """
    Protocol for components that dispatch a Request.

    A transport reads the final URL, headers and entities from the
    Request, performs the I/O and may register an abort handle on it
    for the duration of the call.
    """

    async def execute(self, request: Request) -> HttpResponse:
        """
        Dispatch a request.

        Args:
            request: The fully assembled Request

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            RequestKitError: If the URL or body cannot be built
            Exception on network errors (after retries exhausted)
        """
        ...
