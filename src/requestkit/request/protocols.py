"""Protocol definitions for the collaborators a Request holds but never drives."""

from typing import Any, Protocol


class Abortable(Protocol):
    """
    Handle registered by whichever component dispatches a Request.

    Request.abort() forwards to it; the Request never creates one itself.
    """

    def abort(self) -> None:
        """Signal cancellation of the in-flight dispatch."""
        ...


class DataParser(Protocol):
    """
    Protocol for turning a response body into a result.

    The Request only stores a parser and reports its class name in
    diagnostics. The transport layer is the one that calls parse().
    """

    def parse(self, content: bytes, *, charset: str, content_type: str = "") -> Any:
        """
        Parse a raw response body.

        Args:
            content: Raw response bytes
            charset: Charset configured on the Request
            content_type: Content-Type header of the response

        Returns:
            Parsed result, type depends on the implementation
        """
        ...
