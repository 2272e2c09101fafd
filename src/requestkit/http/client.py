"""Async aiohttp transport dispatching Requests with retry logic."""

from __future__ import annotations

import asyncio
import logging
import random
from contextlib import ExitStack
from types import TracebackType
from typing import Any

import aiohttp

from ..errors import HttpStatusError
from ..models.config import ClientConfig
from ..request import Request
from .body import CONTENT_TYPE, build_body
from .protocols import HttpResponse

logger = logging.getLogger(__name__)


class TaskAbortHandle:
    """
    Abort handle cancelling the asyncio task that dispatches a Request.

    Safe to trigger from another thread: the cancellation is scheduled on
    the loop that owns the task.
    """

    def __init__(self, task: asyncio.Task, loop: asyncio.AbstractEventLoop) -> None:
        self._task = task
        self._loop = loop

    @classmethod
    def for_current_task(cls) -> TaskAbortHandle:
        task = asyncio.current_task()
        if task is None:
            raise RuntimeError("No running task to abort")
        return cls(task, asyncio.get_running_loop())

    def abort(self) -> None:
        logger.info(f"Aborting {self._task.get_name()}")
        self._loop.call_soon_threadsafe(self._task.cancel)


class AsyncHttpTransport:
    """
    Async HTTP transport with retry logic.

    Features:
    - Exponential backoff retry for transient failures, bounded by the
      retry count of each Request
    - Abort support: Request.abort() cancels the in-flight dispatch
    - Content size limits to prevent memory exhaustion
    - Client-wide default headers, overridden by Request headers

    Example:
        async with AsyncHttpTransport(ClientConfig(max_retry_times=2)) as transport:
            request = transport.new_request("https://api.example.com/items")
            request.add_param("page", "1")
            text = await transport.execute_and_parse(request)
    """

    # Status codes that warrant a retry
    RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

    # Exceptions that warrant a retry
    RETRYABLE_EXCEPTIONS = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
        ConnectionError,
    )

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Client-wide defaults (charset, retries, timeouts, headers)
            session: Existing session to use. It is not closed on exit;
                without one, a session is created on enter and closed on exit.
        """
        self._config = config or ClientConfig()
        self._session = session
        self._owns_session = session is None

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> AsyncHttpTransport:
        """Enter async context and create session."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None

    def new_request(self, url: str, **kwargs: Any) -> Request:
        """
        Create a Request seeded with the configured charset and retry count.

        Args:
            url: Base URL
            **kwargs: Passed through to Request

        Returns:
            A new Request
        """
        return Request(url, **kwargs).set_charset(self._config.charset).set_max_retry_times(self._config.max_retry_times)

    def _merge_headers(self, request: Request) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._config.user_agent:
            headers["User-Agent"] = self._config.user_agent
        headers.update(self._config.default_headers)
        headers.update(request.headers)
        return headers

    def _calculate_retry_delay(self, attempt: int) -> float:
        """
        Calculate delay for exponential backoff with jitter.

        Args:
            attempt: Current attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        delay: float = self._config.retry_base_delay * (2**attempt)
        jitter: float = random.uniform(0, 1)
        return delay + jitter

    @staticmethod
    def _stream_positions(request: Request) -> dict[str, int] | None:
        """Remember where each stream starts so a retry can rewind. None if any stream cannot seek."""
        positions = {}
        for key, entity in request.stream_entities.items():
            seekable = getattr(entity.stream, "seekable", None)
            if not callable(seekable) or not seekable():
                return None
            positions[key] = entity.stream.tell()
        return positions

    async def execute(self, request: Request) -> HttpResponse:
        """
        Dispatch a request with retry logic.

        Args:
            request: The Request to send

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            UrlMissingError, ParameterTranslationError, EncodingError:
                If the URL or body cannot be built (never retried)
            aiohttp.ClientError: On network errors after retries exhausted
            ValueError: On content size exceeded
            asyncio.CancelledError: If the request was aborted
        """
        if self._session is None:
            raise RuntimeError("Transport not initialized. Use 'async with' context manager.")

        url = request.get_url()
        headers = self._merge_headers(request)
        positions = self._stream_positions(request)
        max_retries = request.max_retry_times
        if positions is None and request.stream_entities:
            # A consumed stream cannot be sent twice
            max_retries = 0

        request.set_abort(TaskAbortHandle.for_current_task())
        try:
            for attempt in range(max_retries + 1):
                if attempt and positions:
                    for key, position in positions.items():
                        request.stream_entities[key].stream.seek(position)
                try:
                    response = await self._send(request, url, headers)
                except self.RETRYABLE_EXCEPTIONS as e:
                    if attempt < max_retries:
                        delay = self._calculate_retry_delay(attempt)
                        logger.warning(
                            f"Error requesting {url}: {e}, retrying in {delay:.1f}s "
                            f"(attempt {attempt + 1}/{max_retries + 1})"
                        )
                        await asyncio.sleep(delay)
                        continue
                    logger.error(f"HTTP error for {url} after {max_retries + 1} attempts: {e}")
                    raise

                if response.status_code in self.RETRYABLE_STATUS_CODES and attempt < max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"Got {response.status_code} for {url}, retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{max_retries + 1})"
                    )
                    await asyncio.sleep(delay)
                    continue
                return response
        finally:
            request.set_abort(None)

        # Should not reach here, but just in case
        raise RuntimeError(f"Unexpected error requesting {url}")

    async def _send(self, request: Request, url: str, headers: dict[str, str]) -> HttpResponse:
        """Perform a single attempt. Files opened for the body are closed on return."""
        assert self._session is not None
        with ExitStack() as stack:
            body, content_type = build_body(request, stack)
            attempt_headers = dict(headers)
            if content_type and not any(k.lower() == "content-type" for k in attempt_headers):
                attempt_headers[CONTENT_TYPE] = content_type

            async with self._session.request(
                request.method.value,
                url,
                headers=attempt_headers,
                data=body,
                timeout=aiohttp.ClientTimeout(total=self._config.default_timeout),
            ) as response:
                # Check Content-Length if available
                content_length = response.headers.get("Content-Length")
                if content_length and int(content_length) > self._config.max_content_size:
                    raise ValueError(f"Content too large: {content_length} bytes")

                # Read content with size limit
                content = b""
                async for chunk in response.content.iter_chunked(8192):
                    content += chunk
                    if len(content) > self._config.max_content_size:
                        raise ValueError(f"Content size limit exceeded: >{self._config.max_content_size} bytes")

                return HttpResponse(
                    status_code=response.status,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    headers=dict(response.headers),
                    url=str(response.url),
                )

    async def execute_and_parse(self, request: Request) -> Any:
        """
        Dispatch a request and parse the body with its data parser.

        Args:
            request: The Request to send

        Returns:
            Whatever request.data_parser returns

        Raises:
            HttpStatusError: If the final response status is 400 or above
        """
        response = await self.execute(request)
        if not response.ok:
            raise HttpStatusError(response.status_code, response.url, response.content)
        return request.data_parser.parse(
            response.content,
            charset=request.charset,
            content_type=response.content_type,
        )
