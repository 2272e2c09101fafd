"""Request builder aggregating parameters, headers and body entities."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO

from ..errors import UrlMissingError
from ..models.config import DEFAULT_CHARSET, DEFAULT_MAX_RETRY_TIMES, HttpMethod
from ..parsers import StringParser
from ..query import JsonQueryBuilder, QueryBuilder
from .aggregator import aggregate_params
from .entities import OCTET_STREAM, ByteArrayEntity, FileEntity, InputStreamEntity, StringEntity
from .protocols import Abortable, DataParser
from .url import check_charset, synthesize_url

logger = logging.getLogger(__name__)


def _type_name(component: object) -> str:
    return type(component).__name__ if component is not None else "None"


def _coerce_method(method: object) -> HttpMethod | None:
    """Map an HttpMethod or case-insensitive name to a member, None if unknown."""
    if isinstance(method, HttpMethod):
        return method
    if not isinstance(method, str):
        return None
    try:
        return HttpMethod(method.strip().upper())
    except ValueError:
        return None


class Request:
    """
    Description of one outgoing HTTP call, assembled before dispatch.

    Parameters come from two sources: explicit pairs added with add_param()
    and a typed parameter model translated by the query builder. Body
    payloads are kept as entities next to them. The transport asks for
    get_url() and the entity containers when it dispatches.

    Every adder and setter returns self (fluent API). Adders ignore None
    payloads instead of raising.

    Example:
        request = (
            Request("https://api.example.com/items", param_model=Search(q="cats"))
            .add_header("Accept", "application/json")
            .add_param("page", "2")
        )
        request.get_url()
        # 'https://api.example.com/items?page=2&q=cats'

    A Request is built by one caller and read once by the transport; it
    does no locking of its own.
    """

    def __init__(
        self,
        url: str | None = None,
        param_model: Any = None,
        parser: DataParser | None = None,
        method: HttpMethod | str = HttpMethod.GET,
        query_builder: QueryBuilder | None = None,
    ) -> None:
        """
        Initialize the request.

        Args:
            url: Base URL, may already contain a query string
            param_model: Typed parameter object for the query builder
            parser: Result parser for the transport (default: StringParser)
            method: HTTP method or its name (default: GET, also used for unknown names)
            query_builder: Translator for param_model (default: JsonQueryBuilder)
        """
        self._url = url
        self._param_model = param_model
        self._data_parser: DataParser = parser if parser is not None else StringParser()
        self._method = _coerce_method(method) or HttpMethod.GET
        self._query_builder: QueryBuilder = query_builder if query_builder is not None else JsonQueryBuilder()
        self._charset = DEFAULT_CHARSET
        self._max_retry_times = DEFAULT_MAX_RETRY_TIMES
        self._abort: Abortable | None = None

        self._headers: dict[str, str] = {}
        self._param_map: dict[str, str] = {}
        self._bytes_entities: list[ByteArrayEntity] = []
        self._string_entities: list[StringEntity] = []
        self._stream_entities: dict[str, InputStreamEntity] = {}
        self._file_entities: dict[str, FileEntity] = {}

    # Adders

    def add_header(self, key: str, value: str | None) -> Request:
        if value is not None:
            self._headers[key] = value
        return self

    def add_param(self, key: str, value: str | None) -> Request:
        if value is not None:
            self._param_map[key] = value
        return self

    def add_bytes_entity(self, content: bytes | None, content_type: str = OCTET_STREAM) -> Request:
        """Append a raw bytes body part."""
        if content is not None:
            self._bytes_entities.append(ByteArrayEntity(content, content_type))
        return self

    def add_string_entity(
        self,
        text: str | None,
        mime_type: str = "text/plain",
        charset: str | None = None,
    ) -> Request:
        """Append a text body part. charset defaults to the Request charset."""
        if text is not None:
            self._string_entities.append(StringEntity(text, mime_type, charset or self._charset))
        return self

    def add_stream_entity(
        self,
        key: str,
        stream: BinaryIO | None,
        stream_name: str | None = None,
        content_type: str = OCTET_STREAM,
    ) -> Request:
        """Set the stream sent under ``key``, replacing any previous one."""
        if stream is not None:
            self._stream_entities[key] = InputStreamEntity(stream, stream_name, content_type)
        return self

    def add_file_entity(
        self,
        key: str,
        path: str | Path | None,
        content_type: str = OCTET_STREAM,
    ) -> Request:
        """Set the file sent under ``key``, replacing any previous one."""
        if path is not None:
            self._file_entities[key] = FileEntity(path, content_type)
        return self

    def add_url_prefix(self, prefix: str) -> Request:
        """
        Prepend to the base URL.

        If the URL was set as "www.example.com", the scheme must be added
        by the caller: add_url_prefix("https://").
        """
        return self.set_url(prefix + (self._url or ""))

    def add_url_suffix(self, suffix: str) -> Request:
        """
        Append to the base URL.

        set_url("https://example.com/") then add_url_suffix("items/42").
        """
        return self.set_url((self._url or "") + suffix)

    # Setters

    def set_url(self, url: str | None) -> Request:
        self._url = url
        return self

    def set_headers(self, headers: Mapping[str, str] | None) -> Request:
        """Replace all headers. None values are dropped."""
        self._headers = {k: v for k, v in (headers or {}).items() if v is not None}
        return self

    def set_param_map(self, param_map: Mapping[str, str] | None) -> Request:
        """Replace all explicit parameters. None values are dropped."""
        self._param_map = {k: v for k, v in (param_map or {}).items() if v is not None}
        return self

    def set_param_model(self, param_model: Any) -> Request:
        self._param_model = param_model
        return self

    def set_query_builder(self, query_builder: QueryBuilder | None) -> Request:
        """Replace the query builder. None keeps the current one."""
        if query_builder is not None:
            self._query_builder = query_builder
        return self

    def set_method(self, method: HttpMethod | str | None) -> Request:
        """Set the method from a member or a case-insensitive name. Unknown names are ignored."""
        coerced = _coerce_method(method)
        if coerced is None:
            logger.debug(f"Ignoring unknown HTTP method: {method!r}")
        else:
            self._method = coerced
        return self

    def set_charset(self, charset: str | None) -> Request:
        """Set the charset. Validated lazily by get_url(). None keeps the current one."""
        if charset:
            self._charset = charset
        return self

    def set_max_retry_times(self, retry_times: int | None) -> Request:
        """Set the retry count read by the transport. Negative values count as 0, non-numbers are ignored."""
        try:
            self._max_retry_times = max(0, int(retry_times))
        except (TypeError, ValueError):
            logger.debug(f"Ignoring invalid retry count: {retry_times!r}")
        return self

    def set_data_parser(self, parser: DataParser | None) -> Request:
        if parser is not None:
            self._data_parser = parser
        return self

    # Accessors

    @property
    def raw_url(self) -> str | None:
        """Base URL without the generated query string."""
        return self._url

    @property
    def method(self) -> HttpMethod:
        return self._method

    @property
    def headers(self) -> dict[str, str]:
        return self._headers

    @property
    def param_map(self) -> dict[str, str]:
        return self._param_map

    @property
    def param_model(self) -> Any:
        return self._param_model

    @property
    def query_builder(self) -> QueryBuilder:
        return self._query_builder

    @property
    def charset(self) -> str:
        return self._charset

    @property
    def max_retry_times(self) -> int:
        return self._max_retry_times

    @property
    def data_parser(self) -> DataParser:
        return self._data_parser

    @property
    def bytes_entities(self) -> list[ByteArrayEntity]:
        return self._bytes_entities

    @property
    def string_entities(self) -> list[StringEntity]:
        return self._string_entities

    @property
    def stream_entities(self) -> dict[str, InputStreamEntity]:
        return self._stream_entities

    @property
    def file_entities(self) -> dict[str, FileEntity]:
        return self._file_entities

    @property
    def has_entities(self) -> bool:
        return bool(self._bytes_entities or self._string_entities or self._stream_entities or self._file_entities)

    # Abort

    def set_abort(self, abort: Abortable | None) -> None:
        """Register the handle abort() forwards to. Called by the dispatcher."""
        self._abort = abort

    def abort(self) -> None:
        """Forward cancellation to the registered handle, if any."""
        if self._abort is not None:
            self._abort.abort()

    # URL synthesis

    def get_basic_params(self) -> dict[str, str]:
        """
        Merge explicit parameters with those built from the parameter model.

        On a shared key the model value wins. See aggregate_params().

        Returns:
            New ordered parameter map

        Raises:
            ParameterTranslationError: If the query builder fails
        """
        return aggregate_params(self._param_map, self._param_model, self._query_builder, self._charset)

    def get_url(self) -> str:
        """
        Build the final request URL.

        When the merged parameters are empty (no explicit params and a model
        yielding no fields) the base URL is returned as-is, without a dangling "?".

        Returns:
            The base URL followed by the percent-encoded merged parameters

        Raises:
            UrlMissingError: If no base URL is set
            ParameterTranslationError: If the query builder fails
            EncodingError: If the charset is unsupported
        """
        if not self._url:
            raise UrlMissingError()
        if not self._param_map and self._param_model is None:
            return self._url

        check_charset(self._charset)
        url = synthesize_url(self._url, self.get_basic_params(), self._charset)
        logger.debug(f"Request URL: {url}")
        return url

    def __repr__(self) -> str:
        return f"Request({self._method.value} {self._url!r})"

    def __str__(self) -> str:
        fields = [
            ("url", self._url),
            ("method", self._method.value),
            ("headers", self._headers),
            ("charset", self._charset),
            ("max_retry_times", self._max_retry_times),
            ("param_model", self._param_model),
            ("data_parser", _type_name(self._data_parser)),
            ("query_builder", _type_name(self._query_builder)),
            ("param_map", self._param_map),
            ("stream_entities", self._stream_entities),
            ("file_entities", self._file_entities),
            ("bytes_entities", self._bytes_entities),
            ("string_entities", self._string_entities),
        ]
        return "\n".join(f"\t{name} = {value}" for name, value in fields)
