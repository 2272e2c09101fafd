"""
requestkit - Build HTTP request URLs and bodies from explicit parameters,
typed parameter models and body entities.

Usage:
    from requestkit import Request, AsyncHttpTransport

    request = (
        Request("https://api.example.com/items", param_model=Search(q="cats"))
        .add_param("page", "2")
        .add_header("Accept", "application/json")
    )
    request.get_url()

    async with AsyncHttpTransport() as transport:
        text = await transport.execute_and_parse(request)
"""

__version__ = "1.0.0"

from .errors import (
    EncodingError,
    HttpStatusError,
    ParameterTranslationError,
    RequestKitError,
    UrlMissingError,
)
from .http import AsyncHttpTransport, HttpResponse, Transport
from .logging_config import setup_logging
from .models.config import (
    DEFAULT_CHARSET,
    DEFAULT_MAX_RETRY_TIMES,
    ClientConfig,
    HttpMethod,
)
from .parsers import BytesParser, JsonParser, StringParser
from .query import AbstractQueryBuilder, FlatQueryBuilder, JsonQueryBuilder, QueryBuilder
from .request import (
    Abortable,
    ByteArrayEntity,
    DataParser,
    FileEntity,
    InputStreamEntity,
    Request,
    StringEntity,
)

__all__ = [
    "__version__",
    # Core
    "Request",
    "HttpMethod",
    # Entities
    "ByteArrayEntity",
    "StringEntity",
    "InputStreamEntity",
    "FileEntity",
    # Query builders
    "QueryBuilder",
    "AbstractQueryBuilder",
    "JsonQueryBuilder",
    "FlatQueryBuilder",
    # Parsers
    "DataParser",
    "StringParser",
    "BytesParser",
    "JsonParser",
    # Transport
    "Abortable",
    "Transport",
    "AsyncHttpTransport",
    "HttpResponse",
    # Config
    "ClientConfig",
    "DEFAULT_CHARSET",
    "DEFAULT_MAX_RETRY_TIMES",
    "setup_logging",
    # Errors
    "RequestKitError",
    "UrlMissingError",
    "ParameterTranslationError",
    "EncodingError",
    "HttpStatusError",
]
