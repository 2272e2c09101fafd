"""Requestkit configuration models."""

from .config import (
    DEFAULT_CHARSET,
    DEFAULT_MAX_RETRY_TIMES,
    ByteSize,
    ClientConfig,
    HttpMethod,
)

__all__ = [
    "ByteSize",
    "ClientConfig",
    "DEFAULT_CHARSET",
    "DEFAULT_MAX_RETRY_TIMES",
    "HttpMethod",
]
