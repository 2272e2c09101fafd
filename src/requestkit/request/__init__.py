"""Request construction: parameters, entities and URL synthesis."""

from .aggregator import aggregate_params
from .entities import ByteArrayEntity, FileEntity, InputStreamEntity, StringEntity
from .protocols import Abortable, DataParser
from .request import Request
from .url import check_charset, encode_query, synthesize_url

__all__ = [
    "Request",
    # Entities
    "ByteArrayEntity",
    "FileEntity",
    "InputStreamEntity",
    "StringEntity",
    # Protocols
    "Abortable",
    "DataParser",
    # Building blocks
    "aggregate_params",
    "check_charset",
    "encode_query",
    "synthesize_url",
]
