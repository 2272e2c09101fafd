"""Response parsers a Request can carry for its transport."""

from .text import BytesParser, JsonParser, StringParser, decode_content

__all__ = [
    "BytesParser",
    "JsonParser",
    "StringParser",
    "decode_content",
]
