"""Response parsers producing text, bytes or JSON."""

from __future__ import annotations

import json
import logging
from typing import Any

from charset_normalizer import from_bytes as detect_encoding

from ..models.config import DEFAULT_CHARSET

logger = logging.getLogger(__name__)


def charset_from_content_type(content_type: str) -> str | None:
    """Extract the charset parameter from a Content-Type header value."""
    if not content_type:
        return None
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("charset="):
            return part.split("=", 1)[1].strip().strip("\"'") or None
    return None


def decode_content(content: bytes, charset: str = DEFAULT_CHARSET, content_type: str = "") -> str:
    """
    Decode content with intelligent encoding detection.

    Fallback chain:
    1. Content-Type header charset
    2. Request charset
    3. charset-normalizer detection
    4. UTF-8 with replacement

    Args:
        content: Raw bytes content
        charset: Charset configured on the Request
        content_type: Content-Type header value

    Returns:
        Decoded string
    """
    for encoding in (charset_from_content_type(content_type), charset):
        if not encoding:
            continue
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode with encoding: {encoding}")

    result = detect_encoding(content)
    best_match = result.best() if result else None
    if best_match:
        logger.debug(f"Detected encoding: {best_match.encoding}")
        return str(best_match)

    return content.decode("utf-8", errors="replace")


class StringParser:
    """Default parser: the response body as text."""

    def parse(self, content: bytes, *, charset: str = DEFAULT_CHARSET, content_type: str = "") -> str:
        return decode_content(content, charset, content_type)


class BytesParser:
    """Returns the response body untouched."""

    def parse(self, content: bytes, *, charset: str = DEFAULT_CHARSET, content_type: str = "") -> bytes:
        return content


class JsonParser:
    """
    Decodes the body like StringParser, then parses it as JSON.

    An empty body parses to None.
    """

    def parse(self, content: bytes, *, charset: str = DEFAULT_CHARSET, content_type: str = "") -> Any:
        text = decode_content(content, charset, content_type)
        if not text.strip():
            return None
        return json.loads(text)
