"""Query string encoding and final URL synthesis."""

import codecs
from collections.abc import Mapping
from urllib.parse import quote_plus

from ..errors import EncodingError


def check_charset(charset: str) -> str:
    """
    Resolve a charset name, failing if the runtime does not know it as a text encoding.

    Binary transforms registered as codecs ("base64", "hex", "rot13") are
    rejected too.

    Args:
        charset: Charset name such as "UTF-8" or "ISO-8859-1"

    Returns:
        The canonical codec name

    Raises:
        EncodingError: If the charset is unknown or not a text encoding
    """
    try:
        name = codecs.lookup(charset).name
        "".encode(charset)
    except (LookupError, TypeError) as err:
        raise EncodingError(f"Unsupported charset: {charset!r}", charset=charset) from err
    return name


def encode_query(params: Mapping[str, str], charset: str) -> str:
    """
    Encode parameters as an application/x-www-form-urlencoded string.

    Spaces become "+", every reserved character is percent-escaped from
    its byte sequence in ``charset``. Entries keep the map order and are
    joined with "&", with no trailing separator.

    Raises:
        EncodingError: If the charset is unknown or a key or value cannot
            be represented in it
    """
    check_charset(charset)
    parts = []
    for key, value in params.items():
        try:
            parts.append(f"{quote_plus(key, safe='', encoding=charset)}={quote_plus(value, safe='', encoding=charset)}")
        except (UnicodeEncodeError, LookupError, TypeError) as err:
            raise EncodingError(f"Cannot encode parameter {key!r} with charset {charset}: {err}", charset=charset) from err
    return "&".join(parts)


def synthesize_url(base_url: str, params: Mapping[str, str], charset: str) -> str:
    """
    Append an encoded query string to a base URL.

    Uses "?" when the base URL has no query yet, "&" otherwise. An empty
    params map leaves the base URL untouched.

    Args:
        base_url: URL to extend, may already carry a query string
        params: Ordered parameters
        charset: Charset for percent-encoding

    Returns:
        The final request URL
    """
    query = encode_query(params, charset)
    if not query:
        return base_url
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{query}"
