"""Body entity types carried by a Request alongside its key/value parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from ..models.config import DEFAULT_CHARSET

OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True)
class ByteArrayEntity:
    """Raw bytes with their content type."""

    content: bytes = field(repr=False)
    content_type: str = OCTET_STREAM

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class StringEntity:
    """
    Text payload encoded with its own charset.

    Attributes:
        text: The string payload
        mime_type: MIME type without parameters (e.g. "application/json")
        charset: Charset used by encode() and advertised in content_type
    """

    text: str = field(repr=False)
    mime_type: str = "text/plain"
    charset: str = DEFAULT_CHARSET

    @property
    def content_type(self) -> str:
        return f"{self.mime_type}; charset={self.charset}"

    def encode(self) -> bytes:
        return self.text.encode(self.charset)


@dataclass(frozen=True)
class InputStreamEntity:
    """
    A readable binary stream sent under a form key.

    The stream is referenced, never owned: whoever opened it closes it.
    """

    stream: BinaryIO = field(repr=False)
    stream_name: str | None = None
    content_type: str = OCTET_STREAM


@dataclass(frozen=True)
class FileEntity:
    """A file on disk sent under a form key. Opened only by the transport."""

    path: Path
    content_type: str = OCTET_STREAM

    def __post_init__(self) -> None:
        # Accept str paths while keeping the dataclass frozen
        object.__setattr__(self, "path", Path(self.path))

    @property
    def file_name(self) -> str:
        return self.path.name
