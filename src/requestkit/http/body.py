"""Turning the entity containers of a Request into an aiohttp body."""

from __future__ import annotations

import io
from contextlib import ExitStack
from typing import Any, BinaryIO, Optional

import aiohttp

from ..errors import EncodingError
from ..request import Request, StringEntity

CONTENT_TYPE = "Content-Type"


class _UnclosedStream(io.BufferedIOBase):
    """
    Read-through view of a caller's stream whose close() is a no-op.

    Older aiohttp releases close IO payloads once written. Streams belong
    to the caller and must survive the attempt so a retry can rewind them.
    """

    def __init__(self, stream: BinaryIO) -> None:
        super().__init__()
        self._stream = stream

    def readable(self) -> bool:
        return True

    def read(self, size: Optional[int] = -1) -> bytes:
        return self._stream.read(-1 if size is None else size)

    def read1(self, size: int = -1) -> bytes:
        return self.read(size)

    def seekable(self) -> bool:
        seekable = getattr(self._stream, "seekable", None)
        return bool(callable(seekable) and seekable())

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._stream.seek(offset, whence)

    def tell(self) -> int:
        return self._stream.tell()

    def close(self) -> None:
        pass


def _encode(entity: StringEntity) -> bytes:
    try:
        return entity.encode()
    except (LookupError, UnicodeEncodeError) as err:
        raise EncodingError(f"Cannot encode string entity with charset {entity.charset}: {err}", entity.charset) from err


def build_body(request: Request, stack: ExitStack) -> tuple[Any, Optional[str]]:
    """
    Build the request body from the entities of a Request.

    - No entities: no body
    - A single bytes or string entity: sent raw with its own content type
    - Anything else: a multipart body. It is ``multipart/form-data`` when
      keyed streams or files are present (unkeyed parts are then named
      ``part0``, ``part1``, ... by position), ``multipart/mixed`` otherwise

    Files are opened here and registered on ``stack`` so the caller
    closes them once the dispatch is over. Streams are read through
    _UnclosedStream and never closed.

    Args:
        request: The Request to read entities from
        stack: Owns the file handles opened for this body

    Returns:
        (payload, content_type). content_type is None when the payload
        carries its own (multipart) or there is no body.

    Raises:
        EncodingError: If a string entity cannot be encoded
        OSError: If a file entity cannot be opened
    """
    raw_parts: list[tuple[bytes, str]] = [(e.content, e.content_type) for e in request.bytes_entities]
    raw_parts.extend((_encode(e), e.content_type) for e in request.string_entities)
    keyed = bool(request.stream_entities or request.file_entities)

    if not raw_parts and not keyed:
        return None, None
    if len(raw_parts) == 1 and not keyed:
        return raw_parts[0]

    writer = aiohttp.MultipartWriter("form-data" if keyed else "mixed")

    for index, (content, content_type) in enumerate(raw_parts):
        part = writer.append(content, {CONTENT_TYPE: content_type})
        if keyed:
            part.set_content_disposition("form-data", name=f"part{index}")

    for key, stream_entity in request.stream_entities.items():
        part = writer.append(_UnclosedStream(stream_entity.stream), {CONTENT_TYPE: stream_entity.content_type})
        part.set_content_disposition("form-data", name=key, filename=stream_entity.stream_name or key)

    for key, file_entity in request.file_entities.items():
        handle = stack.enter_context(open(file_entity.path, "rb"))
        part = writer.append(handle, {CONTENT_TYPE: file_entity.content_type})
        part.set_content_disposition("form-data", name=key, filename=file_entity.file_name)

    return writer, None
