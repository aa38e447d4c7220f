"""Packing of named files into three flat buffers and back.

Layout for ``n`` files:

- ``offsets``: ``n`` pairs of 4-byte unsigned integers in native byte order,
  the cumulative end of each name in ``names`` and of each content in ``data``
- ``names``: UTF-8 names concatenated without separators
- ``data``: contents concatenated without separators

The file count is not stored and must travel alongside the buffers.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .errors import CodecError

_PAIR = struct.Struct("=II")
OFFSET_SIZE = 4
MAX_OFFSET = 2**32 - 1


@dataclass(frozen=True)
class File:
    name: str
    content: bytes = b""


def encode(files: Sequence[File]) -> tuple[bytes, bytes, bytes]:
    if not files:
        return b"", b"", b""

    offsets = bytearray()
    names = bytearray()
    data = bytearray()
    seen: set[str] = set()
    names_len = data_len = 0

    for file in files:
        if not isinstance(file.name, str) or not file.name:
            raise CodecError("File name must be a non-empty string")
        if file.name in seen:
            raise CodecError(f"Duplicate file name: {file.name}")
        seen.add(file.name)

        raw_name = file.name.encode("utf-8")
        content = bytes(file.content)
        names_len += len(raw_name)
        data_len += len(content)
        if names_len > MAX_OFFSET or data_len > MAX_OFFSET:
            raise CodecError("Encoded resources exceed the 4-byte offset range")

        offsets += _PAIR.pack(names_len, data_len)
        names += raw_name
        data += content

    return bytes(offsets), bytes(names), bytes(data)


def iter_offsets(count: int, offsets: bytes | None) -> Iterator[tuple[int, int]]:
    """Yield the raw ``(name_end, data_end)`` pairs of the offset table."""
    if count <= 0:
        return
    table = memoryview(offsets or b"")
    if len(table) < count * _PAIR.size:
        raise CodecError(
            f"Offset table too short: {count} files need {count * _PAIR.size} "
            f"bytes, got {len(table)}"
        )
    for i in range(count):
        yield _PAIR.unpack_from(table, i * _PAIR.size)


def decode(
    count: int,
    offsets: bytes | None,
    names: bytes | None,
    data: bytes | None,
) -> list[tuple[str, memoryview]]:
    """Return ``(name, view)`` pairs in encoding order.

    Views slice ``data`` without copying and keep it alive.
    """
    if count <= 0:
        return []

    names_view = memoryview(names or b"")
    data_view = memoryview(data or b"").toreadonly()
    result: list[tuple[str, memoryview]] = []
    prev_name = prev_data = 0

    for index, (name_pos, data_pos) in enumerate(iter_offsets(count, offsets)):
        if name_pos < prev_name or data_pos < prev_data:
            raise CodecError(f"Offsets decrease at file {index}")
        if name_pos > len(names_view) or data_pos > len(data_view):
            raise CodecError(f"Offsets of file {index} point past the end of buffer")
        try:
            name = bytes(names_view[prev_name:name_pos]).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError(f"Name of file {index} is not valid UTF-8") from e
        result.append((name, data_view[prev_data:data_pos]))
        prev_name, prev_data = name_pos, data_pos

    return result
