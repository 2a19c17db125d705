"""Byte buffers for recorded draw commands, and their size arithmetic."""

from __future__ import annotations

from typing import Optional

BEGIN_INSTRUCTION_SIZE = 3
_MAX_VERTICES = 0xFFFF


def begin_instruction_size(num_vertices: int) -> int:
    """Bytes taken by a begin-primitive command; fixed regardless of count."""
    if not 0 <= num_vertices <= _MAX_VERTICES:
        raise ValueError(f"vertex count {num_vertices} does not fit in 16 bits")
    return BEGIN_INSTRUCTION_SIZE


def vector_instruction_size(dim: int, type_size: int, num_vertices: int) -> int:
    """Bytes taken by one vertex attribute across ``num_vertices`` vertices."""
    return num_vertices * dim * type_size


class DisplayList:
    """A 32-byte-aligned command buffer that shrinks to what was written."""

    def __init__(self) -> None:
        self._buffer: Optional[bytearray] = None
        self._size = 0

    def resize(self, size: int) -> None:
        """Replace the storage with a zeroed buffer padded past ``size``."""
        self._size = (size | 31) + 33
        self._buffer = bytearray(self._size)

    def clear(self) -> None:
        """Release the storage."""
        if self._buffer is None:
            return
        self._buffer = None
        self._size = 0

    def write(self, data: bytes) -> None:
        """Record ``data`` into the buffer; its length becomes the list size."""
        if self._buffer is None:
            raise ValueError("display list has no storage; resize it first")
        if len(data) > len(self._buffer):
            raise ValueError(
                f"{len(data)} bytes do not fit in a display list of {len(self._buffer)}"
            )
        self._buffer[: len(data)] = data
        self._size = len(data)

    @property
    def data(self) -> bytes:
        """The recorded bytes."""
        if self._buffer is None:
            return b""
        return bytes(self._buffer[: self._size])

    def __len__(self) -> int:
        return self._size