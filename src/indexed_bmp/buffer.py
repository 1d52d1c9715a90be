"""Sequential little-endian byte buffer used by the decoder and encoder."""

from __future__ import annotations

import struct
from pathlib import Path

from .errors import TruncatedDataError


class ByteBuffer:
    """Read/write cursor over an in-memory ``bytearray``.

    Reads advance ``position`` and raise :class:`TruncatedDataError` when the
    requested width is not available. Writes overwrite bytes at the cursor and
    grow the buffer when they run past the end.
    """

    def __init__(self, data: bytes | bytearray = b""):
        self.data = bytearray(data)
        self._position = 0

    @classmethod
    def from_file(cls, path: str | Path) -> "ByteBuffer":
        return cls(Path(path).read_bytes())

    def __len__(self) -> int:
        return len(self.data)

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        """Move the cursor. Positions past the end raise :class:`TruncatedDataError`."""
        if value < 0:
            raise ValueError(f"position must not be negative, got {value}")
        if value > len(self.data):
            raise TruncatedDataError(
                f"Cannot seek to offset {value}: only {len(self.data)} bytes available"
            )
        self._position = value

    @property
    def remaining(self) -> int:
        return len(self.data) - self._position

    def skip(self, count: int) -> None:
        self.read_bytes(count)

    def read_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("count must not be negative")
        end = self._position + count
        if end > len(self.data):
            raise TruncatedDataError(
                f"Unexpected end of data: needed {count} bytes at offset "
                f"{self._position}, {self.remaining} available"
            )
        chunk = bytes(self.data[self._position : end])
        self._position = end
        return chunk

    def _unpack(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        return struct.unpack(fmt, self.read_bytes(size))[0]

    def read_u8(self) -> int:
        return self._unpack("<B")

    def read_u16(self) -> int:
        return self._unpack("<H")

    def read_u32(self) -> int:
        return self._unpack("<I")

    def read_i32(self) -> int:
        return self._unpack("<i")

    def write_bytes(self, chunk: bytes | bytearray) -> None:
        end = self._position + len(chunk)
        self.data[self._position : end] = chunk
        self._position = end

    def write_u8(self, value: int) -> None:
        self.write_bytes(struct.pack("<B", value))

    def write_u16(self, value: int) -> None:
        self.write_bytes(struct.pack("<H", value))

    def write_u32(self, value: int) -> None:
        self.write_bytes(struct.pack("<I", value))

    def write_i32(self, value: int) -> None:
        self.write_bytes(struct.pack("<i", value))

    def getvalue(self) -> bytes:
        return bytes(self.data)

    def save(self, path: str | Path) -> Path:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(self.data)
        return output
