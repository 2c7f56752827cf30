"""Forward-only byte cursor with a single byte of pushback.

Wraps any readable binary stream so the decoders can re-examine one byte
without relying on an unread primitive of the underlying file object.
"""

import io
from typing import BinaryIO, Optional

from ..exceptions import ParseError


class ByteReader:
    def __init__(self, stream: BinaryIO) -> None:
        self._stream: BinaryIO = stream
        self._pending: Optional[int] = None
        self._pos: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteReader":
        """Create a reader over an in-memory buffer."""
        return cls(io.BytesIO(bytes(data)))

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    def _fetch(self) -> Optional[int]:
        if self._pending is not None:
            byte = self._pending
            self._pending = None
            return byte
        chunk = self._stream.read(1)
        if not chunk:
            return None
        return chunk[0]

    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it, or None at end of input."""
        if self._pending is None:
            self._pending = self._fetch()
        return self._pending

    def read_byte(self) -> Optional[int]:
        """Consume and return the next byte, or None at end of input."""
        byte = self._fetch()
        if byte is not None:
            self._pos += 1
        return byte

    advance = read_byte

    def read_fixed(self, length: int) -> bytes:
        """Read up to length bytes; fewer are returned only at end of input."""
        out = bytearray()
        while len(out) < length:
            byte = self.read_byte()
            if byte is None:
                break
            out.append(byte)
        return bytes(out)

    def pushback(self, byte: int) -> None:
        """Return one byte to the front of the input.

        Only one byte may be pending; peek() counts as pending too.
        """
        if self._pending is not None:
            raise ParseError(
                "Pushback buffer already occupied",
                context={"position": self._pos, "byte": f"0x{byte:02x}"},
            )
        self._pending = byte
        self._pos -= 1
