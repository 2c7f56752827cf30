"""
EBCDIC to Unicode translation for Nixdorf 8820 disk labels.

The Nixdorf character set follows IBM EBCDIC for letters, digits and most
punctuation. Codes without a glyph decode to a middle dot.
"""

import logging
from typing import Dict, Tuple, Union

logger = logging.getLogger(__name__)

UNASSIGNED = "·"
EBCDIC_SPACE = 0x40

_ = UNASSIGNED

# fmt: off
_CONTROL_ROWS = (
    # 0x00
    ("\x00", _, _, _, _, "\b", _, "\x7f", _, _, _, _, _, "\r", _, _),
    # 0x10
    (_, _, _, _, _, "\n", "\b", _, _, _, _, _, _, _, _, _),
    # 0x20
    (_, _, _, _, _, "\n", _, "\x1b", _, _, _, _, _, _, _, "\x07"),
    # 0x30
    (_,) * 16,
)

#                 0123456789abcdef
_GRAPHIC_ROWS = (
    " ·········¢.<(+|",  # 0x40
    "&·········!$*);¬",  # 0x50
    "-/········|,%_>?",  # 0x60
    "·········`:#@'=\"",  # 0x70
    "·abcdefghi·····±",  # 0x80
    "·jklmnopqr······",  # 0x90
    "·~stuvwxyz······",  # 0xa0
    "^·········[]····",  # 0xb0
    "{ABCDEFGHI······",  # 0xc0
    "}JKLMNOPQR······",  # 0xd0
    "\\ÜSTUVWXYZ······",  # 0xe0
    "0123456789······",  # 0xf0
)
# fmt: on

del _


def _build_table() -> Tuple[str, ...]:
    table = []
    for row in _CONTROL_ROWS:
        table.extend(row)
    for row in _GRAPHIC_ROWS:
        table.extend(row)
    return tuple(table)


NIXDORF_TABLE: Tuple[str, ...] = _build_table()


def _build_reverse(table: Tuple[str, ...]) -> Dict[str, int]:
    rev: Dict[str, int] = {}
    for i, ch in enumerate(table):
        if ch not in rev:  # Only store first occurrence
            rev[ch] = i
    # The placeholder is not a real character
    rev.pop(UNASSIGNED, None)
    return rev


class NixdorfCodec:
    """Table based codec for the Nixdorf EBCDIC character set.

    Methods return ``(value, length)`` tuples like the codecs module.
    Characters without a code encode as EBCDIC space.
    """

    def __init__(self) -> None:
        self.ebcdic_to_unicode_table = NIXDORF_TABLE
        self._unicode_to_ebcdic_table = _build_reverse(NIXDORF_TABLE)

    def decode(self, data: bytes) -> Tuple[str, int]:
        if not data:
            return ("", 0)
        table = self.ebcdic_to_unicode_table
        decoded = "".join(table[b] for b in data)
        return (decoded, len(decoded))

    def encode(self, text: Union[str, bytes]) -> Tuple[bytes, int]:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("latin-1")
        rev = self._unicode_to_ebcdic_table
        out = bytearray()
        for ch in text:
            code = rev.get(ch)
            if code is None:
                logger.debug(f"Character cannot be encoded: {ch!r} ({ord(ch)})")
                code = EBCDIC_SPACE
            out.append(code)
        return (bytes(out), len(out))


_codec = NixdorfCodec()


def decode_nixdorf(data: bytes) -> str:
    """Decode Nixdorf EBCDIC bytes to a Unicode string."""
    return _codec.decode(data)[0]


def encode_nixdorf(text: str) -> bytes:
    """Encode a Unicode string to Nixdorf EBCDIC bytes."""
    return _codec.encode(text)[0]


__all__ = [
    "NIXDORF_TABLE",
    "UNASSIGNED",
    "EBCDIC_SPACE",
    "NixdorfCodec",
    "decode_nixdorf",
    "encode_nixdorf",
]
