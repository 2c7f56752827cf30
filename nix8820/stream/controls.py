"""
Control byte vocabulary shared by the Nixdorf 8820 text stream decoders.

Printable ASCII passes through unchanged; everything else is a control byte
carrying positioning or structural meaning.
"""

# Printable ASCII range (inclusive)
PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E

# Structural controls
NUL = 0x00  # Null padding
LINE_FEED = 0x1C  # Line feed (streaming variant)
END_OF_STREAM = 0x1F  # Device stream terminator

# Column positioning: COLUMN_BASE + n advances n columns
COLUMN_BASE = 0x80
COLUMN_MAX = 0xC7  # Highest positioning byte at the start of a line
INLINE_COLUMN_MAX = 0x88  # Highest positioning byte once text is on the line
LINE_END = 0xC8  # Explicit line terminator at the start of a line

# Header lookahead read before each line (header variant)
HEADER_LENGTH = 3
HEADER_MARKER_INDEX = 2

NEWLINE = b"\n"
SPACE = b" "


def is_printable(byte: int) -> bool:
    """Return True for bytes copied verbatim to the output."""
    return PRINTABLE_MIN <= byte <= PRINTABLE_MAX


def is_column(byte: int, limit: int = COLUMN_MAX) -> bool:
    """Return True if byte is a positioning byte no higher than limit."""
    return COLUMN_BASE <= byte <= limit


def expand_spaces(byte: int) -> bytes:
    """Expand a positioning byte into its run of spaces.

    Bytes at or below COLUMN_BASE expand to nothing.
    """
    return SPACE * max(byte - COLUMN_BASE, 0)


def escape_byte(byte: int) -> bytes:
    """Render an unknown control byte as a bracketed hex escape, e.g. ``[d0]``."""
    return f"[{byte:02x}]".encode("ascii")


__all__ = [
    "PRINTABLE_MIN",
    "PRINTABLE_MAX",
    "NUL",
    "LINE_FEED",
    "END_OF_STREAM",
    "COLUMN_BASE",
    "COLUMN_MAX",
    "INLINE_COLUMN_MAX",
    "LINE_END",
    "HEADER_LENGTH",
    "HEADER_MARKER_INDEX",
    "NEWLINE",
    "SPACE",
    "is_printable",
    "is_column",
    "expand_spaces",
    "escape_byte",
]
