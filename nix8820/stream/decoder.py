"""
Nixdorf 8820 text stream decoders.

Two historical variants of the decoding rules exist. Both are exposed as
strategies of one Decoder interface:

- HeaderDecoder ("header"): reads a 3-byte header before each line, which
  carries the end-of-stream marker, and interprets control bytes depending on
  whether anything has been printed on the current line yet.
- StreamDecoder ("stream"): a plain byte loop with explicit line feed and
  end-of-stream bytes.

Decoders never raise for malformed input; unknown control bytes are rendered
as escapes, treated as line ends or dropped, and end of input is a normal
end of stream.
"""

import io
import logging
import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Dict, Optional, Type

from ..exceptions import ConfigurationError
from ..utils.logging_utils import log_data_processing, log_debug_operation
from .controls import (
    END_OF_STREAM,
    HEADER_LENGTH,
    HEADER_MARKER_INDEX,
    INLINE_COLUMN_MAX,
    LINE_END,
    LINE_FEED,
    NEWLINE,
    NUL,
    escape_byte,
    expand_spaces,
    is_column,
    is_printable,
)
from .reader import ByteReader

logger = logging.getLogger(__name__)

DEFAULT_VARIANT = "header"
VARIANT_ENV = "NIX8820_VARIANT"


class Decoder(ABC):
    """Transforms a Nixdorf byte stream into plain text."""

    name: str = ""

    @abstractmethod
    def decode(self, input: BinaryIO, output: BinaryIO) -> None:
        """Decode input to output until an end-of-stream marker or end of input."""
        raise NotImplementedError("Subclasses must implement decode")

    def decode_bytes(self, data: bytes) -> bytes:
        """Decode an in-memory buffer and return the text bytes."""
        out = io.BytesIO()
        self.decode(io.BytesIO(bytes(data)), out)
        return out.getvalue()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class LineState(Enum):
    """Position of the header decoder within the current output line."""

    LINE_START = "line_start"
    IN_LINE = "in_line"

    def after(self, printed: int) -> "LineState":
        """State after emitting printed characters; zero leaves it unchanged."""
        return LineState.IN_LINE if printed > 0 else self


class HeaderDecoder(Decoder):
    """Header-aware decoder with per-line lookahead."""

    name = "header"

    def decode(self, input: BinaryIO, output: BinaryIO) -> None:
        reader = ByteReader(input)
        lines = 0
        log_data_processing(logger, "Header decode started")
        while True:
            header = reader.read_fixed(HEADER_LENGTH)
            if len(header) < HEADER_LENGTH:
                log_debug_operation(logger, "End of input at header", header.hex())
                break
            if header[HEADER_MARKER_INDEX] == END_OF_STREAM:
                log_debug_operation(logger, "End-of-stream marker in header")
                break
            if not self._decode_line(reader, output):
                break
            lines += 1
        log_data_processing(
            logger,
            "Header decode finished",
            f"{reader.position} bytes, {lines} lines",
        )

    def _decode_line(self, reader: ByteReader, output: BinaryIO) -> bool:
        """Decode one line. Returns False when input ran out mid-line."""
        state = LineState.LINE_START
        while True:
            c = reader.read_byte()
            if c is None:
                return False
            if is_printable(c):
                output.write(bytes((c,)))
                state = LineState.IN_LINE
            elif c == NUL:
                # The null belongs to the next header
                reader.pushback(c)
                output.write(NEWLINE)
                return True
            elif state is LineState.LINE_START:
                if is_column(c):
                    spaces = expand_spaces(c)
                    output.write(spaces)
                    state = state.after(len(spaces))
                elif c == LINE_END:
                    output.write(NEWLINE)
                    return True
                else:
                    log_debug_operation(
                        logger, "Unknown control at line start", hex(c)
                    )
                    output.write(escape_byte(c))
            elif is_column(c, INLINE_COLUMN_MAX):
                output.write(expand_spaces(c))
            else:
                output.write(NEWLINE)
                return True


class StreamDecoder(Decoder):
    """Streaming decoder without lookahead."""

    name = "stream"

    def decode(self, input: BinaryIO, output: BinaryIO) -> None:
        reader = ByteReader(input)
        dropped = 0
        log_data_processing(logger, "Stream decode started")
        while True:
            c = reader.read_byte()
            if c is None:
                break
            if c == LINE_FEED:
                output.write(NEWLINE)
            elif c == END_OF_STREAM:
                output.write(NEWLINE)
                log_debug_operation(logger, "End-of-stream marker", reader.position)
                break
            elif is_printable(c):
                output.write(bytes((c,)))
            elif c == NUL:
                # Nulls come in pairs
                reader.read_byte()
            elif is_column(c):
                output.write(expand_spaces(c))
            else:
                dropped += 1
        log_data_processing(
            logger,
            "Stream decode finished",
            f"{reader.position} bytes, {dropped} dropped",
        )


DECODERS: Dict[str, Type[Decoder]] = {
    HeaderDecoder.name: HeaderDecoder,
    StreamDecoder.name: StreamDecoder,
}

_ALIASES = {"a": HeaderDecoder.name, "b": StreamDecoder.name}


def get_decoder(variant: Optional[str] = None) -> Decoder:
    """
    Return a decoder strategy by name.

    Args:
        variant: "header", "stream", or their aliases "a" and "b"
            (case-insensitive). None selects the variant named by the
            NIX8820_VARIANT environment variable, "header" if unset.

    Raises:
        ConfigurationError: If the variant is not known.
    """
    if variant is None:
        variant = os.environ.get(VARIANT_ENV, DEFAULT_VARIANT)
    key = variant.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        decoder_cls = DECODERS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown decoder variant {variant!r}",
            context={"known": ", ".join(sorted(DECODERS))},
        ) from None
    return decoder_cls()


def decode_bytes(data: bytes, variant: Optional[str] = None) -> bytes:
    """Decode an in-memory buffer with the selected variant."""
    return get_decoder(variant).decode_bytes(data)


__all__ = [
    "Decoder",
    "LineState",
    "HeaderDecoder",
    "StreamDecoder",
    "DECODERS",
    "DEFAULT_VARIANT",
    "VARIANT_ENV",
    "get_decoder",
    "decode_bytes",
]
