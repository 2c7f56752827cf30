"""Decoding of Nixdorf 8820 terminal/printer text streams."""

from .decoder import (
    DECODERS,
    Decoder,
    HeaderDecoder,
    LineState,
    StreamDecoder,
    decode_bytes,
    get_decoder,
)
from .reader import ByteReader

__all__ = [
    "ByteReader",
    "Decoder",
    "HeaderDecoder",
    "StreamDecoder",
    "LineState",
    "DECODERS",
    "get_decoder",
    "decode_bytes",
]
