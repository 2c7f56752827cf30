"""
nix8820 package init.
Exports the text stream decoders and the disk image reader for Nixdorf 8820
terminals and printers.
"""

import datetime
import json
import logging
import os
import sys
from typing import Any, Dict

from .disk import NixDisk, NixFile
from .exceptions import (
    ConfigurationError,
    DirectoryError,
    DiskImageError,
    LabelError,
    Nix8820Error,
    ParseError,
)
from .stream import (
    ByteReader,
    Decoder,
    HeaderDecoder,
    StreamDecoder,
    decode_bytes,
    get_decoder,
)

LOG_LEVEL_ENV = "NIX8820_LOG_LEVEL"
LOG_JSON_ENV = "NIX8820_LOG_JSON"


class JSONFormatter(logging.Formatter):
    """JSON formatter with structured logging support."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        # Add extra structured data
        extra = getattr(record, "nix8820_extra", {})
        if extra:
            log_entry.update(extra)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "WARNING") -> None:
    """
    Setup basic logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(
            f"Unknown log level {level!r}", context={"env": LOG_LEVEL_ENV}
        )
    use_json = os.environ.get(LOG_JSON_ENV, "false").lower() == "true"
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    if use_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    else:
        logging.basicConfig(level=numeric_level)


def main() -> None:
    """Decode standard input to standard output.

    The variant comes from NIX8820_VARIANT, the log level from
    NIX8820_LOG_LEVEL.
    """
    try:
        setup_logging(os.environ.get(LOG_LEVEL_ENV, "WARNING"))
        decoder = get_decoder()
    except Nix8820Error as e:
        # Logging may not be configured yet
        print(f"nix8820: {e}", file=sys.stderr)
        sys.exit(2)

    logging.getLogger(__name__).info(f"Decoding standard input with {decoder!r}")
    decoder.decode(sys.stdin.buffer, sys.stdout.buffer)
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()


__all__ = [
    "ByteReader",
    "Decoder",
    "HeaderDecoder",
    "StreamDecoder",
    "get_decoder",
    "decode_bytes",
    "NixDisk",
    "NixFile",
    "Nix8820Error",
    "ParseError",
    "ConfigurationError",
    "DiskImageError",
    "LabelError",
    "DirectoryError",
    "JSONFormatter",
    "setup_logging",
    "main",
]
