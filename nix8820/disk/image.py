"""
Random access to Nixdorf 8820 disk images.

Images are raw dumps of hard-sectored 8" floppies laid out per ECMA-58:
128 byte sectors, 26 sectors per track, label fields in EBCDIC. Field
positions in the accessors below count from 1, as the standard does.
"""

import logging
import os
import re
import struct
from typing import BinaryIO, Optional, Sequence, Tuple, Union

from ..exceptions import DiskImageError
from ..utils.logging_utils import log_disk_event
from .ebcdic import decode_nixdorf
from .errors import raise_disk_error

logger = logging.getLogger(__name__)

SECSIZE = 128
SECTORS_PER_TRACK = 26

Position = Union[int, Sequence[int]]

_STRIP_CHARS = " \t\n\r\x0b\x0c\x00"
_LEADING_INT = re.compile(r"\s*([-+]?\d+)")

MONTHS = (
    "Januar",
    "Februar",
    "März",
    "April",
    "Mai",
    "Juni",
    "Juli",
    "August",
    "September",
    "Oktober",
    "November",
    "Dezember",
)


def to_int(text: str) -> int:
    """Parse the leading integer of text, 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class NixDate:
    """Date stored as six EBCDIC digits, YYMMDD."""

    def __init__(self, text: str) -> None:
        self.year = to_int(text[0:2])
        self.month = to_int(text[2:4])
        self.day = to_int(text[4:6])

    def __str__(self) -> str:
        if self.day == 0:
            return ""
        if 1 <= self.month <= len(MONTHS):
            month = MONTHS[self.month - 1]
        else:
            month = str(self.month)
        return f"{self.day}. {month} 19{self.year:02d}"

    def __repr__(self) -> str:
        return f"NixDate(year={self.year}, month={self.month}, day={self.day})"


class Extent:
    """Disk address stored as CCHSS (cylinder, side, sector)."""

    def __init__(self, text: str) -> None:
        self.cylinder = to_int(text[0:2])
        self.side = to_int(text[2:3])
        self.sector = to_int(text[3:5])

    def __str__(self) -> str:
        return f"Cyl {self.cylinder}, Side {self.side}, Sector {self.sector}"


class DiskImage:
    """Disk image file with a current record and ECMA-58 field accessors."""

    def __init__(self, source: Union[str, "os.PathLike[str]", BinaryIO]) -> None:
        self.record: bytes = b""
        if isinstance(source, (str, os.PathLike)):
            self.name = os.fspath(source)
            try:
                self._file: BinaryIO = open(self.name, "rb")
            except OSError as e:
                raise_disk_error(
                    DiskImageError, "Can't read disk image", {"path": self.name}, e
                )
            self._owns_file = True
        else:
            self.name = getattr(source, "name", "<stream>")
            self._file = source
            self._owns_file = False
        log_disk_event(logger, "Opened image", str(self.name))

    def close(self) -> None:
        if self._owns_file and not self._file.closed:
            self._file.close()

    def __enter__(self) -> "DiskImage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @staticmethod
    def offset_of(pos: Position) -> int:
        """
        Convert a position to an absolute byte offset.

        Args:
            pos: Absolute offset, or (track, side, sector) with sectors
                counting from 1.
        """
        if isinstance(pos, bool):
            raise_disk_error(DiskImageError, "Unknown seek value", {"pos": pos})
        if isinstance(pos, int):
            offset = pos
        elif isinstance(pos, (tuple, list)) and len(pos) == 3:
            track, side, sector = pos
            offset = ((track * (side + 1)) * SECTORS_PER_TRACK + sector - 1) * SECSIZE
        else:
            raise_disk_error(DiskImageError, "Unknown seek value", {"pos": pos})
        if offset < 0:
            raise_disk_error(
                DiskImageError, "Seek before start of image", {"pos": pos}
            )
        return offset

    def seek(self, pos: Position) -> None:
        self._file.seek(self.offset_of(pos), os.SEEK_SET)

    def tell(self) -> int:
        return self._file.tell()

    def get(self, size: int = SECSIZE) -> bytes:
        """Read a record at the current position and make it current."""
        self.record = self._file.read(size)
        return self.record

    def get_at(self, pos: Position) -> bytes:
        self.seek(pos)
        return self.get()

    @staticmethod
    def label(record: bytes) -> Tuple[str, str]:
        """Return the (identifier, number) pair of a label record."""
        return decode_nixdorf(record[0:3]), decode_nixdorf(record[3:4])

    def find(self, what: str, start: Optional[Position] = None) -> Optional[str]:
        """
        Read a record and check its label identifier.

        Returns:
            The label number if the identifier equals what, else None.
        """
        if start is not None:
            self.seek(start)
        ident, number = self.label(self.get())
        if ident == what:
            log_disk_event(logger, f"Found {what}{number}", f"start={start}")
            return number
        return None

    def unpack_s(self, start: int, length: int) -> str:
        """EBCDIC field of the current record, stripped."""
        raw = self.record[start - 1 : start - 1 + length]
        return decode_nixdorf(raw).strip(_STRIP_CHARS)

    def unpack_i(self, start: int, length: int) -> int:
        """Numeric EBCDIC field of the current record."""
        raw = self.record[start - 1 : start - 1 + length]
        return to_int(decode_nixdorf(raw))

    def unpack_date(self, start: int) -> NixDate:
        return NixDate(self.unpack_s(start, 6))

    def unpack_u16(self, offset: int) -> int:
        """Big-endian binary halfword at a 0-based offset of the current record."""
        raw = self.record[offset : offset + 2]
        if len(raw) < 2:
            raise_disk_error(
                DiskImageError,
                "Record too short for halfword",
                {"offset": offset, "record_length": len(self.record)},
            )
        return int(struct.unpack(">H", raw)[0])


__all__ = [
    "SECSIZE",
    "SECTORS_PER_TRACK",
    "MONTHS",
    "DiskImage",
    "NixDate",
    "Extent",
    "to_int",
]
