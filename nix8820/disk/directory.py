"""
Nixdorf 8820 disk directory and file extraction.

The main directory lives on cylinder 1 and lists 11 byte entries: an EBCDIC
name, a flag byte and the first sector of the file header. Sector numbers
in the directory and file headers are relative to a base ("magic") that
depends on the physical record length.
"""

import io
import logging
import os
from typing import BinaryIO, Dict, Iterator, List, Optional, Union

from ..exceptions import DirectoryError, LabelError
from ..stream.decoder import get_decoder
from ..utils.logging_utils import log_disk_event
from .ebcdic import decode_nixdorf
from .errors import raise_disk_error
from .image import SECSIZE, DiskImage
from .labels import ErrorMap, FileHeader, Volume, VolumeHeader

logger = logging.getLogger(__name__)

DIR_ENTRY_LENGTH = 11
DIR_END = 0xFF
SYSTEM_FLAG = 0x40

# Sector base per physical record length
_MAGIC: Dict[int, int] = {128: 76, 256: 71}

VOLUME_HEADER_SECTORS = range(8, 27)


class DirEntry:
    """One entry of the main directory."""

    def __init__(self, directory: "Directory", data: bytes) -> None:
        self.name = decode_nixdorf(data[0:8]).rstrip()
        self.flag = data[8]
        self.start = (data[9] << 8) | data[10]
        self.offset = (self.start - directory.magic) * SECSIZE

    @property
    def is_system(self) -> bool:
        return self.flag == SYSTEM_FLAG

    def __str__(self) -> str:
        marker = "<SYS>" if self.is_system else "     "
        return f"{self.name:<8} {marker} {self.start} (0x{self.offset:x})"

    def __repr__(self) -> str:
        return (
            f"DirEntry(name={self.name!r}, flag=0x{self.flag:02x}, start={self.start})"
        )


class Directory:
    """Main directory, usually at (1, 0, 5) aka 0xf00."""

    def __init__(self, volume: Volume) -> None:
        self.volume = volume
        disk = volume.disk
        if volume.rlen not in _MAGIC:
            raise_disk_error(
                DirectoryError,
                "Don't know where to find directory",
                {"rlen": volume.rlen},
            )
        self.magic = _MAGIC[volume.rlen]
        sector = volume.seq
        if volume.rlen == 128 and volume.seq == 13:
            sector = 1
        disk.seek((1, 0, sector))

        self.entries: List[DirEntry] = []
        while True:
            data = disk.get(DIR_ENTRY_LENGTH)
            if len(data) < DIR_ENTRY_LENGTH or data[0] == DIR_END:
                break
            self.entries.append(DirEntry(self, data))
        log_disk_event(logger, "Directory", f"{len(self.entries)} entries")

    def __iter__(self) -> Iterator[DirEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, name: str) -> Optional[DirEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def __str__(self) -> str:
        return "Directory\n" + "\n".join(f"  {entry}" for entry in self.entries)


class NixFile:
    """A file in the data area, located by the sector of its header."""

    def __init__(self, directory: Directory, start: int) -> None:
        self.directory = directory
        self.disk = directory.volume.disk
        self.offset = (start - directory.magic) * SECSIZE
        self.header = FileHeader(directory, self.offset)

    @property
    def name(self) -> str:
        return self.header.name

    def read_bytes(self) -> bytes:
        """Return the file contents, the last sector cut to the file length."""
        out = bytearray()
        remaining = self.header.length
        pos = self.header.start
        while pos <= self.header.end:
            data = self.disk.get_at((pos - self.directory.magic) * SECSIZE)
            if remaining < SECSIZE:
                data = data[: max(remaining, 0)]
            out.extend(data)
            pos += 1
            remaining -= SECSIZE
        return bytes(out)

    def copy(
        self, target: Union[str, "os.PathLike[str]", BinaryIO, None] = None
    ) -> int:
        """
        Write the file contents to a path or binary stream.

        Args:
            target: Destination; defaults to the file's own name in the
                current directory.

        Returns:
            Number of bytes written.
        """
        data = self.read_bytes()
        if target is None:
            target = self.name
        if isinstance(target, (str, os.PathLike)):
            with open(target, "wb") as f:
                f.write(data)
        else:
            target.write(data)
        log_disk_event(logger, "Copied file", f"{self.name!r} {len(data)} bytes")
        return len(data)

    def decode(self, variant: Optional[str] = None) -> bytes:
        """Run the text stream decoder over the file contents."""
        out = io.BytesIO()
        get_decoder(variant).decode(io.BytesIO(self.read_bytes()), out)
        return out.getvalue()

    def __str__(self) -> str:
        return str(self.header)


class NixDisk:
    """Complete Nixdorf 8820 disk."""

    def __init__(self, source: Union[str, "os.PathLike[str]", BinaryIO]) -> None:
        self.disk = DiskImage(source)
        try:
            self.errormap = ErrorMap(self.disk)
            self.volume = Volume(self.disk)
            self.headers: List[VolumeHeader] = []
            for sector in VOLUME_HEADER_SECTORS:
                try:
                    self.headers.append(VolumeHeader(self.disk, (0, 0, sector)))
                except LabelError:
                    break
            self.directory = Directory(self.volume)
        except Exception:
            self.disk.close()
            raise

    def close(self) -> None:
        self.disk.close()

    def __enter__(self) -> "NixDisk":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def open_file(self, name: str) -> NixFile:
        """Look up a directory entry by name and open its file."""
        entry = self.directory.find(name)
        if entry is None:
            raise_disk_error(DirectoryError, f"File {name!r} not found")
        if entry.is_system:
            raise_disk_error(
                DirectoryError, f"Can't handle {entry}", {"flag": entry.flag}
            )
        return NixFile(self.directory, entry.start)

    def __str__(self) -> str:
        return f"{self.volume}{len(self.headers)} Headers\n{self.directory}\n"


__all__ = [
    "DirEntry",
    "Directory",
    "NixFile",
    "NixDisk",
    "DIR_ENTRY_LENGTH",
    "SYSTEM_FLAG",
]
