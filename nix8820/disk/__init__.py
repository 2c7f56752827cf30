"""Reader for Nixdorf 8820 floppy disk images (ECMA-58 labels)."""

from .directory import DirEntry, Directory, NixDisk, NixFile
from .ebcdic import NixdorfCodec, decode_nixdorf, encode_nixdorf
from .image import SECSIZE, SECTORS_PER_TRACK, DiskImage, Extent, NixDate
from .labels import ErrorMap, FileHeader, Volume, VolumeHeader

__all__ = [
    "SECSIZE",
    "SECTORS_PER_TRACK",
    "DiskImage",
    "NixDate",
    "Extent",
    "NixdorfCodec",
    "decode_nixdorf",
    "encode_nixdorf",
    "Volume",
    "VolumeHeader",
    "ErrorMap",
    "FileHeader",
    "DirEntry",
    "Directory",
    "NixFile",
    "NixDisk",
]
