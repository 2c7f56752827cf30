"""
ECMA-58 labels of a Nixdorf 8820 disk.

The index cylinder holds the error map (sector 5), the volume label VOL1
(sector 7) and file labels HDR1 (sectors 8-26). Nixdorf uses the HDR1 labels
on the index cylinder to describe the disk as a whole; the files themselves
carry a HDR1/HDR2 pair in the data area (see FileHeader).
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..exceptions import LabelError
from ..utils.logging_utils import log_disk_event, log_parsing_warning
from .errors import raise_disk_error
from .image import SECSIZE, DiskImage, Extent, Position

if TYPE_CHECKING:
    from .directory import Directory

logger = logging.getLogger(__name__)

VOLUME_LABEL_POS = (0, 0, 7)
ERROR_MAP_POS = (0, 0, 5)

HDR1_LENGTH = 80
HDR2_LENGTH = 48

_SURFACES = {
    "": "Side 0 formatted according to ECMA-54",
    "1": "Side 0 formatted according to ECMA-54",
    "2": "Both sides formatted according to ECMA-59",
    "M": "Both sides formatted according to ECMA-69",
}

_RECORD_LENGTHS = {"": 128, "1": 256, "2": 512, "3": 1024}

_ALLOCATIONS = {"": "Single sided", "1": "Double sided"}


class Volume:
    """Volume label VOL1 (ECMA-58 section 7.3)."""

    def __init__(self, disk: DiskImage) -> None:
        self.disk = disk
        self.number = disk.find("VOL", VOLUME_LABEL_POS)
        if self.number != "1":
            raise_disk_error(LabelError, "VOL1 not found", {"pos": VOLUME_LABEL_POS})
        self.ident = disk.unpack_s(5, 6)
        self.access = disk.unpack_s(11, 1)
        self.owner = disk.unpack_s(38, 14)
        self.seq = disk.unpack_i(77, 2)
        self.version = disk.unpack_s(80, 1)

        surface = disk.unpack_s(72, 1)
        self.surface = _SURFACES.get(surface, repr(surface))

        rlen = disk.unpack_s(76, 1)
        self.rlen: Optional[int] = _RECORD_LENGTHS.get(rlen)
        if self.rlen is None:
            log_parsing_warning(
                logger, "Volume", f"unknown record length identifier {rlen!r}"
            )

        alloc = disk.unpack_s(79, 1)
        self.alloc = _ALLOCATIONS.get(alloc, repr(alloc))
        log_disk_event(logger, "Volume", f"{self.ident!r} rlen={self.rlen}")

    def __str__(self) -> str:
        access = "- unrestricted -" if self.access in ("", " ") else repr(self.access)
        return (
            f"    Volume Identifier                 {self.ident!r}\n"
            f"    Volume Accessibility Indicator    {access}\n"
            f"    Owner                             {self.owner!r}\n"
            f"    Surface Indicator                 {self.surface}\n"
            "    Physical Record Length Identifier "
            f"{self.rlen} bytes per physical record\n"
            f"    Sector Sequence Indicator         {self.seq!r}\n"
            f"    File Label Allocation             {self.alloc}\n"
            f"    Label Standard Version            {self.version!r}\n"
        )


class VolumeHeader:
    """File label HDR1 on the index cylinder (ECMA-58 section 7.4)."""

    def __init__(self, disk: DiskImage, pos: Position) -> None:
        self.number = disk.find("HDR", pos)
        if self.number != "1":
            # End of the header list is found this way, so no error log
            raise LabelError("HDR1 not found", context={"pos": pos})
        self.identifier = disk.unpack_s(6, 9)
        self.blocklen = disk.unpack_i(23, 5)
        self.ext_beg = Extent(disk.unpack_s(29, 5))
        self.ext_end = Extent(disk.unpack_s(35, 5))
        self.rformat = disk.unpack_s(40, 1)
        self.bypass = disk.unpack_s(41, 1)
        self.access = disk.unpack_s(42, 1)
        self.wp = disk.unpack_s(43, 1)
        self.interchange = disk.unpack_s(44, 1)
        self.multi = disk.unpack_s(45, 1)
        self.section = disk.unpack_s(46, 2)
        self.cdate = disk.unpack_date(48)
        self.rlen = disk.unpack_i(54, 4)
        self.next_record = disk.unpack_i(58, 5)
        self.attrib = disk.unpack_s(63, 1)
        self.organization = disk.unpack_s(64, 1)
        self.expiration = disk.unpack_date(67)
        self.verify = disk.unpack_s(73, 1)
        self.eod = Extent(disk.unpack_s(75, 5))

    def __str__(self) -> str:
        return (
            "Header\n"
            f"    File Identifier             {self.identifier}\n"
            f"    Block Length                {self.blocklen}\n"
            f"    Begin of Extent             {self.ext_beg}\n"
            f"    End of Extent               {self.ext_end}\n"
            f"    Record Format               {self.rformat}\n"
            f"    Bypass Indicator            {self.bypass}\n"
            f"    File Accessibility          {self.access}\n"
            f"    Write Protect               {self.wp}\n"
            f"    Interchange Type            {self.interchange}\n"
            f"    Multivolume Indicator       {self.multi}\n"
            f"    File Section Number         {self.section}\n"
            f"    Creation Date               {self.cdate}\n"
            f"    Record Length               {self.rlen}\n"
            f"    Offset to Next Record Space {self.next_record}\n"
            f"    Record Attribute            {self.attrib}\n"
            f"    File Organization           {self.organization}\n"
            f"    Expiration Date             {self.expiration}\n"
            f"    Verify/Copy Indicator       {self.verify}\n"
            f"    End of Data                 {self.eod}\n"
        )


class ErrorMap:
    """ERMAP label (ECMA-58 section 7.5)."""

    def __init__(self, disk: DiskImage) -> None:
        self.disk = disk
        self.number = disk.find("ERM", ERROR_MAP_POS)
        if self.number != "A":
            raise_disk_error(LabelError, "ERMAP not found", {"pos": ERROR_MAP_POS})
        self.defect1 = disk.unpack_s(7, 3)
        self.defect2 = disk.unpack_s(11, 3)
        self.reloc = disk.unpack_s(23, 1)
        self.error_dir_indicator = disk.unpack_s(24, 1)
        self.error_directory_c = disk.unpack_s(25, 48)

    def __str__(self) -> str:
        return (
            "Error map\n"
            f"    Defective Cylinder 1 {self.defect1}\n"
            f"    Defective Cylinder 2 {self.defect2}\n"
            f"    Alternative Relocation Indicator {self.reloc}\n"
            f"    Error Directory Indicator {self.error_dir_indicator}\n"
            f"    Error Directory C {self.error_directory_c}\n"
        )


class FileHeader:
    """
    Header of an individual file in the data area.

    Three consecutive records: HDR1 (name), HDR2 (sector range and the
    number of bytes used in the last sector) and a record tagged "  00"
    holding two dates.
    """

    def __init__(self, directory: "Directory", offset: int) -> None:
        self.directory = directory
        disk = directory.volume.disk
        self.offset = offset

        disk.seek(offset)
        self._expect(disk, disk.get(HDR1_LENGTH), "HDR1")
        self.name = disk.unpack_s(5, 23)
        self.remainder1 = disk.unpack_s(28, 100)

        self._expect(disk, disk.get(HDR2_LENGTH), "HDR2")
        self.u = disk.unpack_s(5, 1)
        self.rsize = disk.unpack_i(6, 5)
        self.start = disk.unpack_u16(15)
        self.next_header = disk.unpack_u16(19)
        self.end = disk.unpack_u16(23)
        self.last = disk.unpack_u16(25)
        self.length = (self.end - self.start) * SECSIZE + self.last

        self._expect(disk, disk.get(SECSIZE), "  00")
        self.date1 = disk.unpack_date(117)
        self.date2 = disk.unpack_date(123)
        log_disk_event(
            logger, "File header", f"{self.name!r} sectors {self.start}-{self.end}"
        )

    def _expect(self, disk: DiskImage, record: bytes, tag: str) -> None:
        ident, number = disk.label(record)
        if ident + number != tag:
            raise_disk_error(
                LabelError,
                f"FileHeader {tag!r} not found",
                {"offset": f"0x{self.offset:x}", "found": ident + number},
            )

    def __str__(self) -> str:
        magic = self.directory.magic
        return (
            "FileHeader1\n"
            f"    Name  {self.name}\n"
            f"    ?     {self.remainder1!r}\n"
            "FileHeader2\n"
            f"    u     {self.u}\n"
            f"    rsize {self.rsize}\n"
            f"    start {self.start} (0x{(self.start - magic) * SECSIZE:x})\n"
            f"    next header {self.next_header}\n"
            f"    end   {self.end} (0x{(self.end - magic) * SECSIZE:x})\n"
            f"    bytes in last record: {self.last}\n"
            f"    computed length {self.length}\n"
            "FileHeader00\n"
            f"    Date1 {self.date1}\n"
            f"    Date2 {self.date2}\n"
        )


__all__ = [
    "Volume",
    "VolumeHeader",
    "ErrorMap",
    "FileHeader",
    "VOLUME_LABEL_POS",
    "ERROR_MAP_POS",
]
