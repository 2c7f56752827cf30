import logging
from typing import Dict

import pytest

from nix8820.disk.ebcdic import encode_nixdorf
from nix8820.disk.image import SECSIZE
from nix8820.stream.decoder import HeaderDecoder, StreamDecoder

# Header bytes that never carry the end-of-stream marker
HDR = b"\x01\x02\x03"

# Layout of the synthetic disk built by make_disk_image()
IMAGE_SECTORS = 40
DIRECTORY_OFFSET = 30 * SECSIZE  # (1, 0, 5)
LISTING_HEADER_SECTOR = 108
LISTING_DATA_START = 110
LISTING_DATA_END = 111
LISTING_LAST = 10
LISTING_CONTENT = (HDR + b"LINE\xc9") * 17 + b"\x00\x1f"


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based tests")


def ebcdic_record(fields: Dict[int, str], size: int = SECSIZE) -> bytearray:
    """Build a record of EBCDIC blanks with text fields at 1-based positions."""
    record = bytearray(b"\x40" * size)
    for start, text in fields.items():
        raw = encode_nixdorf(text)
        record[start - 1 : start - 1 + len(raw)] = raw
    return record


def dir_entry(name: str, flag: int, start: int) -> bytes:
    return encode_nixdorf(f"{name:<8}") + bytes([flag]) + start.to_bytes(2, "big")


def make_disk_image(rlen_id: str = " ", seq: str = "05") -> bytes:
    """
    Build a small Nixdorf disk image.

    Index cylinder: ERMAP (sector 5), VOL1 (sector 7), one HDR1 (sector 8).
    Directory at (1, 0, 5) with LISTING and a system entry SYSPROG.
    LISTING's header sits at sector 108 (offset 0x1000), its 138 data bytes
    at sectors 110-111.
    """
    image = bytearray(SECSIZE * IMAGE_SECTORS)

    def put(offset: int, data: bytes) -> None:
        image[offset : offset + len(data)] = data

    put(4 * SECSIZE, ebcdic_record({1: "ERMAP", 7: "012", 11: "034", 23: "R"}))
    put(
        6 * SECSIZE,
        ebcdic_record(
            {
                1: "VOL1",
                5: "NIXDSK",
                38: "KAEMPF",
                72: "M",
                76: rlen_id,
                77: seq,
                80: "W",
            }
        ),
    )
    put(
        7 * SECSIZE,
        ebcdic_record(
            {
                1: "HDR1",
                6: "SYSTEM",
                23: "00128",
                29: "01001",
                35: "73126",
                48: "810315",
                54: "0128",
            }
        ),
    )

    directory = (
        dir_entry("LISTING", 0x00, LISTING_HEADER_SECTOR)
        + dir_entry("SYSPROG", 0x40, 120)
        + b"\xff"
    )
    put(DIRECTORY_OFFSET, directory)

    header_offset = (LISTING_HEADER_SECTOR - 76) * SECSIZE
    hdr1 = ebcdic_record({1: "HDR1", 5: "LISTING"}, size=80)
    hdr2 = ebcdic_record({1: "HDR2", 5: "U", 6: "00128"}, size=48)
    hdr2[15:17] = LISTING_DATA_START.to_bytes(2, "big")
    hdr2[19:21] = (0).to_bytes(2, "big")
    hdr2[23:25] = LISTING_DATA_END.to_bytes(2, "big")
    hdr2[25:27] = LISTING_LAST.to_bytes(2, "big")
    dates = ebcdic_record({1: "  00", 117: "810315", 123: "820101"})
    put(header_offset, bytes(hdr1) + bytes(hdr2) + bytes(dates))

    data_offset = (LISTING_DATA_START - 76) * SECSIZE
    put(data_offset, LISTING_CONTENT)
    # Unused tail of the last sector
    tail = data_offset + len(LISTING_CONTENT)
    put(tail, b"\xee" * (data_offset + 2 * SECSIZE - tail))
    return bytes(image)


@pytest.fixture
def header_decoder():
    return HeaderDecoder()


@pytest.fixture
def stream_decoder():
    return StreamDecoder()


@pytest.fixture
def make_image():
    """Factory for synthetic images with a chosen record length id and sequence."""
    return make_disk_image


@pytest.fixture
def listing():
    """Expected properties of the LISTING file on the synthetic image."""
    return {
        "header_sector": LISTING_HEADER_SECTOR,
        "start": LISTING_DATA_START,
        "end": LISTING_DATA_END,
        "last": LISTING_LAST,
        "content": LISTING_CONTENT,
        "directory_offset": DIRECTORY_OFFSET,
    }


@pytest.fixture
def disk_image_bytes():
    return make_disk_image()


@pytest.fixture
def disk_image_path(tmp_path, disk_image_bytes):
    path = tmp_path / "disk.img"
    path.write_bytes(disk_image_bytes)
    return path


@pytest.fixture
def preserve_root_logger():
    """Restore root logger level and handlers after a test reconfigures logging."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
