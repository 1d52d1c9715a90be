from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from indexed_bmp.buffer import ByteBuffer
from indexed_bmp.errors import TruncatedDataError


def test_reads_little_endian_values() -> None:
    buffer = ByteBuffer(b"\x42\x4D" + b"\x36\x04\x00\x00" + b"\xFE\xFF\xFF\xFF" + b"\x7F")

    assert buffer.read_u16() == 0x4D42
    assert buffer.read_u32() == 0x436
    assert buffer.read_i32() == -2
    assert buffer.read_u8() == 0x7F
    assert buffer.remaining == 0


def test_read_past_end_raises_truncated() -> None:
    buffer = ByteBuffer(b"\x01\x02\x03")

    with pytest.raises(TruncatedDataError):
        buffer.read_u32()
    # A failed read does not move the cursor.
    assert buffer.position == 0
    assert buffer.read_bytes(3) == b"\x01\x02\x03"


def test_writes_overwrite_then_extend() -> None:
    buffer = ByteBuffer(b"\xAA\xBB\xCC")
    buffer.position = 1
    buffer.write_u16(0x1234)
    buffer.write_i32(-1)

    assert buffer.getvalue() == b"\xAA\x34\x12\xFF\xFF\xFF\xFF"
    assert len(buffer) == 7


def test_seek_outside_data_raises_and_skip_checks_bounds() -> None:
    buffer = ByteBuffer(bytes(4))
    buffer.position = 4
    assert buffer.remaining == 0
    with pytest.raises(TruncatedDataError):
        buffer.position = 5
    with pytest.raises(ValueError):
        buffer.position = -1
    assert buffer.position == 4

    buffer.position = 0

    buffer.skip(3)
    with pytest.raises(TruncatedDataError):
        buffer.skip(2)


def test_save_and_load_file(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "data.bin"
    ByteBuffer(b"hello").save(target)

    assert ByteBuffer.from_file(target).read_bytes(5) == b"hello"
