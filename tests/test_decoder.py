from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from indexed_bmp.buffer import ByteBuffer
from indexed_bmp.decoder import decode_bitmap, row_stride
from indexed_bmp.errors import BitmapFormatError, TruncatedDataError, UnsupportedFormatError
from indexed_bmp.palette import default_palette
from indexed_bmp.quantize import nearest_index

from bmp_samples import GRAY_PALETTE, make_bmp


def test_row_stride() -> None:
    assert row_stride(5, 8) == 8
    assert row_stride(4, 8) == 4
    assert row_stride(3, 24) == 12
    assert row_stride(1, 24) == 4
    assert row_stride(0, 8) == 0


def test_matching_palette_copies_indices() -> None:
    # Bottom-up stream: last visual row comes first.
    data = make_bmp(3, 2, [[4, 5, 6], [0, 1, 2]], palette=GRAY_PALETTE, color_count=0)

    decoded = decode_bitmap(data, palette=GRAY_PALETTE)

    assert decoded.pixels == bytearray([0, 1, 2, 4, 5, 6])
    assert decoded.palette == GRAY_PALETTE
    assert decoded.header.width == 3


def test_index_zero_passes_through_unchanged() -> None:
    data = make_bmp(2, 1, [[0, 255]], palette=GRAY_PALETTE)

    assert decode_bitmap(data, palette=GRAY_PALETTE).pixels == bytearray([0, 255])


def test_orientation_bottom_up_and_top_down_agree() -> None:
    top, bottom = [10, 20], [30, 40]
    bottom_up = make_bmp(2, 2, [bottom, top], palette=GRAY_PALETTE)
    top_down = make_bmp(2, -2, [top, bottom], palette=GRAY_PALETTE)

    first = decode_bitmap(bottom_up, palette=GRAY_PALETTE)
    second = decode_bitmap(top_down, palette=GRAY_PALETTE)

    assert first.pixels == second.pixels == bytearray([10, 20, 30, 40])


def test_padding_is_not_part_of_pixels() -> None:
    rows = [[1, 2, 3, 4, 5], [6, 7, 8, 9, 10], [11, 12, 13, 14, 15]]
    data = make_bmp(5, -3, rows, palette=GRAY_PALETTE)

    decoded = decode_bitmap(data, palette=GRAY_PALETTE)

    assert len(decoded.pixels) == 15
    assert decoded.pixels == bytearray(range(1, 16))


def test_without_target_palette_maps_to_default_palette() -> None:
    data = make_bmp(3, 1, [[0, 100, 255]], palette=GRAY_PALETTE)

    decoded = decode_bitmap(data)

    palette = default_palette()
    assert decoded.palette == palette
    expected = [nearest_index((v, v, v), palette) for v in (0, 100, 255)]
    assert list(decoded.pixels) == expected
    assert expected[0] == 0


def test_different_source_palette_is_remapped() -> None:
    reversed_gray = list(reversed(GRAY_PALETTE))
    data = make_bmp(3, 1, [[0, 1, 200]], palette=reversed_gray)

    decoded = decode_bitmap(data, palette=GRAY_PALETTE)

    assert list(decoded.pixels) == [255, 254, 55]
    assert decoded.palette == GRAY_PALETTE


def test_short_source_palette_is_padded_with_black() -> None:
    data = make_bmp(3, 1, [[0, 1, 2]], palette=[(0, 0, 0), (255, 255, 255)])

    decoded = decode_bitmap(data, palette=GRAY_PALETTE)

    # Index 2 is beyond the two stored entries and reads as black.
    assert list(decoded.pixels) == [0, 255, 0]


def test_target_palette_with_wrong_size_is_ignored_with_warning() -> None:
    data = make_bmp(1, 1, [[128]], palette=GRAY_PALETTE)

    with pytest.warns(UserWarning, match="16 entries"):
        decoded = decode_bitmap(data, palette=GRAY_PALETTE[:16])

    palette = default_palette()
    assert decoded.palette == palette
    assert decoded.pixels[0] == nearest_index((128, 128, 128), palette)


def test_24bit_colors_from_target_palette_map_exactly() -> None:
    target = default_palette()
    rows = [
        [target[20], target[40], target[60]],
        [target[1], target[255], target[100]],
    ]
    data = make_bmp(3, 2, rows, bits=24)

    decoded = decode_bitmap(data, palette=target)

    assert list(decoded.pixels) == [1, 255, 100, 20, 40, 60]
    assert decoded.palette == target


def test_24bit_top_down_rows() -> None:
    rows = [[(10, 10, 10)], [(20, 20, 20)]]
    data = make_bmp(1, -2, rows, bits=24)

    decoded = decode_bitmap(data, palette=GRAY_PALETTE)

    assert list(decoded.pixels) == [10, 20]


def test_24bit_without_target_uses_default_palette() -> None:
    rows = [[(r, (r * 7) % 256, (r * 13) % 256) for r in range(0, 250, 10)] for _ in range(3)]
    data = make_bmp(25, 3, rows, bits=24)

    decoded = decode_bitmap(data)

    assert len(decoded.palette) == 256
    assert decoded.palette == default_palette()
    assert len(decoded.pixels) == 75
    assert all(0 <= value <= 255 for value in decoded.pixels)
    assert decoded.pixels[0] == nearest_index(rows[0][0], decoded.palette)


def test_24bit_last_row_may_omit_padding() -> None:
    rows = [[(1, 1, 1)], [(2, 2, 2)]]
    data = make_bmp(1, 2, rows, bits=24, pad_last_row=False)

    decoded = decode_bitmap(data, palette=GRAY_PALETTE)

    assert list(decoded.pixels) == [2, 1]


def test_24bit_color_table_is_skipped() -> None:
    data = make_bmp(1, 1, [[(7, 7, 7)]], bits=24, palette=[(1, 2, 3), (4, 5, 6)])

    assert list(decode_bitmap(data, palette=GRAY_PALETTE).pixels) == [7]


def test_raw_mode_without_file_header() -> None:
    data = make_bmp(2, 1, [[3, 4]], palette=GRAY_PALETTE, file_header=False)

    decoded = decode_bitmap(ByteBuffer(data), palette=GRAY_PALETTE, file_header=False)

    assert list(decoded.pixels) == [3, 4]
    assert decoded.header.data_offset == 54


def test_larger_info_header_is_skipped() -> None:
    data = make_bmp(2, 1, [[3, 4]], palette=GRAY_PALETTE, info_extra=b"\xEE" * 68)

    assert list(decode_bitmap(data, palette=GRAY_PALETTE).pixels) == [3, 4]


@pytest.mark.parametrize("bits", [1, 4, 16, 32])
def test_unsupported_bit_depth(bits: int) -> None:
    data = make_bmp(4, 1, [], bits=bits, color_count=0)

    with pytest.raises(UnsupportedFormatError):
        decode_bitmap(data)


def test_compressed_bitmap_is_unsupported() -> None:
    data = make_bmp(4, 1, [[0, 0, 0, 0]], palette=GRAY_PALETTE, compression=1)

    with pytest.raises(UnsupportedFormatError):
        decode_bitmap(data, palette=GRAY_PALETTE)


def test_bad_type_tag_is_rejected() -> None:
    data = make_bmp(1, 1, [[0]], palette=GRAY_PALETTE, type_tag=b"XY")

    with pytest.raises(BitmapFormatError):
        decode_bitmap(data, palette=GRAY_PALETTE)


def test_negative_width_is_rejected() -> None:
    data = make_bmp(-1, 1, [], palette=GRAY_PALETTE)

    with pytest.raises(BitmapFormatError):
        decode_bitmap(data, palette=GRAY_PALETTE)


def test_truncated_pixel_data_raises() -> None:
    data = make_bmp(4, 2, [[1, 2, 3, 4], [5, 6, 7, 8]], palette=GRAY_PALETTE)

    with pytest.raises(TruncatedDataError):
        decode_bitmap(data[:-3], palette=GRAY_PALETTE)


def test_truncated_header_raises() -> None:
    data = make_bmp(1, 1, [[0]], palette=GRAY_PALETTE)

    with pytest.raises(TruncatedDataError):
        decode_bitmap(data[:30])


def test_truncated_24bit_pixel_data_raises() -> None:
    rows = [[(1, 1, 1), (2, 2, 2)], [(3, 3, 3), (4, 4, 4)]]
    data = make_bmp(2, 2, rows, bits=24)

    with pytest.raises(TruncatedDataError):
        decode_bitmap(data[:-5], palette=GRAY_PALETTE)


@pytest.mark.parametrize("bits", [8, 24])
def test_huge_dimensions_without_pixel_data_raise_truncated(bits: int) -> None:
    data = make_bmp(2**31 - 1, 2**31 - 1, [], bits=bits) + bytes(6)

    with pytest.raises(TruncatedDataError):
        decode_bitmap(data)
