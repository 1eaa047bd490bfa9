"""색상 포맷 코덱 경계 테스트."""

import numpy as np
import pytest

from bitmap.bitmap32 import Bitmap32
from bitmap.errors import BitmapSizeError
from colormodel import formats
from colormodel.color import RGBA


def _decode(fmt, data, little_endian=True) -> RGBA:
    dst = np.zeros(1, dtype=np.uint32)
    fmt.decode(data, 0, dst, 0, 1, little_endian=little_endian)
    return RGBA(dst[0])


def test_rgba_byte_order():
    assert _decode(formats.RGBA, b"\x01\x02\x03\x04") == RGBA.of(1, 2, 3, 4)


def test_bgra_byte_order():
    assert _decode(formats.BGRA, b"\x01\x02\x03\x04") == RGBA.of(3, 2, 1, 4)


def test_big_endian_reverses_bytes():
    assert _decode(formats.RGBA, b"\x01\x02\x03\x04", little_endian=False) == RGBA.of(4, 3, 2, 1)


def test_decode_respects_offsets():
    dst = np.zeros(3, dtype=np.uint32)
    formats.RGBA.decode(b"\xff\x01\x02\x03\x04", 1, dst, 2, 1)
    assert list(dst) == [0, 0, int(RGBA.of(1, 2, 3, 4))]


def test_bitmap_bytes_round_trip():
    bmp = Bitmap32.generate(3, 2, lambda x, y: RGBA.of(x, y, x + y, 200))
    raw = bmp.extract_bytes(formats.BGRA)
    assert len(raw) == 3 * 2 * 4
    assert raw[:4] == bytes([0, 0, 0, 200])
    assert Bitmap32(3, 2).write_decoded(formats.BGRA, raw) == bmp


def test_short_input_raises():
    with pytest.raises(BitmapSizeError):
        Bitmap32(2, 2).write_decoded(formats.RGBA, b"\x00" * 15)


def test_short_destination_raises():
    dst = np.zeros(1, dtype=np.uint32)
    with pytest.raises(BitmapSizeError):
        formats.RGBA.decode(b"\x00" * 8, 0, dst, 0, 2)
