"""슬라이스 뷰 테스트."""

import gc

import pytest

from bitmap.bitmap32 import Bitmap32
from bitmap.errors import BitmapRangeError, BitmapSliceError
from colormodel.color import RGBA


def _grid() -> Bitmap32:
    return Bitmap32.generate(4, 3, lambda x, y: RGBA.of(x, y, 0, 255))


def test_slice_bounds():
    bmp = _grid()
    sl = bmp.slice(1, 1, 2, 2)
    assert (sl.left, sl.top, sl.right, sl.bottom) == (1, 1, 3, 3)
    assert sl.bounds == (1, 1, 2, 2)
    assert sl.bmp is bmp


def test_slice_reads_relative_coordinates():
    bmp = _grid()
    sl = bmp.slice_with_bounds(2, 1, 4, 3)
    assert sl.get_rgba(0, 0) == RGBA.of(2, 1, 0, 255)
    assert sl.get_rgba(1, 1) == RGBA.of(3, 2, 0, 255)


def test_slice_sees_later_writes():
    bmp = _grid()
    sl = bmp.slice(0, 0, 1, 1)
    bmp[0, 0] = RGBA.of(9, 9, 9, 9)
    assert sl.get_rgba(0, 0) == RGBA.of(9, 9, 9, 9)


def test_extract_copies_region():
    bmp = _grid()
    out = bmp.slice(1, 0, 2, 2).extract()
    assert out.size == (2, 2)
    assert out[0, 1] == RGBA.of(1, 1, 0, 255)
    out[0, 0] = RGBA(0)
    assert bmp[1, 0] == RGBA.of(1, 0, 0, 255)


@pytest.mark.parametrize("rect", [(-1, 0, 2, 2), (0, 0, 5, 1), (3, 2, 2, 2)])
def test_out_of_range_rect_raises(rect):
    with pytest.raises(BitmapRangeError):
        _grid().slice(*rect)


def test_use_after_source_released_raises():
    sl = _grid().slice(0, 0, 1, 1)
    gc.collect()
    assert not sl.alive
    with pytest.raises(BitmapSliceError):
        sl.get_rgba(0, 0)
