"""히스토그램 테스트."""

import numpy as np
import pytest

from bitmap.bitmap32 import Bitmap32
from bitmap.errors import BitmapSizeError
from colormodel.channel import BitmapChannel
from colormodel.color import RGBA


def _sample() -> Bitmap32:
    return Bitmap32(2, 2, [RGBA.of(r, 1, 2, 255) for r in (10, 10, 20, 255)])


def test_counts_red_values():
    counts = _sample().histogram(BitmapChannel.RED)
    assert len(counts) == 256
    assert counts[10] == 2
    assert counts[20] == 1
    assert counts[255] == 1
    assert sum(counts) == 4


def test_counts_into_supplied_array_and_resets_it():
    out = np.full(300, 7, dtype=np.int64)
    _sample().histogram(BitmapChannel.ALPHA, out)
    assert out[255] == 4
    assert out.sum() == 4


def test_short_output_raises_size_error():
    with pytest.raises(BitmapSizeError):
        _sample().histogram(BitmapChannel.RED, [0] * 255)
