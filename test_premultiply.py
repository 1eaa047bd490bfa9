"""프리멀티플라이 관리 테스트."""

import numpy as np

from bitmap.bitmap32 import Bitmap32
from colormodel.color import RGBA, unpack


def _random_bitmap(seed: int, width: int = 16, height: int = 16, opaque: bool = False) -> Bitmap32:
    rng = np.random.default_rng(seed)
    data = rng.integers(0, 2**32, size=width * height, dtype=np.uint64).astype(np.uint32)
    if opaque:
        data |= np.uint32(0xFF000000)
    return Bitmap32(width, height, data)


def test_premultiply_inplace_flips_tag_once():
    bmp = _random_bitmap(1)
    bmp.premultiply_inplace()
    assert bmp.premultiplied
    once = bmp.data.copy()
    bmp.premultiply_inplace()
    np.testing.assert_array_equal(bmp.data, once)


def test_depremultiply_on_straight_is_noop():
    bmp = _random_bitmap(2)
    before = bmp.data.copy()
    bmp.depremultiply_inplace()
    assert not bmp.premultiplied
    np.testing.assert_array_equal(bmp.data, before)


def test_premultiplied_pixels_do_not_exceed_alpha():
    lanes = unpack(_random_bitmap(3).premultiplied_copy().data)
    assert np.all(lanes[:, :3] <= lanes[:, 3:4])


def test_round_trip_is_exact_for_opaque_pixels():
    bmp = _random_bitmap(4, opaque=True)
    assert bmp.premultiplied_copy().depremultiplied_copy() == bmp


def test_round_trip_error_is_bounded_by_alpha():
    bmp = _random_bitmap(5, 32, 32)
    back = bmp.premultiplied_copy().depremultiplied_copy()
    orig = unpack(bmp.data).astype(np.int64)
    got = unpack(back.data).astype(np.int64)
    alpha = orig[:, 3]
    visible = alpha > 0
    bound = 128 // np.maximum(alpha, 1) + 1
    err = np.abs(orig[:, :3] - got[:, :3]).max(axis=1)
    assert np.all(err[visible] <= bound[visible])
    np.testing.assert_array_equal(got[:, 3], alpha)


def test_zero_alpha_depremultiplies_to_zero_word():
    bmp = Bitmap32.filled(2, 2, RGBA.of(200, 100, 50, 0))
    back = bmp.premultiplied_copy().depremultiplied_copy()
    assert all(c == RGBA(0) for c in back)


def test_copy_forms_leave_receiver_untouched():
    bmp = _random_bitmap(6)
    before = bmp.clone()
    pre = bmp.premultiplied_copy()
    assert pre.premultiplied and not bmp.premultiplied
    assert bmp == before
    dep = pre.depremultiplied_copy()
    assert not dep.premultiplied and pre.premultiplied


def test_if_required_returns_self_when_already_in_form():
    straight = _random_bitmap(7)
    assert straight.depremultiplied_if_required() is straight
    pre = straight.premultiplied_if_required()
    assert pre is not straight
    assert pre.premultiplied_if_required() is pre
