"""색상 변환 테스트."""

from bitmap.bitmap32 import Bitmap32
from colormodel.color import RGBA
from colormodel.transform import ColorTransform


def test_identity_transform_is_noop():
    bmp = Bitmap32.generate(8, 8, lambda x, y: RGBA.of(x * 30, y * 30, x + y, 200 - x))
    before = bmp.clone()
    bmp.apply_color_transform(ColorTransform())
    assert ColorTransform().is_identity
    assert bmp == before


def test_lookup_tables_round_and_clamp():
    r, g, b, a = ColorTransform(mul_r=2.0, add_g=-10.0, mul_b=0.5, add_a=300.0).lookup_tables()
    assert r[100] == 200 and r[200] == 255
    assert g[5] == 0 and g[20] == 10
    assert b[3] == 2
    assert b[1] == 1
    assert a[0] == 255


def test_apply_limited_to_rectangle():
    bmp = Bitmap32.filled(4, 4, RGBA.of(100, 100, 100, 255))
    bmp.apply_color_transform(ColorTransform(mul_r=0.0), x=1, y=1, width=2, height=2)
    assert bmp[1, 1] == RGBA.of(0, 100, 100, 255)
    assert bmp[2, 2] == RGBA.of(0, 100, 100, 255)
    for x, y in [(0, 0), (3, 3), (3, 1), (1, 3)]:
        assert bmp[x, y] == RGBA.of(100, 100, 100, 255)


def test_with_color_transform_returns_transformed_copy():
    bmp = Bitmap32.filled(4, 4, RGBA.of(10, 20, 30, 255))
    out = bmp.with_color_transform(ColorTransform(add_r=5.0), x=2, y=0, width=2, height=3)
    assert out.size == (2, 3)
    assert all(c == RGBA.of(15, 20, 30, 255) for c in out)
    assert bmp[2, 0] == RGBA.of(10, 20, 30, 255)


def test_apply_single_color():
    assert ColorTransform(mul_a=0.5).apply(RGBA.of(1, 2, 3, 255)) == RGBA.of(1, 2, 3, 128)
