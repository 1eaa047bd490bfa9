"""32비트 RGBA 픽셀 버퍼 — 합성, 프리멀티플라이 관리, 채널 전송, 색상 변환, 밉맵.

픽셀은 index(x, y) = y * width + x 위치의 uint32 평면 배열에 저장된다.
get/set은 범위를 검사하지 않는다. 논리 영역 밖이지만 저장소 안인 좌표는
옆 행을 읽고 쓰며, 저장소 밖이면 numpy가 IndexError를 낸다.
범위 검사가 필요하면 get_checked/set_checked를 쓴다.
"""

import logging
from typing import Callable

import numpy as np

from bitmap import transfer
from bitmap.base import Bitmap
from bitmap.bitmap8 import Bitmap8
from bitmap.errors import BitmapRangeError, BitmapSizeError
from bitmap.slice import BitmapSlice
from colormodel import formats
from colormodel.channel import BitmapChannel
from colormodel.color import (
    RGBA,
    blend4_array,
    depremultiply_array,
    mix_array,
    pack,
    premultiply_array,
    unpack,
)
from colormodel.formats import ColorFormat
from colormodel.transform import ColorTransform
from colormodel.ycbcr import rgba_to_ycbcr_array, ycbcr_to_rgba_array

logger = logging.getLogger(__name__)


class Bitmap32(Bitmap):
    """고정 크기 32비트 RGBA 비트맵. 저장소는 이 객체가 단독으로 소유한다."""

    def __init__(self, width: int, height: int, data=None, premultiplied: bool = False):
        super().__init__(width, height, 32, premultiplied)
        if data is None:
            data = np.zeros(self.area, dtype=np.uint32)
        self.data = np.ascontiguousarray(data, dtype=np.uint32)
        if self.data.ndim != 1 or len(self.data) < self.area:
            raise BitmapSizeError(
                f"Bitmap data is too short: width={width}, height={height}, "
                f"data={len(self.data)}, area={self.area}"
            )
        # swap_rows용 임시 행
        self._temp = np.zeros(max(self.width, self.height), dtype=np.uint32)

    @classmethod
    def filled(cls, width: int, height: int, color: int, premultiplied: bool = False) -> "Bitmap32":
        """color로 채운 비트맵을 만든다."""
        return cls(width, height, np.full(width * height, int(color) & 0xFFFFFFFF, dtype=np.uint32), premultiplied)

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        generator: Callable[[int, int], int],
        premultiplied: bool = False,
    ) -> "Bitmap32":
        """좌표마다 generator(x, y)를 행 우선 순서로 한 번씩 호출해 비트맵을 만든다."""
        data = np.empty(width * height, dtype=np.uint32)
        n = 0
        for y in range(height):
            for x in range(width):
                data[n] = int(generator(x, y)) & 0xFFFFFFFF
                n += 1
        return cls(width, height, data, premultiplied)

    def _rows(self) -> np.ndarray:
        """(height, width) 2차원 뷰."""
        return self.data[:self.area].reshape(self.height, self.width)

    # ── 픽셀 접근 ──

    def get(self, x: int, y: int) -> RGBA:
        return RGBA(self.data[self.index(x, y)])

    def set(self, x: int, y: int, color: int) -> None:
        self.data[self.index(x, y)] = int(color) & 0xFFFFFFFF

    def __getitem__(self, xy: tuple[int, int]) -> RGBA:
        return self.get(*xy)

    def __setitem__(self, xy: tuple[int, int], color: int) -> None:
        self.set(xy[0], xy[1], color)

    def get_int(self, x: int, y: int) -> int:
        return int(self.data[self.index(x, y)])

    def set_int(self, x: int, y: int, color: int) -> None:
        self.set(x, y, color)

    def get_rgba(self, x: int, y: int) -> RGBA:
        return self.get(x, y)

    def set_rgba(self, x: int, y: int, color: int) -> None:
        self.set(x, y, color)

    def get_checked(self, x: int, y: int) -> RGBA:
        """범위를 검사하는 get. 범위 밖이면 BitmapRangeError."""
        if not self.in_bounds(x, y):
            raise BitmapRangeError(f"({x}, {y}) is out of {self.width}x{self.height}")
        return self.get(x, y)

    def set_checked(self, x: int, y: int, color: int) -> None:
        if not self.in_bounds(x, y):
            raise BitmapRangeError(f"({x}, {y}) is out of {self.width}x{self.height}")
        self.set(x, y, color)

    def set_row(self, y: int, row) -> None:
        i = self.index(0, y)
        self.data[i:i + self.width] = np.asarray(row, dtype=np.uint32)[:self.width]

    def set_row_chunk(self, x: int, y: int, data, width: int, increment: int) -> None:
        """data의 앞 width개 픽셀을 (x, y)부터 increment 간격으로 쓴다."""
        src = np.asarray(data, dtype=np.uint32)[:width]
        m = self.index(x, y)
        if increment == 1:
            self.data[m:m + width] = src
        else:
            self.data[m:m + width * increment:increment] = src

    def fill(self, color: int, x: int = 0, y: int = 0, width: int | None = None, height: int | None = None) -> None:
        """사각형을 color로 채운다. 사각형은 비트맵 범위로 잘라낸다."""
        if width is None:
            width = self.width - x
        if height is None:
            height = self.height - y
        x1 = max(x, 0)
        x2 = min(x + width, self.width)
        y1 = max(y, 0)
        y2 = min(y + height, self.height)
        if x1 >= x2 or y1 >= y2:
            return
        self._rows()[y1:y2, x1:x2] = int(color) & 0xFFFFFFFF

    def swap_rows(self, y0: int, y1: int) -> None:
        w = self.width
        s0 = self.index(0, y0)
        s1 = self.index(0, y1)
        self._temp[:w] = self.data[s0:s0 + w]
        self.data[s0:s0 + w] = self.data[s1:s1 + w]
        self.data[s1:s1 + w] = self._temp[:w]

    def clone(self) -> "Bitmap32":
        return Bitmap32(self.width, self.height, self.data.copy(), self.premultiplied)

    def to_bitmap32(self) -> "Bitmap32":
        return self

    # ── 사각형 순회 ──

    def _each(self, sx: int, sy: int, width: int | None, height: int | None):
        if width is None:
            width = self.width - sx
        if height is None:
            height = self.height - sy
        for y in range(sy, sy + height):
            n = self.index(sx, y)
            for x in range(sx, sx + width):
                yield n, x, y
                n += 1

    def set_each(self, callback: Callable[[int, int], int], sx: int = 0, sy: int = 0,
                 width: int | None = None, height: int | None = None) -> None:
        for n, x, y in self._each(sx, sy, width, height):
            self.data[n] = int(callback(x, y)) & 0xFFFFFFFF

    def update_colors(self, callback: Callable[[RGBA], int], sx: int = 0, sy: int = 0,
                      width: int | None = None, height: int | None = None) -> None:
        for n, _, _ in self._each(sx, sy, width, height):
            self.data[n] = int(callback(RGBA(self.data[n]))) & 0xFFFFFFFF

    def update_colors_xy(self, callback: Callable[[int, int, RGBA], int], sx: int = 0, sy: int = 0,
                         width: int | None = None, height: int | None = None) -> None:
        for n, x, y in self._each(sx, sy, width, height):
            self.data[n] = int(callback(x, y, RGBA(self.data[n]))) & 0xFFFFFFFF

    # ── 합성 ──

    @staticmethod
    def copy_rect(src: "Bitmap32", src_x: int, src_y: int, dst: "Bitmap32", dst_x: int, dst_y: int,
                  width: int, height: int) -> None:
        """src의 사각형을 dst에 그대로 복사한다 (범위 검사 없음)."""
        for y in range(height):
            s = src.index(src_x, src_y + y)
            d = dst.index(dst_x, dst_y + y)
            dst.data[d:d + width] = src.data[s:s + width]

    def copy_slice_with_size(self, x: int, y: int, width: int, height: int) -> "Bitmap32":
        out = Bitmap32(width, height, premultiplied=self.premultiplied)
        Bitmap32.copy_rect(self, x, y, out, 0, 0, width, height)
        return out

    def copy_slice_with_bounds(self, left: int, top: int, right: int, bottom: int) -> "Bitmap32":
        return self.copy_slice_with_size(left, top, right - left, bottom - top)

    def _draw(self, src: "Bitmap32", dx: int, dy: int, sleft: int, stop: int, sright: int, sbottom: int,
              mix: bool) -> None:
        width = sright - sleft
        height = sbottom - stop
        if width <= 0 or height <= 0:
            return
        dst_data = self.data
        src_data = src.data
        for y in range(height):
            d = self.index(dx, dy + y)
            s = src.index(sleft, stop + y)
            if mix:
                dst_data[d:d + width] = mix_array(dst_data[d:d + width], src_data[s:s + width])
            else:
                dst_data[d:d + width] = src_data[s:s + width]

    def _draw_put(self, mix: bool, other: "Bitmap32", dx: int = 0, dy: int = 0) -> None:
        # 음수 오프셋은 원본 사각형을 줄인다. 오른쪽/아래 넘침은 자르지 않는다.
        sleft = 0
        stop = 0
        if dx < 0:
            sleft = -dx
            dx = 0
        if dy < 0:
            stop = -dy
            dy = 0
        self._draw(other, dx, dy, sleft, stop, other.width, other.height, mix)

    def _draw_slice(self, src: BitmapSlice, dx: int = 0, dy: int = 0, mix: bool = False) -> None:
        bmp = src.bmp
        sleft = src.left
        stop = src.top
        if dx < 0:
            sleft -= dx
            dx = 0
        if dy < 0:
            stop -= dy
            dy = 0
        awidth = min(self.width - dx, src.right - sleft)
        aheight = min(self.height - dy, src.bottom - stop)
        self._draw(bmp, dx, dy, sleft, stop, sleft + awidth, stop + aheight, mix)

    def put(self, src, dx: int = 0, dy: int = 0) -> None:
        """src(Bitmap32 또는 BitmapSlice)를 (dx, dy)에 그대로 덮어쓴다."""
        if isinstance(src, BitmapSlice):
            self._draw_slice(src, dx, dy, mix=False)
        else:
            self._draw_put(False, src, dx, dy)

    def draw(self, src, dx: int = 0, dy: int = 0) -> None:
        """src(Bitmap32 또는 BitmapSlice)를 (dx, dy)에 알파 합성한다."""
        if isinstance(src, BitmapSlice):
            self._draw_slice(src, dx, dy, mix=True)
        else:
            self._draw_put(True, src, dx, dy)

    def draw_unoptimized(self, src, dx: int = 0, dy: int = 0, mix: bool = True) -> None:
        """다른 픽셀 포맷의 비트맵을 픽셀 단위 접근자로 읽어 그린다.

        src가 Bitmap32(또는 그 슬라이스)면 빠른 경로로 넘긴다.
        """
        if isinstance(src, BitmapSlice):
            bmp = src.bmp
            if isinstance(bmp, Bitmap32):
                self._draw_slice(src, dx, dy, mix=mix)
                return
            sleft, stop, sright, sbottom = src.left, src.top, src.right, src.bottom
        else:
            bmp = src
            if isinstance(bmp, Bitmap32):
                self._draw_put(mix, bmp, dx, dy)
                return
            sleft, stop, sright, sbottom = 0, 0, bmp.width, bmp.height
        if dx < 0:
            sleft -= dx
            dx = 0
        if dy < 0:
            stop -= dy
            dy = 0
        if isinstance(src, BitmapSlice):
            # 빠른 슬라이스 경로처럼 대상의 남은 폭/높이로 제한
            sright = sleft + min(self.width - dx, sright - sleft)
            sbottom = stop + min(self.height - dy, sbottom - stop)
        self._draw_unoptimized(bmp, dx, dy, sleft, stop, sright, sbottom, mix)

    def _draw_unoptimized(self, src: Bitmap, dx: int, dy: int, sleft: int, stop: int, sright: int, sbottom: int,
                          mix: bool) -> None:
        width = sright - sleft
        height = sbottom - stop
        dst_data = self.data
        for y in range(height):
            d = self.index(dx, dy + y)
            for x in range(width):
                c = src.get_rgba(sleft + x, stop + y)
                if mix:
                    dst_data[d + x] = RGBA.mix(dst_data[d + x], c)
                else:
                    dst_data[d + x] = c

    def draw_pixel_mixed(self, x: int, y: int, color: int) -> None:
        self.set(x, y, RGBA.mix(self.get(x, y), color))

    # ── 채널 ──

    def write_channel(self, destination: BitmapChannel, input, source: BitmapChannel | None = None) -> None:
        """input의 채널을 이 비트맵의 destination 채널로 복사한다.

        input이 Bitmap8이면 평면 전체를, Bitmap32면 source 채널(기본: destination)을 쓴다.
        """
        if isinstance(input, Bitmap8):
            transfer.copy_channel_from_plane(input, self, destination)
        else:
            transfer.copy_channel(input, source or destination, self, destination)

    def extract_channel(self, channel: BitmapChannel) -> Bitmap8:
        out = Bitmap8(self.width, self.height)
        transfer.copy_channel_to_plane(self, channel, out)
        return out

    @classmethod
    def create_with_alpha(
        cls,
        color: "Bitmap32",
        alpha: "Bitmap32",
        alpha_channel: BitmapChannel = BitmapChannel.RED,
    ) -> "Bitmap32":
        """color를 그대로 복사한 뒤 alpha의 alpha_channel을 알파 채널로 넣는다."""
        out = cls(color.width, color.height)
        out.put(color)
        transfer.copy_channel(alpha, alpha_channel, out, BitmapChannel.ALPHA)
        return out

    def invert(self) -> None:
        """알파를 제외한 RGB를 반전한다."""
        self.xor(RGBA.of(255, 255, 255, 0))

    def xor(self, value: int) -> None:
        self.data[:self.area] ^= np.uint32(int(value) & 0xFFFFFFFF)

    def histogram(self, channel: BitmapChannel, out=None):
        """channel 값(0..255)별 픽셀 수를 out(256칸 이상)에 센다."""
        if out is None:
            out = [0] * 256
        if len(out) < 256:
            raise BitmapSizeError(f"output array size must be 256 (got {len(out)})")
        counts = np.bincount(channel.extract_array(self.data[:self.area]), minlength=256)
        out[:] = [0] * len(out)
        out[:256] = counts.tolist()
        return out

    # ── 프리멀티플라이 ──

    def premultiplied_if_required(self) -> "Bitmap32":
        return self if self.premultiplied else self.premultiplied_copy()

    def depremultiplied_if_required(self) -> "Bitmap32":
        return self if not self.premultiplied else self.depremultiplied_copy()

    def premultiplied_copy(self) -> "Bitmap32":
        out = self.clone()
        out.premultiply_inplace()
        return out

    def depremultiplied_copy(self) -> "Bitmap32":
        out = self.clone()
        out.depremultiply_inplace()
        return out

    def premultiply_inplace(self) -> None:
        if self.premultiplied:
            return
        self.premultiplied = True
        self.data[:self.area] = premultiply_array(self.data[:self.area])

    def depremultiply_inplace(self) -> None:
        """알파 0 픽셀은 0 워드(투명 검정)가 된다."""
        if not self.premultiplied:
            return
        self.premultiplied = False
        self.data[:self.area] = depremultiply_array(self.data[:self.area])

    # ── 색상 변환 ──

    def apply_color_transform(self, ct: ColorTransform, x: int = 0, y: int = 0,
                              width: int | None = None, height: int | None = None) -> None:
        """사각형 영역에 색상 변환을 적용한다. 사각형은 잘라내지 않는다."""
        if width is None:
            width = self.width - x
        if height is None:
            height = self.height - y
        region = self._rows()[y:y + height, x:x + width]
        region[...] = ct.apply_array(region)

    def with_color_transform(self, ct: ColorTransform, x: int = 0, y: int = 0,
                             width: int | None = None, height: int | None = None) -> "Bitmap32":
        if width is None:
            width = self.width - x
        if height is None:
            height = self.height - y
        out = self.copy_slice_with_size(x, y, width, height)
        out.apply_color_transform(ct)
        return out

    def rgba_to_ycbcr(self) -> "Bitmap32":
        out = self.clone()
        out.rgba_to_ycbcr_inplace()
        return out

    def rgba_to_ycbcr_inplace(self) -> None:
        self.data[:self.area] = rgba_to_ycbcr_array(self.data[:self.area])

    def ycbcr_to_rgba(self) -> "Bitmap32":
        out = self.clone()
        out.ycbcr_to_rgba_inplace()
        return out

    def ycbcr_to_rgba_inplace(self) -> None:
        self.data[:self.area] = ycbcr_to_rgba_array(self.data[:self.area])

    # ── 크기 변환 ──

    def mipmap(self, levels: int) -> "Bitmap32":
        """2x2 박스 필터로 levels번 절반 축소한 새 비트맵 (프리멀티플라이드)을 반환한다.

        홀수 크기에서는 마지막 행/열을 버린다.
        """
        pixels = self.premultiplied_if_required()._rows()
        for _ in range(levels):
            h2 = pixels.shape[0] // 2
            w2 = pixels.shape[1] // 2
            p = pixels[:h2 * 2, :w2 * 2]
            pixels = blend4_array(p[0::2, 0::2], p[0::2, 1::2], p[1::2, 0::2], p[1::2, 1::2])
        height, width = pixels.shape
        logger.debug("밉맵 %dx%d -> %dx%d (levels=%d)", self.width, self.height, width, height, levels)
        return Bitmap32(width, height, np.array(pixels, dtype=np.uint32).reshape(-1), premultiplied=True)

    def scale_nearest(self, sx: int, sy: int) -> "Bitmap32":
        """정수 배율 최근접 확대."""
        out = np.repeat(np.repeat(self._rows(), sy, axis=0), sx, axis=1)
        return Bitmap32(self.width * sx, self.height * sy, out.reshape(-1), self.premultiplied)

    def scale_linear(self, sx: float, sy: float) -> "Bitmap32":
        """쌍선형 보간 크기 변환. 가장자리 밖은 가장자리 픽셀로 고정한다."""
        width = int(self.width * sx)
        height = int(self.height * sy)
        if width <= 0 or height <= 0 or self.area == 0:
            return Bitmap32(max(width, 0), max(height, 0), premultiplied=self.premultiplied)
        lanes = unpack(self._rows()).astype(np.float64)
        xs = np.arange(width) / sx
        ys = np.arange(height) / sy
        x0 = np.clip(np.floor(xs).astype(np.int64), 0, self.width - 1)
        y0 = np.clip(np.floor(ys).astype(np.int64), 0, self.height - 1)
        x1 = np.minimum(x0 + 1, self.width - 1)
        y1 = np.minimum(y0 + 1, self.height - 1)
        fx = np.clip(xs - x0, 0.0, 1.0)[None, :, None]
        fy = np.clip(ys - y0, 0.0, 1.0)[:, None, None]
        top = lanes[y0][:, x0] * (1.0 - fx) + lanes[y0][:, x1] * fx
        bottom = lanes[y1][:, x0] * (1.0 - fx) + lanes[y1][:, x1] * fx
        out = top * (1.0 - fy) + bottom * fy
        packed = pack(np.clip(np.floor(out + 0.5), 0, 255))
        return Bitmap32(width, height, packed.reshape(-1), self.premultiplied)

    # ── 코덱 경계 ──

    def write_decoded(self, color: ColorFormat, data: bytes, offset: int = 0,
                      little_endian: bool = True) -> "Bitmap32":
        """color 포맷 바이트열로 전체 픽셀을 채운다."""
        color.decode(data, offset, self.data, 0, self.area, little_endian=little_endian)
        return self

    def extract_bytes(self, color: ColorFormat = formats.RGBA, little_endian: bool = True) -> bytes:
        return color.encode(self.data[:self.area], little_endian=little_endian)

    # ── 비교·표현 ──

    def __iter__(self):
        for v in self.data[:self.area]:
            yield RGBA(v)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Bitmap32)
            and self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data[:self.area], other.data[:other.area])
        )

    def __hash__(self) -> int:
        return hash((self.width * 31 + self.height, self.data[:self.area].tobytes()))

    def __repr__(self) -> str:
        return f"Bitmap32({self.width}, {self.height})"
