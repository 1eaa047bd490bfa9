"""8비트 단일 채널 비트맵 — 채널 추출/주입의 원본·대상으로 쓰인다."""

import numpy as np

from bitmap.base import Bitmap
from bitmap.errors import BitmapSizeError
from colormodel.color import RGBA


class Bitmap8(Bitmap):
    """w*h 바이트 평면."""

    def __init__(self, width: int, height: int, data=None):
        super().__init__(width, height, 8, premultiplied=False)
        if data is None:
            data = np.zeros(self.area, dtype=np.uint8)
        self.data = np.ascontiguousarray(data, dtype=np.uint8)
        if self.data.ndim != 1 or len(self.data) < self.area:
            raise BitmapSizeError(
                f"Bitmap data is too short: width={width}, height={height}, "
                f"data={len(self.data)}, area={self.area}"
            )

    def get(self, x: int, y: int) -> int:
        return int(self.data[self.index(x, y)])

    def set(self, x: int, y: int, value: int) -> None:
        self.data[self.index(x, y)] = value & 0xFF

    def __getitem__(self, xy: tuple[int, int]) -> int:
        return self.get(*xy)

    def __setitem__(self, xy: tuple[int, int], value: int) -> None:
        self.set(xy[0], xy[1], value)

    def get_rgba(self, x: int, y: int) -> RGBA:
        """회색 불투명 색상으로 읽는다."""
        v = self.get(x, y)
        return RGBA.of(v, v, v, 255)

    def set_rgba(self, x: int, y: int, color: int) -> None:
        """빨강 채널을 저장한다."""
        self.set(x, y, RGBA(color).r)

    def swap_rows(self, y0: int, y1: int) -> None:
        w = self.width
        s0 = self.index(0, y0)
        s1 = self.index(0, y1)
        temp = self.data[s0:s0 + w].copy()
        self.data[s0:s0 + w] = self.data[s1:s1 + w]
        self.data[s1:s1 + w] = temp

    def copy_slice_with_bounds(self, left: int, top: int, right: int, bottom: int) -> "Bitmap8":
        plane = self.data[:self.area].reshape(self.height, self.width)
        return Bitmap8(right - left, bottom - top, plane[top:bottom, left:right].reshape(-1).copy())

    def clone(self) -> "Bitmap8":
        return Bitmap8(self.width, self.height, self.data.copy())

    def to_bitmap32(self):
        """회색 불투명 Bitmap32로 확장한다."""
        from bitmap.bitmap32 import Bitmap32
        v = self.data[:self.area].astype(np.uint32)
        packed = v | (v << np.uint32(8)) | (v << np.uint32(16)) | np.uint32(0xFF000000)
        return Bitmap32(self.width, self.height, packed)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Bitmap8)
            and self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data[:self.area], other.data[:other.area])
        )

    def __hash__(self) -> int:
        return hash((self.width * 31 + self.height, self.data[:self.area].tobytes()))

    def __repr__(self) -> str:
        return f"Bitmap8({self.width}, {self.height})"
