"""비트맵 슬라이스 — 다른 비트맵 저장소를 가리키는 읽기 전용 사각형 뷰.

원본은 약한 참조로만 잡으므로 원본이 해제된 뒤 슬라이스를 쓰면
BitmapSliceError가 발생한다.
"""

import weakref

from bitmap.errors import BitmapRangeError, BitmapSliceError
from colormodel.color import RGBA


class BitmapSlice:
    """원본 비트맵 + 경계 사각형 (left, top, right, bottom; right/bottom 미포함)."""

    def __init__(self, bmp, left: int, top: int, right: int, bottom: int):
        if not (0 <= left <= right <= bmp.width and 0 <= top <= bottom <= bmp.height):
            raise BitmapRangeError(
                f"슬라이스 범위 오류: ({left}, {top}, {right}, {bottom}) / {bmp.width}x{bmp.height}"
            )
        self._ref = weakref.ref(bmp)
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom

    @property
    def bmp(self):
        """원본 비트맵. 이미 해제되었으면 BitmapSliceError."""
        bmp = self._ref()
        if bmp is None:
            raise BitmapSliceError("슬라이스 원본 비트맵이 해제되었습니다")
        return bmp

    @property
    def alive(self) -> bool:
        return self._ref() is not None

    @property
    def x(self) -> int:
        return self.left

    @property
    def y(self) -> int:
        return self.top

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(x, y, width, height)."""
        return self.left, self.top, self.width, self.height

    def get_rgba(self, x: int, y: int) -> RGBA:
        """슬라이스 좌표 기준으로 원본 픽셀을 읽는다."""
        return self.bmp.get_rgba(self.left + x, self.top + y)

    def extract(self):
        """슬라이스 영역을 새 비트맵으로 복사한다."""
        return self.bmp.copy_slice_with_bounds(self.left, self.top, self.right, self.bottom)

    def __repr__(self) -> str:
        return f"BitmapSlice({self.left}, {self.top}, {self.right}, {self.bottom})"
