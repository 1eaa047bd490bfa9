"""비트맵 공통 기반 클래스."""

from colormodel.color import RGBA


class Bitmap:
    """고정 크기 래스터의 기반 클래스. 서브클래스에서 픽셀 접근을 구현한다."""

    def __init__(self, width: int, height: int, bpp: int, premultiplied: bool = False):
        if width < 0 or height < 0:
            raise ValueError(f"잘못된 크기: {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self.bpp = bpp
        self.premultiplied = premultiplied

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def area(self) -> int:
        return self._width * self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(x, y, width, height)."""
        return 0, 0, self._width, self._height

    def index(self, x: int, y: int) -> int:
        return y * self._width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_rgba(self, x: int, y: int) -> RGBA:
        raise NotImplementedError("Subclasses must implement this method")

    def set_rgba(self, x: int, y: int, color: int) -> None:
        raise NotImplementedError("Subclasses must implement this method")

    def swap_rows(self, y0: int, y1: int) -> None:
        raise NotImplementedError("Subclasses must implement this method")

    def flip_y(self) -> None:
        """행 교환으로 상하를 뒤집는다."""
        for y in range(self._height // 2):
            self.swap_rows(y, self._height - y - 1)

    def slice(self, x: int, y: int, width: int, height: int):
        """원본을 복사하지 않는 사각형 뷰를 만든다."""
        from bitmap.slice import BitmapSlice
        return BitmapSlice(self, x, y, x + width, y + height)

    def slice_with_bounds(self, left: int, top: int, right: int, bottom: int):
        from bitmap.slice import BitmapSlice
        return BitmapSlice(self, left, top, right, bottom)
