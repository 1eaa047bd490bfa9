"""비트맵 엔진 예외."""


class BitmapSizeError(ValueError):
    """버퍼 크기가 연산에 필요한 크기와 맞지 않는다."""


class BitmapRangeError(IndexError):
    """좌표나 사각형이 비트맵 범위를 벗어났다 (검사하는 접근자에서만 발생)."""


class BitmapSliceError(ReferenceError):
    """슬라이스가 참조하던 원본 비트맵이 이미 해제되었다."""
