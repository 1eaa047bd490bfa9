"""채널 기술자 — R/G/B/A 채널이 32비트 워드의 어느 바이트에 있는지 정의한다."""

from enum import Enum

import numpy as np


class BitmapChannel(Enum):
    """32비트 색상의 채널. 값은 바이트 위치(0=R ... 3=A)."""

    RED = 0
    GREEN = 1
    BLUE = 2
    ALPHA = 3

    @property
    def index(self) -> int:
        return self.value

    @property
    def shift(self) -> int:
        """워드 내 비트 위치."""
        return self.value * 8

    @property
    def clear_mask(self) -> int:
        """이 채널만 0으로 만들고 나머지 3채널은 보존하는 마스크."""
        return ~(0xFF << self.shift) & 0xFFFFFFFF

    def extract(self, color: int) -> int:
        return (int(color) >> self.shift) & 0xFF

    def insert(self, color: int, value: int) -> int:
        return (int(color) & self.clear_mask) | ((int(value) & 0xFF) << self.shift)

    def extract_array(self, data: np.ndarray) -> np.ndarray:
        """uint32 배열에서 이 채널만 uint8 배열로 꺼낸다."""
        return ((data >> np.uint32(self.shift)) & np.uint32(0xFF)).astype(np.uint8)

    def insert_array(self, data: np.ndarray, values: np.ndarray) -> np.ndarray:
        """data의 이 채널을 values로 바꾼 새 uint32 배열을 반환한다."""
        lane = np.asarray(values).astype(np.uint32) & np.uint32(0xFF)
        return (data & np.uint32(self.clear_mask)) | (lane << np.uint32(self.shift))
