"""색상 포맷 — 바이트열과 픽셀 배열 사이의 변환 전략 (코덱 경계).

비트맵은 포맷을 불투명한 전략으로 다루며, 넘기는 픽셀 수와 오프셋이
자신의 버퍼 크기와 맞는지만 보장한다.
"""

import logging

import numpy as np

from bitmap.errors import BitmapSizeError
from colormodel.color import pack, unpack

logger = logging.getLogger(__name__)

_LANE = {"r": 0, "g": 1, "b": 2, "a": 3}


class ColorFormat:
    """4바이트/픽셀 패킹 포맷. order는 리틀 엔디언 메모리에서의 채널 순서 (예: "rgba")."""

    bytes_per_pixel = 4

    def __init__(self, name: str, order: str):
        if sorted(order) != sorted("rgba"):
            raise ValueError(f"잘못된 채널 순서: {order}")
        self.name = name
        self.order = order
        self._lanes = [_LANE[ch] for ch in order]

    def decode(
        self,
        data: bytes,
        offset: int,
        dst: np.ndarray,
        dst_offset: int,
        count: int,
        little_endian: bool = True,
    ) -> None:
        """data[offset:]의 count 픽셀을 해석해 dst[dst_offset:]에 쓴다."""
        need = count * self.bytes_per_pixel
        if offset < 0 or len(data) - offset < need:
            raise BitmapSizeError(
                f"{self.name}: 입력 바이트 부족 (offset={offset}, size={len(data)}, need={need})"
            )
        if dst_offset < 0 or len(dst) - dst_offset < count:
            raise BitmapSizeError(
                f"{self.name}: 대상 픽셀 부족 (dst_offset={dst_offset}, size={len(dst)}, count={count})"
            )
        raw = np.frombuffer(data, dtype=np.uint8, count=need, offset=offset).reshape(count, 4)
        if not little_endian:
            raw = raw[:, ::-1]
        lanes = np.empty((count, 4), dtype=np.uint32)
        for pos, lane in enumerate(self._lanes):
            lanes[:, lane] = raw[:, pos]
        dst[dst_offset:dst_offset + count] = pack(lanes)
        logger.debug("%s 디코드: %d 픽셀", self.name, count)

    def encode(self, pixels: np.ndarray, little_endian: bool = True) -> bytes:
        lanes = unpack(np.asarray(pixels, dtype=np.uint32).reshape(-1))
        raw = np.empty(lanes.shape, dtype=np.uint8)
        for pos, lane in enumerate(self._lanes):
            raw[:, pos] = lanes[:, lane]
        if not little_endian:
            raw = raw[:, ::-1]
        return raw.tobytes()

    def __repr__(self) -> str:
        return f"ColorFormat({self.name!r})"


RGBA = ColorFormat("RGBA", "rgba")
BGRA = ColorFormat("BGRA", "bgra")
