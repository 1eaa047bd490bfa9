"""채널별 아핀 색상 변환 — 256 엔트리 룩업 테이블로 가속한다."""

from dataclasses import dataclass

import numpy as np

from colormodel.color import RGBA, pack, unpack


def _lookup_table(mul: float, add: float) -> np.ndarray:
    """i(0..255)에 대해 clamp(round(mul * i + add), 0, 255) 테이블을 만든다."""
    values = np.floor(np.arange(256, dtype=np.float64) * mul + add + 0.5)
    return np.clip(values, 0, 255).astype(np.uint8)


@dataclass(frozen=True)
class ColorTransform:
    """채널마다 곱셈·덧셈 계수 한 쌍을 가진 색상 변환."""

    mul_r: float = 1.0
    mul_g: float = 1.0
    mul_b: float = 1.0
    mul_a: float = 1.0
    add_r: float = 0.0
    add_g: float = 0.0
    add_b: float = 0.0
    add_a: float = 0.0

    @property
    def is_identity(self) -> bool:
        return (
            (self.mul_r, self.mul_g, self.mul_b, self.mul_a) == (1, 1, 1, 1)
            and (self.add_r, self.add_g, self.add_b, self.add_a) == (0, 0, 0, 0)
        )

    def lookup_tables(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """R, G, B, A 순서의 룩업 테이블 4개. 호출할 때마다 새로 만든다."""
        return (
            _lookup_table(self.mul_r, self.add_r),
            _lookup_table(self.mul_g, self.add_g),
            _lookup_table(self.mul_b, self.add_b),
            _lookup_table(self.mul_a, self.add_a),
        )

    def apply_array(self, data: np.ndarray) -> np.ndarray:
        """uint32 색상 배열 전체를 테이블로 재매핑한 새 배열을 반환한다."""
        tables = self.lookup_tables()
        lanes = unpack(data)
        for i, table in enumerate(tables):
            lanes[..., i] = table[lanes[..., i]]
        return pack(lanes)

    def apply(self, color: int) -> RGBA:
        """색상 하나에 변환을 적용한다."""
        c = RGBA(color)
        r, g, b, a = self.lookup_tables()
        return RGBA.of(int(r[c.r]), int(g[c.g]), int(b[c.b]), int(a[c.a]))
