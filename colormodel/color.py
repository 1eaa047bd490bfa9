"""RGBA 색상 모델 — 32비트 패킹 색상값과 배열 단위 채널 연산.

채널 배치: R=bit 0-7, G=bit 8-15, B=bit 16-23, A=bit 24-31.
메모리(리틀 엔디언)에서는 R, G, B, A 순서의 바이트가 된다.
"""

import numpy as np

# 채널별 비트 시프트
R_SHIFT = 0
G_SHIFT = 8
B_SHIFT = 16
A_SHIFT = 24

_SHIFTS = (R_SHIFT, G_SHIFT, B_SHIFT, A_SHIFT)


def _clamp8(v: int) -> int:
    if v < 0:
        return 0
    if v > 255:
        return 255
    return v


class RGBA(int):
    """32비트 패킹 RGBA 색상값. 비트 단위로 비교한다."""

    __slots__ = ()

    def __new__(cls, value: int = 0):
        return super().__new__(cls, int(value) & 0xFFFFFFFF)

    @classmethod
    def of(cls, r: int, g: int, b: int, a: int = 255) -> "RGBA":
        """4개 채널 값으로 색상을 만든다 (각 채널은 하위 8비트만 사용)."""
        return cls((r & 0xFF) | ((g & 0xFF) << G_SHIFT) | ((b & 0xFF) << B_SHIFT) | ((a & 0xFF) << A_SHIFT))

    @property
    def value(self) -> int:
        return int(self)

    @property
    def r(self) -> int:
        return int(self) & 0xFF

    @property
    def g(self) -> int:
        return (int(self) >> G_SHIFT) & 0xFF

    @property
    def b(self) -> int:
        return (int(self) >> B_SHIFT) & 0xFF

    @property
    def a(self) -> int:
        return (int(self) >> A_SHIFT) & 0xFF

    @property
    def rgb(self) -> int:
        return int(self) & 0x00FFFFFF

    def with_r(self, v: int) -> "RGBA":
        return RGBA.of(v, self.g, self.b, self.a)

    def with_g(self, v: int) -> "RGBA":
        return RGBA.of(self.r, v, self.b, self.a)

    def with_b(self, v: int) -> "RGBA":
        return RGBA.of(self.r, self.g, v, self.a)

    def with_a(self, v: int) -> "RGBA":
        return RGBA.of(self.r, self.g, self.b, v)

    def with_channel(self, channel, v: int) -> "RGBA":
        """channel(BitmapChannel) 채널만 v로 바꾼 색상을 반환한다."""
        return RGBA((int(self) & channel.clear_mask) | ((v & 0xFF) << channel.shift))

    def xor(self, other: int) -> "RGBA":
        return RGBA(int(self) ^ int(other))

    def premultiplied(self) -> "RGBA":
        """직선 알파 값을 프리멀티플라이드 값으로 변환한다."""
        a = self.a
        if a == 0xFF:
            return self
        return RGBA.of(
            (self.r * a + 127) // 255,
            (self.g * a + 127) // 255,
            (self.b * a + 127) // 255,
            a,
        )

    def depremultiplied(self) -> "RGBA":
        """프리멀티플라이드 값을 직선 알파 값으로 되돌린다.

        알파가 0이면 RGB 정보가 없으므로 0 워드(투명 검정)를 반환한다.
        """
        a = self.a
        if a == 0:
            return RGBA(0)
        if a == 0xFF:
            return self
        half = a // 2
        return RGBA.of(
            _clamp8((self.r * 255 + half) // a),
            _clamp8((self.g * 255 + half) // a),
            _clamp8((self.b * 255 + half) // a),
            a,
        )

    @staticmethod
    def mix(dst: int, src: int) -> "RGBA":
        """src를 dst 위에 알파 합성한다 (직선 알파)."""
        dst = RGBA(dst)
        src = RGBA(src)
        sa = src.a
        if sa == 0:
            return dst
        if sa == 0xFF:
            return src
        inv = 255 - sa
        return RGBA.of(
            (src.r * sa + dst.r * inv + 127) // 255,
            (src.g * sa + dst.g * inv + 127) // 255,
            (src.b * sa + dst.b * inv + 127) // 255,
            min(255, dst.a + sa),
        )

    @property
    def hex_string(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"

    def __repr__(self) -> str:
        return f"RGBA({self.r}, {self.g}, {self.b}, {self.a})"

    __str__ = __repr__


# ── numpy 배열 단위 연산 ──

def unpack(data: np.ndarray) -> np.ndarray:
    """uint32 색상 배열을 (..., 4) 크기의 채널 배열(R, G, B, A)로 분해한다."""
    data = np.asarray(data, dtype=np.uint32)
    return np.stack([(data >> np.uint32(s)) & np.uint32(0xFF) for s in _SHIFTS], axis=-1)


def pack(lanes: np.ndarray) -> np.ndarray:
    """(..., 4) 채널 배열을 uint32 색상 배열로 합친다. 값은 0..255여야 한다."""
    lanes = np.asarray(lanes).astype(np.uint32)
    return (
        lanes[..., 0]
        | (lanes[..., 1] << np.uint32(G_SHIFT))
        | (lanes[..., 2] << np.uint32(B_SHIFT))
        | (lanes[..., 3] << np.uint32(A_SHIFT))
    )


def premultiply_array(data: np.ndarray) -> np.ndarray:
    lanes = unpack(data)
    a = lanes[..., 3:4]
    lanes[..., :3] = (lanes[..., :3] * a + 127) // 255
    return pack(lanes)


def depremultiply_array(data: np.ndarray) -> np.ndarray:
    """알파 0 픽셀은 0 워드가 된다."""
    lanes = unpack(data)
    a = lanes[..., 3:4]
    safe_a = np.where(a == 0, 1, a)
    rgb = np.minimum((lanes[..., :3] * 255 + safe_a // 2) // safe_a, 255)
    lanes[..., :3] = np.where(a == 0, 0, rgb)
    return pack(lanes)


def mix_array(dst: np.ndarray, src: np.ndarray) -> np.ndarray:
    """RGBA.mix의 배열 버전."""
    d = unpack(dst)
    s = unpack(src)
    sa = s[..., 3:4]
    out = np.empty_like(d)
    out[..., :3] = (s[..., :3] * sa + d[..., :3] * (255 - sa) + 127) // 255
    out[..., 3] = np.minimum(d[..., 3] + s[..., 3], 255)
    return pack(out)


def blend4_array(c1: np.ndarray, c2: np.ndarray, c3: np.ndarray, c4: np.ndarray) -> np.ndarray:
    """4개 프리멀티플라이드 색상의 채널별 평균 (소수점 버림)."""
    total = unpack(c1) + unpack(c2) + unpack(c3) + unpack(c4)
    return pack(total >> np.uint32(2))
