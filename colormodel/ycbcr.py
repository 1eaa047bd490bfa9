"""RGBA <-> YCbCr 변환 (JPEG 풀레인지 계수).

YCbCr 값도 같은 32비트 배치를 쓴다: Y=R 자리, Cb=G 자리, Cr=B 자리, 알파는 그대로.
"""

import numpy as np

from colormodel.color import pack, unpack


def _round_clip(v: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(v + 0.5), 0, 255)


def rgba_to_ycbcr_array(data: np.ndarray) -> np.ndarray:
    lanes = unpack(data).astype(np.float64)
    r, g, b = lanes[..., 0], lanes[..., 1], lanes[..., 2]
    out = np.empty_like(lanes)
    out[..., 0] = _round_clip(0.299 * r + 0.587 * g + 0.114 * b)
    out[..., 1] = _round_clip(128.0 - 0.168736 * r - 0.331264 * g + 0.5 * b)
    out[..., 2] = _round_clip(128.0 + 0.5 * r - 0.418688 * g - 0.081312 * b)
    out[..., 3] = lanes[..., 3]
    return pack(out)


def ycbcr_to_rgba_array(data: np.ndarray) -> np.ndarray:
    lanes = unpack(data).astype(np.float64)
    y = lanes[..., 0]
    cb = lanes[..., 1] - 128.0
    cr = lanes[..., 2] - 128.0
    out = np.empty_like(lanes)
    out[..., 0] = _round_clip(y + 1.402 * cr)
    out[..., 1] = _round_clip(y - 0.344136 * cb - 0.714136 * cr)
    out[..., 2] = _round_clip(y + 1.772 * cb)
    out[..., 3] = lanes[..., 3]
    return pack(out)
