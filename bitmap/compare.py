"""비트맵 비교 — 픽셀별 절대 차이와 임계값 기반 일치 판정.

matches/matches_ssim은 호출 측이 워커에서 돌릴 수 있도록 코루틴으로 선언하지만
내부에서 대기하는 작업은 없다.
"""

import logging

import numpy as np

from bitmap.bitmap32 import Bitmap32
from bitmap.errors import BitmapSizeError
from colormodel.color import pack, unpack

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 32


def diff(a, b) -> Bitmap32:
    """프리멀티플라이드 값 기준 채널별 절대 차이 비트맵을 반환한다.

    Args:
        a, b: Bitmap32 또는 Bitmap8 (8비트 평면은 불투명 회색으로 취급)

    Raises:
        BitmapSizeError: 두 비트맵의 크기가 다를 때
    """
    if a.width != b.width or a.height != b.height:
        raise BitmapSizeError(f"{a!r} not matches {b!r} size")
    a32 = a.to_bitmap32().premultiplied_if_required()
    b32 = b.to_bitmap32().premultiplied_if_required()
    la = unpack(a32.data[:a32.area]).astype(np.int32)
    lb = unpack(b32.data[:b32.area]).astype(np.int32)
    return Bitmap32(a.width, a.height, pack(np.abs(la - lb)), premultiplied=True)


async def matches(a, b, threshold: int = DEFAULT_THRESHOLD) -> bool:
    """차이 비트맵의 모든 채널이 threshold 미만이면 True."""
    d = diff(a, b)
    max_diff = int(unpack(d.data[:d.area]).max()) if d.area else 0
    result = max_diff < threshold
    logger.debug("비교 결과: %s (최대 차이=%d, 임계값=%d)", result, max_diff, threshold)
    return result


async def matches_ssim(a, b) -> bool:
    """구조적 유사도(SSIM) 비교. 지원하지 않는다."""
    raise NotImplementedError("SSIM 비교는 구현되어 있지 않습니다")
