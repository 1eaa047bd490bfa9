"""채널 전송 — 한 채널을 다른 버퍼의 한 채널이나 8비트 평면으로 복사한다.

모두 w*h 픽셀을 한 번 훑으며, 대상의 나머지 3채널은 마스크로 보존한다.
"""

import numpy as np

from colormodel.channel import BitmapChannel


def copy_channel(src, src_channel: BitmapChannel, dst, dst_channel: BitmapChannel) -> None:
    """src(Bitmap32)의 src_channel을 dst(Bitmap32)의 dst_channel로 복사한다."""
    n = dst.area
    lane = (src.data[:n] >> np.uint32(src_channel.shift)) & np.uint32(0xFF)
    dst.data[:n] = (dst.data[:n] & np.uint32(dst_channel.clear_mask)) | (lane << np.uint32(dst_channel.shift))


def copy_channel_from_plane(src, dst, dst_channel: BitmapChannel) -> None:
    """src(Bitmap8) 평면을 dst(Bitmap32)의 dst_channel로 올린다."""
    n = dst.area
    lane = src.data[:n].astype(np.uint32)
    dst.data[:n] = (dst.data[:n] & np.uint32(dst_channel.clear_mask)) | (lane << np.uint32(dst_channel.shift))


def copy_channel_to_plane(src, src_channel: BitmapChannel, dst) -> None:
    """src(Bitmap32)의 src_channel을 dst(Bitmap8) 평면으로 내린다."""
    n = src.area
    dst.data[:n] = src_channel.extract_array(src.data[:n])
