"""PNG 변환 모듈 — Pillow 이미지와 Bitmap32 사이의 변환.

PNG는 직선 알파로 저장하므로 프리멀티플라이드 비트맵은 먼저 되돌린다.
벡터/SVG 직렬화 측은 paint_source()의 폭·높이·PNG 바이트만 사용한다.
"""

import base64
import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image

from bitmap.bitmap32 import Bitmap32
from colormodel import formats

logger = logging.getLogger(__name__)

DEFAULT_COMPRESS_LEVEL = 6


def to_image(bmp: Bitmap32) -> Image.Image:
    """Bitmap32를 RGBA 모드 Pillow 이미지로 변환한다."""
    straight = bmp.depremultiplied_if_required()
    raw = straight.extract_bytes(formats.RGBA)
    return Image.frombytes("RGBA", (bmp.width, bmp.height), raw)


def from_image(img: Image.Image) -> Bitmap32:
    """Pillow 이미지를 직선 알파 Bitmap32로 변환한다."""
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    w, h = img.size
    return Bitmap32(w, h).write_decoded(formats.RGBA, img.tobytes())


def encode_png(bmp: Bitmap32, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> bytes:
    buf = BytesIO()
    to_image(bmp).save(buf, format="PNG", compress_level=compress_level)
    png = buf.getvalue()
    logger.debug("PNG 인코딩: %dx%d -> %dB", bmp.width, bmp.height, len(png))
    return png


def decode_png(data: bytes) -> Bitmap32:
    with Image.open(BytesIO(data)) as img:
        bmp = from_image(img)
    logger.debug("PNG 디코딩: %dB -> %dx%d", len(data), bmp.width, bmp.height)
    return bmp


def load_png(path) -> Bitmap32:
    with open(path, "rb") as f:
        return decode_png(f.read())


def save_png(bmp: Bitmap32, path, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> None:
    with open(path, "wb") as f:
        f.write(encode_png(bmp, compress_level))


@dataclass
class BitmapPaintSource:
    """벡터 도형의 패턴 채우기 원본 (폭, 높이, PNG 바이트)."""
    width: int
    height: int
    png: bytes

    @property
    def data_uri(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")


def paint_source(bmp: Bitmap32) -> BitmapPaintSource:
    """비트맵을 변경하지 않고 채우기 원본으로 내보낸다."""
    return BitmapPaintSource(bmp.width, bmp.height, encode_png(bmp))
