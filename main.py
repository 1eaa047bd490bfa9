"""이미지 비교 도구 — 두 PNG를 비교하고 차이 이미지를 저장한다.

사용법: python main.py a.png b.png [--diff diff.png] [--threshold 32] [--config config.json]
"""

import argparse
import asyncio
import logging
import sys

from bitmap.compare import diff, matches
from bitmap.errors import BitmapSizeError
from codec.png import load_png, save_png
from colormodel.transform import ColorTransform
from config import load_config

logger = logging.getLogger("compare")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="두 PNG 이미지를 픽셀 단위로 비교한다.")
    parser.add_argument("expected", help="기준 PNG")
    parser.add_argument("actual", help="비교할 PNG")
    parser.add_argument("--diff", help="차이 이미지 저장 경로")
    parser.add_argument("--threshold", type=int, default=None, help="채널별 허용 차이 (미만이면 일치)")
    parser.add_argument("--config", default=None, help="설정 파일 경로")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config(args.config)

    logging.basicConfig(
        level=config["logging"].get("level", "INFO"),
        format="%(asctime)s [%(name)s] %(message)s",
    )

    threshold = args.threshold if args.threshold is not None else config["compare"].get("threshold", 32)

    expected = load_png(args.expected)
    actual = load_png(args.actual)
    logger.info("기준 %r, 비교 대상 %r", expected, actual)

    try:
        ok = await matches(expected, actual, threshold=threshold)
    except BitmapSizeError as e:
        logger.error("크기가 다릅니다: %s", e)
        return 2

    if args.diff:
        # 차이 값이 그대로 보이도록 알파를 255로 고정해 직선 알파로 저장
        out = diff(expected, actual)
        out.premultiplied = False
        out.apply_color_transform(ColorTransform(mul_a=0.0, add_a=255.0))
        save_png(out, args.diff, compress_level=config["png"].get("compress_level", 6))
        logger.info("차이 이미지 저장: %s", args.diff)

    logger.info("비교 결과: %s (임계값 %d)", "일치" if ok else "불일치", threshold)
    return 0 if ok else 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logging.info("종료")
