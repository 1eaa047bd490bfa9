"""자주 쓰는 색상 상수."""

from colormodel.color import RGBA

TRANSPARENT = RGBA.of(0, 0, 0, 0)
BLACK = RGBA.of(0, 0, 0)
WHITE = RGBA.of(255, 255, 255)
RED = RGBA.of(255, 0, 0)
GREEN = RGBA.of(0, 255, 0)
BLUE = RGBA.of(0, 0, 255)
YELLOW = RGBA.of(255, 255, 0)
