"""Candidate rectangle grown by the expander."""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Box:
    """Axis-aligned rectangle with INCLUSIVE corners and one color.

    Created as 1x1 at (x0, y0) == (x1, y1) from the origin pixel. Only
    PixelImage.expand() mutates it; it is read-only once covered.
    """
    x0: int
    y0: int
    x1: int
    y1: int
    r: int
    g: int
    b: int
    alpha: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0 + 1

    @property
    def height(self) -> int:
        return self.y1 - self.y0 + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)
