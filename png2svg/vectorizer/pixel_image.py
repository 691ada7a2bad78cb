"""Greedy rectangle covering of a pixel grid.

PixelImage owns the state of one conversion:
    - the read-only pixel grid
    - a CoverageTracker (which pixels are already represented)
    - the SVGDocument receiving finalized rectangles

Covering loop (driven by convert.convert):
    1. first_uncovered(hint) → next uncovered opaque pixel, row-major with wrap
    2. create_box(x, y)      → 1x1 box with that pixel's color
    3. expand(box)           → grow right until blocked, then down until blocked
    4. cover_box(box, ...)   → mark covered, append rectangle
    5. repeat until first_uncovered() returns None

Single-pixel mode replaces steps 1-4 with cover_all_pixels().

A pixel blocks growth if it is transparent (alpha == 0), already covered, or
not exactly the box color. Blocking pixels are never skipped over.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from ..utils import color
from .box import Box
from .coverage import CoverageTracker
from .pixels import PixelGrid
from .svg import Rectangle, SVGDocument

logger = logging.getLogger(__name__)


class PixelImage:
    """Pixel grid plus coverage state for a single conversion."""

    def __init__(self, grid: PixelGrid):
        self.grid = grid
        self.width, self.height = grid.bounds()

        rgba = grid.rgba
        self._opaque = rgba[:, :, 3] != 0
        # r, g, b packed into one int per pixel for exact color comparison
        rgb = rgba[:, :, :3].astype(np.uint32)
        self._packed = (rgb[:, :, 0] << 16) | (rgb[:, :, 1] << 8) | rgb[:, :, 2]

        self.coverage = CoverageTracker(self.width, self.height)
        self.document = SVGDocument(self.width, self.height)

    @property
    def opaque_count(self) -> int:
        return int(self._opaque.sum())

    def _pending(self, y: int, x_start: int, x_stop: int) -> np.ndarray:
        """Uncovered opaque flags for row y, columns [x_start, x_stop)."""
        covered = self.coverage.mask
        return self._opaque[y, x_start:x_stop] & ~covered[y, x_start:x_stop]

    def first_uncovered(self, hint_x: int = 0, hint_y: int = 0) -> Optional[Tuple[int, int]]:
        """Find the next uncovered opaque pixel in row-major order.

        Parameters
        ----------
        hint_x, hint_y : int
            Where to resume; the scan wraps to (0, 0) after the last pixel and
            stops once it gets back to the hint. Out-of-range hints start at (0, 0).

        Returns
        -------
        Optional[Tuple[int, int]]
            (x, y) of the pixel, or None if every opaque pixel is covered
        """
        if self.width == 0 or self.height == 0:
            return None
        if not (0 <= hint_x < self.width and 0 <= hint_y < self.height):
            hint_x, hint_y = 0, 0

        # Hint row from the hint column, then the rows below it
        for y in range(hint_y, self.height):
            x_start = hint_x if y == hint_y else 0
            row = self._pending(y, x_start, self.width)
            if row.any():
                return (x_start + int(row.argmax()), y)

        # Wrapped: rows above the hint, then the hint row up to the hint column
        for y in range(0, hint_y + 1):
            x_stop = hint_x if y == hint_y else self.width
            row = self._pending(y, 0, x_stop)
            if row.any():
                return (int(row.argmax()), y)

        return None

    def done(self, hint_x: int = 0, hint_y: int = 0) -> bool:
        """True when no uncovered opaque pixel is left."""
        return self.first_uncovered(hint_x, hint_y) is None

    def create_box(self, x: int, y: int) -> Box:
        r, g, b, alpha = self.grid.color_at(x, y)
        return Box(x, y, x, y, r, g, b, alpha)

    def _can_absorb(self, box: Box, ys: slice, xs: slice) -> bool:
        """True if every pixel in [ys, xs] is opaque, uncovered and box-colored."""
        target = (box.r << 16) | (box.g << 8) | box.b
        covered = self.coverage.mask
        return bool(np.all(
            self._opaque[ys, xs]
            & ~covered[ys, xs]
            & (self._packed[ys, xs] == target)
        ))

    def expand(self, box: Box) -> bool:
        """Grow box to the right as far as possible, then downwards.

        Parameters
        ----------
        box : Box
            Box to grow in place

        Returns
        -------
        bool
            True if the box is now larger than 1x1
        """
        rows = slice(box.y0, box.y1 + 1)
        while box.x1 + 1 < self.width and self._can_absorb(box, rows, slice(box.x1 + 1, box.x1 + 2)):
            box.x1 += 1

        cols = slice(box.x0, box.x1 + 1)
        while box.y1 + 1 < self.height and self._can_absorb(box, slice(box.y1 + 1, box.y1 + 2), cols):
            box.y1 += 1

        return box.area > 1

    def cover_box(self, box: Box, pink: bool = False, quantize: bool = False) -> Optional[Rectangle]:
        """Mark box pixels covered and append its rectangle.

        Parameters
        ----------
        box : Box
            Expanded box
        pink : bool
            Fill with the debug color instead of the box color when the box
            spans more than one pixel
        quantize : bool
            Limit the fill to the 4096-color palette (3-digit hex)

        Returns
        -------
        Optional[Rectangle]
            The appended rectangle, or None for a transparent origin
        """
        self.coverage.mark_covered(box.x0, box.y0, box.x1, box.y1)

        if box.alpha == 0:
            return None

        rgb = color.PINK if pink and box.area > 1 else box.rgb
        rect = Rectangle(box.x0, box.y0, box.width, box.height, color.fill_string(rgb, quantize))
        self.document.append(rect)
        return rect

    def cover_all_pixels(self, quantize: bool = False) -> int:
        """Emit a 1x1 rectangle for every uncovered opaque pixel.

        Returns
        -------
        int
            Number of rectangles appended
        """
        pending = self._opaque & ~self.coverage.mask
        count = 0
        # argwhere yields (y, x) in row-major order
        for y, x in np.argwhere(pending):
            if self.cover_box(self.create_box(int(x), int(y)), quantize=quantize) is not None:
                count += 1
        logger.debug(f"Covered {count} pixels with single-pixel rectangles")
        return count
