"""Per-pixel record of which pixels already belong to an emitted rectangle."""

from typing import Tuple

import numpy as np


class CoverageTracker:
    """Boolean (H, W) grid, all False at creation.

    Cells only ever go from False to True. Coordinates are trusted to be in
    bounds; the scanner and expander never produce anything else.
    """

    def __init__(self, width: int, height: int):
        self._covered = np.zeros((height, width), dtype=bool)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._covered.shape

    @property
    def mask(self) -> np.ndarray:
        """Read-only view of the covered flags, indexed [y, x]."""
        view = self._covered.view()
        view.setflags(write=False)
        return view

    def is_covered(self, x: int, y: int) -> bool:
        return bool(self._covered[y, x])

    def mark_covered(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Mark the inclusive rectangle (x0, y0)-(x1, y1) as covered."""
        self._covered[y0:y1 + 1, x0:x1 + 1] = True

    def count(self) -> int:
        return int(self._covered.sum())
