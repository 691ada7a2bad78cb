"""Shared fixtures: synthetic pixel grids and coverage checks."""

import numpy as np
import pytest

from png2svg.vectorizer import PixelGrid

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)
CLEAR = (0, 0, 0, 0)


@pytest.fixture
def make_grid():
    """Build a PixelGrid from rows of RGBA tuples (rows[y][x])."""
    def _make(rows):
        return PixelGrid(np.array(rows, dtype=np.uint8).reshape(len(rows), len(rows[0]), 4))
    return _make


@pytest.fixture
def random_grid():
    """Seeded random grid with a small palette and some transparent pixels."""
    def _make(width, height, seed=0, n_colors=3, clear_frac=0.2):
        rng = np.random.default_rng(seed)
        palette = rng.integers(0, 256, size=(n_colors, 3), dtype=np.uint8)
        idx = rng.integers(0, n_colors, size=(height, width))
        rgba = np.zeros((height, width, 4), dtype=np.uint8)
        rgba[:, :, :3] = palette[idx]
        rgba[:, :, 3] = 255
        rgba[rng.random((height, width)) < clear_frac] = 0
        return PixelGrid(rgba)
    return _make


def ownership(document):
    """Count how many rectangles cover each pixel, shape (H, W)."""
    counts = np.zeros((document.height, document.width), dtype=np.int32)
    for rect in document:
        counts[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width] += 1
    return counts
