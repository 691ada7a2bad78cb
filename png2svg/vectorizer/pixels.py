"""Pixel sources: the RGBA grid a conversion reads from.

A pixel source is anything exposing:
    bounds() -> (width, height)
    color_at(x, y) -> (r, g, b, alpha)     for 0 <= x < width, 0 <= y < height

PixelGrid is the concrete implementation used by the converter. It wraps a
read-only numpy uint8 array of shape (H, W, 4). PNG decoding is done by
Pillow; palette, grayscale and RGB images are converted to RGBA on load.
"""

import logging
from pathlib import Path
from typing import Any, Tuple, Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]


class PixelGrid:
    """Immutable RGBA pixel grid backed by a (H, W, 4) uint8 array."""

    def __init__(self, rgba: np.ndarray):
        rgba = np.asarray(rgba)
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError(f"Expected RGBA array of shape (H, W, 4), got {rgba.shape}")
        if rgba.dtype != np.uint8:
            if not np.issubdtype(rgba.dtype, np.integer):
                raise ValueError(f"RGBA values must be integers, got dtype {rgba.dtype}")
            if rgba.size and (rgba.min() < 0 or rgba.max() > 255):
                raise ValueError("RGBA values must be in [0, 255]")
            rgba = rgba.astype(np.uint8)

        self._rgba = np.array(rgba, copy=True)
        self._rgba.setflags(write=False)

    @classmethod
    def from_image(cls, img: Image.Image) -> 'PixelGrid':
        """Build a grid from a Pillow image of any mode."""
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(np.asarray(img, dtype=np.uint8))

    @property
    def rgba(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view."""
        return self._rgba

    @property
    def width(self) -> int:
        return self._rgba.shape[1]

    @property
    def height(self) -> int:
        return self._rgba.shape[0]

    def bounds(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def color_at(self, x: int, y: int) -> RGBA:
        r, g, b, a = self._rgba[y, x]
        return (int(r), int(g), int(b), int(a))

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"


def load_png(path: Union[str, Path]) -> PixelGrid:
    """Decode a PNG file into a PixelGrid.

    Parameters
    ----------
    path : Union[str, Path]
        PNG file path

    Returns
    -------
    PixelGrid
        RGBA grid with the image's dimensions

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    PIL.UnidentifiedImageError
        If the file is not a decodable image
    """
    path = Path(path)
    logger.debug(f"Reading {path}")
    with Image.open(path) as img:
        grid = PixelGrid.from_image(img)
    logger.debug(f"Decoded {path}: {grid.width}x{grid.height}")
    return grid


def as_pixel_grid(source: Any) -> PixelGrid:
    """Materialize any pixel source into a PixelGrid.

    Parameters
    ----------
    source : PixelGrid | PIL.Image.Image | np.ndarray | pixel source
        Objects with bounds()/color_at() are queried pixel by pixel;
        errors they raise propagate unchanged.

    Returns
    -------
    PixelGrid
    """
    if isinstance(source, PixelGrid):
        return source
    if isinstance(source, Image.Image):
        return PixelGrid.from_image(source)
    if isinstance(source, np.ndarray):
        return PixelGrid(source)

    width, height = source.bounds()
    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            rgba[y, x] = source.color_at(x, y)
    return PixelGrid(rgba)
