"""Greedy rectangle vectorization of pixel grids.

Modules:
    - pixels: PixelGrid, PNG loading, pixel source adaptation
    - coverage: CoverageTracker (covered flag per pixel)
    - box: Box, the rectangle grown by the expander
    - pixel_image: scanner, expander, cover and single-pixel modes
    - svg: Rectangle, SVGDocument and serialization
    - convert: convert(), convert_file(), convert_directory()

Workflow:
    1. PNG → PixelGrid (RGBA, uint8)
    2. Scan for the first uncovered opaque pixel
    3. Grow a box right, then down, while the color matches
    4. Mark covered, emit rectangle, repeat
    5. Serialize rectangles to SVG (atomic write)

All outputs are deterministic.
"""

from .convert import convert, convert_directory, convert_file
from .pixels import PixelGrid, as_pixel_grid, load_png
from .svg import Rectangle, SVGDocument

__all__ = [
    'convert',
    'convert_file',
    'convert_directory',
    'PixelGrid',
    'as_pixel_grid',
    'load_png',
    'Rectangle',
    'SVGDocument',
]
