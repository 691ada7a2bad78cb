"""png2svg: convert PNG images to SVG documents made of solid rectangles.

This package turns a raster pixel grid into a set of axis-aligned,
single-color rectangles that reproduce every opaque pixel exactly.

Architecture layers (strict one-way dependency):
    png2svg/cli.py → png2svg/vectorizer/ → png2svg/utils/

Key invariants:
    - Coordinates are integer pixels in image frame (top-left, +Y down)
    - Fully transparent pixels (alpha == 0) are never drawn
    - Output is deterministic: identical input and options give identical bytes
    - YAML-only configs, no JSON
"""

__version__ = "1.6.0"

VERSION_STRING = f"png2svg {__version__}"
