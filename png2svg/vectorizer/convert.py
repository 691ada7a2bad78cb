"""Conversion entry points: pixel source → SVG document.

Public API:
    convert(source, options) → SVGDocument
    convert_file(input_path, output_path, options) → SVGDocument
    convert_directory(input_dir, output_dir, options) → List[Path]

Each call builds its own PixelImage, so separate conversions never share
coverage state. Batch conversion is sequential and stops at the first error.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from ..utils import fs
from ..utils.logging_config import pop_context, push_context
from ..utils.validators import ConversionOptions
from .pixel_image import PixelImage
from .pixels import as_pixel_grid, load_png
from .svg import SVGDocument

logger = logging.getLogger(__name__)


def convert(source: Any, options: Optional[ConversionOptions] = None) -> SVGDocument:
    """Cover every opaque pixel of source with solid rectangles.

    Parameters
    ----------
    source : PixelGrid | PIL.Image.Image | np.ndarray | pixel source
        Input pixels; see pixels.as_pixel_grid
    options : ConversionOptions, optional
        Defaults to greedy expansion with exact colors

    Returns
    -------
    SVGDocument
        Rectangles in discovery order
    """
    options = options or ConversionOptions()
    pi = PixelImage(as_pixel_grid(source))
    logger.info(f"Converting {pi.width}x{pi.height} image ({pi.opaque_count} opaque pixels)")

    if options.single_pixel:
        pi.cover_all_pixels(quantize=options.quantize)
    else:
        _cover_greedy(pi, options)

    logger.info(f"Placed {len(pi.document)} rectangles")
    return pi.document


def _cover_greedy(pi: PixelImage, options: ConversionOptions) -> None:
    """Scan, expand and cover until no opaque pixel is left."""
    x, y = 0, 0
    last_line = -1
    percentage = -1

    while True:
        found = pi.first_uncovered(x, y)
        if found is None:
            break
        x, y = found

        if y != last_line:
            last_line = y
            current = int(y / pi.height * 100)
            if current != percentage:
                percentage = current
                logger.debug(f"Placing rectangles... {percentage}%")

        box = pi.create_box(x, y)
        expanded = pi.expand(box)
        pi.cover_box(box, pink=expanded and options.pink, quantize=options.quantize)

    logger.debug("Placing rectangles... 100%")


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Optional[ConversionOptions] = None,
) -> SVGDocument:
    """Convert one PNG file and write the SVG atomically.

    Raises
    ------
    FileNotFoundError, PIL.UnidentifiedImageError
        If the input cannot be read
    RuntimeError
        If the output cannot be written
    """
    grid = load_png(input_path)
    document = convert(grid, options)
    document.write(output_path)
    logger.info(f"Wrote {output_path}")
    return document


def convert_directory(
    input_dir: Union[str, Path],
    output_dir: Union[str, Path],
    options: Optional[ConversionOptions] = None,
) -> List[Path]:
    """Convert every PNG under input_dir, mirroring the tree under output_dir.

    Returns
    -------
    List[Path]
        Written SVG paths, in processing (sorted input) order
    """
    input_dir = Path(input_dir)
    files = fs.find_files(input_dir, ".png")
    logger.info(f"Found {len(files)} PNG files under {input_dir}")

    written = []
    for png_path in files:
        svg_path = fs.derive_output_path(png_path, input_dir, output_dir)
        push_context(file=str(png_path))
        try:
            convert_file(png_path, svg_path, options)
        finally:
            pop_context(keys=["file"])
        written.append(svg_path)

    return written
