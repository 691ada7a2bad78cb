"""Color quantization and SVG hex encoding.

Provides:
    - 4096-color quantization (each 8-bit channel truncated to its high nibble)
    - 6-digit hex fill strings (#rrggbb)
    - 3-digit short hex fill strings (#rgb) for quantized colors
    - The fixed debug color used to highlight merged rectangles

Used by:
    - PixelImage.cover_box / cover_all_pixels: fill color of emitted rectangles

Invariants:
    - Channels are ints in [0, 255]
    - quantize_color() is idempotent
    - hex_color_short(c) == hex_color_short(quantize_color(c))
"""

from typing import Tuple

RGB = Tuple[int, int, int]

# Debug fill for rectangles larger than one pixel
PINK: RGB = (0xbb, 0x33, 0x88)

_NIBBLE_MASK = 0xf0


def quantize_channel(value: int) -> int:
    """Truncate an 8-bit channel to its most significant 4 bits.

    Examples
    --------
    >>> quantize_channel(0x34)
    48
    """
    return int(value) & _NIBBLE_MASK


def quantize_color(rgb: RGB) -> RGB:
    """Reduce a 24-bit color to the 4096-entry (12-bit) palette.

    Parameters
    ----------
    rgb : Tuple[int, int, int]
        Full-precision color

    Returns
    -------
    Tuple[int, int, int]
        Color with each channel's low nibble cleared,
        e.g. (0x12, 0x34, 0x56) → (0x10, 0x30, 0x50)
    """
    r, g, b = rgb
    return (quantize_channel(r), quantize_channel(g), quantize_channel(b))


def hex_color(rgb: RGB) -> str:
    """Encode a color as a 6-digit SVG fill, e.g. "#ff0000"."""
    r, g, b = rgb
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def hex_color_short(rgb: RGB) -> str:
    """Encode a color as a 3-digit SVG fill using each channel's high nibble.

    Examples
    --------
    >>> hex_color_short((0x12, 0x34, 0x56))
    '#135'
    """
    r, g, b = rgb
    return f"#{int(r) >> 4:x}{int(g) >> 4:x}{int(b) >> 4:x}"


def fill_string(rgb: RGB, quantize: bool = False) -> str:
    """SVG fill for a color, short form when quantizing."""
    if quantize:
        return hex_color_short(quantize_color(rgb))
    return hex_color(rgb)
