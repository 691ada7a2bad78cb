"""Rectangle list and SVG serialization.

The document is an append-only list of rectangles in discovery order. That
order is also the draw order, so identical input always serializes to
identical bytes.

Output format:
    <?xml version="1.0" encoding="UTF-8"?>
    <svg xmlns="http://www.w3.org/2000/svg" width="W" height="H" viewBox="0 0 W H">
      <rect x="0" y="0" width="2" height="1" fill="#ff0000" />
    </svg>

No strokes, groups or transforms are emitted.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Union

from ..utils import fs

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


@dataclass(frozen=True)
class Rectangle:
    """Finalized rectangle: top-left corner, size in pixels, SVG fill."""
    x: int
    y: int
    width: int
    height: int
    fill: str

    def to_svg(self) -> str:
        return (
            f'<rect x="{self.x}" y="{self.y}" width="{self.width}" '
            f'height="{self.height}" fill="{self.fill}" />'
        )


class SVGDocument:
    """Canvas size plus the ordered rectangles drawn on it."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._rectangles: List[Rectangle] = []

    @property
    def rectangles(self) -> List[Rectangle]:
        """Copy of the rectangle list, in draw order."""
        return list(self._rectangles)

    def append(self, rect: Rectangle) -> None:
        self._rectangles.append(rect)

    def __len__(self) -> int:
        return len(self._rectangles)

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self._rectangles)

    def render(self) -> str:
        """Serialize to SVG markup."""
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="{SVG_NAMESPACE}" width="{self.width}" height="{self.height}"'
            f' viewBox="0 0 {self.width} {self.height}">',
        ]
        lines.extend(f"  {rect.to_svg()}" for rect in self._rectangles)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def write(self, path: Union[str, Path]) -> None:
        """Write the document atomically.

        Raises
        ------
        RuntimeError
            If the file cannot be written; no partial file is left behind.
        """
        fs.atomic_write_text(path, self.render())
        logger.debug(f"Wrote {len(self)} rectangles to {path}")
