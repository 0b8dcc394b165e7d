"""Rasterise a :class:`~identicon_service.core.pattern.PatternGrid` with Pillow.

Layout on a ``scale x scale`` canvas::

    +-------------------------------+
    |            border             |
    |   +-----------------------+   |
    |   | margin                |   |
    |   |   +---+---+---+---+   |   |
    |   |   |   |   |   |   |   |   |
    |   |   +---+---+---+---+   |   |
    |   |              margin + |   |
    |   +-----------------------+   |
    |                               |
    +-------------------------------+

The border is inset, never added: the pattern lives in the
``scale - 2 * border`` square in the middle.  Cells are
``drawable // grid_size`` pixels wide and whatever is left over becomes extra
margin, with the odd pixel going to the right and bottom edges.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from identicon_service.core.pattern import Color, PatternGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellLayout:
    """Pixel geometry of the pattern on the canvas.

    Attributes:
        cell: Edge length of one cell in pixels.  ``0`` means nothing is drawn.
        offset: Distance from the canvas edge to the first cell, on both axes.
    """

    cell: int
    offset: int

    def box(self, row: int, col: int) -> tuple[int, int, int, int]:
        """Return the inclusive ``(x0, y0, x1, y1)`` box of a cell."""
        x0 = self.offset + col * self.cell
        y0 = self.offset + row * self.cell
        return (x0, y0, x0 + self.cell - 1, y0 + self.cell - 1)


def layout(scale: int, border: int, grid_size: int) -> CellLayout:
    """Compute cell size and offset, clamping every degenerate case to zero."""
    drawable = max(scale - 2 * border, 0)
    if grid_size == 0 or drawable < grid_size:
        return CellLayout(cell=0, offset=0)

    cell = drawable // grid_size
    leftover = drawable - cell * grid_size
    return CellLayout(cell=cell, offset=border + leftover // 2)


def render(
    grid: PatternGrid,
    scale: int,
    border: int,
    background: Color | None = None,
) -> Image.Image:
    """Paint ``grid`` onto a new RGB canvas.

    Args:
        grid: The pattern to draw.
        scale: Canvas edge length in pixels.
        border: Inset margin in pixels.
        background: Fill colour for the canvas.  Defaults to
            ``grid.background``.

    Returns:
        A ``scale x scale`` Pillow image in ``RGB`` mode.  When the border
        swallows the canvas or the cells would be smaller than one pixel the
        image is plain background.
    """
    fill = grid.background if background is None else background
    image = blank_canvas(scale, fill)

    geometry = layout(scale, border, grid.size)
    if geometry.cell == 0:
        logger.debug(
            f"No drawable area for size={grid.size}, scale={scale}, border={border}"
        )
        return image

    # One palette pixel per cell (0 = background, 1 = foreground), scaled up
    # to whole cells with nearest-neighbour sampling.
    pattern = Image.frombytes(
        "P", (grid.size, grid.size), b"".join(bytes(row) for row in grid.cells)
    )
    pattern.putpalette([*fill, *grid.foreground])
    side = geometry.cell * grid.size
    pattern = pattern.resize((side, side), Image.Resampling.NEAREST).convert("RGB")

    image.paste(pattern, (geometry.offset, geometry.offset))
    return image


def blank_canvas(scale: int, background: Color) -> Image.Image:
    """Return a ``scale x scale`` RGB canvas filled with ``background``."""
    return Image.new("RGB", (scale, scale), background)
