"""
Cell layout - splits the canvas into cells and draws each one in isolation
"""

import logging
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

# Small landscape viewports get one row of four cells
SINGLE_ROW_ASPECT = 1.5
SINGLE_ROW_MAX_HEIGHT = 500

TINT = (20, 100)   # (saturation, brightness)
SHADE = (100, 20)


@dataclass(frozen=True)
class CellDescriptor:
    x: float
    y: float
    width: float
    height: float
    background: Tuple[float, float, float]
    stroke_hue: float
    is_tinted: bool
    pattern_index: int

    @property
    def center(self):
        return (self.width / 2, self.height / 2)

    @property
    def min_side(self):
        return min(self.width, self.height)


def use_single_row(width, height):
    return height > 0 and width / height > SINGLE_ROW_ASPECT and height < SINGLE_ROW_MAX_HEIGHT


def grid_rects(width, height):
    """2x2 grid in reading order"""
    w, h = width / 2, height / 2
    return [(0, 0, w, h), (w, 0, w, h), (0, h, w, h), (w, h, w, h)]


def cell_rects(width, height):
    """Four (x, y, w, h) rectangles: a 2x2 grid, or a single row"""
    if use_single_row(width, height):
        w = width / 4
        return [(w * i, 0, w, height) for i in range(4)]
    return grid_rects(width, height)


def split_rects(width, height):
    """Two halves: stacked in portrait, side by side otherwise"""
    if height > width:
        h = height / 2
        return [(0, 0, width, h), (0, h, width, h)]
    w = width / 2
    return [(0, 0, w, height), (w, 0, w, height)]


def monochromatic_cells(width, height, generation):
    """Cell descriptors for the four-cell tint/shade composition"""
    base = generation.base_hue
    comp = generation.complementary_hue

    if use_single_row(width, height):
        assignments = [
            (comp, TINT, True),
            (comp, SHADE, False),
            (base, TINT, True),
            (base, SHADE, False),
        ]
    else:
        assignments = [
            (comp, SHADE, True),
            (base, TINT, False),
            (comp, TINT, False),
            (base, SHADE, True),
        ]

    cells = []
    for index, ((x, y, w, h), (hue, (sat, bri), tinted)) in enumerate(
            zip(cell_rects(width, height), assignments)):
        cells.append(CellDescriptor(x, y, w, h, (hue, sat, bri), hue, tinted, index))
    return cells


def render_cells(canvas, cells, draw_cell):
    """Draw each cell translated to its origin; a failing cell is skipped.

    Returns:
        Number of cells that drew without error
    """
    drawn = 0
    for cell in cells:
        canvas.push()
        try:
            canvas.translate(cell.x, cell.y)
            draw_cell(canvas, cell)
            drawn += 1
        except Exception:
            logger.exception("Skipping cell %d", cell.pattern_index)
        finally:
            canvas.pop()
    return drawn
