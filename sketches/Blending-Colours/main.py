# Blending Colours Sketch
# 2x2 grid: base colour, two black-or-white cells, complementary colour
# Every pattern in the catalog is available; fills are translucent so the
# overlapping shapes build up where they cross
#
# Click: new hue pair, shape and pattern (and a new black/white choice)

import random

from sacred_geometry.layout import CellDescriptor, grid_rects, render_cells
from sacred_geometry.patterns import draw_pattern

SIZE_FACTOR = 0.35
FILL_ALPHA = 20


def alt_colour(generation):
    """Black or white, fixed for the lifetime of one generation"""
    rng = random.Random(round(generation.base_hue, 6))
    return (0, 0, 0) if rng.random() < 0.5 else (0, 0, 100)


def build_cells(width, height, generation):
    base, comp = generation.base_hue, generation.complementary_hue
    alt = alt_colour(generation)
    assignments = [
        ((base, 100, 100), comp),
        (alt, base),
        (alt, comp),
        ((comp, 100, 100), base),
    ]
    cells = []
    for index, ((x, y, w, h), (background, stroke_hue)) in enumerate(zip(grid_rects(width, height), assignments)):
        cells.append(CellDescriptor(x, y, w, h, background, stroke_hue, False, index))
    return cells


def draw(canvas, ctx):
    """Draw function called every frame"""
    generation = ctx.generation

    def draw_cell(canvas, cell):
        canvas.set_fill_color(*cell.background)
        canvas.no_stroke()
        canvas.draw_rect(0, 0, cell.width, cell.height)

        canvas.set_fill_color(cell.stroke_hue, 100, 100, FILL_ALPHA)
        canvas.set_stroke_color(cell.stroke_hue, 100, 100)
        draw_pattern(canvas, generation.pattern_name, generation.shape_kind,
                     cell.min_side * SIZE_FACTOR, cell.center)

    render_cells(canvas, build_cells(ctx.width, ctx.height, generation), draw_cell)
