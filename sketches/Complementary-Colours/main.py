# Complementary Colours Sketch
# Two cells, each filled with one hue of a complementary pair and the active
# pattern stroked in the other hue
#
# Click: new hue pair, shape and pattern
# Cells stack vertically on portrait canvases

from sacred_geometry.layout import CellDescriptor, render_cells, split_rects
from sacred_geometry.patterns import PatternName, draw_pattern

PATTERN_POOL = (
    PatternName.VESICA_PISCIS,
    PatternName.SEED_OF_LIFE,
    PatternName.EGG_OF_LIFE,
    PatternName.FLOWER_OF_LIFE,
)

SIZE_FACTOR = 0.4


def build_cells(width, height, generation):
    """(background hue, stroke hue) swap between the two cells"""
    hue_pairs = [
        (generation.base_hue, generation.complementary_hue),
        (generation.complementary_hue, generation.base_hue),
    ]
    cells = []
    for index, ((x, y, w, h), (bg_hue, stroke_hue)) in enumerate(zip(split_rects(width, height), hue_pairs)):
        cells.append(CellDescriptor(x, y, w, h, (bg_hue, 100, 100), stroke_hue, False, index))
    return cells


def draw(canvas, ctx):
    """Draw function called every frame"""
    generation = ctx.generation

    def draw_cell(canvas, cell):
        # Background
        canvas.set_fill_color(*cell.background)
        canvas.no_stroke()
        canvas.draw_rect(0, 0, cell.width, cell.height)

        # Pattern outline only
        canvas.no_fill()
        canvas.set_stroke_color(cell.stroke_hue, 100, 100)
        draw_pattern(canvas, generation.pattern_name, generation.shape_kind,
                     cell.min_side * SIZE_FACTOR, cell.center)

    render_cells(canvas, build_cells(ctx.width, ctx.height, generation), draw_cell)
