# Monochromatic Sketch
# Four cells, each with its own pattern and shape, grown in over half a
# second and regenerated automatically every two seconds
#
# Tinted cells lower saturation on the outer motif and raise it on the
# half-size inner repeat; shaded cells do the same with brightness.
#
# Click: regenerate immediately

from sacred_geometry.layout import monochromatic_cells, render_cells
from sacred_geometry.patterns import draw_pattern

ANIMATED = True

SIZE_FACTOR = 0.35

# (stroke saturation, stroke brightness), (fill saturation, fill brightness), size scale
TINT_LAYERS = (
    ((100, 100), (40, 100), 1.0),
    ((80, 100), (100, 40), 0.5),
)
SHADE_LAYERS = (
    ((100, 100), (100, 40), 1.0),
    ((100, 80), (40, 100), 0.5),
)


def draw(canvas, ctx):
    """Draw function called every frame"""
    animation = ctx.animation
    progress = ctx.progress

    def draw_cell(canvas, cell):
        canvas.set_fill_color(*cell.background)
        canvas.no_stroke()
        canvas.draw_rect(0, 0, cell.width, cell.height)

        size = cell.min_side * SIZE_FACTOR * progress
        if size <= 0:
            return  # nothing has grown yet

        pattern = animation.cell_patterns[cell.pattern_index]
        shape = animation.cell_shapes[cell.pattern_index]
        hue = cell.stroke_hue

        for (stroke_s, stroke_b), (fill_s, fill_b), scale in (TINT_LAYERS if cell.is_tinted else SHADE_LAYERS):
            canvas.set_stroke_color(hue, stroke_s, stroke_b)
            canvas.set_fill_color(hue, fill_s, fill_b)
            draw_pattern(canvas, pattern, shape, size * scale, cell.center)

    render_cells(canvas, monochromatic_cells(ctx.width, ctx.height, ctx.generation), draw_cell)
