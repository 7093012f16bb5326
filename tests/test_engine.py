# tests/test_engine.py
import os

import pytest

from sacred_geometry.geometry_engine import SacredGeometryEngine
from sacred_geometry.patterns import PatternName, UnknownPattern
from sacred_geometry.shapes import HEXAGON, InvalidShapeParameter

from conftest import SKETCHES_DIR


@pytest.mark.parametrize("sketch", ["Complementary-Colours", "Blending-Colours", "Monochromatic"])
def test_every_sketch_renders(make_engine, clock, sketch):
    engine = make_engine(sketch)
    image, error = engine.render_frame()
    assert error is None
    assert image.startswith("data:image/jpeg;base64,")

    # Let the growth animation settle and render again
    clock.advance(400)
    image, error = engine.render_frame()
    assert error is None


def test_load_missing_sketch(clock):
    engine = SacredGeometryEngine(clock=clock)
    success, message = engine.load_sketch(os.path.join(SKETCHES_DIR, "No-Such-Sketch"))
    assert not success
    assert "main.py not found" in message
    assert engine.render_frame() == (None, "No sketch loaded")


def test_load_sketch_without_draw(tmp_path, clock):
    (tmp_path / "main.py").write_text("PATTERN_POOL = None\n", encoding="utf-8")
    engine = SacredGeometryEngine(clock=clock)
    success, message = engine.load_sketch(str(tmp_path))
    assert not success
    assert "draw" in message


def test_complementary_sketch_pool(make_engine):
    engine = make_engine("Complementary-Colours")
    assert engine.scheduler is None
    assert set(engine.controller.patterns) == {
        PatternName.VESICA_PISCIS, PatternName.SEED_OF_LIFE,
        PatternName.EGG_OF_LIFE, PatternName.FLOWER_OF_LIFE}


def test_pointer_regenerates_unless_over_overlay(make_engine):
    engine = make_engine("Complementary-Colours")
    before = engine.ctx.generation

    assert engine.handle_pointer(10, 10, over_overlay=True) is False
    assert engine.ctx.generation is before

    assert engine.handle_pointer(10, 10) is True
    after = engine.ctx.generation
    assert after.pattern_name != before.pattern_name
    assert after.shape_kind != before.shape_kind


def test_set_shape_and_pattern(make_engine):
    engine = make_engine("Blending-Colours")
    engine.set_shape_kind("Hexagon")
    engine.set_pattern_name("MetatronsCube")
    assert engine.ctx.generation.shape_kind is HEXAGON
    assert engine.get_active_pattern_display_name() == "Metatrons Cube"

    with pytest.raises(UnknownPattern):
        engine.set_pattern_name("TreeOfLife")
    with pytest.raises(InvalidShapeParameter):
        engine.set_shape_kind("Star")


def test_animated_sketch_rejects_manual_selection(make_engine):
    """Animated cells pick their own patterns and shapes."""
    engine = make_engine("Monochromatic")
    generation, animation = engine.ctx.generation, engine.ctx.animation

    with pytest.raises(RuntimeError):
        engine.set_pattern_name("SeedOfLife")
    with pytest.raises(RuntimeError):
        engine.set_shape_kind("Hexagon")
    assert engine.ctx.generation is generation
    assert engine.ctx.animation is animation


def test_pattern_outside_sketch_pool(make_engine):
    engine = make_engine("Complementary-Colours")
    with pytest.raises(UnknownPattern):
        engine.set_pattern_name("FruitOfLife")


def test_monochromatic_auto_regenerates(make_engine, clock):
    engine = make_engine("Monochromatic")
    first = engine.ctx.animation
    assert engine.ctx.progress == 0.0

    clock.advance(250)
    assert engine.step() is False
    assert engine.ctx.progress == 0.5

    clock.advance(1751)
    assert engine.step() is True
    assert engine.ctx.animation.last_regen_time == clock.now
    assert engine.ctx.progress == 0.0
    assert engine.ctx.animation is not first

    assert engine.step() is False


def test_monochromatic_display_name_lists_cells(make_engine):
    engine = make_engine("Monochromatic")
    names = engine.get_active_pattern_display_name().split(" / ")
    assert len(names) == 4
    assert len(set(names)) == 4


def test_monochromatic_draws_nothing_before_growth(make_engine, clock, monkeypatch):
    engine = make_engine("Monochromatic")
    calls = []
    monkeypatch.setattr(engine.canvas, "draw_ellipse", lambda *a: calls.append(a))
    monkeypatch.setattr(engine.canvas, "draw_polygon", lambda *a: calls.append(a))
    engine.draw_frame()
    assert calls == []

    clock.advance(500)
    engine.draw_frame()
    assert calls


def test_resize_keeps_state(make_engine):
    engine = make_engine("Monochromatic", width=800, height=600)
    generation, animation = engine.ctx.generation, engine.ctx.animation

    engine.on_resize(1200, 400)
    assert engine.canvas.get_size() == (1200, 400)
    assert engine.ctx.stroke_weight == pytest.approx(4.0)
    assert engine.ctx.generation is generation
    assert engine.ctx.animation is animation

    with pytest.raises(ValueError):
        engine.on_resize(0, 100)


def test_failing_cell_does_not_break_frame(tmp_path, clock):
    (tmp_path / "main.py").write_text(
        "from sacred_geometry.layout import monochromatic_cells, render_cells\n"
        "from sacred_geometry.patterns import draw_pattern\n"
        "\n"
        "def draw(canvas, ctx):\n"
        "    def draw_cell(canvas, cell):\n"
        "        pattern = 'TreeOfLife' if cell.pattern_index == 0 else ctx.generation.pattern_name\n"
        "        draw_pattern(canvas, pattern, ctx.generation.shape_kind, 50, cell.center)\n"
        "    render_cells(canvas, monochromatic_cells(ctx.width, ctx.height, ctx.generation), draw_cell)\n",
        encoding="utf-8")
    engine = SacredGeometryEngine(width=200, height=200, clock=clock, seed=1)
    assert engine.load_sketch(str(tmp_path))[0]
    image, error = engine.render_frame()
    assert error is None
    assert image


def test_crashing_cell_still_renders_frame(tmp_path, clock):
    """An arbitrary error in one cell leaves the other three on the frame."""
    (tmp_path / "main.py").write_text(
        "from sacred_geometry.layout import monochromatic_cells, render_cells\n"
        "from sacred_geometry.patterns import draw_pattern\n"
        "\n"
        "DRAWN = []\n"
        "\n"
        "def draw(canvas, ctx):\n"
        "    def draw_cell(canvas, cell):\n"
        "        if cell.pattern_index == 0:\n"
        "            raise ZeroDivisionError('cell 0 failed')\n"
        "        draw_pattern(canvas, ctx.generation.pattern_name, ctx.generation.shape_kind, 50, cell.center)\n"
        "        DRAWN.append(cell.pattern_index)\n"
        "    render_cells(canvas, monochromatic_cells(ctx.width, ctx.height, ctx.generation), draw_cell)\n",
        encoding="utf-8")
    engine = SacredGeometryEngine(width=200, height=200, clock=clock, seed=1)
    assert engine.load_sketch(str(tmp_path))[0]
    image, error = engine.render_frame()
    assert error is None
    assert image
    assert engine.current_sketch.DRAWN == [1, 2, 3]


def test_seeded_engines_agree(clock):
    a = SacredGeometryEngine(clock=clock, seed="same")
    b = SacredGeometryEngine(clock=clock, seed="same")
    path = os.path.join(SKETCHES_DIR, "Blending-Colours")
    a.load_sketch(path)
    b.load_sketch(path)
    assert a.ctx.generation == b.ctx.generation


def test_status(make_engine):
    status = make_engine("Complementary-Colours").get_status()
    assert status["sketch_loaded"]
    assert status["current_sketch"] == "Complementary-Colours"
    assert status["animated"] is False
    assert status["resolution"] == (800, 600)
