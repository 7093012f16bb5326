"""
Test configuration and fixtures for the sacred geometry engine.

Provides a canvas that records draw calls, a seeded random source and a
manual clock so generation and animation are deterministic.
"""

import os
import random
import sys

import pytest

# Ensure repo root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

os.environ.setdefault("FLASK_ENV", "testing")

from sacred_geometry.geometry_engine import SacredGeometryEngine
from sacred_geometry.pil_canvas import Canvas

SKETCHES_DIR = os.path.join(ROOT, "sketches")


class RecordingCanvas(Canvas):
    """Canvas that remembers every primitive it was asked to draw"""

    def __init__(self, size=(400, 400)):
        super().__init__(size)
        self.calls = []

    def draw_ellipse(self, cx, cy, w, h):
        self.calls.append(("ellipse", cx, cy, w, h))
        super().draw_ellipse(cx, cy, w, h)

    def draw_polygon(self, points):
        self.calls.append(("polygon", list(points)))
        super().draw_polygon(points)

    def draw_line(self, x1, y1, x2, y2):
        self.calls.append(("line", x1, y1, x2, y2, self.stroke_weight))
        super().draw_line(x1, y1, x2, y2)

    @property
    def shapes(self):
        return [c for c in self.calls if c[0] in ("ellipse", "polygon")]

    @property
    def lines(self):
        return [c for c in self.calls if c[0] == "line"]


class ManualClock:
    """Millisecond clock that only moves when told to"""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return ManualClock(10_000.0)


@pytest.fixture
def make_engine(clock):
    """Build an engine with a loaded sketch, driven by the manual clock"""
    def _make(sketch="Complementary-Colours", seed=7, width=800, height=600):
        engine = SacredGeometryEngine(width=width, height=height, clock=clock, seed=seed)
        success, message = engine.load_sketch(os.path.join(SKETCHES_DIR, sketch))
        assert success, message
        return engine
    return _make
