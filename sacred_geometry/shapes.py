"""
Shape kinds and the renderer that draws a single shape instance
"""

import math
from dataclasses import dataclass

import numpy as np


class InvalidShapeParameter(ValueError):
    """Raised for degenerate shape input (non-positive size, fewer than 3 sides)"""


@dataclass(frozen=True)
class ShapeKind:
    """Ellipse (sides == 0) or regular polygon (sides >= 3)"""
    name: str
    sides: int = 0
    rotation: float = 0.0  # intrinsic rotation in degrees

    def __post_init__(self):
        if self.sides != 0 and self.sides < 3:
            raise InvalidShapeParameter(f"Polygon needs at least 3 sides, got {self.sides}")

    @property
    def is_ellipse(self):
        return self.sides == 0

    def __str__(self):
        return self.name


ELLIPSE = ShapeKind('Circle')
TRIANGLE = ShapeKind('Triangle', 3)
SQUARE = ShapeKind('Square', 4)
PENTAGON = ShapeKind('Pentagon', 5)
# Hexagon and octagon are turned so their silhouettes line up with ellipse rings
HEXAGON = ShapeKind('Hexagon', 6, 30.0)
HEPTAGON = ShapeKind('Heptagon', 7)
OCTAGON = ShapeKind('Octagon', 8, 22.5)

SHAPE_KINDS = (ELLIPSE, TRIANGLE, SQUARE, PENTAGON, HEXAGON, HEPTAGON, OCTAGON)


def shape_kind_by_name(name):
    """Look up a shape kind by its display name (case-insensitive)"""
    if isinstance(name, ShapeKind):
        return name
    for kind in SHAPE_KINDS:
        if kind.name.lower() == str(name).strip().lower():
            return kind
    raise InvalidShapeParameter(f"Unknown shape kind: {name!r}")


def polygon_vertices(sides, center, radius, rotation_offset=0.0):
    """Vertices of a regular polygon with vertex 0 at the top before rotation.

    Args:
        sides: Number of sides (>= 3)
        center: (x, y) center point
        radius: Circumradius in pixels (> 0)
        rotation_offset: Extra rotation in degrees

    Returns:
        List of (x, y) tuples
    """
    if sides < 3:
        raise InvalidShapeParameter(f"Polygon needs at least 3 sides, got {sides}")
    if radius <= 0:
        raise InvalidShapeParameter(f"Polygon radius must be positive, got {radius}")

    angles = np.deg2rad(np.arange(sides) * 360.0 / sides - 90.0 + rotation_offset)
    xs = center[0] + radius * np.cos(angles)
    ys = center[1] + radius * np.sin(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


class ShapeRenderer:
    """Draws one shape instance onto a canvas"""

    def __init__(self, canvas):
        self.canvas = canvas

    def draw(self, kind, center, size, rotation_offset=0.0, height=None):
        """Draw `kind` centered at `center`.

        For ellipses `size` is the width and `height` (defaults to `size`) the
        height. For polygons `size` is the circumradius.
        """
        if size is None or size <= 0 or math.isnan(size):
            raise InvalidShapeParameter(f"Shape size must be positive, got {size}")

        if kind.is_ellipse:
            if height is None:
                height = size
            if height <= 0:
                raise InvalidShapeParameter(f"Ellipse height must be positive, got {height}")
            self.canvas.draw_ellipse(center[0], center[1], size, height)
        else:
            points = polygon_vertices(kind.sides, center, size, kind.rotation + rotation_offset)
            self.canvas.draw_polygon(points)
