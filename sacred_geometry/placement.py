"""
Polar placement - turns a placement spec into concrete shape centers
"""

from dataclasses import dataclass, replace
from typing import NamedTuple, Optional

import numpy as np

from sacred_geometry.shapes import InvalidShapeParameter, ShapeKind


class Point(NamedTuple):
    x: float
    y: float


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class PlacementSpec:
    """One row of a pattern recipe.

    Fractions are multiplied by the runtime base size. A `shape` of None
    means "use whichever shape kind is active".
    """
    count: int = 1
    radius_fraction: float = 0.0
    size_fraction: float = 1.0
    angle_offset: float = 0.0
    start_angle: float = 0.0
    shape: Optional[ShapeKind] = None

    def with_shape(self, shape):
        return replace(self, shape=shape)


class Placement(NamedTuple):
    center: Point
    size: float
    rotation: float


def polar_point(origin, angle_deg, distance):
    """Point `distance` away from `origin` along `angle_deg` (0 = +x, y down)"""
    rad = np.deg2rad(angle_deg)
    return Point(float(origin[0] + distance * np.cos(rad)),
                 float(origin[1] + distance * np.sin(rad)))


def expand(spec, base_size, origin=ORIGIN):
    """Expand a placement spec into a list of Placements.

    count == 1 places a single shape along `angle_offset`; count > 1 spreads
    `count` shapes every 360/count degrees starting at `start_angle`.
    """
    if spec.count < 1:
        raise InvalidShapeParameter(f"Placement count must be at least 1, got {spec.count}")

    distance = spec.radius_fraction * base_size
    size = spec.size_fraction * base_size

    if spec.count == 1:
        angles = np.array([spec.angle_offset], dtype=float)
    else:
        angles = spec.start_angle + np.arange(spec.count) * 360.0 / spec.count

    rads = np.deg2rad(angles)
    xs = origin[0] + distance * np.cos(rads)
    ys = origin[1] + distance * np.sin(rads)

    return [
        Placement(Point(float(x), float(y)), size, float(angle))
        for x, y, angle in zip(xs, ys, angles)
    ]
