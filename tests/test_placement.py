# tests/test_placement.py
import math

import pytest

from sacred_geometry.placement import ORIGIN, PlacementSpec, Point, expand, polar_point
from sacred_geometry.shapes import InvalidShapeParameter


def test_single_placement_along_angle_offset():
    """count=1 gives exactly one center, radius along the offset direction."""
    spec = PlacementSpec(radius_fraction=0.5, size_fraction=0.25, angle_offset=0)
    placements = expand(spec, 100, Point(10, 20))
    assert len(placements) == 1
    assert placements[0].center == pytest.approx((60, 20))
    assert placements[0].size == pytest.approx(25)


def test_single_placement_angle_90_is_down_on_screen():
    spec = PlacementSpec(radius_fraction=1, angle_offset=90)
    (placement,) = expand(spec, 10)
    assert placement.center == pytest.approx((0, 10), abs=1e-9)
    assert placement.rotation == 90


def test_centered_placement():
    (placement,) = expand(PlacementSpec(size_fraction=0.5), 100)
    assert placement.center == pytest.approx((0, 0))
    assert placement.size == 50


@pytest.mark.parametrize("count", [2, 3, 5, 6, 12])
def test_ring_is_evenly_spaced(count):
    """k centers at equal distance, consecutive gaps of 360/k summing to 360."""
    spec = PlacementSpec(count=count, radius_fraction=0.4, size_fraction=0.1, start_angle=15)
    placements = expand(spec, 200, Point(50, 50))
    assert len(placements) == count

    angles = []
    for p in placements:
        dx, dy = p.center.x - 50, p.center.y - 50
        assert math.hypot(dx, dy) == pytest.approx(80)
        assert p.size == pytest.approx(20)
        angles.append(math.degrees(math.atan2(dy, dx)) % 360)

    gaps = [(angles[(i + 1) % count] - angles[i]) % 360 for i in range(count)]
    assert gaps == pytest.approx([360 / count] * count)
    assert sum(gaps) == pytest.approx(360)
    assert angles[0] == pytest.approx(15)


def test_ring_rotation_follows_angle():
    placements = expand(PlacementSpec(count=4, radius_fraction=1), 10)
    assert [p.rotation for p in placements] == pytest.approx([0, 90, 180, 270])


def test_size_scales_with_base():
    (p,) = expand(PlacementSpec(size_fraction=0.5), 100)
    assert p.size == 50


def test_zero_count_rejected():
    with pytest.raises(InvalidShapeParameter):
        expand(PlacementSpec(count=0), 100)


def test_polar_point():
    assert polar_point(ORIGIN, 180, 5) == pytest.approx((-5, 0), abs=1e-9)
