"""
Metatron's Cube - connects every pair of the 12 Fruit of Life ring centers
"""

from itertools import combinations

from sacred_geometry.placement import ORIGIN, polar_point

# Fruit of Life circles are a fifth of the base size; the two rings sit at
# two and four circle sizes from the center.
RING_UNITS = (2, 4)
EDGE_WEIGHT_FACTOR = 0.25


def cube_vertices(base_size, origin=ORIGIN):
    """12 vertices: for each of 6 spokes (30, 90, ... 330 deg) one inner and one outer point"""
    unit = base_size / 5
    vertices = []
    for i in range(6):
        angle = i * 60 + 30
        for units in RING_UNITS:
            vertices.append(polar_point(origin, angle, units * unit))
    return vertices


def cube_edges(vertices):
    """Every unordered pair of vertices exactly once, as (start, end) segments"""
    return [(a, b) for a, b in combinations(vertices, 2)]


def draw_cube_edges(canvas, base_size, origin=ORIGIN):
    """Draw the full lattice at a quarter of the ambient stroke weight"""
    edges = cube_edges(cube_vertices(base_size, origin))

    ambient = canvas.stroke_weight
    canvas.set_stroke_weight(ambient * EDGE_WEIGHT_FACTOR)
    try:
        for start, end in edges:
            canvas.draw_line(start[0], start[1], end[0], end[1])
    finally:
        canvas.set_stroke_weight(ambient)

    return len(edges)
