"""
Triangle geometry for the chaos game.

The attractor lives inside a fixed equilateral triangle with unit base.
"""
import math
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """A point in the plane. Immutable."""
    x: float
    y: float


TRIANGLE_WIDTH = 1.0
TRIANGLE_HEIGHT = math.sqrt(0.75)

VERTICES: Tuple[Point, Point, Point] = (
    Point(0.0, 0.0),
    Point(1.0, 0.0),
    Point(0.5, TRIANGLE_HEIGHT),
)

CENTROID = Point(0.5, TRIANGLE_HEIGHT / 3)


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def is_point_in_triangle(p: Point, vertices: Sequence[Point] = VERTICES) -> bool:
    """
    Test whether p lies inside the triangle or on its boundary.

    Computes the cross product of p against each edge. The point is outside
    only when the signs disagree, i.e. at least one is strictly positive and
    another strictly negative. Vertex order does not matter.
    """
    v1, v2, v3 = vertices
    d1 = (p.x - v2.x) * (v1.y - v2.y) - (v1.x - v2.x) * (p.y - v2.y)
    d2 = (p.x - v3.x) * (v2.y - v3.y) - (v2.x - v3.x) * (p.y - v3.y)
    d3 = (p.x - v1.x) * (v3.y - v1.y) - (v3.x - v1.x) * (p.y - v1.y)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def random_point_in_triangle(rng, vertices: Sequence[Point] = VERTICES) -> Point:
    """
    Uniform random point inside the triangle via barycentric sampling.

    Args:
        rng: A numpy Generator (anything with ``random()``).
        vertices: The triangle, defaults to the fixed chaos-game triangle.
    """
    s = rng.random()
    t = rng.random()
    # reflect back into the simplex
    if s + t > 1:
        s = 1 - s
        t = 1 - t

    v0, v1, v2 = vertices
    w0 = 1 - s - t
    return Point(
        v0.x * w0 + v1.x * s + v2.x * t,
        v0.y * w0 + v1.y * s + v2.y * t,
    )
