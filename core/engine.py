"""
Chaos Game Engine.

Owns the current point and the ordered collection of generated points.
Each step picks one of the three vertices uniformly at random and moves
halfway toward it; iterating from any seed inside (or near) the triangle
converges onto the Sierpinski attractor.
"""
import logging
from typing import List, Optional, Tuple

import numpy as np

from core.config import ChaosConfig
from core.geometry import (
    Point,
    VERTICES,
    is_point_in_triangle,
    midpoint,
    random_point_in_triangle,
)
from core.viewport import CanvasSize, Viewport, visible_world_rect

log = logging.getLogger("sierpinski.core.engine")


class ChaosGameEngine:
    """
    Point generator for the chaos game.

    Attributes:
        current_point (Point): Most recently generated point, or the initial seed.
        points (list): Every generated point for this session, in append order.

    The same points are also kept in a growable (n, 2) float64 buffer,
    exposed through points_array().
    """

    def __init__(self, config: Optional[ChaosConfig] = None, rng: Optional[np.random.Generator] = None):
        self.config = config or ChaosConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.rng_seed)
        self.points: List[Point] = []
        self._xy = np.empty((0, 2), dtype=np.float64)
        self.current_point = random_point_in_triangle(self.rng)

    def step(self, current_point: Point) -> Tuple[Point, Point]:
        """Pick a random vertex and return (target_vertex, new_point)."""
        target_vertex = VERTICES[int(self.rng.integers(len(VERTICES)))]
        return target_vertex, midpoint(current_point, target_vertex)

    def seed_reacquisition(self, current_point: Point, viewport: Optional[Viewport],
                           canvas_size: Optional[CanvasSize]) -> Point:
        """
        Return a point to continue iterating from.

        Keeps current_point when points exist and it is on screen. Otherwise
        tries a fixed number of uniform draws inside the visible rectangle,
        accepting the first one inside the triangle, and falls back to a
        random point anywhere in the triangle.
        """
        if viewport is None or not canvas_size or canvas_size[0] <= 0 or canvas_size[1] <= 0:
            log.debug("No usable canvas; seeding anywhere in the triangle")
            return random_point_in_triangle(self.rng)

        view = visible_world_rect(viewport, canvas_size)
        if self.points and view.contains(current_point):
            return current_point

        for _ in range(self.config.seed_attempts):
            candidate = Point(
                view.x_min + self.rng.random() * view.width,
                view.y_min + self.rng.random() * view.height,
            )
            if is_point_in_triangle(candidate, VERTICES):
                return candidate

        log.debug("Visible area misses the triangle after %d attempts; using fallback seed",
                  self.config.seed_attempts)
        return random_point_in_triangle(self.rng)

    def generate_batch(self, n: int, viewport: Optional[Viewport],
                       canvas_size: Optional[CanvasSize]) -> List[Point]:
        """
        Run n chaos-game steps and append the results in one update.

        Args:
            n: Number of points, one of ``config.batch_sizes``.
            viewport: Current viewport, used for seed reacquisition.
            canvas_size: Current canvas size in pixels.

        Returns:
            The newly generated points.
        """
        if n not in self.config.batch_sizes:
            raise ValueError(f"Batch size {n} is not one of {self.config.batch_sizes}")

        current = self.seed_reacquisition(self.current_point, viewport, canvas_size)
        new_points: List[Point] = []
        for _ in range(n):
            _, current = self.step(current)
            new_points.append(current)

        self.current_point = current
        self._store(np.array([(p.x, p.y) for p in new_points], dtype=np.float64))
        self.points.extend(new_points)
        log.info("Generated %d points (%d total)", n, len(self.points))
        return new_points

    def append(self, point: Point) -> None:
        """Append a single point produced outside a batch."""
        self._store(np.array([(point.x, point.y)], dtype=np.float64))
        self.points.append(point)

    def commit(self, point: Point) -> None:
        """Persist the current point so the next run continues from it."""
        self.current_point = point

    def reset(self) -> None:
        """Forget all points and draw a fresh seed."""
        self.points = []
        # fresh buffer; earlier views handed out stay valid
        self._xy = np.empty((0, 2), dtype=np.float64)
        self.current_point = random_point_in_triangle(self.rng)

    def points_array(self) -> np.ndarray:
        """Read-only (n, 2) view of every generated point."""
        view = self._xy[:len(self.points)]
        view.flags.writeable = False
        return view

    def _store(self, rows: np.ndarray) -> None:
        count = len(self.points)
        needed = count + len(rows)
        if needed > len(self._xy):
            grown = np.empty((max(needed, 2 * len(self._xy), 1024), 2), dtype=np.float64)
            grown[:count] = self._xy[:count]
            self._xy = grown
        self._xy[count:needed] = rows

