"""
Tests for the viewport model: fitting, world/screen mapping, pan and zoom.
"""

import math
import unittest

import numpy as np

from core.geometry import Point, VERTICES
from core.viewport import (
    Viewport,
    initial_viewport,
    pan,
    to_screen,
    to_world,
    visible_world_rect,
    zoom_at,
)

CANVAS = (800, 600)


class TestInitialViewport(unittest.TestCase):

    def test_fits_800_by_600(self):
        vp = initial_viewport(800, 600)
        expected = min(800 / 1.1, 600 / (math.sqrt(0.75) * 1.1))
        self.assertTrue(np.isclose(vp.scale, expected))
        self.assertTrue(np.isclose(vp.scale, 629.8366572977734))
        self.assertEqual(vp.x, 0.5)
        self.assertTrue(np.isclose(vp.y, 0.4330127))

    def test_width_limited_canvas(self):
        vp = initial_viewport(300, 1000)
        self.assertTrue(np.isclose(vp.scale, 300 / 1.1))

    def test_whole_triangle_visible(self):
        vp = initial_viewport(*CANVAS)
        rect = visible_world_rect(vp, CANVAS)
        for v in VERTICES:
            self.assertTrue(rect.contains(v))

    def test_zero_area_canvas(self):
        self.assertIsNone(initial_viewport(0, 600))
        self.assertIsNone(initial_viewport(800, 0))


class TestMapping(unittest.TestCase):

    def setUp(self):
        self.vp = Viewport(x=0.5, y=0.25, scale=400.0)

    def test_center_maps_to_canvas_center(self):
        s = to_screen(Point(0.5, 0.25), self.vp, CANVAS)
        self.assertEqual(s, Point(400.0, 300.0))

    def test_y_axis_is_flipped(self):
        above = to_screen(Point(0.5, 0.5), self.vp, CANVAS)
        self.assertTrue(np.isclose(above.x, 400.0))
        self.assertTrue(np.isclose(above.y, 300.0 - 0.25 * 400.0))

        right = to_screen(Point(0.75, 0.25), self.vp, CANVAS)
        self.assertTrue(np.isclose(right.x, 400.0 + 100.0))

    def test_round_trip(self):
        for p in [Point(0.0, 0.0), Point(1.3, -0.7), Point(0.123, 0.456)]:
            back = to_world(to_screen(p, self.vp, CANVAS), self.vp, CANVAS)
            self.assertTrue(np.isclose(back.x, p.x))
            self.assertTrue(np.isclose(back.y, p.y))


class TestZoom(unittest.TestCase):

    def setUp(self):
        self.vp = initial_viewport(*CANVAS)

    def test_zoom_in_and_out_restores_viewport(self):
        anchor = Point(123.0, 456.0)
        for delta in (120, -360, 37.5):
            zoomed = zoom_at(anchor, delta, self.vp, CANVAS)
            restored = zoom_at(anchor, -delta, zoomed, CANVAS)
            self.assertTrue(np.isclose(restored.scale, self.vp.scale))
            self.assertTrue(np.isclose(restored.x, self.vp.x))
            self.assertTrue(np.isclose(restored.y, self.vp.y))

    def test_zoom_is_multiplicative(self):
        zoomed = zoom_at(Point(400, 300), 100, self.vp, CANVAS)
        self.assertTrue(np.isclose(zoomed.scale, self.vp.scale * 0.998 ** 100))
        # scrolling toward the user (negative delta) zooms in
        self.assertGreater(zoom_at(Point(400, 300), -100, self.vp, CANVAS).scale, self.vp.scale)

    def test_zoom_keeps_cursor_anchored(self):
        cursor = Point(650.0, 120.0)
        before = to_world(cursor, self.vp, CANVAS)
        zoomed = zoom_at(cursor, -500, self.vp, CANVAS)
        after = to_world(cursor, zoomed, CANVAS)
        self.assertTrue(np.isclose(before.x, after.x))
        self.assertTrue(np.isclose(before.y, after.y))

    def test_degenerate_zoom_is_noop(self):
        # 0.998 ** 1e6 underflows to zero
        self.assertIs(zoom_at(Point(10, 10), 1e6, self.vp, CANVAS), self.vp)
        # 0.998 ** -1e6 overflows
        self.assertIs(zoom_at(Point(10, 10), -1e6, self.vp, CANVAS), self.vp)


class TestPan(unittest.TestCase):

    def test_pan_moves_center_opposite_to_drag(self):
        vp = Viewport(x=0.5, y=0.5, scale=100.0)
        moved = pan(10, 20, vp)
        self.assertTrue(np.isclose(moved.x, 0.4))
        self.assertTrue(np.isclose(moved.y, 0.7))
        self.assertEqual(moved.scale, 100.0)

    def test_dragged_point_follows_cursor(self):
        vp = initial_viewport(*CANVAS)
        world = to_world(Point(200, 200), vp, CANVAS)
        moved = pan(35, -12, vp)
        s = to_screen(world, moved, CANVAS)
        self.assertTrue(np.isclose(s.x, 235))
        self.assertTrue(np.isclose(s.y, 188))


class TestVisibleRect(unittest.TestCase):

    def test_rect_bounds(self):
        rect = visible_world_rect(Viewport(x=1.0, y=2.0, scale=100.0), CANVAS)
        self.assertTrue(np.isclose(rect.x_min, 1.0 - 4.0))
        self.assertTrue(np.isclose(rect.x_max, 1.0 + 4.0))
        self.assertTrue(np.isclose(rect.y_min, 2.0 - 3.0))
        self.assertTrue(np.isclose(rect.y_max, 2.0 + 3.0))
        self.assertTrue(rect.contains(Point(5.0, 5.0)))
        self.assertFalse(rect.contains(Point(5.01, 0.0)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
