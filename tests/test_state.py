"""
Tests for AppState: the control surface, the input adapter and snapshot
publication.
"""

import unittest

import numpy as np

from core.config import ChaosConfig
from core.geometry import Point
from core.scheduler import ManualScheduler
from core.state import AppState
from core.viewport import initial_viewport


class StateTestCase(unittest.TestCase):

    def setUp(self):
        self.scheduler = ManualScheduler()
        self.state = AppState(ChaosConfig(), self.scheduler, np.random.default_rng(42))
        self.snapshots = []
        self.state.subscribe(self.snapshots.append)
        self.state.on_resize(800, 600)
        self.snapshots.clear()

    def run_animation(self):
        self.state.set_animation_mode(True)
        self.state.generate()


class TestInitialState(unittest.TestCase):

    def test_defaults(self):
        state = AppState()
        self.assertFalse(state.animation_mode)
        self.assertFalse(state.is_running)
        self.assertEqual(state.batch_size, 100)
        self.assertEqual(state.point_count, 0)
        self.assertEqual(state.viewport, initial_viewport(1200, 800))

    def test_invalid_config_rejected(self):
        with self.assertRaises(ValueError):
            AppState(ChaosConfig(default_batch_size=7))
        with self.assertRaises(ValueError):
            AppState(ChaosConfig(zoom_base=1.5))

    def test_animation_mode_needs_scheduler(self):
        state = AppState()
        with self.assertRaises(RuntimeError):
            state.set_animation_mode(True)


class TestBatchPath(StateTestCase):

    def test_generate_uses_selected_batch_size(self):
        self.state.set_batch_size(1000)
        self.state.generate()
        self.assertEqual(self.state.point_count, 1000)
        self.assertEqual(self.snapshots[-1].point_count, 1000)

    def test_generate_batch_explicit_size(self):
        self.state.generate_batch(10000)
        self.assertEqual(self.state.point_count, 10000)

    def test_generate_batch_rejects_zero(self):
        with self.assertRaises(ValueError):
            self.state.generate_batch(0)
        self.assertEqual(self.state.point_count, 0)

    def test_set_batch_size_validates(self):
        with self.assertRaises(ValueError):
            self.state.set_batch_size(500)
        self.assertEqual(self.state.batch_size, 100)

    def test_generate_label(self):
        self.assertEqual(self.state.generate_label(), "Generate 100 Points")
        self.state.set_batch_size(1000)
        self.assertEqual(self.state.generate_label(), "Generate 1,000 Points")
        self.state.set_batch_size(10000)
        self.assertEqual(self.state.generate_label(), "Generate 10,000 Points")
        self.state.set_animation_mode(True)
        self.assertEqual(self.state.generate_label(), "Animate 100 Points")


class TestAnimatedPath(StateTestCase):

    def test_full_run_adds_100_points(self):
        self.run_animation()
        self.assertTrue(self.state.is_running)
        self.scheduler.run_all()
        self.assertFalse(self.state.is_running)
        self.assertEqual(self.state.point_count, 100)

        last = self.snapshots[-1]
        self.assertFalse(last.is_running)
        self.assertIsNone(last.animation_step)
        self.assertEqual(last.highlights, ())

    def test_snapshots_track_each_tick(self):
        self.run_animation()
        self.scheduler.advance(300)
        running = [s for s in self.snapshots if s.is_running]
        self.assertEqual([s.point_count for s in running], [1, 2, 3, 4])
        for s in running:
            new = s.animation_step.new_point
            self.assertEqual(tuple(s.xy[-1]), (new.x, new.y))

    def test_snapshot_array_tracks_batches_and_ticks(self):
        self.state.generate_batch(1000)
        self.state.generate_batch(10000)
        self.run_animation()
        self.scheduler.advance(2000)
        snap = self.state.snapshot()
        self.assertEqual(snap.point_count, 11021)
        expected = np.array([(p.x, p.y) for p in self.state.engine.points])
        self.assertTrue(np.array_equal(snap.points_array(), expected))
        self.assertFalse(snap.xy.flags.writeable)

    def test_controls_locked_while_running(self):
        self.run_animation()
        self.state.generate()
        self.state.generate_batch(1000)
        self.state.set_animation_mode(False)
        self.state.set_batch_size(1000)

        self.assertTrue(self.state.animation_mode)
        self.assertEqual(self.state.batch_size, 100)
        self.assertEqual(self.state.point_count, 1)

    def test_pan_and_zoom_stay_live_while_running(self):
        self.run_animation()
        before = self.state.viewport
        self.state.on_drag_delta(15, 5)
        self.state.on_wheel(Point(400, 300), -120)
        self.assertNotEqual(self.state.viewport, before)
        self.assertTrue(self.state.is_running)


class TestReset(StateTestCase):

    def test_reset_mid_run_cancels_remaining_ticks(self):
        self.run_animation()
        self.scheduler.advance(1000)
        self.assertEqual(self.state.point_count, 11)

        self.state.reset()
        self.assertFalse(self.state.is_running)
        self.assertEqual(self.state.point_count, 0)
        self.assertEqual(self.scheduler.pending(), 0)

        self.scheduler.advance(100000)
        self.assertEqual(self.state.point_count, 0)

    def test_reset_publishes_one_consistent_snapshot(self):
        self.run_animation()
        self.scheduler.advance(500)
        self.snapshots.clear()

        self.state.reset()
        self.assertEqual(len(self.snapshots), 1)
        snap = self.snapshots[0]
        self.assertEqual(snap.point_count, 0)
        self.assertFalse(snap.is_running)
        self.assertIsNone(snap.animation_step)
        self.assertEqual(snap.highlights, ())

    def test_reset_refits_viewport(self):
        self.state.generate()
        self.state.on_drag_delta(100, 100)
        self.state.on_wheel(Point(10, 10), 300)
        self.state.reset()
        self.assertEqual(self.state.viewport, initial_viewport(800, 600))

    def test_reset_keeps_mode_and_batch_size(self):
        self.state.set_batch_size(10000)
        self.state.set_animation_mode(True)
        self.state.reset()
        self.assertTrue(self.state.animation_mode)
        self.assertEqual(self.state.batch_size, 10000)

    def test_reset_when_idle(self):
        self.state.generate()
        self.state.reset()
        self.assertEqual(self.state.point_count, 0)


class TestInputAdapter(StateTestCase):

    def test_resize_refits_while_empty(self):
        self.state.on_resize(1000, 400)
        self.assertEqual(self.state.viewport, initial_viewport(1000, 400))
        self.assertEqual(self.state.canvas_size, (1000, 400))
        self.assertEqual(len(self.snapshots), 1)

    def test_resize_keeps_viewport_once_points_exist(self):
        self.state.generate()
        before = self.state.viewport
        self.snapshots.clear()
        self.state.on_resize(1000, 400)
        self.assertEqual(self.state.viewport, before)
        self.assertEqual(self.state.canvas_size, (1000, 400))
        # still redraws
        self.assertEqual(len(self.snapshots), 1)

    def test_zero_resize_ignored(self):
        self.state.on_resize(0, 0)
        self.assertEqual(self.state.canvas_size, (800, 600))
        self.assertEqual(self.snapshots, [])

    def test_wheel_then_opposite_wheel_restores(self):
        before = self.state.viewport
        self.state.on_wheel(Point(250, 130), 240)
        self.state.on_wheel(Point(250, 130), -240)
        after = self.state.viewport
        self.assertTrue(np.isclose(after.scale, before.scale))
        self.assertTrue(np.isclose(after.x, before.x))
        self.assertTrue(np.isclose(after.y, before.y))

    def test_unsubscribe(self):
        self.state.unsubscribe(self.snapshots.append)
        self.state.generate()
        self.assertEqual(self.snapshots, [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
