import sys
import os
import unittest

import numpy as np

# Add root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import ChaosConfig
from core.geometry import TRIANGLE_HEIGHT
from core.scheduler import ManualScheduler
from core.state import AppState

class TestCore(unittest.TestCase):
    def test_state_initialization(self):
        state = AppState()
        self.assertFalse(state.animation_mode)
        self.assertFalse(state.is_running)
        print("AppState initialized successfully.")

    def test_headless_session(self):
        print("Running a headless session (batch, animation, reset)...")
        scheduler = ManualScheduler()
        state = AppState(ChaosConfig(rng_seed=3), scheduler)
        state.on_resize(640, 480)

        state.generate_batch(10000)
        state.set_animation_mode(True)
        state.generate()
        scheduler.run_all()
        self.assertEqual(state.point_count, 10100)

        xy = state.snapshot().points_array()
        self.assertEqual(xy.shape, (10100, 2))
        self.assertTrue(np.all((xy[:, 0] >= -1e-12) & (xy[:, 0] <= 1 + 1e-12)))
        self.assertTrue(np.all((xy[:, 1] >= -1e-12) & (xy[:, 1] <= TRIANGLE_HEIGHT + 1e-12)))
        print(f"Generated {state.point_count} points.")

        state.reset()
        self.assertEqual(state.point_count, 0)

if __name__ == "__main__":
    unittest.main()
