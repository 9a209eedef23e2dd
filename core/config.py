"""
Tunable constants for the chaos game explorer.

Kept in a single dataclass so the core, the desktop shell and the tests
all agree on the same numbers.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class ChaosConfig:
    """
    Configuration for point generation, viewport fitting and animation pacing.
    """
    # Viewport
    padding: float = 1.1  # 10% padding around the triangle
    zoom_base: float = 0.998  # zoom factor = zoom_base ** wheel_delta

    # Seed reacquisition
    seed_attempts: int = 100

    # Animation
    ticks_per_run: int = 100
    tick_interval_ms: int = 100
    highlight_life: int = 5

    # Batch generation
    batch_sizes: Tuple[int, ...] = (100, 1000, 10000)
    default_batch_size: int = 100

    # Rendering
    vertex_marker_max_scale: float = 2000.0
    default_canvas_size: Tuple[int, int] = (1200, 800)

    # Reproducible runs
    rng_seed: Optional[int] = None

    def validate(self) -> "ChaosConfig":
        """Raise ValueError if any field is out of range; return self otherwise."""
        if self.padding <= 0:
            raise ValueError(f"padding must be positive, got {self.padding}")
        if not 0 < self.zoom_base < 1:
            raise ValueError(f"zoom_base must lie in (0, 1), got {self.zoom_base}")
        if self.seed_attempts < 0:
            raise ValueError(f"seed_attempts must be non-negative, got {self.seed_attempts}")
        if self.ticks_per_run <= 0:
            raise ValueError(f"ticks_per_run must be positive, got {self.ticks_per_run}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.highlight_life <= 0:
            raise ValueError(f"highlight_life must be positive, got {self.highlight_life}")
        if not self.batch_sizes or any(n <= 0 for n in self.batch_sizes):
            raise ValueError(f"batch_sizes must be non-empty and positive, got {self.batch_sizes}")
        if self.default_batch_size not in self.batch_sizes:
            raise ValueError(
                f"default_batch_size {self.default_batch_size} is not one of {self.batch_sizes}"
            )
        return self
