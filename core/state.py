"""
Session state and control surface for the chaos game explorer.

Independent of UI or rendering backend: the desktop shell forwards input
here and redraws from the published RenderSnapshot.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from core.animation import AnimationController, AnimationStep, HighlightedVertex
from core.config import ChaosConfig
from core.engine import ChaosGameEngine
from core.geometry import Point
from core.scheduler import Scheduler
from core.viewport import CanvasSize, Viewport, initial_viewport, pan, zoom_at

log = logging.getLogger("sierpinski.core.state")


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything the render surface needs for one frame.

    xy is a read-only (n, 2) view of the generated points in world units.
    """
    xy: np.ndarray = field(compare=False, repr=False)
    viewport: Viewport
    canvas_size: CanvasSize
    animation_step: Optional[AnimationStep]
    highlights: Tuple[HighlightedVertex, ...]
    is_running: bool
    animation_mode: bool
    batch_size: int

    @property
    def point_count(self) -> int:
        return len(self.xy)

    def points_array(self) -> np.ndarray:
        return self.xy


Listener = Callable[[RenderSnapshot], None]


class AppState:
    """
    Holds the runtime state of the application.

    Owns the engine, the animation controller, the viewport and the canvas
    size. Every mutating operation publishes exactly one snapshot to the
    subscribed listeners once the mutation is complete.
    """

    def __init__(self, config: Optional[ChaosConfig] = None, scheduler: Optional[Scheduler] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = (config or ChaosConfig()).validate()
        self.engine = ChaosGameEngine(self.config, rng)
        self.animation = AnimationController(
            self.engine, scheduler, self.config, on_change=self._publish
        ) if scheduler is not None else None

        # Generation options
        self.animation_mode = False
        self.batch_size = self.config.default_batch_size

        # Viewport; replaced by the first real resize
        self.canvas_size: CanvasSize = self.config.default_canvas_size
        self.viewport = initial_viewport(*self.canvas_size, padding=self.config.padding)

        self._listeners: List[Listener] = []
        self._hold = 0
        self._dirty = False

    # ─────────────────────────────────────────────────────────────────────────
    # Publication
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> RenderSnapshot:
        anim = self.animation
        return RenderSnapshot(
            xy=self.engine.points_array(),
            viewport=self.viewport,
            canvas_size=self.canvas_size,
            animation_step=anim.step if anim else None,
            highlights=anim.highlights if anim else (),
            is_running=self.is_running,
            animation_mode=self.animation_mode,
            batch_size=self.batch_size,
        )

    @contextmanager
    def _held(self):
        """Collapse all publishes inside the block into one at the end."""
        self._hold += 1
        try:
            yield
        finally:
            self._hold -= 1
            if self._hold == 0 and self._dirty:
                self._dirty = False
                self._emit()

    def _publish(self) -> None:
        if self._hold:
            self._dirty = True
            return
        self._emit()

    def _emit(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self.animation is not None and self.animation.is_running

    @property
    def point_count(self) -> int:
        return len(self.engine.points)

    def generate_label(self) -> str:
        """Text for the generate button."""
        if self.animation_mode:
            return f"Animate {self.config.ticks_per_run} Points"
        return f"Generate {self.batch_size:,} Points"

    # ─────────────────────────────────────────────────────────────────────────
    # Control surface
    # ─────────────────────────────────────────────────────────────────────────

    def generate_batch(self, n: Optional[int] = None) -> None:
        """Generate n points at once (defaults to the selected batch size)."""
        if self.is_running:
            log.debug("Ignoring batch generation while animating")
            return
        self.engine.generate_batch(self.batch_size if n is None else n, self.viewport, self.canvas_size)
        self._publish()

    def set_animation_mode(self, enabled: bool) -> None:
        if self.is_running:
            log.debug("Ignoring mode change while animating")
            return
        if enabled and self.animation is None:
            raise RuntimeError("Animation mode needs a scheduler")
        self.animation_mode = bool(enabled)
        self._publish()

    def set_batch_size(self, n: int) -> None:
        if n not in self.config.batch_sizes:
            raise ValueError(f"Batch size {n} is not one of {self.config.batch_sizes}")
        if self.is_running:
            log.debug("Ignoring batch size change while animating")
            return
        self.batch_size = n
        self._publish()

    def generate(self) -> None:
        """Run the batch or the animated path, depending on the mode."""
        if self.is_running:
            log.debug("Ignoring generate while animating")
            return
        if self.animation_mode:
            self.animation.start(self.viewport, self.canvas_size)
        else:
            self.generate_batch()

    def reset(self) -> None:
        """Cancel any run, refit the viewport and start over with a fresh seed."""
        with self._held():
            # must precede every other mutation
            if self.animation is not None:
                self.animation.cancel()

            fitted = initial_viewport(*self.canvas_size, padding=self.config.padding)
            if fitted is not None:
                self.viewport = fitted
            self.engine.reset()
            log.info("Reset")
            self._publish()

    # ─────────────────────────────────────────────────────────────────────────
    # Input adapter
    # ─────────────────────────────────────────────────────────────────────────

    def on_wheel(self, screen_point: Point, delta_y: float) -> None:
        self.viewport = zoom_at(screen_point, delta_y, self.viewport, self.canvas_size,
                                zoom_base=self.config.zoom_base)
        self._publish()

    def on_drag_delta(self, dx: float, dy: float) -> None:
        self.viewport = pan(dx, dy, self.viewport)
        self._publish()

    def on_resize(self, width: float, height: float) -> None:
        """Track the canvas size; refit the view only before any points exist."""
        if width <= 0 or height <= 0:
            log.debug("Ignoring resize to %sx%s", width, height)
            return
        self.canvas_size = (width, height)
        if not self.engine.points:
            self.viewport = initial_viewport(width, height, padding=self.config.padding)
        self._publish()
