"""
Animation Controller: stepwise visualization of the chaos game.

Runs the engine one step per tick for a fixed number of ticks, publishing
the in-progress step and a short-lived trail of highlighted vertices so the
render surface can show each move as it happens.
"""
import enum
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from core.config import ChaosConfig
from core.engine import ChaosGameEngine
from core.geometry import Point
from core.scheduler import CancelToken, Scheduler
from core.viewport import CanvasSize, Viewport

log = logging.getLogger("sierpinski.core.animation")


class AnimationState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class AnimationStep:
    """Snapshot of one in-progress iteration, for drawing only."""
    current_point: Point
    target_vertex: Point
    new_point: Point


@dataclass(frozen=True)
class HighlightedVertex:
    vertex: Point
    life: int  # remaining ticks before the highlight disappears


class AnimationController:
    """
    Two-state machine (IDLE, RUNNING) layered over the engine.

    Each tick performs one step, appends the new point to the engine's
    collection right away and schedules the next tick through the scheduler.
    The pending tick is held as a CancelToken so cancel() can stop the chain
    before any other state is touched.
    """

    def __init__(self, engine: ChaosGameEngine, scheduler: Scheduler,
                 config: Optional[ChaosConfig] = None,
                 on_change: Optional[Callable[[], None]] = None):
        self.engine = engine
        self.scheduler = scheduler
        self.config = config or engine.config
        self.on_change = on_change

        self.state = AnimationState.IDLE
        self.step: Optional[AnimationStep] = None
        self.highlights: Tuple[HighlightedVertex, ...] = ()
        self.ticks_done = 0

        self._token: Optional[CancelToken] = None
        self._local_point: Optional[Point] = None

    @property
    def is_running(self) -> bool:
        return self.state is AnimationState.RUNNING

    def start(self, viewport: Optional[Viewport], canvas_size: Optional[CanvasSize]) -> None:
        """Begin a run from IDLE. Tick 0 executes immediately."""
        if self.is_running:
            raise RuntimeError("Animation is already running")

        self.state = AnimationState.RUNNING
        self.step = None
        self.highlights = ()
        self.ticks_done = 0
        self._local_point = self.engine.seed_reacquisition(
            self.engine.current_point, viewport, canvas_size
        )
        log.info("Animation started (%d ticks every %d ms)",
                 self.config.ticks_per_run, self.config.tick_interval_ms)
        self.tick(0)

    def tick(self, count: int) -> None:
        """Perform tick number count of the current run."""
        if not self.is_running:
            # stray callback after cancel
            return
        self._token = None

        before = self._local_point
        target_vertex, after = self.engine.step(before)

        self.step = AnimationStep(current_point=before, target_vertex=target_vertex, new_point=after)
        fresh = (HighlightedVertex(target_vertex, self.config.highlight_life),) + self.highlights
        self.highlights = tuple(
            h for h in (replace(h, life=h.life - 1) for h in fresh) if h.life > 0
        )
        self.engine.append(after)
        self._local_point = after
        self.ticks_done = count + 1

        if count + 1 < self.config.ticks_per_run:
            self._token = self.scheduler.call_later(
                self.config.tick_interval_ms, lambda: self.tick(count + 1)
            )
        else:
            self.state = AnimationState.IDLE
            self.engine.commit(after)
            self.step = None
            self.highlights = ()
            log.info("Animation finished after %d ticks", self.ticks_done)

        self._notify()

    def cancel(self) -> None:
        """Stop a run. Safe to call when IDLE."""
        if not self.is_running:
            return

        # pending tick goes first so it can never fire into cleared state
        if self._token is not None:
            self._token.cancel()
            self._token = None

        self.state = AnimationState.IDLE
        self.step = None
        self.highlights = ()
        self._local_point = None
        log.info("Animation cancelled after %d ticks", self.ticks_done)
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
