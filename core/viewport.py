"""
Viewport model: world <-> screen mapping, pan and cursor-anchored zoom.

Screen origin is the top-left of the canvas with y growing downward; the
world y axis points up, so the y term is flipped in both directions.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from core.geometry import Point, TRIANGLE_HEIGHT, TRIANGLE_WIDTH

log = logging.getLogger("sierpinski.core.viewport")

CanvasSize = Tuple[float, float]


@dataclass(frozen=True)
class Viewport:
    """
    World coordinates visible at the canvas center plus the zoom level.

    Attributes:
        x: World x at the canvas center.
        y: World y at the canvas center.
        scale: Screen pixels per world unit. Always > 0.
    """
    x: float
    y: float
    scale: float


@dataclass(frozen=True)
class WorldRect:
    """Axis-aligned rectangle in world coordinates."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, p: Point) -> bool:
        return self.x_min <= p.x <= self.x_max and self.y_min <= p.y <= self.y_max


def initial_viewport(width: float, height: float, padding: float = 1.1) -> Optional[Viewport]:
    """
    Fit the triangle's bounding box into the canvas with some padding.

    Returns None for a zero-area canvas; callers keep their current viewport.
    """
    if width <= 0 or height <= 0:
        log.debug("Ignoring initial viewport for empty canvas %sx%s", width, height)
        return None

    scale_x = width / (TRIANGLE_WIDTH * padding)
    scale_y = height / (TRIANGLE_HEIGHT * padding)
    return Viewport(
        x=TRIANGLE_WIDTH / 2,
        y=TRIANGLE_HEIGHT / 2,
        scale=min(scale_x, scale_y),
    )


def to_screen(world: Point, viewport: Viewport, canvas_size: CanvasSize) -> Point:
    width, height = canvas_size
    return Point(
        width / 2 + (world.x - viewport.x) * viewport.scale,
        height / 2 - (world.y - viewport.y) * viewport.scale,
    )


def to_world(screen: Point, viewport: Viewport, canvas_size: CanvasSize) -> Point:
    width, height = canvas_size
    return Point(
        (screen.x - width / 2) / viewport.scale + viewport.x,
        -(screen.y - height / 2) / viewport.scale + viewport.y,
    )


def zoom_at(screen_point: Point, delta_wheel: float, viewport: Viewport,
            canvas_size: CanvasSize, zoom_base: float = 0.998) -> Viewport:
    """
    Zoom around a screen point so the world point under it stays put.

    The zoom is multiplicative, so equal and opposite wheel deltas cancel.
    Returns the input viewport unchanged if the new scale would not be a
    positive finite number.
    """
    width, height = canvas_size
    anchor = to_world(screen_point, viewport, canvas_size)

    try:
        new_scale = viewport.scale * math.pow(zoom_base, delta_wheel)
    except OverflowError:
        new_scale = math.inf
    if not math.isfinite(new_scale) or new_scale <= 0:
        log.debug("Rejecting zoom to scale %r", new_scale)
        return viewport

    # solve for the center that maps screen_point back onto anchor
    new_x = anchor.x - (screen_point.x - width / 2) / new_scale
    new_y = anchor.y + (screen_point.y - height / 2) / new_scale
    return Viewport(x=new_x, y=new_y, scale=new_scale)


def pan(dx_screen: float, dy_screen: float, viewport: Viewport) -> Viewport:
    """Shift the viewport by a screen-space drag delta."""
    return replace(
        viewport,
        x=viewport.x - dx_screen / viewport.scale,
        y=viewport.y + dy_screen / viewport.scale,
    )


def visible_world_rect(viewport: Viewport, canvas_size: CanvasSize) -> WorldRect:
    """World rectangle currently visible on the canvas."""
    width, height = canvas_size
    world_w = width / viewport.scale
    world_h = height / viewport.scale
    return WorldRect(
        x_min=viewport.x - world_w / 2,
        y_min=viewport.y - world_h / 2,
        x_max=viewport.x + world_w / 2,
        y_max=viewport.y + world_h / 2,
    )
