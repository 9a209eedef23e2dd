"""
CPU rasterizer for the chaos game render surface.

Turns a RenderSnapshot into an RGBA numpy buffer. Points are projected with
one vectorized transform, so redraws stay cheap even with many points.
"""
import math

import numpy as np

from core.config import ChaosConfig
from core.geometry import VERTICES


def _rgba(hex_color, alpha=255):
    hex_color = hex_color.lstrip("#")
    return np.array(
        [int(hex_color[i:i + 2], 16) for i in (0, 2, 4)] + [alpha], dtype=np.uint8
    )


BACKGROUND = _rgba("#0f172a")  # slate-900
POINT_COLOR = _rgba("#ffffff")
VERTEX_COLOR = _rgba("#f87171")  # red-400
HIGHLIGHT_COLOR = _rgba("#a78bfa")  # violet-400
LINE_COLOR = _rgba("#ffff00")
LINE_ALPHA = 0.5
CURRENT_COLOR = _rgba("#facc15")  # yellow-400
NEW_COLOR = _rgba("#22d3ee")  # cyan-400

VERTEX_SIZE = 4
HIGHLIGHT_RADIUS = 4.0
MARKER_RADIUS = 2.5


def project(xy, viewport, width, height):
    """
    Map an (n, 2) array of world points to screen pixel coordinates.

    Returns two float arrays (sx, sy); y is flipped so world up is screen up.
    """
    xy = np.asarray(xy, dtype=np.float64).reshape(-1, 2)
    sx = width / 2 + (xy[:, 0] - viewport.x) * viewport.scale
    sy = height / 2 - (xy[:, 1] - viewport.y) * viewport.scale
    return sx, sy


def plot_points(buffer, sx, sy, color):
    """Set one pixel per point, discarding anything off the canvas."""
    height, width = buffer.shape[:2]
    ix = np.floor(sx).astype(np.int64)
    iy = np.floor(sy).astype(np.int64)
    inside = (ix >= 0) & (ix < width) & (iy >= 0) & (iy < height)
    buffer[iy[inside], ix[inside]] = color


def fill_square(buffer, cx, cy, size, color):
    height, width = buffer.shape[:2]
    half = size / 2
    x0 = max(0, int(math.floor(cx - half)))
    x1 = min(width, int(math.ceil(cx + half)))
    y0 = max(0, int(math.floor(cy - half)))
    y1 = min(height, int(math.ceil(cy + half)))
    if x0 < x1 and y0 < y1:
        buffer[y0:y1, x0:x1] = color


def fill_disc(buffer, cx, cy, radius, color):
    height, width = buffer.shape[:2]
    x0 = max(0, int(math.floor(cx - radius)))
    x1 = min(width, int(math.ceil(cx + radius)) + 1)
    y0 = max(0, int(math.floor(cy - radius)))
    y1 = min(height, int(math.ceil(cy + radius)) + 1)
    if x0 >= x1 or y0 >= y1:
        return
    yy, xx = np.ogrid[y0:y1, x0:x1]
    mask = (xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2 <= radius ** 2
    buffer[y0:y1, x0:x1][mask] = color


def blend_line(buffer, p0, p1, color, alpha):
    """Alpha-blend a one pixel wide line from p0 to p1 (screen coordinates)."""
    (x0, y0), (x1, y1) = p0, p1
    length = math.hypot(x1 - x0, y1 - y0)
    samples = max(2, int(math.ceil(length)) + 1)
    t = np.linspace(0.0, 1.0, samples)
    ix = np.floor(x0 + (x1 - x0) * t).astype(np.int64)
    iy = np.floor(y0 + (y1 - y0) * t).astype(np.int64)

    height, width = buffer.shape[:2]
    inside = (ix >= 0) & (ix < width) & (iy >= 0) & (iy < height)
    if not np.any(inside):
        return
    # dedupe so no pixel is blended twice
    flat = np.unique(iy[inside] * width + ix[inside])
    rows, cols = np.divmod(flat, width)

    under = buffer[rows, cols, :3].astype(np.float32)
    over = color[:3].astype(np.float32)
    buffer[rows, cols, :3] = np.round(under * (1 - alpha) + over * alpha).astype(np.uint8)


def rasterize(snapshot, config=None):
    """
    Draw a snapshot into a fresh (height, width, 4) uint8 RGBA buffer.

    Args:
        snapshot: RenderSnapshot published by AppState.
        config: ChaosConfig; only vertex_marker_max_scale is used.

    Returns:
        The pixel buffer. Empty (0x0) for a zero-area canvas.
    """
    config = config or ChaosConfig()
    width = max(0, int(snapshot.canvas_size[0]))
    height = max(0, int(snapshot.canvas_size[1]))
    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[:] = BACKGROUND
    viewport = snapshot.viewport
    if width == 0 or height == 0 or viewport is None or viewport.scale <= 0:
        return buffer

    def to_px(p):
        sx, sy = project([(p.x, p.y)], viewport, width, height)
        return float(sx[0]), float(sy[0])

    # Points
    if snapshot.point_count:
        sx, sy = project(snapshot.points_array(), viewport, width, height)
        plot_points(buffer, sx, sy, POINT_COLOR)

    # Vertices, for context when zoomed out
    if viewport.scale < config.vertex_marker_max_scale:
        for v in VERTICES:
            fill_square(buffer, *to_px(v), VERTEX_SIZE, VERTEX_COLOR)

    # Highlighted vertices from the animation trail
    for h in snapshot.highlights:
        fill_disc(buffer, *to_px(h.vertex), HIGHLIGHT_RADIUS, HIGHLIGHT_COLOR)

    # Current animation step
    step = snapshot.animation_step
    if step is not None:
        current = to_px(step.current_point)
        blend_line(buffer, current, to_px(step.target_vertex), LINE_COLOR, LINE_ALPHA)
        fill_disc(buffer, *current, MARKER_RADIUS, CURRENT_COLOR)
        fill_disc(buffer, *to_px(step.new_point), MARKER_RADIUS, NEW_COLOR)

    return buffer
