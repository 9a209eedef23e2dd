"""
Chaos game viewport widget.

Render surface for the session: redraws from every published snapshot and
forwards wheel, drag and resize input to the session's input adapter.
"""

import logging

from PySide6 import QtCore
from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent

from core.geometry import Point
from .raster import rasterize
from .raster_widget import BufferWidget

log = logging.getLogger("sierpinski.app.viewport")

HINT_TEXT = "Use mouse wheel to zoom and drag to pan."


class ChaosViewport(BufferWidget):
    """
    A PySide6 widget that draws the chaos game points.

    Holds the latest RenderSnapshot and rasterizes it on paint.
    """

    # Signal emitted with the point count whenever a snapshot arrives
    points_changed = QtCore.Signal(int)

    def __init__(self, state, parent=None):
        super().__init__(parent)
        self.state = state
        self.snapshot = state.snapshot()

        # Drag state
        self._dragging = False
        self._last_pos = QtCore.QPointF()

        self.setMinimumSize(200, 150)
        self.setCursor(Qt.SizeAllCursor)
        self.setAccessibleName("Sierpinski triangle canvas")

        state.subscribe(self._on_snapshot)

    def detach(self):
        """Stop following the session."""
        self.state.unsubscribe(self._on_snapshot)

    def _on_snapshot(self, snapshot):
        self.snapshot = snapshot
        self.points_changed.emit(snapshot.point_count)
        self.update()

    def paintBuffer(self):
        """Rasterize the current snapshot."""
        try:
            self.buffer = rasterize(self.snapshot, self.state.config)
        except Exception:
            log.exception("Render error")
            self.buffer = None
            return
        self.render_text(12, self.height() - 12, HINT_TEXT)

    def resizeBuffer(self, width, height):
        self.state.on_resize(width, height)

    # ─────────────────────────────────────────────────────────────────────────
    # Mouse Event Handling
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._dragging = True
            self._last_pos = event.position()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._dragging = False
        super().mouseReleaseEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self._dragging:
            pos = event.position()
            dx = pos.x() - self._last_pos.x()
            dy = pos.y() - self._last_pos.y()
            self._last_pos = pos
            self.state.on_drag_delta(dx, dy)
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        self._dragging = False
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        # Qt reports positive angles when scrolling away from the user
        delta = -event.angleDelta().y()
        if delta:
            pos = event.position()
            self.state.on_wheel(Point(pos.x(), pos.y()), delta)
        event.accept()

    def keyPressEvent(self, event):
        """Forward key events to parent for handling."""
        event.ignore()
