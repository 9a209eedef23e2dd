"""
Buffer Widget Base Class for PySide6.

Provides an abstract base class for widgets that render into a numpy RGBA
buffer on the CPU and blit it with QPainter.
"""

from abc import ABCMeta, abstractmethod
from typing import List, Tuple

import numpy as np
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QImage, QPainter
from PySide6.QtWidgets import QWidget


class QWidgetABCMeta(type(QWidget), ABCMeta):
    """Metaclass combining ABCMeta and QWidget's metaclass."""
    pass


class BufferWidget(QWidget, metaclass=QWidgetABCMeta):
    """
    Abstract base class for buffer-blitting widgets.

    Subclasses must implement paintBuffer() and resizeBuffer().

    The rendering approach:
    1. Subclass fills self.buffer in paintBuffer()
    2. This class blits self.buffer onto the widget using QPainter
    3. Queued text items are drawn on top

    Attributes:
        buffer (np.ndarray): RGBA pixel buffer to be blitted. Shape: (height, width, 4).
        text_buffer (list): Queued text items to render.
    """

    def __init__(self, parent=None):
        """Initialize the buffer widget."""
        super().__init__(parent)
        self.buffer = None
        self.text_buffer: List[Tuple[int, int, str, int, str, QColor]] = []

        # Enable keyboard focus for key events
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)

    @abstractmethod
    def paintBuffer(self) -> None:
        """
        Render content into self.buffer.

        Called every paint event. The buffer should be a numpy array of shape
        (height, width, 4) with dtype uint8.
        """
        pass

    @abstractmethod
    def resizeBuffer(self, width: int, height: int) -> None:
        """
        Handle resize of the drawing area.

        Args:
            width: New widget width in pixels.
            height: New widget height in pixels.
        """
        pass

    def paintEvent(self, event) -> None:
        """Handle Qt paint event."""
        self.paintBuffer()

        painter = QPainter(self)

        if self.buffer is not None and self.buffer.size:
            self._blit_buffer(painter)

        # Render text overlays
        for x, y, text, size, font, colour in self.text_buffer:
            painter.setPen(colour)
            painter.setFont(QFont(font, size))
            painter.drawText(x, y, text)
        self.text_buffer.clear()

        painter.end()

    def resizeEvent(self, event) -> None:
        """Handle Qt resize event."""
        size = event.size()
        if size.width() > 0 and size.height() > 0:
            self.resizeBuffer(size.width(), size.height())
        super().resizeEvent(event)

    def render_text(
        self,
        x: int,
        y: int,
        text: str,
        size: int = 10,
        font: str = "Arial",
        colour: QColor = None,
    ) -> None:
        """
        Queue text to be rendered on the widget for the next paint.

        Args:
            x: X coordinate.
            y: Y coordinate.
            text: Text string to render.
            size: Font size.
            font: Font family name.
            colour: Text color (default: light slate).
        """
        if colour is None:
            colour = QColor(148, 163, 184)
        self.text_buffer.append((x, y, text, size, font, colour))

    def _blit_buffer(self, painter: QPainter) -> None:
        """Blit the pixel buffer onto the widget."""
        buffer = np.ascontiguousarray(self.buffer)
        height, width = buffer.shape[:2]

        # Disable smoothing for pixel-perfect blit
        painter.setRenderHints(
            QPainter.RenderHint.Antialiasing | QPainter.RenderHint.SmoothPixmapTransform,
            False,
        )

        image = QImage(
            buffer.tobytes(),
            width,
            height,
            width * 4,
            QImage.Format.Format_RGBA8888,
        )

        painter.drawImage(self.rect(), image)
