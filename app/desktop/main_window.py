"""
Sierpinski Chaos Game - Main Window

PySide6 main window with the chaos game viewport and generation controls.
"""

import logging

from PySide6 import QtWidgets, QtCore

from core.config import ChaosConfig
from core.state import AppState
from .qt_scheduler import QtScheduler
from .viewport import ChaosViewport
from .widgets import GenerationControls

log = logging.getLogger("sierpinski.app.window")


class MainWindow(QtWidgets.QMainWindow):
    """
    Main application window.

    Contains the chaos game viewport and a dock of Qt controls for the
    generation mode, batch size, generate and reset.
    """

    def __init__(self, config=None):
        super().__init__()
        self.setWindowTitle("Sierpinski Triangle")
        self.config = config or ChaosConfig()
        self.resize(*self.config.default_canvas_size)

        # Core State
        self.scheduler = QtScheduler(self)
        self.state = AppState(self.config, self.scheduler)

        # Build UI
        self._setup_ui()

        # Connect signals
        self._connect_signals()

        self.state.subscribe(self._on_snapshot)
        self._on_snapshot(self.state.snapshot())

    def _setup_ui(self):
        """Create the UI layout."""
        self.viewport = ChaosViewport(self.state)
        self.viewport.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Expanding
        )
        self.setCentralWidget(self.viewport)

        # Sidebar dock
        self.dock = QtWidgets.QDockWidget("Controls", self)
        self.dock.setAllowedAreas(
            QtCore.Qt.LeftDockWidgetArea | QtCore.Qt.RightDockWidgetArea
        )
        self.controls = GenerationControls(self.config.batch_sizes, self.state.batch_size)
        self.dock.setWidget(self.controls)
        self.addDockWidget(QtCore.Qt.RightDockWidgetArea, self.dock)

    def _connect_signals(self):
        """Connect UI signals to slots."""
        self.controls.mode_toggled.connect(self.state.set_animation_mode)
        self.controls.amount_changed.connect(self.state.set_batch_size)
        self.controls.generate_clicked.connect(self.state.generate)
        self.controls.reset_clicked.connect(self.state.reset)

    def _on_snapshot(self, snapshot):
        self.controls.apply_snapshot(snapshot, self.state.generate_label())

    # ─────────────────────────────────────────────────────────────────────────
    # UI Event Handlers
    # ─────────────────────────────────────────────────────────────────────────

    def keyPressEvent(self, event):
        """Handle keyboard shortcuts."""
        key = event.key()

        if key == QtCore.Qt.Key_G:
            self.state.generate()

        elif key == QtCore.Qt.Key_R:
            self.state.reset()

        elif key == QtCore.Qt.Key_A:
            # Toggle animation mode; the checkbox drives the state change
            if not self.state.is_running:
                self.controls.mode.check_animate.setChecked(not self.state.animation_mode)

        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        """Stop any pending animation tick before the window goes away."""
        log.debug("Closing main window")
        if self.state.animation is not None:
            self.state.animation.cancel()
        self.state.unsubscribe(self._on_snapshot)
        self.viewport.detach()
        super().closeEvent(event)
