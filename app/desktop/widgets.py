from PySide6 import QtWidgets, QtCore


AMOUNT_LABELS = {100: "100", 1000: "1k", 10000: "10k"}


class ModeToggle(QtWidgets.QWidget):
    """
    Instant / Animate switch.
    """
    toggled = QtCore.Signal(bool)  # True = animate

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.check_animate = QtWidgets.QCheckBox("Animate")
        self.check_animate.setToolTip("Off: Instant, On: Animate 100 points step by step")
        self.check_animate.toggled.connect(self.toggled.emit)

        layout.addWidget(QtWidgets.QLabel("Instant"))
        layout.addWidget(self.check_animate)
        layout.addStretch(1)


class AmountSelector(QtWidgets.QGroupBox):
    """
    Radio buttons for the batch size.
    """
    amount_changed = QtCore.Signal(int)

    def __init__(self, sizes=(100, 1000, 10000), selected=100, parent=None):
        super().__init__("Amount", parent)
        layout = QtWidgets.QHBoxLayout(self)
        self.group = QtWidgets.QButtonGroup(self)
        self.radios = {}

        for n in sizes:
            radio = QtWidgets.QRadioButton(AMOUNT_LABELS.get(n, f"{n:,}"))
            radio.setToolTip(f"Generate {n} points")
            radio.setChecked(n == selected)
            radio.toggled.connect(lambda c, n=n: self.amount_changed.emit(n) if c else None)
            self.group.addButton(radio)
            self.radios[n] = radio
            layout.addWidget(radio)

    def set_selected(self, n):
        radio = self.radios.get(n)
        if radio is not None and not radio.isChecked():
            radio.blockSignals(True)
            radio.setChecked(True)
            radio.blockSignals(False)


class GenerationControls(QtWidgets.QWidget):
    """
    Sidebar widget: mode toggle, amount, generate/reset buttons and counter.
    """
    mode_toggled = QtCore.Signal(bool)
    amount_changed = QtCore.Signal(int)
    generate_clicked = QtCore.Signal()
    reset_clicked = QtCore.Signal()

    def __init__(self, sizes=(100, 1000, 10000), selected=100, parent=None):
        super().__init__(parent)
        self.layout = QtWidgets.QVBoxLayout(self)

        # Section 1: Info
        self.lbl_title = QtWidgets.QLabel("Sierpinski Triangle")
        self.lbl_title.setStyleSheet("font-weight: bold; font-size: 16px; color: #67e8f9;")
        self.lbl_count = QtWidgets.QLabel("Generated Points: 0")

        # Section 2: Options
        self.mode = ModeToggle()
        self.mode.toggled.connect(self.mode_toggled.emit)

        self.amount = AmountSelector(sizes, selected)
        self.amount.amount_changed.connect(self.amount_changed.emit)

        # Section 3: Actions
        self.btn_generate = QtWidgets.QPushButton(f"Generate {selected:,} Points")
        self.btn_generate.setMinimumWidth(180)
        self.btn_generate.clicked.connect(self.generate_clicked.emit)

        self.btn_reset = QtWidgets.QPushButton("Reset")
        self.btn_reset.clicked.connect(self.reset_clicked.emit)

        buttons = QtWidgets.QHBoxLayout()
        buttons.addWidget(self.btn_generate)
        buttons.addWidget(self.btn_reset)

        self.layout.addWidget(self.lbl_title)
        self.layout.addWidget(self.lbl_count)
        self.layout.addWidget(self.mode)
        self.layout.addWidget(self.amount)
        self.layout.addLayout(buttons)
        self.layout.addStretch(1)

    def apply_snapshot(self, snapshot, label):
        """Sync enabled states, label and counter with the session."""
        running = snapshot.is_running
        self.lbl_count.setText(f"Generated Points: {snapshot.point_count:,}")
        self.btn_generate.setText(label)
        self.btn_generate.setEnabled(not running)
        self.mode.setEnabled(not running)
        self.amount.setEnabled(not (running or snapshot.animation_mode))
        self.amount.set_selected(snapshot.batch_size)
