# ui/session_summary.py
from __future__ import annotations
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel
import pyqtgraph as pg

from app.state import SessionSnapshot
from utils.graph_helper import setup_wpm_plot, update_curve


class SessionSummary(QWidget):
    """
    End screen: final stats and the per-second WPM history.
    Accuracy is the keystroke figure (mistakes stay counted after fixes);
    the final-text accuracy is shown next to it.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.NoFocus)

        root = QVBoxLayout(self)
        title = QLabel("Passage complete", self)
        title.setObjectName("lblTitle")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 28px; font-weight: bold;")
        root.addWidget(title)

        grid = QGridLayout()
        self._values: dict[str, QLabel] = {}
        rows = [
            ("wpm", "WPM"),
            ("accuracy", "Accuracy"),
            ("final", "Final text accuracy"),
            ("time", "Time"),
            ("streak", "Best streak"),
            ("mistakes", "Mistakes"),
            ("words", "Correct words"),
        ]
        for i, (key, label) in enumerate(rows):
            grid.addWidget(QLabel(label + ":", self), i, 0, alignment=Qt.AlignRight)
            value = QLabel("", self)
            value.setObjectName(f"val_{key}")
            grid.addWidget(value, i, 1)
            self._values[key] = value
        root.addLayout(grid)

        self.lblSource = QLabel("", self)
        self.lblSource.setObjectName("lblSource")
        self.lblSource.setAlignment(Qt.AlignCenter)
        self.lblSource.setWordWrap(True)
        root.addWidget(self.lblSource)

        self.plot = pg.PlotWidget()
        self.plot.setFocusPolicy(Qt.NoFocus)
        self._curve = setup_wpm_plot(self.plot, "#c8c8ff")
        root.addWidget(self.plot, stretch=1)

        hint = QLabel("Enter: next passage  ·  Esc: main menu", self)
        hint.setAlignment(Qt.AlignCenter)
        root.addWidget(hint)

    def set_theme(self, theme):
        self._curve.setPen(pg.mkPen(getattr(theme, "accent", "#c8c8ff"), width=2))

    def render(self, snap: SessionSnapshot):
        self._values["wpm"].setText(f"{snap.wpm:.1f}")
        self._values["accuracy"].setText(f"{snap.accuracy:.1f}%")
        self._values["final"].setText(f"{snap.instant_accuracy:.1f}%")
        self._values["time"].setText(f"{snap.elapsed:.1f}s")
        self._values["streak"].setText(str(snap.best_streak))
        self._values["mistakes"].setText(str(snap.mistakes))
        self._values["words"].setText(f"{snap.correct_words}/{snap.total_words}")
        self.lblSource.setText(snap.attribution)
        update_curve(self._curve, snap.wpm_history)

    def value_text(self, key: str) -> str:
        return self._values[key].text()
