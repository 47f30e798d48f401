from __future__ import annotations
import html
from typing import List, Tuple

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout, QHBoxLayout, QSizePolicy, QProgressBar
import pyqtgraph as pg

from app.state import SessionSnapshot
from app.themes import Theme, THEMES, DEFAULT_THEME_INDEX
from services.typing_engine import CORRECT, INCORRECT
from utils.graph_helper import setup_wpm_plot, update_curve


def _rgba(hex_color: str, alpha: float) -> str:
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    try:
        r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return f"rgba(255,255,255,{alpha})"
    return f"rgba({r},{g},{b},{alpha})"


def wrap_lines(text: str, width: int) -> List[Tuple[int, int]]:
    """Split ``text`` into (start, end) spans of at most ``width`` code points,
    breaking after whitespace where possible. Spans cover the text exactly."""
    spans = []
    start = 0
    while start < len(text):
        end = min(len(text), start + width)
        if end < len(text):
            cut = end
            while cut > start and not text[cut - 1].isspace():
                cut -= 1
            if cut > start:
                end = cut
        spans.append((start, end))
        start = end
    return spans


class TypingPage(QWidget):
    """Typing page: live stats, the passage coloured per character, progress
    and a WPM sparkline. Only reads snapshots; never touches the session."""

    chars_per_line = 60
    visible_lines = 3

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.NoFocus)
        self.theme: Theme = THEMES[DEFAULT_THEME_INDEX]
        self._history_len = -1

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 24, 0, 24)
        root.setSpacing(20)

        row = QHBoxLayout()
        row.setSpacing(36)
        self.lblTimer = QLabel(self)
        self.lblWPM = QLabel(self)
        self.lblAcc = QLabel(self)
        self.lblStreak = QLabel(self)
        for name, lab in (("lblTimer", self.lblTimer), ("lblWPM", self.lblWPM),
                          ("lblAcc", self.lblAcc), ("lblStreak", self.lblStreak)):
            lab.setObjectName(name)
            lab.setAlignment(Qt.AlignCenter)
            row.addWidget(lab)
        root.addLayout(row)

        self.lblPassage = QLabel(self)
        self.lblPassage.setObjectName("lblPassage")
        self.lblPassage.setTextFormat(Qt.RichText)
        self.lblPassage.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.lblPassage.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblPassage.setMinimumHeight(150)
        self.lblPassage.setStyleSheet("font-family: monospace; font-size: 26px;")
        root.addWidget(self.lblPassage, stretch=1)

        self.lblSource = QLabel(self)
        self.lblSource.setObjectName("lblSource")
        self.lblSource.setAlignment(Qt.AlignRight)
        root.addWidget(self.lblSource)

        self.progress = QProgressBar(self)
        self.progress.setRange(0, 100)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(6)
        root.addWidget(self.progress)

        self.spark = pg.PlotWidget()
        self.spark.setFixedHeight(60)
        self.spark.setFocusPolicy(Qt.NoFocus)
        self._curve = setup_wpm_plot(self.spark, self.theme.accent, compact=True)
        root.addWidget(self.spark)

    def set_theme(self, theme: Theme):
        self.theme = theme
        self.setStyleSheet(
            f"""
            QLabel#lblPassage {{ color: {theme.text_muted}; }}
            QLabel#lblTimer, QLabel#lblAcc, QLabel#lblStreak, QLabel#lblSource {{ color: {theme.secondary}; }}
            QLabel#lblWPM {{ color: {theme.accent}; font-weight: bold; }}
            """
        )
        self._curve.setPen(pg.mkPen(theme.accent, width=2.5))

    def render(self, snap: SessionSnapshot):
        self.lblTimer.setText(f"{snap.elapsed:0.1f} s")
        self.lblWPM.setText(f"{snap.wpm:0.1f} WPM")
        self.lblAcc.setText(f"{snap.accuracy:0.1f} %")
        self.lblStreak.setText(f"streak {snap.streak}")
        self.lblSource.setText(snap.attribution)
        self.progress.setValue(int(min(100.0, snap.progress)))

        # the sparkline only changes once per second
        if len(snap.wpm_history) != self._history_len:
            self._history_len = len(snap.wpm_history)
            update_curve(self._curve, snap.wpm_history)

        self.lblPassage.setText(self.passage_html(snap))

    def passage_html(self, snap: SessionSnapshot) -> str:
        """Rich text for the lines around the caret. Overtyped input is shown
        in the error colour after the last line of the passage."""
        text = snap.passage
        caret = len(snap.input)
        lines = wrap_lines(text, self.chars_per_line) or [(0, 0)]

        current = len(lines) - 1
        for n, (start, end) in enumerate(lines):
            if caret < end:
                current = n
                break
        first = max(0, min(current - 1, len(lines) - self.visible_lines))
        shown = lines[first:first + self.visible_lines]

        rows = []
        for start, end in shown:
            row = "".join(self._char_html(snap, i) for i in range(start, end))
            if end == len(text):
                extra = snap.input[len(text):]
                if extra:
                    row += self._span(extra, self.theme.error, marked=True)
                if caret >= len(text):
                    row += self._caret()
            rows.append(row)
        return "<br>".join(rows)

    def _char_html(self, snap: SessionSnapshot, i: int) -> str:
        ch = snap.passage[i]
        state = snap.char_states[i] if i < len(snap.char_states) else None
        out = self._caret() if i == len(snap.input) else ""
        if state == CORRECT:
            return out + self._span(ch, self.theme.correct)
        if state == INCORRECT:
            # a missed space needs something visible to colour
            return out + self._span("·" if ch.isspace() else ch, self.theme.error, marked=True)
        return out + self._span(ch, self.theme.text_muted)

    def _span(self, txt: str, color: str, marked: bool = False) -> str:
        style = f"color:{color}"
        if marked:
            style += f";background:{_rgba(self.theme.error, 0.15)}"
        escaped = html.escape(txt).replace(" ", "&nbsp;")
        return f'<span style="{style}">{escaped}</span>'

    def _caret(self) -> str:
        return f'<span style="color:{self.theme.accent}">|</span>'
