# ui/main_window.py
import logging

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QStackedWidget
from PySide6.QtCore import Qt, QTimer

from app.errors import InvalidText
from app.session import TypingSession
from app.state import State
from app.themes import THEMES, DEFAULT_THEME_INDEX
from core.keys import classify_event
from ui.main_menu import MainMenu
from ui.session_summary import SessionSummary
from ui.typing_page import TypingPage

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Host window. Key events are classified and handed to the session; the
    visible page is redrawn from a fresh snapshot after every event and on
    every tick."""

    def __init__(self, session: TypingSession, theme_idx: int = DEFAULT_THEME_INDEX, tick_ms: int = 100):
        super().__init__()
        self.session = session
        self.setWindowTitle("Typerpunk")
        self.resize(1100, 680)
        self.setFocusPolicy(Qt.StrongFocus)

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 24, 16, 16)

        self.pages = QStackedWidget(root)
        self.pages.setFocusPolicy(Qt.NoFocus)
        self.menu_page = MainMenu(self.pages)
        self.typing_page = TypingPage(self.pages)
        self.end_page = SessionSummary(self.pages)
        self._page_for = {
            State.MAIN_MENU: self.menu_page,
            State.TYPING: self.typing_page,
            State.END_SCREEN: self.end_page,
        }
        for page in self._page_for.values():
            self.pages.addWidget(page)
        root_v.addWidget(self.pages, 1)
        self.setCentralWidget(root)
        self.menuBar().setVisible(False)

        self._apply_theme(theme_idx)

        # elapsed time and the WPM history are computed on demand; this only
        # drives sampling and repaint
        self._tick = QTimer(self)
        self._tick.setInterval(tick_ms)
        self._tick.timeout.connect(self._on_tick)
        self._tick.start()

        self.refresh()

    # ---------------- Theme ----------------
    def _apply_theme(self, idx):
        theme = THEMES[idx]
        self.theme_idx = idx
        self.typing_page.set_theme(theme)
        self.end_page.set_theme(theme)
        self.setStyleSheet(
            f"""
            QWidget {{ background: {theme.background}; color: {theme.primary}; }}
            QLabel#lblTitle {{ color: {theme.accent}; }}
            QLabel#lblCategory {{ color: {theme.secondary}; }}
            QProgressBar {{ border: none; background: {theme.secondary}; }}
            QProgressBar::chunk {{ background: {theme.accent}; }}
            """
        )

    # ---------------- Input ----------------
    def keyPressEvent(self, ev):
        cmd = classify_event(ev)
        if cmd is None:
            return super().keyPressEvent(ev)
        try:
            self.session.dispatch(cmd)
        except InvalidText as e:
            log.warning("Rejected input: %s", e)
        ev.accept()
        if self.session.should_exit:
            self.close()
            return
        self.refresh()

    # ---------------- Rendering ----------------
    def _on_tick(self):
        self.session.tick()
        if self.session.state is not State.MAIN_MENU:
            self.refresh()

    def refresh(self):
        snap = self.session.snapshot()
        page = self._page_for[snap.state]
        if self.pages.currentWidget() is not page:
            self.pages.setCurrentWidget(page)
        page.render(snap)
        if snap.state is State.END_SCREEN:
            self.setWindowTitle(f"Typerpunk | {snap.wpm:.1f} WPM")
        else:
            self.setWindowTitle("Typerpunk")
