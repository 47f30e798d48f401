# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import AppConfig, load_config
from app.errors import CorpusLoadError, EmptyCorpus
from app.session import TypingSession
from app.themes import load_custom_themes, theme_index
from ui.main_window import MainWindow
from utils.file_handler import load_corpus


def setup_logging(cfg: AppConfig) -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    if cfg.log_file:
        handlers.append(logging.FileHandler(cfg.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(None, "Typerpunk", f"{exctype.__name__}: {value}")
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    cfg = load_config()
    setup_logging(cfg)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Typerpunk")
    app.setOrganizationName("Typerpunk")

    try:
        corpus = load_corpus(cfg.texts_path)
    except (EmptyCorpus, CorpusLoadError) as e:
        logging.error("Cannot start: %s", e)
        QMessageBox.critical(None, "Typerpunk", f"No passages available.\n\n{e}")
        return 2

    load_custom_themes()
    session = TypingSession(corpus)

    win = MainWindow(session, theme_idx=theme_index(cfg.theme), tick_ms=cfg.tick_ms)
    win.show()
    win.setFocus()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
