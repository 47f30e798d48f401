# ui/main_menu.py
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel

from app.state import SessionSnapshot


class MainMenu(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.NoFocus)

        root = QVBoxLayout(self)
        root.addStretch(1)

        self.lblTitle = QLabel("Welcome to Typerpunk!", self)
        self.lblTitle.setObjectName("lblTitle")
        self.lblTitle.setStyleSheet("font-size: 36px; font-weight: bold;")
        self.lblCategory = QLabel("", self)
        self.lblCategory.setObjectName("lblCategory")
        self.lblHint = QLabel("Press Enter to start  ·  Esc to quit", self)
        self.lblHint.setObjectName("lblHint")

        for lab in (self.lblTitle, self.lblCategory, self.lblHint):
            lab.setAlignment(Qt.AlignCenter)
            root.addWidget(lab)
        root.addStretch(1)

    def render(self, snap: SessionSnapshot):
        cat = snap.selected_category or "Random"
        self.lblCategory.setText(f"Category: {cat}  (←/→ to change)")
