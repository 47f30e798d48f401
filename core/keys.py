# core/keys.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from PySide6.QtCore import Qt


class Command(Enum):
    CHARACTER = "character"
    BACKSPACE = "backspace"
    WORD_DELETE = "word_delete"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    CATEGORY_LEFT = "category_left"
    CATEGORY_RIGHT = "category_right"


@dataclass(frozen=True)
class KeyCommand:
    kind: Command
    char: str = ""
    # ctrl/alt/meta held on a printable key: the engine must not insert it
    modified: bool = False


_EDIT_MODIFIERS = (
    Qt.KeyboardModifier.ControlModifier
    | Qt.KeyboardModifier.AltModifier
    | Qt.KeyboardModifier.MetaModifier
)
_WORD_DELETE_MODIFIERS = Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.AltModifier

# terminals and remote sessions that cannot send Ctrl+Backspace fall back to these
_WORD_DELETE_KEYS = (Qt.Key.Key_W.value, Qt.Key.Key_H.value)

_FIXED = {
    Qt.Key.Key_Return.value: Command.CONFIRM,
    Qt.Key.Key_Enter.value: Command.CONFIRM,
    Qt.Key.Key_Escape.value: Command.CANCEL,
    Qt.Key.Key_Left.value: Command.CATEGORY_LEFT,
    Qt.Key.Key_Right.value: Command.CATEGORY_RIGHT,
}


def _key_code(key) -> int:
    return int(getattr(key, "value", key))


def _has(modifiers, flag) -> bool:
    return bool(modifiers & flag)


def classify_key(key, text: str, modifiers=Qt.KeyboardModifier.NoModifier) -> KeyCommand | None:
    """
    Map a raw key event (Qt key code, produced text, modifier flags) onto the
    closed set of engine commands. Returns None for keys the engine ignores.
    Pure: no session state is consulted.
    """
    code = _key_code(key)
    if code in _FIXED:
        return KeyCommand(_FIXED[code])

    if code == Qt.Key.Key_Backspace.value:
        if _has(modifiers, _WORD_DELETE_MODIFIERS):
            return KeyCommand(Command.WORD_DELETE)
        return KeyCommand(Command.BACKSPACE)

    if code in _WORD_DELETE_KEYS and _has(modifiers, Qt.KeyboardModifier.ControlModifier):
        return KeyCommand(Command.WORD_DELETE)

    if code == Qt.Key.Key_Tab.value:
        return None

    modified = _has(modifiers, _EDIT_MODIFIERS)
    text = text or ""
    if len(text) == 1 and text >= " ":
        return KeyCommand(Command.CHARACTER, char=text, modified=modified)
    return None


def classify_event(ev) -> KeyCommand | None:
    """Classify a QKeyEvent."""
    return classify_key(ev.key(), ev.text(), ev.modifiers())
