# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List
import json
import logging

log = logging.getLogger(__name__)


@dataclass
class Theme:
    name: str
    background: str
    primary: str
    secondary: str
    accent: str
    correct: str = "#22c55e"
    error: str = "#ef4444"
    text_muted: str = "#6b7280"


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="Monkeytype Dark",
        background="#0f1115",
        primary="#e5e7eb",
        secondary="#6b7280",
        accent="#eab308",
    ),
    Theme(
        name="Monkeytype Light",
        background="#fafafa",
        primary="#111111",
        secondary="#6b6b6b",
        accent="#eab308",
        correct="#15803d",
        error="#b91c1c",
        text_muted="#9ca3af",
    ),
    Theme(
        name="Terminal",
        background="#000000",
        primary="#ffffff",
        secondary="#00bcd4",
        accent="#00bcd4",
        correct="#4caf50",
        error="#f44336",
        text_muted="#9e9e9e",
    ),
]

DEFAULT_THEME_INDEX = 0
_BUILTIN_COUNT = len(THEMES)
_CUSTOM_FILE = Path("themes.json")

_REQUIRED = {"name", "background", "primary", "secondary", "accent"}
_OPTIONAL = ("correct", "error", "text_muted")


# -------- helpers --------
def _theme_from_dict(d: Dict[str, Any]) -> Theme:
    missing = _REQUIRED - set(d.keys())
    if missing:
        raise ValueError(f"Missing theme keys: {', '.join(sorted(missing))}")
    extra = {k: str(d[k]) for k in _OPTIONAL if k in d}
    return Theme(
        name=str(d["name"]),
        background=str(d["background"]),
        primary=str(d["primary"]),
        secondary=str(d["secondary"]),
        accent=str(d["accent"]),
        **extra,
    )


# -------- public API used by UI --------
def load_custom_themes(path: Path | None = None) -> int:
    """Append extra themes from themes.json (if present). Returns how many loaded."""
    p = path or _CUSTOM_FILE
    if not p.exists():
        return 0
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Failed to read custom themes from %s: %s", p, e)
        return 0
    if not isinstance(data, list):
        log.warning("Custom themes file %s is not a list", p)
        return 0
    loaded = 0
    for item in data:
        try:
            THEMES.append(_theme_from_dict(item))
            loaded += 1
        except (ValueError, AttributeError, TypeError) as e:
            log.warning("Skipping custom theme: %s", e)
    return loaded


def theme_index(name: str) -> int:
    for i, t in enumerate(THEMES):
        if t.name.lower() == (name or "").lower():
            return i
    return DEFAULT_THEME_INDEX


def reset_custom_themes() -> None:
    del THEMES[_BUILTIN_COUNT:]
