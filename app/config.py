# app/config.py
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict
import json
import logging
import os

log = logging.getLogger(__name__)

CONFIG_ENV = "TYPERPUNK_CONFIG"
_DEFAULT_FILE = Path("typerpunk.json")
_BUNDLED_TEXTS = Path(__file__).resolve().parent.parent / "assets" / "texts.json"


@dataclass
class AppConfig:
    texts_path: str = str(_BUNDLED_TEXTS)
    theme: str = "Monkeytype Dark"
    log_level: str = "INFO"
    log_file: str = "typerpunk.log"
    tick_ms: int = 100


def config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV) or _DEFAULT_FILE)


def _from_dict(d: Dict[str, Any]) -> AppConfig:
    cfg = AppConfig()
    known = {f.name for f in fields(AppConfig)}
    for key, value in d.items():
        if key not in known:
            log.debug("Ignoring unknown config key %r", key)
            continue
        default = getattr(cfg, key)
        try:
            setattr(cfg, key, type(default)(value))
        except (TypeError, ValueError):
            log.warning("Bad value for %s: %r (keeping %r)", key, value, default)
    if cfg.tick_ms <= 0:
        cfg.tick_ms = AppConfig.tick_ms
    return cfg


def load_config(path: Path | str | None = None) -> AppConfig:
    """Load settings from JSON; a missing or corrupt file gives the defaults."""
    p = Path(path) if path is not None else config_path()
    if not p.exists():
        return AppConfig()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Could not read config %s: %s", p, e)
        return AppConfig()
    if not isinstance(data, dict):
        log.warning("Config %s is not a JSON object, using defaults", p)
        return AppConfig()
    return _from_dict(data)
