import json
from pathlib import Path

import pytest

from app.config import CONFIG_ENV, AppConfig, config_path, load_config
from app.themes import (
    DEFAULT_THEME_INDEX,
    THEMES,
    load_custom_themes,
    reset_custom_themes,
    theme_index,
)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == AppConfig()

    def test_overrides(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"theme": "Terminal", "tick_ms": "250", "other": 1}), encoding="utf-8")
        cfg = load_config(path)
        assert cfg.theme == "Terminal"
        assert cfg.tick_ms == 250
        assert cfg.texts_path == AppConfig.texts_path

    def test_default_texts_path_does_not_depend_on_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = Path(AppConfig().texts_path)
        assert path.is_absolute()
        assert path.exists()

    def test_bad_values_keep_defaults(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"tick_ms": "fast"}), encoding="utf-8")
        assert load_config(path).tick_ms == AppConfig.tick_ms

    def test_non_positive_tick_is_reset(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"tick_ms": 0}), encoding="utf-8")
        assert load_config(path).tick_ms == AppConfig.tick_ms

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_unusable_file_gives_defaults(self, tmp_path, content):
        path = tmp_path / "cfg.json"
        path.write_text(content, encoding="utf-8")
        assert load_config(path) == AppConfig()

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"log_level": "DEBUG"}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV, str(path))
        assert config_path() == path
        assert load_config().log_level == "DEBUG"


class TestThemes:
    def test_lookup_is_case_insensitive(self):
        assert THEMES[theme_index("terminal")].name == "Terminal"

    def test_unknown_theme_falls_back(self):
        assert theme_index("no such theme") == DEFAULT_THEME_INDEX

    def test_custom_themes(self, tmp_path):
        path = tmp_path / "themes.json"
        path.write_text(json.dumps([
            {"name": "Mine", "background": "#000", "primary": "#fff",
             "secondary": "#888", "accent": "#f0f", "error": "#f00"},
            {"name": "Broken"},
        ]), encoding="utf-8")
        try:
            assert load_custom_themes(path) == 1
            theme = THEMES[theme_index("Mine")]
            assert theme.error == "#f00"
            assert theme.correct == "#22c55e"
        finally:
            reset_custom_themes()
        assert theme_index("Mine") == DEFAULT_THEME_INDEX
