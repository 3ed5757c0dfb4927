# tests/test_config.py
from __future__ import annotations

import json

from ganttz.utils import config


def test_missing_file_gives_defaults(tmp_path):
    assert config.load_settings(tmp_path / "settings.json") == config.defaults()


def test_partial_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"ui": {"theme": "dark"}}), encoding="utf-8")

    data = config.load_settings(path)

    assert data["ui"]["theme"] == "dark"
    assert data["ui"]["diagnostics_dock_visible"] is False
    assert data["recording"]["analysis_delay_ms"] == 2000


def test_corrupt_or_non_object_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert config.load_settings(path) == config.defaults()

    path.write_text("[1, 2]", encoding="utf-8")
    assert config.load_settings(path) == config.defaults()


def test_save_creates_parent_and_round_trips(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    data = config.defaults()
    data["timeline"]["min_bar_width"] = 0.05
    config.save_settings(data, path)
    assert config.load_settings(path)["timeline"]["min_bar_width"] == 0.05


def test_settings_file_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config.settings_file() == tmp_path / "ganttZ" / "settings.json"


def test_defaults_are_copies():
    data = config.defaults()
    data["ui"]["theme"] = "dark"
    assert config.defaults()["ui"]["theme"] == "default"
