# Rev 0.1.0
# ganttz/utils/config.py
from __future__ import annotations
import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_setup import get_logger
from .paths import config_dir

_log = get_logger("config")

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1200,
        "height": 780,
    },
    "ui": {
        "theme": "default",
        "diagnostics_dock_visible": False,
    },
    "recording": {
        "analysis_delay_ms": 2000,
    },
    "timeline": {
        "min_bar_width": 0.02,
    },
}


def settings_file() -> Path:
    return config_dir() / "settings.json"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def defaults() -> Dict[str, Any]:
    return copy.deepcopy(_DEFAULTS)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    if not path.exists():
        return defaults()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _log.warning("Settings at %s unreadable (%s); using defaults", path, exc)
        return defaults()
    if not isinstance(data, dict):
        _log.warning("Settings at %s is not an object; using defaults", path)
        return defaults()
    return _merge(_DEFAULTS, data)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
