# Rev 0.1.0

"""Paths and XDG helpers (Rev 0.1.0)
- Follows the XDG Base Directory layout
- Logs live under the state dir, settings under the config dir
- Nothing task-related is written to disk; the store is session-only
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "ganttZ"


def _xdg(var: str, fallback: Path) -> Path:
    return Path(os.environ.get(var, fallback)).expanduser()


def state_dir() -> Path:
    return _xdg("XDG_STATE_HOME", Path.home() / ".local" / "state") / APP_NAME


def logs_dir() -> Path:
    return state_dir() / "logs"


def config_dir() -> Path:
    return _xdg("XDG_CONFIG_HOME", Path.home() / ".config") / APP_NAME


def ensure_dirs() -> None:
    for p in (state_dir(), logs_dir(), config_dir()):
        p.mkdir(parents=True, exist_ok=True)
