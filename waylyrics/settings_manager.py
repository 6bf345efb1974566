from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os


def get_settings_path() -> Path:
    """Return ~/.config/waylyrics/settings.json (honours XDG_CONFIG_HOME)."""
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return Path(base) / "waylyrics" / "settings.json"


def default_settings() -> Dict[str, Any]:
    return {
        "player": "musicfox",
        "provider": "netease",  # or "lrclib"
        "interval": 0.2,  # seconds between status lines
        "fetch_timeout": 3.0,
        "player_timeout": 1.0,
        "default_text": "♫",
        "log_level": "WARNING",
        "show_status": True,
        "show_title": True,
        "show_position": True,
        "show_lyric": True,
        "show_translate_lyric": True,
        "show_phonetic": False,
    }


def read_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load settings from JSON, merged onto the defaults.

    Unknown keys are kept. A missing or unreadable file yields the defaults.
    """
    path = path or get_settings_path()
    settings = default_settings()
    if not path.exists():
        return settings
    try:
        values = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logging.warning(f"Ignoring unreadable settings file {path}: {e}")
        return settings
    if not isinstance(values, dict):
        logging.warning(f"Ignoring settings file {path}: expected a JSON object")
        return settings
    settings.update(values)
    return settings


def setup_logging(level: str = "WARNING") -> None:
    # stdout carries the status line, so logs go to stderr
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logging.basicConfig(level=numeric, format='%(levelname)s: %(message)s')
