import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HtmlSettings:
    page_width: float = 800
    default_font_size: float = 16
    default_line_height: float = 1.2
    thumbnail_scale: float = 0.3
    untitled_title: str = "Untitled HTML"


def _project_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


def default_settings_path() -> str:
    return os.path.join(_project_root(), "config", "html_settings.json")


def _coerce(name: str, value: Any, default: Any) -> Any:
    if isinstance(default, str):
        if isinstance(value, str) and value.strip():
            return value
    elif isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return value
    logger.warning("Ignoring invalid value for setting '%s': %r", name, value)
    return default


def settings_from_dict(raw: Dict[str, Any]) -> HtmlSettings:
    base = HtmlSettings()
    known = {f.name for f in fields(HtmlSettings)}
    updates: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Unknown setting '%s' ignored", key)
            continue
        updates[key] = _coerce(key, value, getattr(base, key))
    return replace(base, **updates)


def load_settings(path: Optional[str] = None) -> HtmlSettings:
    """Load converter settings from config/html_settings.json (or ``path``).

    A missing or unreadable file yields the built-in defaults.
    """
    settings_path = path or default_settings_path()
    if not os.path.exists(settings_path):
        if path:
            logger.warning("Settings file not found at %s, using defaults", settings_path)
        return HtmlSettings()

    try:
        with open(settings_path, "r", encoding="utf-8") as settings_file:
            raw = json.load(settings_file) or {}
    except (OSError, ValueError) as exc:
        logger.warning("Could not load settings from %s: %s", settings_path, exc)
        return HtmlSettings()

    if not isinstance(raw, dict):
        logger.warning("Settings file %s must contain a JSON object", settings_path)
        return HtmlSettings()
    return settings_from_dict(raw)
