"""Editor presentation and behaviour settings loaded from JSON."""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from textual.color import Color, ColorParseError

from bolt_editor.view import PageDownPolicy

CONFIG_ENV = "BOLT_CONFIG"

DEFAULT_STATUS_FG = Color(50, 50, 50)
DEFAULT_STATUS_BG = Color(239, 239, 239)
DEFAULT_STATUS_TIMEOUT = 5.0


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or understood."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True, slots=True)
class EditorConfig:
    status_line_fg_color: Color = DEFAULT_STATUS_FG
    status_line_bg_color: Color = DEFAULT_STATUS_BG
    page_down_policy: PageDownPolicy = PageDownPolicy.WRAP
    status_message_timeout: float = DEFAULT_STATUS_TIMEOUT

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], *, path: str | None = None
    ) -> "EditorConfig":
        """Build a config from camelCase JSON keys; unknown keys are ignored."""

        defaults = cls()
        return cls(
            status_line_fg_color=_color(
                raw, "statusLineFgColor", defaults.status_line_fg_color, path
            ),
            status_line_bg_color=_color(
                raw, "statusLineBgColor", defaults.status_line_bg_color, path
            ),
            page_down_policy=_page_down_policy(raw, path),
            status_message_timeout=_timeout(raw, path),
        )


def _color(
    raw: Mapping[str, Any], key: str, default: Color, path: str | None
) -> Color:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a color string", path=path)
    try:
        return Color.parse(value)
    except ColorParseError as exc:
        raise ConfigError(f"'{key}': invalid color {value!r}", path=path) from exc


def _page_down_policy(raw: Mapping[str, Any], path: str | None) -> PageDownPolicy:
    value = raw.get("pageDownPolicy", PageDownPolicy.WRAP.value)
    try:
        return PageDownPolicy(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(policy.value for policy in PageDownPolicy)
        raise ConfigError(
            f"'pageDownPolicy' must be one of {choices}, got {value!r}", path=path
        ) from exc


def _timeout(raw: Mapping[str, Any], path: str | None) -> float:
    value = raw.get("statusMessageTimeout", DEFAULT_STATUS_TIMEOUT)
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or (isinstance(value, float) and not math.isfinite(value))
        or value < 0
    ):
        raise ConfigError(
            "'statusMessageTimeout' must be a finite non-negative number", path=path
        )
    return float(value)


def load_config(path: Optional[str] = None) -> EditorConfig:
    """Load settings from ``path`` or ``$BOLT_CONFIG``; defaults when neither is set."""

    path = path or os.environ.get(CONFIG_ENV) or None
    if path is None:
        return EditorConfig()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config: {exc}", path=path) from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON: {exc}", path=path) from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a JSON object", path=path)
    return EditorConfig.from_mapping(raw, path=path)


__all__ = ["CONFIG_ENV", "ConfigError", "EditorConfig", "load_config"]
