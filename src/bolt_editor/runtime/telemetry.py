"""Editor logging on top of telelog.

Logging is a side channel for the editor: whatever the sink or profiler
does, buffer edits and key handling carry on. ``record_event`` and ``span``
therefore never let a telelog failure escape, while errors raised by the
code inside a span still propagate unchanged.

Console output is off unless ``BOLT_LOG_CONSOLE`` is set because the TUI
owns the terminal while the editor runs.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "BOLT_"
DEFAULT_LOGGER_NAME = "bolt_editor"
PRESETS = ("development", "production", "performance")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _preset_config(preset: str) -> Any:
    config = tl.Config()
    if preset == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif preset == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "bolt.log")
        config.with_buffering(True)
    elif preset == "performance":
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_file_output(_env("LOG_FILE") or "bolt-performance.log")
        config.with_buffering(True)
    else:
        raise ValueError(f"Unknown log preset '{preset}'.")
    config.with_profiling(True)
    return config


def _env_config() -> Any:
    """Build a config from ``BOLT_LOG_*`` variables."""

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    console = _env_flag("LOG_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    # spans are built on logger.profile
    config.with_profiling(True)
    return config


def configure(*, preset: Optional[str] = None) -> None:
    """Switch to a named preset, or back to the environment-driven config."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = _preset_config(preset) if preset else _env_config()
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger``; the editor logger by default."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _env_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method = getattr(logger, f"{level}_with")
    method(message, [(key, _stringify(value)) for key, value in payload.items()])


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record; sink failures are dropped."""

    try:
        payload = {"event": name, **(data or {})}
        _emit(get_logger(logger_name), level, f"event::{name}", payload)
    except Exception:
        pass


@dataclass(slots=True)
class SpanHandle:
    """Yielded by ``span``; ``logger`` is ``None`` when telemetry is unavailable."""

    logger: Optional[Any]
    span_name: str
    component_name: Optional[str] = None

    def fail(self, reason: str) -> None:
        if self.logger is None:
            return
        payload = {"span": self.span_name, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        try:
            _emit(self.logger, "error", "span::fail", payload)
        except Exception:
            pass


def _open_span(
    name: str,
    logger_name: Optional[str],
    component_name: Optional[str],
    metadata: Optional[Dict[str, Any]],
) -> tuple[SpanHandle, ExitStack]:
    """Enter profiling, component tracking and logger context for one span.

    On any telelog error, whatever was entered is unwound and a detached
    handle is returned with an empty stack.
    """

    stack = ExitStack()
    try:
        log = get_logger(logger_name)
        for key, value in (metadata or {}).items():
            log.add_context(key, _stringify(value))
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
    except Exception:
        _close_quietly(stack)
        return SpanHandle(None, name, component_name), ExitStack()
    return SpanHandle(log, name, component_name), stack


def _close_quietly(stack: ExitStack) -> None:
    try:
        stack.close()
    except Exception:
        pass


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the wrapped block, optionally tracked as a component.

    ``component=True`` reuses ``name`` as the component. ``metadata`` is set
    as logger context for the duration of the block. The block always runs,
    even when telelog cannot open the span.
    """

    component_name = name if component is True else component or None
    handle, stack = _open_span(name, logger_name, component_name, metadata)
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        _close_quietly(stack)


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
