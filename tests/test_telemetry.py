from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Tuple

import pytest

from bolt_editor.buffer import Position
from bolt_editor.runtime import telemetry
from bolt_editor.session import CharKey, EditorSession
from bolt_editor.view import Size

from support import make_buffer, row_texts


class RecordingLogger:
    """Logger double; names in ``broken`` raise ``OSError`` when called."""

    def __init__(self, *broken: str) -> None:
        self.broken = set(broken)
        self.calls: List[Tuple[str, object]] = []

    def _check(self, method: str, arg: object) -> None:
        self.calls.append((method, arg))
        if method in self.broken:
            raise OSError("log sink unavailable")

    def add_context(self, key: str, value: str) -> None:
        self._check("add_context", key)

    def remove_context(self, key: str) -> None:
        self._check("remove_context", key)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self._check("track_component", name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self._check("profile", name)
        yield
        self._check("profile_end", name)

    def info_with(self, message: str, pairs: object) -> None:
        self._check("info_with", message)

    def error_with(self, message: str, pairs: object) -> None:
        self._check("error_with", message)


def use_logger(monkeypatch: pytest.MonkeyPatch, logger: RecordingLogger) -> None:
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)


def test_span_enters_and_unwinds_telelog_contexts(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = RecordingLogger()
    use_logger(monkeypatch, logger)

    with telemetry.span("op", component=True, metadata={"line": 3}) as handle:
        assert handle.logger is logger

    assert [method for method, _ in logger.calls] == [
        "add_context",
        "track_component",
        "profile",
        "profile_end",
        "remove_context",
    ]


@pytest.mark.parametrize(
    "broken", ["profile", "track_component", "add_context", "profile_end"]
)
def test_insert_applies_when_telemetry_fails(
    monkeypatch: pytest.MonkeyPatch, broken: str
) -> None:
    use_logger(monkeypatch, RecordingLogger(broken))
    buffer = make_buffer()

    buffer.insert(Position(), "a")

    assert row_texts(buffer) == ["a"]
    assert buffer.is_dirty() is True


def test_context_is_removed_when_profile_fails(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = RecordingLogger("profile")
    use_logger(monkeypatch, logger)

    with telemetry.span("op", metadata={"key": "value"}) as handle:
        assert handle.logger is None

    assert ("remove_context", "key") in logger.calls


def test_remove_context_failure_is_dropped(monkeypatch: pytest.MonkeyPatch) -> None:
    use_logger(monkeypatch, RecordingLogger("remove_context"))
    buffer = make_buffer("ab")

    buffer.delete(Position(column=0, line=0))

    assert row_texts(buffer) == ["b"]


def test_missing_logger_still_runs_span_body(monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable(name: str | None = None) -> RecordingLogger:
        raise OSError("log sink unavailable")

    monkeypatch.setattr(telemetry, "get_logger", unavailable)
    ran: List[bool] = []

    with telemetry.span("op"):
        ran.append(True)
    telemetry.record_event("ignored")

    assert ran == [True]


def test_key_handling_survives_broken_profiler(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    use_logger(monkeypatch, RecordingLogger("profile", "info_with"))
    session = EditorSession(make_buffer())

    session.handle_key(CharKey("z"), Size(width=10, height=4))

    assert row_texts(session.buffer) == ["z"]
    assert session.cursor == Position(column=1, line=0)


def test_errors_inside_span_propagate_and_are_logged(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = RecordingLogger("error_with")
    use_logger(monkeypatch, logger)

    with pytest.raises(KeyError):
        with telemetry.span("op"):
            raise KeyError("boom")

    assert ("error_with", "span::fail") in logger.calls
    assert ("profile", "op") in logger.calls


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
