"""Executable Textual app that hosts the editor session."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from bolt_editor.config import ConfigError, EditorConfig, load_config
from bolt_editor.runtime import telemetry
from bolt_editor.session import EditorSession
from bolt_editor.view import Frame, Size

from .controller import TextualEditorAdapter, TextualUIHooks


def frame_to_text(frame: Frame) -> Text:
    """Render frame rows, drawing the cursor cell in reverse video."""

    text = Text(no_wrap=True, overflow="crop")
    for index, row in enumerate(frame.rows):
        if index:
            text.append("\n")
        if index != frame.cursor.line:
            text.append(row)
            continue
        column = frame.cursor.column
        text.append(row[:column])
        text.append(row[column : column + 1] or " ", style="reverse")
        text.append(row[column + 1 :])
    return text


class BoltApp(App[None], inherit_bindings=False):
    """Full-screen editor: text area, status bar, and message bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0;
	}

	#status-line {
		height: 1;
	}

	#message-line {
		height: 1;
	}
	"""

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    @property
    def editor_config(self) -> EditorConfig:
        return self.session.config

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        if self._status_widget is not None:
            config = self.editor_config
            self._status_widget.styles.color = config.status_line_fg_color
            self._status_widget.styles.background = config.status_line_bg_color
        hooks = TextualUIHooks(
            draw=self._draw,
            viewport_size=self._viewport_size,
            quit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        telemetry.record_event(
            "editor.start",
            data={"source": self.session.buffer.source_identity or "[No Name]"},
        )
        self.call_after_refresh(self._redraw)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.call_after_refresh(self._redraw)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        result = self.adapter.handle_textual_key(
            event.key, character=event.character, is_printable=event.is_printable
        )
        if result is not None:
            event.stop()
            event.prevent_default()

    def _redraw(self) -> None:
        if self.adapter:
            self.adapter.refresh()

    def _viewport_size(self) -> Size:
        if self._buffer_widget is None:
            return Size(width=1, height=1)
        content = self._buffer_widget.content_size
        return Size(width=content.width, height=content.height)

    def _draw(self, frame: Frame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(frame_to_text(frame))
        if self._status_widget:
            self._status_widget.update(Text(frame.status_bar, no_wrap=True))
        if self._message_widget:
            self._message_widget.update(Text(frame.message, no_wrap=True))

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("bolt_editor.textual").debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="bolt", description="Minimal text editor.")
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config file (default: $BOLT_CONFIG)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: configured from BOLT_LOG_* variables)",
    )
    args = parser.parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        args.editor_config = load_config(args.config)
    except ConfigError as exc:
        parser.error(f"{exc.path}: {exc}")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    session = EditorSession.from_path(args.file, config=args.editor_config)
    BoltApp(session).run()
    telemetry.record_event("editor.exit", data={"dirty": session.buffer.is_dirty()})


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
