"""Display sinks: where the kernel's display operations go.

A sink receives display_data (create), update_display_data (replace) and
stream (plain text) operations in emission order. The host's message
transport is one implementation; this module provides a recording sink and a
terminal sink built on rich.
"""

import sys
from typing import Protocol

import structlog
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from ai_kernel.display.models import (
    DisplayContent,
    DisplayOperation,
    StreamContent,
    StreamName,
)

logger = structlog.get_logger(__name__)


class DisplayProtocolError(Exception):
    """Raised when display operations violate create-before-update ordering."""

    pass


class DisplaySink(Protocol):
    """Receiver for the kernel's display operations."""

    def display_data(self, content: DisplayContent) -> None:
        """Create a display addressed by content.display_id."""
        ...

    def update_display_data(self, content: DisplayContent) -> None:
        """Replace the content of an existing display."""
        ...

    def stream(self, name: StreamName, text: str) -> None:
        """Write plain text to stdout or stderr."""
        ...


class RecordingSink:
    """Sink that records every operation in order.

    Operations are checked against earlier creates: creating a display id
    twice, or updating one that was never created, raises
    DisplayProtocolError.

    Example:
        >>> sink = RecordingSink()
        >>> sink.stream("stdout", "hi\\n")
        >>> sink.stream_text("stdout")
        'hi\\n'
    """

    def __init__(self) -> None:
        self.operations: list[DisplayOperation] = []
        self._displays: dict[str, DisplayContent] = {}

    def display_data(self, content: DisplayContent) -> None:
        display_id = content.display_id
        if display_id is not None:
            if display_id in self._displays:
                raise DisplayProtocolError(f"Display id created twice: {display_id!r}")
            self._displays[display_id] = content
        self.operations.append(DisplayOperation(kind="display_data", display=content))

    def update_display_data(self, content: DisplayContent) -> None:
        display_id = content.display_id
        if display_id is None or display_id not in self._displays:
            raise DisplayProtocolError(f"Update for unknown display id: {display_id!r}")
        self._displays[display_id] = content
        self.operations.append(DisplayOperation(kind="update_display_data", display=content))

    def stream(self, name: StreamName, text: str) -> None:
        self.operations.append(
            DisplayOperation(kind="stream", stream=StreamContent(name=name, text=text))
        )

    def displays(self) -> dict[str, DisplayContent]:
        """Latest content of every display, in creation order."""
        return dict(self._displays)

    def stream_text(self, name: StreamName) -> str:
        """Concatenated text written to one stream."""
        return "".join(
            op.stream.text
            for op in self.operations
            if op.kind == "stream" and op.stream is not None and op.stream.name == name
        )

    def kinds(self) -> list[str]:
        return [op.kind for op in self.operations]


class ConsoleSink(RecordingSink):
    """Sink that renders kernel output to a terminal with rich.

    Displays are only final once the execution ends, so nothing is printed
    until render(). Output then follows emission order: stream writes where
    they happened and each display where it was created.
    """

    def __init__(self, console: Console | None = None, error_console: Console | None = None):
        super().__init__()
        self.console = console or Console()
        self.error_console = error_console or Console(file=sys.stderr)

    def render(self) -> None:
        """Print stream writes and final displays in emission order."""
        displays = self.displays()
        for op in self.operations:
            if op.kind == "stream" and op.stream is not None:
                self._print_stream(op.stream)
            elif op.kind == "display_data" and op.display is not None:
                display_id = op.display.display_id or ""
                content = displays.get(display_id, op.display)
                logger.debug(
                    "Rendering display", display_id=display_id, mime_types=list(content.data)
                )
                self.console.print(_to_renderable(display_id, content))

    def _print_stream(self, stream: StreamContent) -> None:
        text = stream.text.rstrip("\n")
        if stream.name == "stderr":
            self.error_console.print(Text(text, style="bold red"))
        else:
            self.console.print(Text(text, style="dim"))


def _to_renderable(display_id: str, content: DisplayContent) -> Markdown | Panel:
    data = content.data
    markdown = data.get("text/markdown")
    if isinstance(markdown, str):
        return Markdown(markdown)

    plain = data.get("text/plain", "")
    if isinstance(plain, list):
        plain = "".join(plain)

    rich_types = [mime_type for mime_type in data if mime_type != "text/plain"]
    title = ", ".join(rich_types) if rich_types else "text/plain"
    return Panel(Text(str(plain)), title=title, subtitle=display_id, title_align="left")
