"""Suppression of text that echoes a rich display payload.

After the display_data tool renders rich output, models often repeat the same
payload as a Markdown code block or raw JSON. Text that follows a displayed
payload is therefore held in a buffer (an "episode") until it either looks
like an echo, at which point the rest of the episode is dropped, or the
episode ends and the buffered text is released unchanged.

State machine:
    idle --begin()--> buffering --echo detected--> suppressed
    buffering/suppressed --flush()/reset()--> idle
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

# Newline, optional whitespace, "[" or "{", newline, whitespace, quoted key, colon
_PRETTY_JSON_OPENING = re.compile(r'\n\s*[\[{]\s*\n\s*"[^"]+"\s*:')

CODE_FENCE = "```"

EchoPredicate = Callable[[str], bool]


def looks_like_payload_echo(value: str) -> bool:
    """Detect text that appears to repeat a raw payload.

    Args:
        value: Text buffered since the payload was displayed

    Returns:
        True for fenced code blocks, text starting with a JSON object or
        array, or pretty-printed JSON anywhere in the text

    Example:
        >>> looks_like_payload_echo('```json\\n{"a": 1}')
        True
        >>> looks_like_payload_echo("Here is a summary of the chart.")
        False
    """
    trimmed = value.lstrip()
    if not trimmed:
        return False

    if CODE_FENCE in value:
        return True

    if trimmed.startswith(("{", "[")):
        return True

    return _PRETTY_JSON_OPENING.search(value) is not None


@dataclass
class SuppressionState:
    """Buffer state for one echo-suppression episode.

    Attributes:
        buffering: An episode is open; chunks are held back
        suppressed: The episode matched the echo predicate; chunks are dropped
        buffer: Text held back so far
        is_echo: Predicate deciding whether the buffer is an echo
    """

    buffering: bool = False
    suppressed: bool = False
    buffer: str = ""
    is_echo: EchoPredicate = field(default=looks_like_payload_echo, repr=False)

    @property
    def idle(self) -> bool:
        return not self.buffering and not self.suppressed

    def begin(self) -> None:
        """Open an episode with an empty buffer."""
        self.buffering = True
        self.suppressed = False
        self.buffer = ""

    def admit(self, chunk: str) -> bool:
        """Offer a text chunk to the buffer.

        Args:
            chunk: Incoming text chunk

        Returns:
            True if the chunk should be rendered now, False if it was held
            back or dropped
        """
        if self.suppressed:
            return False

        if not self.buffering:
            return True

        self.buffer += chunk
        if self.is_echo(self.buffer):
            self.buffer = ""
            self.suppressed = True
        return False

    def flush(self) -> str | None:
        """End the episode.

        Returns:
            The buffered text if the episode never matched and the buffer is
            not blank, otherwise None
        """
        released = None
        if self.buffering and not self.suppressed and self.buffer.strip():
            released = self.buffer
        self.reset()
        return released

    def reset(self) -> None:
        """Return to idle, discarding any buffered text."""
        self.buffering = False
        self.suppressed = False
        self.buffer = ""
