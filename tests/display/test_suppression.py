"""Tests for echo detection and the suppression buffer."""

import pytest

from ai_kernel.display.suppression import SuppressionState, looks_like_payload_echo


class TestLooksLikePayloadEcho:
    """Tests for the echo predicate."""

    @pytest.mark.parametrize(
        "text",
        [
            '```json\n{"a": 1}',
            "Here it is:\n```\ncode",
            '{"type": "Feature"}',
            '   [1, 2, 3]',
            'The data:\n{\n  "name": "x"',
            'Result:\n[\n  "key": 1',
        ],
    )
    def test_detects_echo(self, text):
        """Fences, leading JSON and pretty-printed JSON are echoes."""
        assert looks_like_payload_echo(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   \n\t",
            "Here is a summary of the chart.",
            "Values are {a} and [b] inline.",
            "Two backticks `` are fine",
        ],
    )
    def test_ignores_prose(self, text):
        """Prose and blank text are not echoes."""
        assert looks_like_payload_echo(text) is False


class TestSuppressionState:
    """Tests for the episode state machine."""

    def test_idle_admits_everything(self):
        """Outside an episode chunks render immediately."""
        state = SuppressionState()

        assert state.idle
        assert state.admit('```json') is True

    def test_begin_opens_episode(self):
        """begin() starts buffering with an empty buffer."""
        state = SuppressionState()

        state.begin()

        assert state.buffering is True
        assert state.suppressed is False
        assert state.buffer == ""

    def test_prose_is_buffered(self):
        """Prose inside an episode is held back."""
        state = SuppressionState()
        state.begin()

        assert state.admit("Here is ") is False
        assert state.admit("a summary.") is False
        assert state.buffer == "Here is a summary."

    def test_echo_suppresses_rest_of_episode(self):
        """Once an echo is detected the buffer is dropped with later chunks."""
        state = SuppressionState()
        state.begin()

        state.admit("```json\n")
        assert state.suppressed is True
        assert state.buffering is True
        assert state.buffer == ""

        assert state.admit("Here is a summary.") is False
        assert state.buffer == ""

    def test_echo_split_across_chunks(self):
        """Detection runs on the accumulated buffer."""
        state = SuppressionState()
        state.begin()

        state.admit("Output:\n")
        state.admit("{\n")
        assert state.suppressed is False

        state.admit('  "name": "x"')
        assert state.suppressed is True

    def test_flush_releases_prose(self):
        """Flushing an unmatched episode releases its text."""
        state = SuppressionState()
        state.begin()
        state.admit("Here is a summary.")

        assert state.flush() == "Here is a summary."
        assert state.idle

    def test_flush_after_suppression_releases_nothing(self):
        """Flushing a suppressed episode releases nothing."""
        state = SuppressionState()
        state.begin()
        state.admit("```json")

        assert state.flush() is None
        assert state.idle

    def test_flush_blank_buffer_releases_nothing(self):
        """Whitespace-only buffers are dropped."""
        state = SuppressionState()
        state.begin()
        state.admit("\n\n  ")

        assert state.flush() is None
        assert state.idle

    def test_flush_when_idle_is_noop(self):
        """Flushing without an episode does nothing."""
        state = SuppressionState()

        assert state.flush() is None
        assert state.idle

    def test_reset_discards_buffer(self):
        """reset() returns to idle without releasing text."""
        state = SuppressionState()
        state.begin()
        state.admit("Here is a summary.")

        state.reset()

        assert state.idle
        assert state.buffer == ""

    def test_begin_clears_previous_suppression(self):
        """A new episode starts unsuppressed."""
        state = SuppressionState()
        state.begin()
        state.admit("```")

        state.begin()

        assert state.suppressed is False
        assert state.admit("prose") is False
        assert state.flush() == "prose"

    def test_custom_predicate(self):
        """The echo predicate can be replaced."""
        state = SuppressionState(is_echo=lambda text: "ECHO" in text)
        state.begin()

        state.admit("```json")
        assert state.suppressed is False

        state.admit(" ECHO")
        assert state.suppressed is True
