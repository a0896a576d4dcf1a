"""Tests for tool call card rendering."""

from ai_kernel.display.tool_card import (
    ToolStatus,
    build_tool_call_bundle,
    build_tool_call_html,
    build_tool_call_text,
)

SECTION_LABEL = 'class="jp-ai-tool-label"'


class TestBuildToolCallText:
    """Tests for the plain-text card."""

    def test_pending_card(self):
        """A pending card shows the name, label and input."""
        text = build_tool_call_text("search", '{"q": "x"}', ToolStatus.PENDING)

        assert text == '[Tool: search] (Running...)\nInput: {"q": "x"}'

    def test_summary_follows_name(self):
        """The summary is appended to the tool name."""
        text = build_tool_call_text(
            "execute_command", "{}", ToolStatus.PENDING, summary="notebook:run-cell"
        )

        assert text.startswith("[Tool: execute_command notebook:run-cell] (Running...)")

    def test_completed_card_shows_result(self):
        """A completed card shows the output as Result."""
        text = build_tool_call_text("search", "{}", ToolStatus.COMPLETED, output="3 hits")

        assert text == "[Tool: search] (Completed)\nInput: {}\nResult: 3 hits"

    def test_error_card_shows_error(self):
        """An error card shows the output as Error."""
        text = build_tool_call_text("search", "{}", ToolStatus.ERROR, output="timeout")

        assert text == "[Tool: search] (Error)\nInput: {}\nError: timeout"

    def test_empty_output_still_shown(self):
        """An empty output string still gets a section."""
        text = build_tool_call_text("search", "{}", ToolStatus.COMPLETED, output="")

        assert text.endswith("\nResult: ")

    def test_plain_text_is_not_escaped(self):
        """Markup is left as-is in the plain-text form."""
        text = build_tool_call_text("<b>", "<i>", ToolStatus.PENDING)

        assert text == "[Tool: <b>] (Running...)\nInput: <i>"


class TestBuildToolCallHtml:
    """Tests for the HTML card."""

    def test_pending_card_has_status_and_input_only(self):
        """A pending card has one section and the running label."""
        html = build_tool_call_html("search", '{"q": "x"}', ToolStatus.PENDING)

        assert html.lstrip().startswith("<style>")
        assert '<details class="jp-ai-tool-call jp-ai-tool-pending">' in html
        assert "Running..." in html
        assert html.count(SECTION_LABEL) == 1
        assert ">Input<" in html

    def test_completed_card_has_result_section(self):
        """A completed card adds a Result section."""
        html = build_tool_call_html("search", "{}", ToolStatus.COMPLETED, output="3 hits")

        assert "jp-ai-tool-completed" in html
        assert html.count(SECTION_LABEL) == 2
        assert ">Result<" in html

    def test_error_card_has_error_section(self):
        """An error card labels its output Error."""
        html = build_tool_call_html("search", "{}", ToolStatus.ERROR, output="timeout")

        assert "jp-ai-tool-status-error" in html
        assert ">Error<" in html
        assert ">Result<" not in html

    def test_summary_span_only_when_present(self):
        """The summary span is rendered only for a non-empty summary."""
        with_summary = build_tool_call_html("search", "{}", ToolStatus.PENDING, summary="q")
        without_summary = build_tool_call_html("search", "{}", ToolStatus.PENDING)

        assert '<span class="jp-ai-tool-summary">' in with_summary
        assert '<span class="jp-ai-tool-summary">' not in without_summary

    def test_values_are_escaped(self):
        """Tool name, summary, input and output cannot inject markup."""
        payload = "<script>alert(1)</script>"
        html = build_tool_call_html(
            payload, payload, ToolStatus.COMPLETED, summary=payload, output=payload
        )

        assert "<script>" not in html
        assert html.count("&lt;script&gt;") == 4

    def test_rendering_is_idempotent(self):
        """Identical arguments give identical output."""
        args = ("search", '{"q": "x"}', ToolStatus.COMPLETED, "q", "done")

        assert build_tool_call_html(*args) == build_tool_call_html(*args)


class TestBuildToolCallBundle:
    """Tests for the card MIME bundle."""

    def test_bundle_has_html_and_text(self):
        """The bundle pairs the HTML card with its text fallback."""
        bundle = build_tool_call_bundle("search", "{}", ToolStatus.PENDING)

        assert set(bundle) == {"text/html", "text/plain"}
        assert bundle["text/plain"] == build_tool_call_text("search", "{}", ToolStatus.PENDING)
        assert bundle["text/html"] == build_tool_call_html("search", "{}", ToolStatus.PENDING)
