"""Tool call cards for notebook output.

A tool card shows one tool invocation: its name, an optional one-line
summary, a status badge, the input, and (once finished) the result or error.
Each card is rendered twice, as a collapsible HTML card and as a plain-text
fallback, and both go into the same MIME bundle.
"""

from dataclasses import dataclass
from enum import Enum

import nh3

from ai_kernel.display.models import MimeBundle


class ToolStatus(str, Enum):
    """Lifecycle status of a tool call."""

    PENDING = "pending"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class StatusStyle:
    """CSS classes and label for a tool status."""

    css_class: str
    status_class: str
    status_text: str


STATUS_CONFIG: dict[ToolStatus, StatusStyle] = {
    ToolStatus.PENDING: StatusStyle(
        css_class="jp-ai-tool-pending",
        status_class="jp-ai-tool-status-pending",
        status_text="Running...",
    ),
    ToolStatus.COMPLETED: StatusStyle(
        css_class="jp-ai-tool-completed",
        status_class="jp-ai-tool-status-completed",
        status_text="Completed",
    ),
    ToolStatus.ERROR: StatusStyle(
        css_class="jp-ai-tool-error",
        status_class="jp-ai-tool-status-error",
        status_text="Error",
    ),
}

# Embedded so the card renders correctly outside the notebook theme too
TOOL_CALL_STYLES = """
<style>
.jp-ai-tool-call {
  margin: 8px 0;
  border: 1px solid var(--jp-border-color1, #e0e0e0);
  border-radius: 6px;
  background: var(--jp-layout-color0, #fff);
  box-shadow: 0 1px 3px rgba(0,0,0,0.1);
  overflow: hidden;
  font-family: var(--jp-ui-font-family, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif);
}
.jp-ai-tool-header {
  display: flex;
  align-items: center;
  padding: 8px 12px;
  background: var(--jp-layout-color1, #f5f5f5);
  cursor: pointer;
  user-select: none;
  gap: 8px;
}
.jp-ai-tool-header:hover {
  background: var(--jp-layout-color2, #eee);
}
.jp-ai-tool-header::marker {
  content: '';
}
.jp-ai-tool-title {
  font-size: 13px;
  font-weight: 500;
  color: var(--jp-ui-font-color1, #333);
  flex: 1;
}
.jp-ai-tool-summary {
  font-weight: 400;
  opacity: 0.7;
  font-size: 12px;
  margin-left: 6px;
}
.jp-ai-tool-status {
  font-size: 11px;
  font-weight: 500;
  padding: 2px 8px;
  border-radius: 3px;
}
.jp-ai-tool-status-pending {
  background: rgba(255, 152, 0, 0.15);
  color: #e65100;
}
.jp-ai-tool-status-completed {
  background: rgba(76, 175, 80, 0.15);
  color: #2e7d32;
}
.jp-ai-tool-status-error {
  background: rgba(244, 67, 54, 0.15);
  color: #c62828;
}
.jp-ai-tool-body {
  padding: 12px;
}
.jp-ai-tool-section {
  margin-bottom: 8px;
}
.jp-ai-tool-section:last-child {
  margin-bottom: 0;
}
.jp-ai-tool-label {
  font-size: 10px;
  font-weight: 600;
  color: var(--jp-ui-font-color2, #666);
  margin-bottom: 4px;
  text-transform: uppercase;
  letter-spacing: 0.5px;
}
.jp-ai-tool-code {
  background: var(--jp-layout-color2, #f5f5f5);
  border: 1px solid var(--jp-border-color1, #e0e0e0);
  border-radius: 4px;
  padding: 8px;
  margin: 0;
  font-family: var(--jp-code-font-family, 'SFMono-Regular', Consolas, monospace);
  font-size: 12px;
  line-height: 1.4;
  overflow: auto;
  max-height: 200px;
  white-space: pre-wrap;
  word-break: break-word;
}
.jp-ai-tool-pending {
  border-left: 4px solid #ff9800;
}
.jp-ai-tool-completed {
  border-left: 4px solid #4caf50;
}
.jp-ai-tool-error {
  border-left: 4px solid #f44336;
}
</style>"""


def escape_html(value: str) -> str:
    """Escape text for safe interpolation into HTML."""
    return nh3.clean_text(value)


def output_label(status: ToolStatus) -> str:
    return "Error" if status == ToolStatus.ERROR else "Result"


def build_tool_call_html(
    tool_name: str,
    input: str,
    status: ToolStatus,
    summary: str = "",
    output: str | None = None,
) -> str:
    """Build the HTML card for a tool call.

    Every interpolated value is escaped, so tool names, arguments and results
    can never inject markup.

    Args:
        tool_name: Name of the tool
        input: Serialized tool arguments
        status: Current status of the call
        summary: Optional one-line summary shown next to the name
        output: Tool result or error text; the section is omitted when None

    Returns:
        HTML fragment with embedded styles
    """
    config = STATUS_CONFIG[status]
    summary_html = (
        f'<span class="jp-ai-tool-summary">{escape_html(summary)}</span>' if summary else ""
    )

    body = f"""
<div class="jp-ai-tool-section">
<div class="jp-ai-tool-label">Input</div>
<pre class="jp-ai-tool-code"><code>{escape_html(input)}</code></pre>
</div>"""

    if output is not None:
        body += f"""
<div class="jp-ai-tool-section">
<div class="jp-ai-tool-label">{output_label(status)}</div>
<pre class="jp-ai-tool-code"><code>{escape_html(output)}</code></pre>
</div>"""

    return f"""{TOOL_CALL_STYLES}
<details class="jp-ai-tool-call {config.css_class}">
<summary class="jp-ai-tool-header">
<div class="jp-ai-tool-title">{escape_html(tool_name)}{summary_html}</div>
<div class="jp-ai-tool-status {config.status_class}">{config.status_text}</div>
</summary>
<div class="jp-ai-tool-body">{body}
</div>
</details>"""


def build_tool_call_text(
    tool_name: str,
    input: str,
    status: ToolStatus,
    summary: str = "",
    output: str | None = None,
) -> str:
    """Build the plain-text fallback for a tool call.

    Example:
        >>> build_tool_call_text("search", '{"q": "x"}', ToolStatus.PENDING)
        '[Tool: search] (Running...)\\nInput: {"q": "x"}'
    """
    config = STATUS_CONFIG[status]
    summary_text = f" {summary}" if summary else ""
    text = f"[Tool: {tool_name}{summary_text}] ({config.status_text})\nInput: {input}"
    if output is not None:
        text += f"\n{output_label(status)}: {output}"
    return text


def build_tool_call_bundle(
    tool_name: str,
    input: str,
    status: ToolStatus,
    summary: str = "",
    output: str | None = None,
) -> MimeBundle:
    """Build the MIME bundle (text/html + text/plain) for a tool card."""
    return {
        "text/html": build_tool_call_html(tool_name, input, status, summary, output),
        "text/plain": build_tool_call_text(tool_name, input, status, summary, output),
    }
