"""Display module for rendering agent output in notebook cells.

This module provides the display protocol models, MIME bundle normalization
for the display_data tool, tool call cards, echo suppression, and sinks that
receive the kernel's display operations.
"""

from ai_kernel.display.mime import (
    DisplayDataParseError,
    ParsedDisplayData,
    parse_display_data_output,
)
from ai_kernel.display.models import (
    DisplayContent,
    DisplayOperation,
    ExecuteReply,
    MimeBundle,
    StreamContent,
)
from ai_kernel.display.sinks import ConsoleSink, DisplayProtocolError, DisplaySink, RecordingSink
from ai_kernel.display.suppression import SuppressionState, looks_like_payload_echo
from ai_kernel.display.tool_card import (
    ToolStatus,
    build_tool_call_bundle,
    build_tool_call_html,
    build_tool_call_text,
)

__all__ = [
    # Models
    "DisplayContent",
    "DisplayOperation",
    "ExecuteReply",
    "MimeBundle",
    "StreamContent",
    # MIME bundles
    "DisplayDataParseError",
    "ParsedDisplayData",
    "parse_display_data_output",
    # Tool cards
    "ToolStatus",
    "build_tool_call_bundle",
    "build_tool_call_html",
    "build_tool_call_text",
    # Echo suppression
    "SuppressionState",
    "looks_like_payload_echo",
    # Sinks
    "DisplaySink",
    "RecordingSink",
    "ConsoleSink",
    "DisplayProtocolError",
]
