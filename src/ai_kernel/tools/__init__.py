"""Tools the kernel contributes to its agent.

This module provides a small tool registry, the display_data tool used for
rich MIME output, and tool input summaries for tool call cards.
"""

from ai_kernel.tools.display_data import (
    DISPLAY_DATA_TOOL_NAME,
    build_display_data_description,
    create_display_data_tool,
    display_data,
    register_display_data_tool,
)
from ai_kernel.tools.registry import (
    Tool,
    ToolError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
)
from ai_kernel.tools.summary import extract_tool_summary

__all__ = [
    # Registry
    "Tool",
    "ToolError",
    "ToolNotFoundError",
    "ToolRegistrationError",
    "ToolRegistry",
    # display_data
    "DISPLAY_DATA_TOOL_NAME",
    "build_display_data_description",
    "create_display_data_tool",
    "display_data",
    "register_display_data_tool",
    # Summaries
    "extract_tool_summary",
]
