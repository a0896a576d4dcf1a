"""The display_data tool: rich MIME output from the agent.

The tool lets the model show content through the notebook's MIME renderers
(HTML, LaTeX, JSON trees, images, vendor types) instead of Markdown text. Its
function only echoes the payload back; the kernel intercepts the completed
call and turns the result into a display message (see
ai_kernel.display.mime).
"""

from collections.abc import Sequence
from typing import Any

import structlog

from ai_kernel.tools.registry import Tool, ToolRegistry

logger = structlog.get_logger(__name__)

DISPLAY_DATA_TOOL_NAME = "display_data"

DEFAULT_MIME_TYPES_HINT = (
    "Use standard MIME types (e.g., application/json, text/html, image/png, "
    "application/geo+json)."
)

# Two accepted shapes: a single payload, or a full MIME bundle in "data"
DISPLAY_DATA_PARAMETERS: dict[str, Any] = {
    "anyOf": [
        {
            "type": "object",
            "properties": {
                "mime_type": {
                    "type": "string",
                    "description": (
                        'The MIME type of the data (e.g., "application/json", '
                        '"text/html", "text/latex", "image/png")'
                    ),
                },
                "data": {
                    "description": (
                        "The content to display for this MIME type. "
                        "For binary formats like images, use base64 encoding."
                    ),
                },
                "metadata": {
                    "type": ["object", "null"],
                    "description": "Optional metadata for the MIME bundle",
                },
            },
            "required": ["mime_type", "data"],
        },
        {
            "type": "object",
            "properties": {
                "data": {
                    "type": "object",
                    "additionalProperties": True,
                    "description": (
                        "A full MIME bundle mapping MIME types to values (e.g., "
                        '{"text/latex": "\\\\boxed{5}", "text/plain": "5"}).'
                    ),
                },
                "metadata": {
                    "type": ["object", "null"],
                    "description": "Optional metadata for the MIME bundle",
                },
            },
            "required": ["data"],
        },
    ]
}


def build_display_data_description(mime_types: Sequence[str] | None = None) -> str:
    """Describe the tool, listing the MIME types the frontend can render.

    Args:
        mime_types: MIME types available in the renderer registry, if known

    Returns:
        Tool description for the model
    """
    mime_types_hint = (
        f"Available MIME types: {', '.join(mime_types)}" if mime_types else DEFAULT_MIME_TYPES_HINT
    )
    return (
        "Display rich data using the notebook's MIME renderers. You can provide either: "
        '(1) a single payload with "mime_type" + "data", or (2) a full MIME bundle in '
        '"data" (mapping MIME types to values). Supports standard types like '
        "application/json, text/html, text/latex, image/png, and custom "
        f"application/vnd.* types. {mime_types_hint}"
    )


def display_data(
    data: Any,
    mime_type: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Echo a display payload back as the tool result.

    Args:
        data: Content for mime_type, or a full MIME bundle when mime_type is None
        mime_type: MIME type of a single payload
        metadata: Optional bundle metadata

    Returns:
        Result document the kernel parses into a MIME bundle

    Example:
        >>> display_data("<b>x</b>", mime_type="text/html")
        {'displayed': True, 'mime_type': 'text/html', 'data': '<b>x</b>', 'metadata': None}
    """
    result: dict[str, Any] = {"displayed": True}
    if mime_type:
        result["mime_type"] = mime_type
    result["data"] = data
    result["metadata"] = metadata

    logger.debug("display_data called", mime_type=mime_type)
    return result


def create_display_data_tool(mime_types: Sequence[str] | None = None) -> Tool:
    """Create the display_data tool definition.

    Args:
        mime_types: MIME types available in the renderer registry, if known

    Returns:
        Tool ready to register with an agent
    """
    return Tool(
        name=DISPLAY_DATA_TOOL_NAME,
        description=build_display_data_description(mime_types),
        parameters_schema=DISPLAY_DATA_PARAMETERS,
        function=display_data,
    )


def register_display_data_tool(
    registry: ToolRegistry, mime_types: Sequence[str] | None = None
) -> None:
    """Register the display_data tool in a registry.

    Args:
        registry: ToolRegistry to register the tool with
        mime_types: MIME types available in the renderer registry, if known

    Raises:
        ToolRegistrationError: If display_data is already registered
    """
    registry.register(create_display_data_tool(mime_types))
    logger.info("Registered display_data tool", mime_type_count=len(mime_types or []))
