"""One-line summaries of tool inputs for tool call cards.

Summaries are best effort: unknown tools, unexpected shapes and unparsable
input all yield an empty string.
"""

import json
import re
from typing import Any

EXECUTE_COMMAND_TOOL = "execute_command"
DISCOVER_COMMANDS_TOOL = "discover_commands"

_COMMAND_ID_PATTERN = re.compile(r'"commandId"\s*:\s*"([^"]+)"')


def extract_tool_summary(tool_name: str, input: str) -> str:
    """Summarize a tool call's input for display next to the tool name.

    Args:
        tool_name: Name of the tool being called
        input: Serialized tool input, usually JSON

    Returns:
        The command id for execute_command, a quoted query label for
        discover_commands, otherwise an empty string

    Example:
        >>> extract_tool_summary("execute_command", '{"commandId": "notebook:run-cell"}')
        'notebook:run-cell'
        >>> extract_tool_summary("discover_commands", '{"query": "run"}')
        'query: "run"'
    """
    parsed = _parse_json(input)

    if tool_name == EXECUTE_COMMAND_TOOL:
        return _find_command_id(parsed) or _match_command_id(input)

    if tool_name == DISCOVER_COMMANDS_TOOL and isinstance(parsed, dict):
        query = parsed.get("query")
        if query:
            return f'query: "{query}"'

    return ""


def _parse_json(value: str) -> Any:
    try:
        return json.loads(value)
    except (TypeError, ValueError, RecursionError):
        return None


def _find_command_id(parsed: Any) -> str:
    if isinstance(parsed, str):
        # JSON-encoded JSON
        nested = _parse_json(parsed)
        if nested is None:
            return _match_command_id(parsed)
        return _find_command_id(nested) if not isinstance(nested, str) else ""

    if not isinstance(parsed, dict):
        return ""

    command_id = parsed.get("commandId")
    if isinstance(command_id, str) and command_id:
        return command_id

    for value in parsed.values():
        if isinstance(value, dict):
            nested_id = value.get("commandId")
            if isinstance(nested_id, str) and nested_id:
                return nested_id
    return ""


def _match_command_id(value: str) -> str:
    match = _COMMAND_ID_PATTERN.search(value)
    return match.group(1) if match else ""
