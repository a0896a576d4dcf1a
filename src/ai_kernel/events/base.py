"""Agent event types consumed by the AI kernel.

This module defines the events an agent emits while generating a response.
Each event kind is an immutable dataclass; together they form the AgentEvent
union that the kernel dispatches on. Events arrive in wire form as
``{"type": ..., "data": {...}}`` dictionaries and are converted with
parse_agent_event().
"""

from dataclasses import dataclass
from typing import Any

# Event type constants for consistency
MESSAGE_CHUNK = "message_chunk"
ERROR = "error"
TOOL_CALL_START = "tool_call_start"
TOOL_CALL_COMPLETE = "tool_call_complete"
TOOL_APPROVAL_REQUEST = "tool_approval_request"


class AgentEventError(ValueError):
    """Raised when a wire-format agent event cannot be interpreted."""

    pass


@dataclass(frozen=True)
class MessageChunk:
    """A piece of streamed response text.

    Attributes:
        chunk: The text fragment, to be appended to the current response

    Example:
        >>> event = MessageChunk(chunk="Hello")
    """

    chunk: str


@dataclass(frozen=True)
class AgentError:
    """An error reported by the agent during generation.

    Errors do not end the event stream; more events may follow.

    Attributes:
        message: Human-readable error message
    """

    message: str


@dataclass(frozen=True)
class ToolCallStart:
    """The agent started invoking a tool.

    Attributes:
        call_id: Identifier pairing this start with its completion
        tool_name: Name of the tool being called
        input: Serialized tool arguments (usually JSON)

    Example:
        >>> event = ToolCallStart(
        ...     call_id="call_1",
        ...     tool_name="execute_command",
        ...     input='{"commandId": "notebook:run-cell"}'
        ... )
    """

    call_id: str
    tool_name: str
    input: str


@dataclass(frozen=True)
class ToolCallComplete:
    """A tool invocation finished.

    Attributes:
        call_id: Identifier of the matching ToolCallStart
        tool_name: Name of the tool that ran
        output: Serialized tool result, or the error text when is_error is set
        is_error: Whether the tool failed
    """

    call_id: str
    tool_name: str
    output: str
    is_error: bool = False


@dataclass(frozen=True)
class ToolApprovalRequest:
    """The agent is waiting for approval before running a tool.

    Attributes:
        approval_id: Identifier to answer the request with
    """

    approval_id: str


AgentEvent = MessageChunk | AgentError | ToolCallStart | ToolCallComplete | ToolApprovalRequest


def parse_agent_event(payload: dict[str, Any]) -> AgentEvent:
    """Convert a wire-format event dictionary into a typed AgentEvent.

    Args:
        payload: Event dictionary with "type" and "data" keys

    Returns:
        The typed event

    Raises:
        AgentEventError: If the type is unknown or required fields are missing

    Example:
        >>> parse_agent_event({"type": "message_chunk", "data": {"chunk": "Hi"}})
        MessageChunk(chunk='Hi')
    """
    if not isinstance(payload, dict):
        raise AgentEventError(f"Event must be an object, got {type(payload).__name__}")

    event_type = payload.get("type")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise AgentEventError(f"Event {event_type!r} is missing its data object")

    if event_type == MESSAGE_CHUNK:
        return MessageChunk(chunk=_require_str(data, "chunk", event_type))
    elif event_type == ERROR:
        error = data.get("error")
        if not isinstance(error, dict):
            raise AgentEventError("Event 'error' is missing its error object")
        return AgentError(message=_require_str(error, "message", event_type))
    elif event_type == TOOL_CALL_START:
        return ToolCallStart(
            call_id=_require_str(data, "callId", event_type),
            tool_name=_require_str(data, "toolName", event_type),
            input=_require_str(data, "input", event_type),
        )
    elif event_type == TOOL_CALL_COMPLETE:
        return ToolCallComplete(
            call_id=_require_str(data, "callId", event_type),
            tool_name=_require_str(data, "toolName", event_type),
            output=_require_str(data, "output", event_type),
            is_error=bool(data.get("isError", False)),
        )
    elif event_type == TOOL_APPROVAL_REQUEST:
        return ToolApprovalRequest(approval_id=_require_str(data, "approvalId", event_type))
    else:
        raise AgentEventError(f"Unknown event type: {event_type!r}")


def _require_str(data: dict[str, Any], key: str, event_type: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise AgentEventError(f"Event {event_type!r} requires string field {key!r}")
    return value
