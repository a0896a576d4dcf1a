"""Agent event definitions and delivery.

This package contains the typed events an agent emits while generating a
response, their wire-format parser, and the signal used to subscribe to them.
"""

from ai_kernel.events.base import (
    ERROR,
    MESSAGE_CHUNK,
    TOOL_APPROVAL_REQUEST,
    TOOL_CALL_COMPLETE,
    TOOL_CALL_START,
    AgentError,
    AgentEvent,
    AgentEventError,
    MessageChunk,
    ToolApprovalRequest,
    ToolCallComplete,
    ToolCallStart,
    parse_agent_event,
)
from ai_kernel.events.signal import AgentEventSignal, EventHandler, Subscription

__all__ = [
    # Event types
    "AgentEvent",
    "MessageChunk",
    "AgentError",
    "ToolCallStart",
    "ToolCallComplete",
    "ToolApprovalRequest",
    # Wire format
    "MESSAGE_CHUNK",
    "ERROR",
    "TOOL_CALL_START",
    "TOOL_CALL_COMPLETE",
    "TOOL_APPROVAL_REQUEST",
    "AgentEventError",
    "parse_agent_event",
    # Delivery
    "AgentEventSignal",
    "EventHandler",
    "Subscription",
]
