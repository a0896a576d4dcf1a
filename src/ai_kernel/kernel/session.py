"""Per-execution session state for the AI kernel.

An ExecutionSessionState is owned by exactly one execute request. It tracks
the open markdown block, tool call contexts waiting for completion, the first
error reported by the agent, and the echo-suppression episode. Display
identifiers come from a counter that outlives the session, so identifiers
stay unique across executions.
"""

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field

from ai_kernel.display.suppression import SuppressionState

RESPONSE_PREFIX = "response"
TOOL_CALL_PREFIX = "tool-call"
DISPLAY_PREFIX = "display"


@dataclass(frozen=True)
class ToolCallContext:
    """What the kernel remembers about a started tool call.

    Attributes:
        display_id: Display identifier of the tool card
        tool_name: Name of the tool being called
        input: Serialized tool input
        summary: One-line summary shown on the card
    """

    display_id: str
    tool_name: str
    input: str
    summary: str = ""


@dataclass
class ExecutionSessionState:
    """Mutable state for one execution.

    Attributes:
        display_ids: Shared counter used to allocate display identifiers
        response_display_id: Display id of the open markdown block, if any
        response_content: Text accumulated in the open markdown block
        execution_error: First error message reported during the execution
        tool_contexts: Started tool calls keyed by call id
        suppression: Echo-suppression episode state
    """

    display_ids: Iterator[int] = field(default_factory=itertools.count)
    response_display_id: str | None = None
    response_content: str = ""
    execution_error: str | None = None
    tool_contexts: dict[str, ToolCallContext] = field(default_factory=dict)
    suppression: SuppressionState = field(default_factory=SuppressionState)

    def next_display_id(self, prefix: str) -> str:
        """Allocate a display identifier such as ``tool-call-3``."""
        return f"{prefix}-{next(self.display_ids)}"

    def record_error(self, message: str) -> bool:
        """Record an error message unless one is already recorded.

        Returns:
            True if this message became the execution error
        """
        if self.execution_error is not None:
            return False
        self.execution_error = message
        return True

    def close_response(self) -> None:
        """Close the open markdown block; the next chunk opens a new one."""
        self.response_display_id = None
        self.response_content = ""

    def reset(self) -> None:
        """Clear everything except the display id counter."""
        self.close_response()
        self.execution_error = None
        self.tool_contexts.clear()
        self.suppression.reset()
