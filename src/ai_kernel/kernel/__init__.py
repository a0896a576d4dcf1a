"""AI kernel execution.

This package drives one execution per cell: it prompts the agent, routes the
agent's events through an EventDispatcher into display operations, and builds
the execute reply.
"""

from ai_kernel.kernel.dispatcher import EventDispatcher
from ai_kernel.kernel.kernel import (
    AI_ERROR,
    CONFIGURATION_ERROR,
    NOT_CONFIGURED_MESSAGE,
    AIKernel,
)
from ai_kernel.kernel.prompts import AI_KERNEL_PROMPT_SUFFIX, build_prompt
from ai_kernel.kernel.session import ExecutionSessionState, ToolCallContext

__all__ = [
    "AIKernel",
    "AI_ERROR",
    "CONFIGURATION_ERROR",
    "NOT_CONFIGURED_MESSAGE",
    "EventDispatcher",
    "ExecutionSessionState",
    "ToolCallContext",
    "AI_KERNEL_PROMPT_SUFFIX",
    "build_prompt",
]
