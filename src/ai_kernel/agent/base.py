"""Agent manager interface for the AI kernel.

The kernel never talks to an LLM directly. It drives an AgentManager, which
owns the provider connection and tool execution, and listens to the events
the manager emits on its agent_events signal while a response is generated.
"""

from abc import ABC, abstractmethod

from ai_kernel.events import AgentEventSignal


class AgentManagerError(Exception):
    """Base exception for agent manager failures."""

    pass


class AgentManager(ABC):
    """Abstract base class for agents that back an AI kernel.

    Implementations emit AgentEvent values on ``agent_events`` while
    generate_response() is running. Events must be emitted from the event
    loop thread, in order.
    """

    def __init__(self) -> None:
        self.agent_events = AgentEventSignal()

    @abstractmethod
    def has_valid_config(self) -> bool:
        """Report whether the provider is usable (credentials, model, etc.).

        Returns:
            True if generate_response() can be called
        """
        pass

    @abstractmethod
    async def generate_response(self, prompt: str) -> None:
        """Generate a response to the prompt, emitting events as it streams.

        Args:
            prompt: Full prompt text to send to the model

        Raises:
            Exception: Any failure of the underlying agent call
        """
        pass

    @abstractmethod
    def approve_tool_call(self, approval_id: str, reason: str | None = None) -> None:
        """Approve a pending tool call.

        Args:
            approval_id: Identifier from the ToolApprovalRequest event
            reason: Optional rationale recorded with the approval
        """
        pass
