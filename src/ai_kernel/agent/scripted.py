"""Scripted agent manager that replays a recorded event stream.

This module provides an AgentManager that emits a fixed list of events
instead of calling a model. It backs the ``ai-kernel replay`` command and
is convenient for exercising the kernel without a provider.
"""

import asyncio
import json
from pathlib import Path

import structlog

from ai_kernel.agent.base import AgentManager, AgentManagerError
from ai_kernel.events import AgentEvent, AgentEventError, parse_agent_event

logger = structlog.get_logger(__name__)


class ScriptedAgentManager(AgentManager):
    """Agent manager that replays pre-recorded events.

    Attributes:
        events: Events emitted, in order, by each generate_response() call
        configured: Value returned by has_valid_config()
        failure: Exception raised after the events have been emitted, if any
        prompts: Prompts received by generate_response()
        approvals: (approval_id, reason) pairs received by approve_tool_call()

    Example:
        >>> agent = ScriptedAgentManager([MessageChunk(chunk="Hello")])
        >>> asyncio.run(agent.generate_response("Hi"))
        >>> agent.prompts
        ['Hi']
    """

    def __init__(
        self,
        events: list[AgentEvent],
        configured: bool = True,
        failure: Exception | None = None,
    ) -> None:
        super().__init__()
        self.events = list(events)
        self.configured = configured
        self.failure = failure
        self.prompts: list[str] = []
        self.approvals: list[tuple[str, str | None]] = []

    @classmethod
    def from_jsonl(cls, path: str | Path) -> "ScriptedAgentManager":
        """Load a replay file with one wire-format event per line.

        Blank lines are skipped. A line of the form ``{"raise": "message"}``
        makes generate_response() raise AgentManagerError after emitting the
        events before it.

        Args:
            path: Path to the JSONL replay file

        Returns:
            ScriptedAgentManager replaying the file

        Raises:
            AgentEventError: If a line is not valid JSON or not a valid event
        """
        events: list[AgentEvent] = []
        failure: Exception | None = None
        text = Path(path).read_text(encoding="utf-8")

        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise AgentEventError(f"Line {line_number}: invalid JSON ({e})") from e

            if isinstance(record, dict) and "raise" in record:
                failure = AgentManagerError(str(record["raise"]))
                break

            try:
                events.append(parse_agent_event(record))
            except AgentEventError as e:
                raise AgentEventError(f"Line {line_number}: {e}") from e

        logger.info("Loaded replay file", path=str(path), event_count=len(events))
        return cls(events, failure=failure)

    def has_valid_config(self) -> bool:
        return self.configured

    async def generate_response(self, prompt: str) -> None:
        """Emit the scripted events, yielding to the event loop between them."""
        self.prompts.append(prompt)
        log = logger.bind(event_count=len(self.events))
        log.debug("Replaying scripted events")

        for event in self.events:
            self.agent_events.emit(event)
            await asyncio.sleep(0)

        if self.failure is not None:
            log.debug("Raising scripted failure", error=str(self.failure))
            raise self.failure

    def approve_tool_call(self, approval_id: str, reason: str | None = None) -> None:
        self.approvals.append((approval_id, reason))
