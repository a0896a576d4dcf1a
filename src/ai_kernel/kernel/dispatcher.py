"""Routing of agent events to display operations.

The EventDispatcher is the single place where agent events are interpreted.
Message chunks grow a markdown block, tool calls become cards that are
created pending and updated once, display_data results replace their card
with a rich MIME bundle, and errors and orphaned completions become stream
writes.
"""

from typing import assert_never

import structlog

from ai_kernel.agent.base import AgentManager
from ai_kernel.config import DEFAULT_AUTO_APPROVE_REASON
from ai_kernel.display.mime import DisplayDataParseError, parse_display_data_output
from ai_kernel.display.models import DisplayContent
from ai_kernel.display.sinks import DisplaySink
from ai_kernel.display.tool_card import ToolStatus, build_tool_call_bundle
from ai_kernel.events import (
    AgentError,
    AgentEvent,
    MessageChunk,
    ToolApprovalRequest,
    ToolCallComplete,
    ToolCallStart,
)
from ai_kernel.kernel.session import (
    DISPLAY_PREFIX,
    RESPONSE_PREFIX,
    TOOL_CALL_PREFIX,
    ExecutionSessionState,
    ToolCallContext,
)
from ai_kernel.tools.display_data import DISPLAY_DATA_TOOL_NAME
from ai_kernel.tools.summary import extract_tool_summary

logger = structlog.get_logger(__name__)


class EventDispatcher:
    """Translate agent events for one execution into display operations.

    Events are handled synchronously and in arrival order. The dispatcher
    writes only to its sink and to the session state it was given.

    Example:
        >>> dispatcher = EventDispatcher(sink, agent, ExecutionSessionState())
        >>> with agent.agent_events.connected(dispatcher.handle):
        ...     await agent.generate_response(prompt)
        >>> dispatcher.flush()
    """

    def __init__(
        self,
        sink: DisplaySink,
        agent: AgentManager,
        state: ExecutionSessionState,
        auto_approve_reason: str = DEFAULT_AUTO_APPROVE_REASON,
        echo_suppression: bool = True,
    ) -> None:
        self.sink = sink
        self.agent = agent
        self.state = state
        self.auto_approve_reason = auto_approve_reason
        self.echo_suppression = echo_suppression

    def handle(self, event: AgentEvent) -> None:
        """Handle one agent event."""
        if isinstance(event, MessageChunk):
            self._handle_message_chunk(event)
        elif isinstance(event, AgentError):
            self._handle_error(event)
        elif isinstance(event, ToolCallStart):
            self._handle_tool_call_start(event)
        elif isinstance(event, ToolCallComplete):
            self._handle_tool_call_complete(event)
        elif isinstance(event, ToolApprovalRequest):
            self._handle_tool_approval_request(event)
        else:
            assert_never(event)

    def flush(self) -> None:
        """End any suppression episode, rendering text it held back."""
        released = self.state.suppression.flush()
        if released is not None:
            logger.debug("Releasing buffered text", length=len(released))
            self._render_chunk(released)

    def _handle_message_chunk(self, event: MessageChunk) -> None:
        if self.state.suppression.admit(event.chunk):
            self._render_chunk(event.chunk)

    def _render_chunk(self, chunk: str) -> None:
        state = self.state
        opening = state.response_display_id is None
        if opening:
            state.response_display_id = state.next_display_id(RESPONSE_PREFIX)
            state.response_content = ""

        state.response_content += chunk
        content = DisplayContent.for_display(
            state.response_display_id,
            {
                "text/markdown": state.response_content,
                "text/plain": state.response_content,
            },
        )

        if opening:
            self.sink.display_data(content)
        else:
            self.sink.update_display_data(content)

    def _handle_error(self, event: AgentError) -> None:
        if self.state.record_error(event.message):
            logger.debug("Recorded execution error", error=event.message)
        self.sink.stream("stderr", f"Error: {event.message}\n")

    def _handle_tool_call_start(self, event: ToolCallStart) -> None:
        self.flush()
        self.state.close_response()

        display_id = self.state.next_display_id(TOOL_CALL_PREFIX)
        context = ToolCallContext(
            display_id=display_id,
            tool_name=event.tool_name,
            input=event.input,
            summary=extract_tool_summary(event.tool_name, event.input),
        )

        log = logger.bind(call_id=event.call_id, tool_name=event.tool_name)
        log.debug("Tool call started", display_id=display_id)

        self.sink.display_data(
            DisplayContent.for_display(
                display_id,
                build_tool_call_bundle(
                    context.tool_name, context.input, ToolStatus.PENDING, context.summary
                ),
            )
        )
        self.state.tool_contexts[event.call_id] = context

    def _handle_tool_call_complete(self, event: ToolCallComplete) -> None:
        if event.tool_name == DISPLAY_DATA_TOOL_NAME and not event.is_error:
            self._handle_display_data_complete(event)
            return

        context = self.state.tool_contexts.pop(event.call_id, None)
        if context is not None:
            status = ToolStatus.ERROR if event.is_error else ToolStatus.COMPLETED
            self._update_card(context, status, event.output)
            return

        log = logger.bind(call_id=event.call_id, tool_name=event.tool_name)
        log.warning("Tool call completed without a start event", is_error=event.is_error)
        if event.is_error:
            self.sink.stream("stderr", f"[Tool {event.tool_name} failed: {event.output}]\n")
        else:
            self.sink.stream("stdout", f"[Tool {event.tool_name} completed]\n")

    def _handle_display_data_complete(self, event: ToolCallComplete) -> None:
        log = logger.bind(call_id=event.call_id)
        context = self.state.tool_contexts.pop(event.call_id, None)

        try:
            parsed = parse_display_data_output(event.output)
        except DisplayDataParseError as e:
            message = f"Failed to parse display_data output ({e})"
            log.warning("Invalid display_data output", reason=str(e))
            if context is not None:
                self._update_card(context, ToolStatus.ERROR, message)
            self.sink.stream("stderr", f"Error: {message}\n")
            return

        self.flush()
        self.state.close_response()
        if context is not None:
            content = DisplayContent.for_display(
                context.display_id, parsed.mime_bundle, parsed.metadata
            )
            self.sink.update_display_data(content)
        else:
            content = DisplayContent.for_display(
                self.state.next_display_id(DISPLAY_PREFIX), parsed.mime_bundle, parsed.metadata
            )
            self.sink.display_data(content)

        log.debug(
            "Displayed MIME bundle",
            display_id=content.display_id,
            mime_types=list(parsed.mime_bundle),
        )

        if self.echo_suppression:
            self.state.suppression.begin()

    def _handle_tool_approval_request(self, event: ToolApprovalRequest) -> None:
        logger.debug("Auto-approving tool call", approval_id=event.approval_id)
        self.agent.approve_tool_call(event.approval_id, self.auto_approve_reason)

    def _update_card(self, context: ToolCallContext, status: ToolStatus, output: str) -> None:
        self.sink.update_display_data(
            DisplayContent.for_display(
                context.display_id,
                build_tool_call_bundle(
                    context.tool_name, context.input, status, context.summary, output
                ),
            )
        )
