"""The AI kernel: notebook cells answered by an agent.

Each execute request sends the cell text to an AgentManager as a prompt and
turns the events it emits while responding into display operations on a
DisplaySink. The kernel follows this sequence per request:

1. Validate the request (empty code, provider configuration)
2. Subscribe an EventDispatcher to the agent's events
3. Await the agent's response
4. Flush, unsubscribe and reset the session state, on every exit path
5. Build the execute reply from the outcome
"""

import asyncio
import itertools
from typing import Any

import structlog

from ai_kernel import __version__
from ai_kernel.agent.base import AgentManager
from ai_kernel.config import KernelConfig
from ai_kernel.display.models import ExecuteReply
from ai_kernel.display.sinks import DisplaySink
from ai_kernel.kernel.dispatcher import EventDispatcher
from ai_kernel.kernel.prompts import build_prompt
from ai_kernel.kernel.session import ExecutionSessionState

logger = structlog.get_logger(__name__)

CONFIGURATION_ERROR = "ConfigurationError"
AI_ERROR = "AIError"

NOT_CONFIGURED_MESSAGE = "AI provider not configured"
NOT_CONFIGURED_STREAM_TEXT = (
    "Error: AI provider not configured. Check your API key in the AI kernel settings.\n"
)

PROTOCOL_VERSION = "5.3"

LANGUAGE_INFO: dict[str, Any] = {
    "codemirror_mode": {"name": "markdown"},
    "file_extension": ".md",
    "mimetype": "text/markdown",
    "name": "markdown",
    "nbconvert_exporter": "markdown",
    "pygments_lexer": "markdown",
    "version": "1.0",
}


class AIKernel:
    """Kernel that answers cells with an AI agent.

    Executions are serialized: a request that arrives while another is running
    waits for it to finish. Display identifiers are unique for the lifetime of
    the kernel.

    Attributes:
        agent_manager: Agent that generates responses
        sink: Receiver of display and stream operations
        provider_name: Provider name shown in the banner
        model_name: Model name shown in the banner
        config: Kernel rendering configuration
        execution_count: Number of execute requests received

    Example:
        >>> kernel = AIKernel(agent, RecordingSink(), "Anthropic", "claude")
        >>> reply = await kernel.execute_request("Summarize this notebook")
        >>> reply.status
        'ok'
    """

    def __init__(
        self,
        agent_manager: AgentManager,
        sink: DisplaySink,
        provider_name: str,
        model_name: str,
        config: KernelConfig | None = None,
    ) -> None:
        self.agent_manager = agent_manager
        self.sink = sink
        self.provider_name = provider_name
        self.model_name = model_name
        self.config = config or KernelConfig()
        self.execution_count = 0
        self._display_ids = itertools.count()
        self._lock = asyncio.Lock()

    def kernel_info_request(self) -> dict[str, Any]:
        """Build the kernel_info_reply content."""
        return {
            "implementation": "AI",
            "implementation_version": __version__,
            "language_info": dict(LANGUAGE_INFO),
            "protocol_version": PROTOCOL_VERSION,
            "status": "ok",
            "banner": f"AI Kernel - {self.provider_name} ({self.model_name})",
            "help_links": [
                {
                    "text": "JupyterLite AI",
                    "url": "https://github.com/jupyterlite/jupyterlite-ai",
                }
            ],
        }

    async def execute_request(self, code: str) -> ExecuteReply:
        """Execute a cell by prompting the agent.

        Args:
            code: Cell source

        Returns:
            ExecuteReply with status ok, or error tagged ConfigurationError
            (provider unusable) or AIError (agent reported or raised an error)
        """
        async with self._lock:
            self.execution_count += 1
            return await self._execute(code, self.execution_count)

    async def _execute(self, code: str, execution_count: int) -> ExecuteReply:
        log = logger.bind(execution_count=execution_count)

        if not code.strip():
            log.debug("Skipping empty cell")
            return ExecuteReply.ok(execution_count)

        if not self.agent_manager.has_valid_config():
            log.warning("AI provider not configured")
            self.sink.stream("stderr", NOT_CONFIGURED_STREAM_TEXT)
            return ExecuteReply.error(execution_count, CONFIGURATION_ERROR, NOT_CONFIGURED_MESSAGE)

        state = ExecutionSessionState(display_ids=self._display_ids)
        dispatcher = EventDispatcher(
            self.sink,
            self.agent_manager,
            state,
            auto_approve_reason=self.config.auto_approve_reason,
            echo_suppression=self.config.echo_suppression,
        )
        prompt = build_prompt(code, include_suffix=self.config.prompt_suffix)
        log.info("Starting execution", prompt_length=len(prompt))

        try:
            try:
                with self.agent_manager.agent_events.connected(dispatcher.handle):
                    try:
                        await self.agent_manager.generate_response(prompt)
                    finally:
                        dispatcher.flush()
            except Exception as e:
                message = str(e)
                log.error("Agent failed", error=message, exc_info=True)
                self.sink.stream("stderr", f"Error: {message}\n")
                return ExecuteReply.error(
                    execution_count, AI_ERROR, state.execution_error or message
                )

            if state.execution_error is not None:
                log.info("Execution finished with error", error=state.execution_error)
                return ExecuteReply.error(execution_count, AI_ERROR, state.execution_error)

            log.info("Execution finished")
            return ExecuteReply.ok(execution_count)
        finally:
            state.reset()
