"""Subscription handles for agent event delivery.

An AgentEventSignal fans events out to connected handlers. Each call to
subscribe() returns a Subscription handle that owns the connection; the
connected() context manager scopes a handler to a block and guarantees it is
detached on every exit path.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from ai_kernel.events.base import AgentEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[AgentEvent], None]


class Subscription:
    """Handle for one handler connected to an AgentEventSignal.

    Example:
        >>> signal = AgentEventSignal()
        >>> subscription = signal.subscribe(print)
        >>> subscription.unsubscribe()
        >>> subscription.active
        False
    """

    def __init__(self, signal: "AgentEventSignal", handler: EventHandler) -> None:
        self._signal = signal
        self._handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the handler still receives events."""
        return self._active

    @property
    def handler(self) -> EventHandler:
        return self._handler

    def unsubscribe(self) -> None:
        """Detach the handler. Calling this more than once is a no-op."""
        if not self._active:
            return
        self._active = False
        self._signal._detach(self)


class AgentEventSignal:
    """Synchronous fan-out of agent events to subscribed handlers.

    Handlers run in subscription order on the emitting thread. A handler that
    raises is logged and the exception propagates to the emitter.

    Example:
        >>> signal = AgentEventSignal()
        >>> received = []
        >>> with signal.connected(received.append):
        ...     signal.emit(MessageChunk(chunk="Hi"))
        >>> received
        [MessageChunk(chunk='Hi')]
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, handler: EventHandler) -> Subscription:
        """Connect a handler and return its subscription handle.

        Args:
            handler: Callable invoked with each emitted event

        Returns:
            Subscription handle; call unsubscribe() to detach
        """
        subscription = Subscription(self, handler)
        self._subscriptions.append(subscription)
        logger.debug("Handler subscribed", subscriber_count=len(self._subscriptions))
        return subscription

    @contextmanager
    def connected(self, handler: EventHandler) -> Iterator[Subscription]:
        """Subscribe a handler for the duration of a with-block.

        Args:
            handler: Callable invoked with each emitted event

        Yields:
            The active Subscription
        """
        subscription = self.subscribe(handler)
        try:
            yield subscription
        finally:
            subscription.unsubscribe()

    def emit(self, event: AgentEvent) -> None:
        """Deliver an event to every subscribed handler.

        Args:
            event: The event to deliver

        Raises:
            Exception: Whatever a handler raises
        """
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription.handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    event_type=type(event).__name__,
                    error=str(e),
                    exc_info=True,
                )
                raise

    def _detach(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
        logger.debug("Handler unsubscribed", subscriber_count=len(self._subscriptions))
