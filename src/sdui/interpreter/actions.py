"""Action Dispatcher - routes interactions to registered handlers."""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from sdui.core import get_logger
from sdui.core.errors import ActionNotFoundError
from sdui.monitoring import metrics_collector
from .context import ActionHandler, ContextSource
from .output import ActionBinding

logger = get_logger(__name__)


class ActionDispatcher:
    """
    Looks up action ids in a context and invokes the handler with the
    scoped item.

    Missing handlers and handler failures are logged and absorbed: dispatch
    never raises to the caller. After a handler commits, `on_change` is
    signalled so the owner can rebuild its context and re-render.
    """

    def __init__(
        self,
        context: ContextSource,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.context = context
        self.on_change = on_change
        self._pending: set[asyncio.Task[None]] = set()

    def _lookup(self, action_id: str) -> ActionHandler:
        handler = self.context.action(action_id)
        if handler is None:
            raise ActionNotFoundError(action_id)
        return handler

    def dispatch(self, action_id: str, scoped_item: Any = None) -> asyncio.Task[None] | None:
        """
        Invoke the handler for action_id.

        Synchronous handlers run inline. Coroutine handlers are scheduled on
        the running loop (the task is returned) or, with no loop running,
        run to completion.

        Returns:
            The scheduled task for async handlers on a running loop, else None
        """
        try:
            handler = self._lookup(action_id)
        except ActionNotFoundError as e:
            logger.warning("action_not_found", action_id=e.action_id)
            metrics_collector.record_action("missing")
            return None

        try:
            result = handler(scoped_item)
        except Exception as e:
            self._record_failure(action_id, e)
            return None

        if inspect.isawaitable(result):
            return self._run_awaitable(action_id, result)

        self._committed(action_id)
        return None

    async def adispatch(self, action_id: str, scoped_item: Any = None) -> None:
        """Invoke the handler and wait for it, async handlers included."""
        try:
            handler = self._lookup(action_id)
        except ActionNotFoundError as e:
            logger.warning("action_not_found", action_id=e.action_id)
            metrics_collector.record_action("missing")
            return

        try:
            result = handler(scoped_item)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._record_failure(action_id, e)
            return

        self._committed(action_id)

    def trigger(self, binding: ActionBinding) -> asyncio.Task[None] | None:
        """Dispatch a bound action from interpreted output."""
        return self.dispatch(binding.action_id, binding.item)

    def _run_awaitable(self, action_id: str, awaitable: Awaitable[None]) -> asyncio.Task[None] | None:
        async def runner() -> None:
            try:
                await awaitable
            except Exception as e:
                self._record_failure(action_id, e)
                return
            self._committed(action_id)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(runner())
            return None

        task = loop.create_task(runner())
        # Keep a strong reference until the task finishes
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _committed(self, action_id: str) -> None:
        logger.debug("action_dispatched", action_id=action_id)
        metrics_collector.record_action("handled")
        if self.on_change is not None:
            self.on_change()

    def _record_failure(self, action_id: str, error: Exception) -> None:
        logger.error("action_failed", action_id=action_id, error=str(error), exc_info=True)
        metrics_collector.record_action("failed")


__all__ = ["ActionDispatcher"]
