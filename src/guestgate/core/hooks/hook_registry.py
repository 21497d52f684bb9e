"""Hook registry: registration and priority-ordered execution of hooks.

Hooks are async callables ``(event, data, context) -> dict | None``. A hook
may return a replacement payload, raise ``AbortHookException`` to stop the
chain, or fail; failures are logged and collected in the ``HookResult``
unless the hook was registered with ``stop_on_error``.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from guestgate.core.hooks.hook_events import EVENT_CATEGORIES
from guestgate.core.logging import get_logger
from guestgate.domain.entities.hook_context import (
    AbortHookException,
    HookContext,
    HookResult,
)

logger = get_logger(__name__)


@dataclass
class RegisteredHook:
    """A callback registered for one event.

    Attributes:
        id: Handle returned by ``register``.
        event: Event name.
        callback: Async function to call.
        filters: Tags the trigger must carry, e.g. ``{"table": "guests"}``.
        priority: Higher runs first; ties run in registration order.
        stop_on_error: Whether a failure ends the chain.
        is_builtin: Built-in hooks cannot be unregistered.
    """

    id: str
    event: str
    callback: Callable
    filters: dict[str, Any] = field(default_factory=dict)
    priority: int = 0
    stop_on_error: bool = False
    is_builtin: bool = False
    order: int = 0


class HookRegistry:
    """Central hook registration and execution engine.

    Example:
        registry = HookRegistry()
        hook_id = registry.register(HookEvent.ON_ROLE_AFTER_ASSIGN, notify_admins)
        await registry.trigger(
            HookEvent.ON_ROLE_AFTER_ASSIGN,
            data={"user_id": user_id, "role": "staff"},
            context=HookContext(user_id=user_id),
        )
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[RegisteredHook]] = {}
        self._by_id: dict[str, RegisteredHook] = {}
        self._counter = 0

    def register(
        self,
        event: str,
        callback: Callable,
        filters: Optional[dict[str, Any]] = None,
        priority: int = 0,
        stop_on_error: bool = False,
        is_builtin: bool = False,
    ) -> str:
        """Register a hook for an event.

        Raises:
            ValueError: If the event name is unknown.

        Returns:
            Hook ID for later removal.
        """
        if event not in EVENT_CATEGORIES:
            raise ValueError(f"Unknown hook event: {event}")

        self._counter += 1
        hook = RegisteredHook(
            id=f"hook_{uuid.uuid4().hex[:12]}",
            event=event,
            callback=callback,
            filters=filters or {},
            priority=priority,
            stop_on_error=stop_on_error,
            is_builtin=is_builtin,
            order=self._counter,
        )
        self._hooks.setdefault(event, []).append(hook)
        self._by_id[hook.id] = hook

        logger.debug(
            "Hook registered",
            hook_id=hook.id,
            hook_event=event,
            priority=priority,
            is_builtin=is_builtin,
        )
        return hook.id

    def unregister(self, hook_id: str) -> bool:
        """Remove a hook. Built-in and unknown hooks are left alone."""
        hook = self._by_id.get(hook_id)
        if hook is None:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False
        if hook.is_builtin:
            logger.warning("Cannot unregister built-in hook", hook_id=hook_id, hook_event=hook.event)
            return False

        remaining = [h for h in self._hooks[hook.event] if h.id != hook_id]
        if remaining:
            self._hooks[hook.event] = remaining
        else:
            del self._hooks[hook.event]
        del self._by_id[hook_id]

        logger.debug("Hook unregistered", hook_id=hook_id, hook_event=hook.event)
        return True

    async def trigger(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        context: Optional[HookContext] = None,
        filters: Optional[dict[str, Any]] = None,
    ) -> HookResult:
        """Run every matching hook for an event in priority order.

        Returns:
            HookResult with the final payload and any collected errors.
        """
        result = HookResult(success=True, data=data)
        hooks = self._matching(self._hooks.get(event, []), filters)
        if not hooks:
            return result

        logger.debug("Triggering hooks", hook_event=event, hook_count=len(hooks))

        for hook in sorted(hooks, key=lambda h: (-h.priority, h.order)):
            try:
                returned = await self._call(hook, event, result.data, context)
            except AbortHookException as e:
                logger.info(
                    "Hook aborted operation",
                    hook_id=hook.id,
                    hook_event=event,
                    message=e.message,
                )
                result.success = False
                result.aborted = True
                result.abort_message = e.message
                result.abort_status_code = e.status_code
                return result
            except Exception as e:
                logger.error(
                    "Hook execution failed",
                    hook_id=hook.id,
                    hook_event=event,
                    error=str(e),
                )
                result.errors.append(f"Hook {hook.id} failed: {e}")
                if hook.stop_on_error:
                    result.success = False
                    return result
                continue

            if isinstance(returned, dict):
                result.data = returned

        return result

    async def _call(
        self,
        hook: RegisteredHook,
        event: str,
        data: Optional[dict[str, Any]],
        context: Optional[HookContext],
    ) -> Any:
        if asyncio.iscoroutinefunction(hook.callback):
            return await hook.callback(event, data, context)
        logger.warning("Hook callback is not async", hook_id=hook.id, hook_event=event)
        return hook.callback(event, data, context)

    @staticmethod
    def _matching(
        hooks: list[RegisteredHook],
        filters: Optional[dict[str, Any]],
    ) -> list[RegisteredHook]:
        """A hook matches when each of its filters equals the trigger's."""
        if not filters:
            return list(hooks)
        return [
            hook
            for hook in hooks
            if all(filters.get(key) == value for key, value in hook.filters.items())
        ]

    def get_hooks_for_event(self, event: str) -> list[RegisteredHook]:
        return list(self._hooks.get(event, []))

    def clear(self, include_builtin: bool = False) -> int:
        """Remove registered hooks, keeping built-ins unless asked otherwise.

        Returns:
            Number of hooks removed.
        """
        if include_builtin:
            count = len(self._by_id)
            self._hooks.clear()
            self._by_id.clear()
        else:
            removable = [hook_id for hook_id, hook in self._by_id.items() if not hook.is_builtin]
            count = sum(1 for hook_id in removable if self.unregister(hook_id))

        logger.debug("Hooks cleared", count=count, include_builtin=include_builtin)
        return count
