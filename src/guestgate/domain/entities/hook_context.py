"""Hook context and exceptions for the hook system.

Contains the core data structures used by the hook system:
- HookContext: Context passed to all hook callbacks
- AbortHookException: Raised by before-hooks to cancel operations
- HookResult: Result of a hook trigger operation
"""

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class AbortHookException(Exception):
    """Raised by a hook to cancel the operation that triggered it.

    Args:
        message: Human-readable error message.
        status_code: HTTP status code to return (default: 400 Bad Request).
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class HookContext:
    """Context passed to all hook callbacks.

    Attributes:
        user_id: The acting identity, or None for public or system actions.
        session: Database session of the triggering operation, if any.
        request_id: Correlation ID for logging and tracing.

    Example:
        async def my_hook(event: str, data: dict, context: HookContext) -> dict:
            logger.info("Hook fired", hook_event=event, user_id=context.user_id)
            return data
    """

    user_id: Optional[str] = None
    session: Optional["AsyncSession"] = None
    request_id: str = ""

    def __post_init__(self) -> None:
        if not self.request_id:
            self.request_id = f"hk_{uuid.uuid4().hex[:12]}"


@dataclass
class HookResult:
    """Result of a hook trigger operation.

    Attributes:
        success: Whether all hooks executed successfully.
        aborted: Whether the operation was aborted by a hook.
        abort_message: Message from AbortHookException if aborted.
        abort_status_code: Status code from AbortHookException if aborted.
        errors: List of error messages from hooks that failed.
        data: Modified data from the hook chain.
    """

    success: bool = True
    aborted: bool = False
    abort_message: Optional[str] = None
    abort_status_code: int = 400
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None
