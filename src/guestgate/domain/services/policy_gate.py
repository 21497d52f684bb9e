"""Policy gate: the checkpoint every data access passes through.

Services call ``authorize`` (or ``filter_readable``) before touching a
repository. The gate looks up the expression for ``(table, operation)`` in
the policy table, binds the caller and the row into the evaluation context,
and raises ``AccessDeniedError`` unless the expression is true. Missing
entries and broken expressions deny.
"""

from typing import Any, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.logging import get_logger
from guestgate.core.policy import PolicyError, compile_policy, evaluate_policy
from guestgate.domain.entities import Caller
from guestgate.domain.exceptions import AccessDeniedError
from guestgate.domain.services.role_resolver import RoleResolver
from guestgate.infrastructure.persistence.repositories import EventRepository

logger = get_logger(__name__)


def as_record(row: Any) -> dict[str, Any]:
    """Turn a model instance into a plain column dict; dicts pass through."""
    if row is None:
        return {}
    if isinstance(row, dict):
        return dict(row)
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


def only_fields(changes: Iterable[str] | None, allowed: Iterable[str] | None) -> bool:
    """True when every changed column is in ``allowed``."""
    return set(changes or ()) <= set(allowed or ())


class PolicyGate:
    """Evaluates access policies for one caller during one request."""

    def __init__(
        self,
        session: AsyncSession,
        caller: Caller,
        resolver: RoleResolver | None = None,
    ) -> None:
        self.caller = caller
        self.resolver = resolver or RoleResolver(session)
        self.events = EventRepository(session)
        self._owners: dict[str, str | None] = {}

    async def allows(
        self,
        table: str,
        operation: str,
        record: Any = None,
        changes: Iterable[str] | None = None,
    ) -> bool:
        """Evaluate the policy without raising.

        Args:
            table: Table name, e.g. "guests".
            operation: "select", "insert", "update" or "delete".
            record: Existing row (model or dict) or insert payload.
            changes: Columns touched by an update.

        Returns:
            True if the policy grants the operation.
        """
        try:
            node = compile_policy(table, operation)
        except PolicyError as e:
            logger.error("Policy expression is invalid", table=table, operation=operation, error=str(e))
            return False
        if node is None:
            return False

        context = {
            "auth": {"uid": self.caller.user_id, "email": self.caller.email},
            "request": {"channel": self.caller.channel},
            "record": as_record(record),
            "changes": sorted(changes or ()),
        }
        try:
            return bool(await evaluate_policy(node, context, self._functions()))
        except PolicyError as e:
            logger.error("Policy evaluation failed", table=table, operation=operation, error=str(e))
            return False

    async def authorize(
        self,
        table: str,
        operation: str,
        record: Any = None,
        changes: Iterable[str] | None = None,
    ) -> None:
        """Raise ``AccessDeniedError`` unless the policy grants the operation."""
        if not await self.allows(table, operation, record, changes):
            logger.warning(
                "Access denied",
                table=table,
                operation=operation,
                user_id=self.caller.user_id,
                channel=self.caller.channel,
            )
            raise AccessDeniedError(table, operation)

    async def filter_readable(self, table: str, rows: Iterable[Any]) -> list[Any]:
        """Keep the rows the caller may select, like row-level security."""
        return [row for row in rows if await self.allows(table, "select", row)]

    def _functions(self) -> dict[str, Any]:
        return {
            "has_role": self.resolver.has_role,
            "has_any_role": self.resolver.has_any_role,
            "role_of": self._role_name,
            "event_owner": self._event_owner,
            "only_fields": only_fields,
        }

    async def _role_name(self, user_id: str | None) -> str | None:
        role = await self.resolver.role_of(user_id)
        return role.value if role is not None else None

    async def _event_owner(self, event_id: str | None) -> str | None:
        if not event_id:
            return None
        if event_id not in self._owners:
            self._owners[event_id] = await self.events.get_owner_id(event_id)
        return self._owners[event_id]
