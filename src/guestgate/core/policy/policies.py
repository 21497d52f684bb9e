"""Access policy table.

Every data operation is looked up here as ``(table, operation)`` and the
matching expression is evaluated by ``PolicyGate``. A missing entry denies.

Context available to expressions:
    auth.uid, auth.email    the caller, null on the public channel
    request.channel         'authenticated' or 'public'
    record.<column>         the existing row, or the payload on insert
    changes                 names of the columns an update touches

Functions: has_role(uid, role), role_of(uid), has_any_role(uid),
event_owner(event_id), only_fields(changes, [columns]).

No entry grants insert or update on user_roles, and only admins may read
access_codes. Identities are only ever touched through the password reset,
which is admin only; login records are otherwise read by the identity
provider alone. Roles are assigned exclusively by RoleAssignmentService,
which works on the trusted session and never consults this table.
"""

from functools import lru_cache

from .ast import Node
from .lexer import Lexer
from .parser import Parser

SELECT = "select"
INSERT = "insert"
UPDATE = "update"
DELETE = "delete"
OPERATIONS = (SELECT, INSERT, UPDATE, DELETE)

IS_ADMIN = "has_role(auth.uid, 'admin')"
IS_ADMIN_OR_STAFF = "role_of(auth.uid) in ['admin', 'staff']"
IS_SELF = "(auth.uid != null and record.user_id == auth.uid)"
IS_PUBLIC = "request.channel == 'public'"

POLICIES: dict[str, dict[str, str]] = {
    "user_roles": {
        SELECT: f"{IS_SELF} or {IS_ADMIN}",
        INSERT: "false",
        UPDATE: "false",
        DELETE: IS_ADMIN,
    },
    "access_codes": {
        SELECT: IS_ADMIN,
        INSERT: "false",
        UPDATE: IS_ADMIN,
        DELETE: "false",
    },
    "profiles": {
        SELECT: f"{IS_SELF} or {IS_ADMIN}",
        INSERT: "false",
        UPDATE: f"{IS_SELF} or {IS_ADMIN}",
        DELETE: IS_ADMIN,
    },
    "events": {
        SELECT: f"{IS_PUBLIC} or has_any_role(auth.uid)",
        INSERT: f"{IS_ADMIN_OR_STAFF} and record.user_id == auth.uid",
        UPDATE: IS_ADMIN_OR_STAFF,
        DELETE: f"{IS_ADMIN} or (has_role(auth.uid, 'staff') and record.user_id == auth.uid)",
    },
    "guests": {
        SELECT: f"{IS_PUBLIC} or has_any_role(auth.uid)",
        INSERT: f"{IS_ADMIN_OR_STAFF} or ({IS_PUBLIC} and record.checked_in == true)",
        UPDATE: (
            f"{IS_ADMIN_OR_STAFF} or (has_role(auth.uid, 'reception')"
            " and only_fields(changes, ['checked_in', 'checkin_time']))"
        ),
        DELETE: IS_ADMIN,
    },
    "event_staff": {
        SELECT: "has_any_role(auth.uid)",
        INSERT: IS_ADMIN_OR_STAFF,
        UPDATE: (
            f"{IS_ADMIN_OR_STAFF} or (has_role(auth.uid, 'reception')"
            " and only_fields(changes, ['checked_in', 'checkin_time']))"
        ),
        DELETE: IS_ADMIN,
    },
    "identities": {
        SELECT: "false",
        INSERT: "false",
        UPDATE: f"{IS_ADMIN} and only_fields(changes, ['password'])",
        DELETE: "false",
    },
    "activity_logs": {
        SELECT: (
            f"{IS_ADMIN_OR_STAFF} or (has_any_role(auth.uid)"
            " and event_owner(record.event_id) == auth.uid)"
        ),
        INSERT: f"has_any_role(auth.uid) or ({IS_PUBLIC} and record.action == 'Auto Check-in')",
        UPDATE: "false",
        DELETE: "false",
    },
}


def get_policy(table: str, operation: str) -> str | None:
    """Return the expression for an operation, or None when none is defined."""
    return POLICIES.get(table, {}).get(operation)


@lru_cache(maxsize=None)
def compile_policy(table: str, operation: str) -> Node | None:
    """Parse and cache the expression for ``(table, operation)``."""
    expression = get_policy(table, operation)
    if expression is None:
        return None
    return Parser(Lexer(expression)).parse()
