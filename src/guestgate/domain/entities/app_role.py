"""The closed set of access roles.

Roles carry no order: each one has its own capability set, expressed in the
policy table rather than by comparing roles.
"""

from enum import Enum

# Labels used by earlier deployments, accepted on input only
ROLE_ALIASES = {
    "equipe": "staff",
    "recepcao": "reception",
    "recepção": "reception",
}


class AppRole(str, Enum):
    """Role granted to a user through an access code."""

    ADMIN = "admin"
    STAFF = "staff"
    RECEPTION = "reception"

    @classmethod
    def parse(cls, value: "str | AppRole") -> "AppRole":
        """Normalise a role name, accepting legacy aliases.

        Raises:
            ValueError: If the value names no role.
        """
        if isinstance(value, AppRole):
            return value
        name = value.strip().lower()
        name = ROLE_ALIASES.get(name, name)
        return cls(name)

    @classmethod
    def try_parse(cls, value: str | None) -> "AppRole | None":
        if value is None:
            return None
        try:
            return cls.parse(value)
        except ValueError:
            return None
