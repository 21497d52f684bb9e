"""Who is making a request.

A ``Caller`` is built once per request by the API dependencies and passed
explicitly to every service; no session state is kept globally.
"""

from dataclasses import dataclass

AUTHENTICATED_CHANNEL = "authenticated"
PUBLIC_CHANNEL = "public"


@dataclass(frozen=True)
class Caller:
    """Identity and channel of the current request.

    Attributes:
        user_id: Identity ID, or None on the public channel.
        email: Identity email, or None on the public channel.
        channel: 'authenticated' or 'public'.
    """

    user_id: str | None = None
    email: str | None = None
    channel: str = AUTHENTICATED_CHANNEL

    def __post_init__(self) -> None:
        if self.channel not in (AUTHENTICATED_CHANNEL, PUBLIC_CHANNEL):
            raise ValueError(f"Unknown channel: {self.channel}")
        if self.channel == AUTHENTICATED_CHANNEL and not self.user_id:
            raise ValueError("Authenticated callers need a user_id")

    @classmethod
    def public(cls) -> "Caller":
        """Unauthenticated caller of a public screen."""
        return cls(user_id=None, email=None, channel=PUBLIC_CHANNEL)

    @property
    def is_public(self) -> bool:
        return self.channel == PUBLIC_CHANNEL
