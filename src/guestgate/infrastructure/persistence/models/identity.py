"""SQLAlchemy model for the identities table.

Identities are the login records kept by the local identity provider. The
rest of the system only ever references ``id`` and ``email``.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from guestgate.infrastructure.persistence.database import Base


class IdentityModel(Base):
    """SQLAlchemy model for the identities table.

    Attributes:
        id: Primary key (UUID string).
        email: Login email, stored lowercased and unique.
        password_hash: Argon2id hash of the password.
        is_active: Whether the identity can log in.
        created_at: Timestamp when the identity was created.
        last_login: Timestamp of last successful login.
        role_revoked_at: Set when a role is revoked. A revoked identity can
            never redeem an access code again.
    """

    __tablename__ = "identities"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Identity ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        comment="Timestamp of last successful login",
    )
    role_revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        comment="Set once a role is revoked; blocks further code redemption",
    )

    def __repr__(self) -> str:
        return f"<Identity(id={self.id}, email={self.email})>"
