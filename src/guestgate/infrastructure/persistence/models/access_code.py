"""SQLAlchemy model for the access_codes table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from guestgate.infrastructure.persistence.database import Base


class AccessCodeModel(Base):
    """Current registration code of a role.

    Exactly one row exists per role. Rows are seeded at initialization and
    only ever overwritten afterwards. No two roles share a code.

    Attributes:
        id: Primary key (UUID string).
        role: Role the code grants, unique.
        code: Secret presented at signup.
        updated_at: Timestamp of the last change.
        updated_by: Admin identity that made the last change.
    """

    __tablename__ = "access_codes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        comment="Role granted by the code",
    )
    code: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Registration secret",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    updated_by: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("identities.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        # The code itself is never rendered
        return f"<AccessCode(role={self.role})>"
