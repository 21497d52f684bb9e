"""SQLAlchemy model for the user_roles table.

A user holds at most one role. The unique constraint sits on ``user_id``
alone, so neither a second role nor a duplicate of the same role can be
inserted, even by two concurrent signups.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from guestgate.infrastructure.persistence.database import Base


class UserRoleModel(Base):
    """SQLAlchemy model for the user_roles table.

    Attributes:
        id: Primary key (UUID string).
        user_id: Identity holding the role.
        role: One of 'admin', 'staff', 'reception'.
        created_at: Timestamp of the assignment.
    """

    __tablename__ = "user_roles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Identity holding the role",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Role name (admin, staff, reception)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (UniqueConstraint("user_id", name="uq_user_roles_user_id"),)

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role={self.role})>"
