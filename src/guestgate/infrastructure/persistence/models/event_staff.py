"""SQLAlchemy model for the event_staff table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from guestgate.infrastructure.persistence.database import Base


class EventStaffModel(Base):
    """A member of the working crew of an event and their check-in state."""

    __tablename__ = "event_staff"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Function at the event, unrelated to access roles",
    )
    checked_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    checkin_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<EventStaff(id={self.id}, name={self.name}, checked_in={self.checked_in})>"
