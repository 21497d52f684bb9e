"""SQLAlchemy model for the events table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from guestgate.infrastructure.persistence.database import Base


class EventModel(Base):
    """An organized event with its public display settings.

    Image fields hold opaque URLs produced by external storage.
    """

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    wifi_ssid: Mapped[str | None] = mapped_column(String(255), nullable=True)
    wifi_pass: Mapped[str | None] = mapped_column(String(255), nullable=True)
    wifi_img_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    photo_img_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    event_logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    primary_color: Mapped[str] = mapped_column(String(20), nullable=False, default="#f37021")
    secondary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    tertiary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    event_logo_size: Mapped[int] = mapped_column(Integer, nullable=False, default=150)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Identity that created the event",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name})>"
