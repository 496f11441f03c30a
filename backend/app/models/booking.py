"""
HairBook Backend — Booking SQLAlchemy Model
=============================================

What:  ORM model representing the `bookings` table.
Who:   Used by BookingService to create bookings and list a user's bookings.

Table Design:
    - user_id: FK to users.id; always taken from the authenticated caller
    - date: appointment date/time (UTC, timezone-aware)
    - status: 'pending' on creation; nothing in this service changes it
    - created_at: assigned by the server at insert time

    Index on (user_id, date DESC) serves the only read pattern:
    "my bookings, latest appointment first".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DEFAULT_STATUS = "pending"


class Booking(Base):
    """
    An appointment request with a named hairdresser.

    Lifecycle:
        1. Created by POST /api/bookings (status = 'pending')
        2. Read-only afterwards (no update or cancel operations exist)
    """

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        comment="Owner; set from the bearer token, never from request input",
    )

    hairdresser_name: Mapped[str] = mapped_column(String(255), nullable=False)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Scheduled appointment date/time (UTC)",
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DEFAULT_STATUS,
        server_default=text(f"'{DEFAULT_STATUS}'"),
    )

    price: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, user_id={self.user_id}, "
            f"status='{self.status}', date='{self.date}')>"
        )


# ── Indexes ───────────────────────────────────────────────────────────────
Index("idx_bookings_user_date", Booking.user_id, Booking.date.desc())
