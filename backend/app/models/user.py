"""
HairBook Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by UserService for registration, login, location updates and the
       admin locations report.

Table Design:
    - UUID primary key generated in Python (portable across PostgreSQL and SQLite)
    - email: UNIQUE; the constraint backs up the service-level existence check
      when two registrations race
    - password_hash: bcrypt digest, never the raw password
    - role: "user" by default; "admin" is granted out of band (SQL or console)
    - location_*: last reported position; all three are NULL until the first
      report and are always written together
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DEFAULT_ROLE = "user"
ADMIN_ROLE = "admin"


class User(Base):
    """
    A registered customer (or admin) of the booking app.

    Lifecycle:
        1. Created by POST /api/register (role = 'user', no location)
        2. Location columns overwritten by each POST /api/location
        3. Never deleted by this service
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
        comment="Login identifier; unique across all users",
    )

    phone: Mapped[str] = mapped_column(String(64), nullable=False)

    password_hash: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="bcrypt digest of the password",
    )

    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DEFAULT_ROLE,
        server_default=text(f"'{DEFAULT_ROLE}'"),
    )

    # ── Last Known Location ───────────────────────────────────────────────
    location_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location_lng: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location_updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role='{self.role}')>"
