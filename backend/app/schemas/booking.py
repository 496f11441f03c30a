"""
HairBook Backend — Booking Schemas
====================================

What:  Request body for booking creation and the booking representation
       returned by GET /api/bookings.
"""

import uuid
from typing import List, Optional

from pydantic import Field

from app.schemas.common import CamelModel, UtcDatetime


class BookingCreateRequest(CamelModel):
    """
    POST /api/bookings body.

    The owner is not part of the body: it always comes from the bearer token.
    A price of 0 is valid; only absent fields are rejected.
    """
    hairdresser_name: Optional[str] = Field(default=None, description="Who does the appointment")
    date: Optional[UtcDatetime] = Field(default=None, description="Appointment date/time (ISO 8601)")
    price: Optional[float] = Field(default=None, description="Agreed price")

    def missing_fields(self) -> List[str]:
        missing = []
        if self.hairdresser_name is None or not self.hairdresser_name.strip():
            missing.append("hairdresserName")
        if self.date is None:
            missing.append("date")
        if self.price is None:
            missing.append("price")
        return missing


class BookingOut(CamelModel):
    """A stored booking as returned to its owner."""
    id: uuid.UUID
    user_id: uuid.UUID
    hairdresser_name: str
    date: UtcDatetime
    status: str
    price: float
    created_at: UtcDatetime
