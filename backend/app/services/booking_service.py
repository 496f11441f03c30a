"""
HairBook Backend — Booking Service
====================================

What:  Creates bookings for the authenticated caller and lists them back.
Who:   Called by routes/bookings.py.

There is no conflict detection: two bookings with the same hairdresser at
the same time are both accepted.
"""

import logging
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, ValidationError
from app.models.booking import Booking
from app.schemas.auth import TokenClaims
from app.schemas.booking import BookingCreateRequest, BookingOut
from app.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class BookingService:
    """Stateless business logic for the `bookings` table."""

    async def create_booking(
        self,
        db: AsyncSession,
        identity: TokenClaims,
        data: BookingCreateRequest,
    ) -> MessageResponse:
        """
        Persist a 'pending' booking owned by the token identity.

        Raises:
            ValidationError: hairdresserName, date or price is missing
            DatabaseError: the insert failed
        """
        missing = data.missing_fields()
        if missing:
            raise ValidationError(
                message="All booking details are required",
                context={"missing": missing},
            )

        booking = Booking(
            user_id=identity.user_id,
            hairdresser_name=data.hairdresser_name,
            date=data.date,
            price=data.price,
        )
        try:
            db.add(booking)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating booking: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the booking. Please try again.",
                context={"user_id": str(identity.user_id)},
            )

        logger.info("Booking %s created for user %s", booking.id, identity.user_id)
        return MessageResponse(message="Booking created")

    async def list_bookings(
        self,
        db: AsyncSession,
        identity: TokenClaims,
    ) -> List[BookingOut]:
        """
        All bookings of the caller, latest appointment date first.

        Query plan:
            SELECT ... FROM bookings WHERE user_id = :id ORDER BY date DESC
            → served by idx_bookings_user_date
        """
        try:
            result = await db.execute(
                select(Booking)
                .where(Booking.user_id == identity.user_id)
                .order_by(desc(Booking.date), desc(Booking.created_at))
            )
            bookings = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing bookings: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bookings. Please try again.",
                context={"user_id": str(identity.user_id)},
            )

        return [BookingOut.model_validate(booking) for booking in bookings]


booking_service = BookingService()
