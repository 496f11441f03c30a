"""
HairBook Backend — Booking Routes
===================================

What:  POST /api/bookings (create) and GET /api/bookings (list own), both gated.
How:   The owner of every booking is the identity attached by the auth gate;
       nothing in the request body can change it.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.auth import TokenClaims
from app.schemas.booking import BookingCreateRequest, BookingOut
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.booking_service import booking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Bookings"])


@router.post(
    "/bookings",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing booking details", "model": ErrorResponse},
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    },
    summary="Book an appointment",
)
async def create_booking(
    data: Optional[BookingCreateRequest] = None,
    identity: TokenClaims = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Create a 'pending' booking owned by the caller."""
    return await booking_service.create_booking(
        db=db,
        identity=identity,
        data=data or BookingCreateRequest(),
    )


@router.get(
    "/bookings",
    response_model=List[BookingOut],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    },
    summary="List the caller's bookings",
    description="Returns every booking of the caller, latest appointment date first. Not paginated.",
)
async def list_bookings(
    identity: TokenClaims = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[BookingOut]:
    bookings = await booking_service.list_bookings(db=db, identity=identity)
    logger.debug("Returning %d bookings for user %s", len(bookings), identity.user_id)
    return bookings
