"""
HairBook Backend — Location Route
===================================

What:  POST /api/location, the caller's periodic position report (gated).
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_identity
from app.schemas.auth import TokenClaims
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.user import LocationUpdateRequest
from app.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Location"])


@router.post(
    "/location",
    response_model=MessageResponse,
    responses={
        400: {"description": "Coordinates missing", "model": ErrorResponse},
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    },
    summary="Report the caller's current location",
)
async def update_location(
    data: Optional[LocationUpdateRequest] = None,
    identity: TokenClaims = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await user_service.update_location(
        db=db,
        identity=identity,
        data=data or LocationUpdateRequest(),
    )
