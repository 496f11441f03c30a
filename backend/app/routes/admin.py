"""
HairBook Backend — Admin Routes
=================================

What:  GET /api/admin/users-locations, the admin map of located users.
How:   Gated by `require_admin`: a valid token whose role claim is not
       'admin' gets 403, no token at all gets 401.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_admin
from app.schemas.auth import TokenClaims
from app.schemas.common import ErrorResponse
from app.schemas.user import UserLocation
from app.services.user_service import user_service

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get(
    "/users-locations",
    response_model=List[UserLocation],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
    },
    summary="List every user with a reported location",
)
async def users_locations(
    admin: TokenClaims = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserLocation]:
    return await user_service.list_user_locations(db=db)
