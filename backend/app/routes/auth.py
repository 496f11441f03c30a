"""
HairBook Backend — Registration & Login Routes
================================================

What:  POST /api/register and POST /api/login.
How:   Parse the JSON body, delegate to UserService, return its result.
Who:   Called by the mobile client's sign-up and sign-in screens.

Neither endpoint is gated. A missing body is treated like an empty one so
the client gets the usual "required" message instead of a schema error.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_password_hasher, get_token_service
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.password_service import PasswordHasher
from app.services.token_service import TokenService
from app.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields or email already registered", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    data: Optional[RegisterRequest] = None,
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> MessageResponse:
    """
    Create an account with role 'user'.

    No token is returned; the client logs in separately.
    """
    return await user_service.register(db=db, hasher=hasher, data=data or RegisterRequest())


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in and receive a bearer token",
)
async def login(
    data: Optional[LoginRequest] = None,
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    return await user_service.login(
        db=db,
        hasher=hasher,
        tokens=tokens,
        data=data or LoginRequest(),
    )
