"""
HairBook Backend — User Service
=================================

What:  Registration, login, location reports and the admin locations report.
How:   Validates presence of input on the request records, talks to the
       `users` table through the request's AsyncSession, hashes/verifies
       passwords and issues tokens through the collaborators it is handed.
Who:   Called by routes/auth.py, routes/location.py and routes/admin.py.

Design:
    UserService is stateless; every call receives the session and the
    collaborators (PasswordHasher, TokenService) it needs. bcrypt work runs
    in the threadpool so one login does not stall every other request on
    the event loop.

Error Handling:
    Missing input            → ValidationError (400)
    Email taken              → DuplicateEmailError (400), including when the
                               UNIQUE constraint fires on a concurrent insert
    Unknown email / bad pwd  → InvalidCredentialsError (400), same message
    Other SQLAlchemy errors  → DatabaseError (500)
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, TokenClaims
from app.schemas.common import MessageResponse
from app.schemas.user import Location, LocationUpdateRequest, PublicUser, UserLocation
from app.services.password_service import PasswordHasher
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for user accounts.

    Responsibilities:
        - register(): create a user with a hashed password
        - login(): check credentials and issue a bearer token
        - update_location(): overwrite the caller's last known position
        - list_user_locations(): admin report of every located user
    """

    async def register(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        data: RegisterRequest,
    ) -> MessageResponse:
        """
        Create a new user with role 'user'. No token is issued.

        Raises:
            ValidationError: any of name, email, phone, password is missing
            DuplicateEmailError: the email belongs to an existing user
            DatabaseError: the insert failed for another reason
        """
        missing = data.missing_fields()
        if missing:
            raise ValidationError(
                message="All fields are required",
                context={"missing": missing},
            )

        try:
            result = await db.execute(select(User.id).where(User.email == data.email))
            if result.scalar_one_or_none() is not None:
                raise DuplicateEmailError()

            password_hash = await run_in_threadpool(hasher.hash, data.password)
            user = User(
                name=data.name,
                email=data.email,
                phone=data.phone,
                password_hash=password_hash,
            )
            db.add(user)
            await db.flush()

        except IntegrityError:
            # Another registration with the same email committed between
            # the existence check and this insert.
            logger.info("Registration lost the race on the email uniqueness constraint")
            raise DuplicateEmailError()
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not register the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: %s", user.id)
        return MessageResponse(message="User registered successfully")

    async def login(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        tokens: TokenService,
        data: LoginRequest,
    ) -> LoginResponse:
        """
        Check credentials and issue a 7-day bearer token.

        Unknown email and wrong password raise the identical
        InvalidCredentialsError, and both paths perform one bcrypt
        verification.
        """
        missing = data.missing_fields()
        if missing:
            raise ValidationError(
                message="Email and password are required",
                context={"missing": missing},
            )

        try:
            result = await db.execute(select(User).where(User.email == data.email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None:
            await run_in_threadpool(hasher.dummy_verify)
            raise InvalidCredentialsError()

        if not await run_in_threadpool(hasher.verify, data.password, user.password_hash):
            raise InvalidCredentialsError()

        token = tokens.issue(user.id, user.role)
        logger.info("User %s logged in (role=%s)", user.id, user.role)
        return LoginResponse(token=token, user=PublicUser.model_validate(user))

    async def update_location(
        self,
        db: AsyncSession,
        identity: TokenClaims,
        data: LocationUpdateRequest,
    ) -> MessageResponse:
        """
        Overwrite the caller's location with (lat, lng, now).

        The row is selected by the token identity only; the body cannot
        name another user.
        """
        missing = data.missing_fields()
        if missing:
            raise ValidationError(
                message="Coordinates required",
                context={"missing": missing},
            )

        try:
            result = await db.execute(
                update(User)
                .where(User.id == identity.user_id)
                .values(
                    location_lat=data.lat,
                    location_lng=data.lng,
                    location_updated_at=datetime.now(timezone.utc),
                )
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating location: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the location. Please try again.",
                context={"user_id": str(identity.user_id)},
            )

        if result.rowcount == 0:
            # The gate trusts the token alone; the user row may be gone.
            logger.warning("Location report for unknown user %s ignored", identity.user_id)

        return MessageResponse(message="Location updated")

    async def list_user_locations(self, db: AsyncSession) -> List[UserLocation]:
        """Every user whose location has been reported at least once."""
        try:
            result = await db.execute(
                select(User)
                .where(User.location_lat.is_not(None))
                .order_by(User.name)
            )
            users = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing user locations: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve user locations. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [
            UserLocation(
                name=user.name,
                email=user.email,
                phone=user.phone,
                location=Location(
                    lat=user.location_lat,
                    lng=user.location_lng,
                    updated_at=user.location_updated_at,
                ),
            )
            for user in users
        ]


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
