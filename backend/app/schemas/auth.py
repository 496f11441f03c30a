"""
HairBook Backend — Authentication Schemas
===========================================

What:  Request/response bodies for registration and login, plus the claims
       carried by a bearer token.

Presence checks live on the request records (`missing_fields()`), not in
Pydantic field constraints: the API reports absent input with its own
messages ("All fields are required") instead of FastAPI's 422 error list.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.user import ADMIN_ROLE
from app.schemas.common import CamelModel
from app.schemas.user import PublicUser


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class RegisterRequest(CamelModel):
    """POST /api/register body. Every field is required."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None

    def missing_fields(self) -> List[str]:
        return [
            field
            for field in ("name", "email", "phone", "password")
            if _blank(getattr(self, field))
        ]


class LoginRequest(CamelModel):
    """POST /api/login body."""
    email: Optional[str] = None
    password: Optional[str] = None

    def missing_fields(self) -> List[str]:
        return [field for field in ("email", "password") if _blank(getattr(self, field))]


class LoginResponse(BaseModel):
    """Token plus the public projection of the user (never the digest)."""
    token: str = Field(description="Bearer token valid for 7 days")
    user: PublicUser


class TokenClaims(BaseModel):
    """
    Verified contents of a bearer token.

    The auth gate attaches an instance to `request.state.identity` and hands
    it to gated handlers. `sub` is the user id.
    """
    sub: uuid.UUID
    role: str
    iat: int
    exp: int

    @property
    def user_id(self) -> uuid.UUID:
        return self.sub

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE
