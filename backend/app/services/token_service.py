"""
HairBook Backend — Bearer Token Issuing & Verification
========================================================

What:  Signs and validates the bearer tokens that prove identity and role.
How:   PyJWT, HMAC (HS256 by default) over the configured shared secret.
       Claims: sub (user id), role, iat, exp = iat + 7 days.
Who:   UserService issues tokens at login; the auth gate verifies them on
       every gated request.

There is no revocation list. A token stays valid for its whole window even
if the user's role changes afterwards.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import InvalidTokenError
from app.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(days=7)
REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


class TokenService:
    """Issues and verifies signed bearer tokens for one signing key."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def issue(
        self,
        identity: uuid.UUID,
        role: str,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Create a signed token for `identity` with `role`.

        Args:
            identity: User id embedded as the `sub` claim
            role: Role embedded as the `role` claim
            now: Issuance instant (defaults to the current UTC time)

        Returns:
            Compact JWS string (`header.payload.signature`)
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(identity),
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + TOKEN_TTL).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Validate signature, structure and expiry of `token`.

        Returns:
            TokenClaims with the embedded identity and role

        Raises:
            InvalidTokenError: bad signature, malformed token, missing or
                ill-typed claims, or past the validity window
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError(message="Token has expired", context={"reason": "expired"})
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(context={"reason": type(e).__name__})

        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError:
            raise InvalidTokenError(context={"reason": "bad_claims"})
