"""
HairBook Backend — Auth Gate
==============================

What:  FastAPI dependencies guarding the bearer-protected endpoints.
How:   `require_identity` reads `Authorization: Bearer <token>`, verifies it
       with the app's TokenService and attaches the claims to
       `request.state.identity`. `require_admin` builds on it and checks the
       role claim.
Who:   Declared with `Depends(...)` on gated routes; runs before the handler,
       so a failed check means the handler never executes.

Outcomes:
    no / non-bearer header     → UnauthorizedError (401)
    bad signature / expired    → UnauthorizedError (401)
    valid token, role != admin → ForbiddenError (403, require_admin only)

The gate is a pure boundary check: it never reads the users table to
confirm the user still exists or still holds the claimed role.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import ForbiddenError, InvalidTokenError, UnauthorizedError
from app.middleware.request_id import request_id_var
from app.schemas.auth import TokenClaims
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


async def require_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    """Proceed with the verified identity, or short-circuit with 401."""
    if credentials is None:
        raise UnauthorizedError(context={"reason": "missing_token"})

    tokens: TokenService = request.app.state.token_service
    try:
        identity = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.info(
            "[%s] Rejected bearer token: %s",
            request_id_var.get(""),
            e.context.get("reason", "invalid"),
        )
        raise UnauthorizedError(context=e.context)

    request.state.identity = identity
    return identity


async def require_admin(identity: TokenClaims = Depends(require_identity)) -> TokenClaims:
    """Like require_identity, but the role claim must be 'admin' (else 403)."""
    if not identity.is_admin:
        raise ForbiddenError(context={"role": identity.role})
    return identity
