"""
HairBook Backend — Shared FastAPI Dependencies
================================================

What:  Accessors for the per-application objects built by `create_app()`.
How:   Each reads `request.app.state`; two apps built with different
       Settings never share a hasher or a signing key.
"""

from fastapi import Request

from app.services.password_service import PasswordHasher
from app.services.token_service import TokenService


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service
