"""
HairBook Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request, plus the bearer gate.

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route Handler

    - Request ID: correlation ID shared by every log line of one request
    - Access Logging: method, path, status and duration, tagged with the ID
    - CORS: preflight handling for the mobile/web clients

Route-level gate (not a Starlette middleware):
    auth.require_identity / auth.require_admin run as FastAPI dependencies
    on the protected routes only.
"""
