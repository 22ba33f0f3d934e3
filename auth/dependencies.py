"""
Access control for protected routers.
"""
from fastapi import Request

from app.errors import AuthError
from auth.jwt_handler import verify_token


def require_auth(request: Request) -> dict:
    """
    FastAPI dependency gating a route on a valid `Authorization: Bearer <token>` header.

    Missing header or token -> 401, token failing verification -> 403.
    The decoded claims are stored on `request.state.user` and returned.
    """
    header = request.headers.get("Authorization")
    if not header:
        raise AuthError("Token missing", status_code=401)

    parts = header.split(" ")
    if len(parts) < 2 or not parts[1]:
        raise AuthError("Token missing", status_code=401)

    claims = verify_token(parts[1])
    request.state.user = claims
    return claims
