import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import JWTError, jwt

from app.config import settings
from app.errors import AuthError
from app.logger import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: Union[str, int]) -> timedelta:
    """Parse `3600`, `30s`, `15m`, `1h` or `7d` into a timedelta."""
    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def create_access_token(
    data: dict,
    secret: Optional[str] = None,
    expires_in: Optional[Union[str, int]] = None,
    now: Optional[datetime] = None,
) -> str:
    payload = data.copy()
    issued_at = now or datetime.now(timezone.utc)
    lifetime = parse_duration(expires_in if expires_in is not None else settings.token_expires_in)
    payload.update({
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + lifetime).timestamp()),
    })
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=ALGORITHM)


def verify_token(
    token: str,
    secret: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    """
    Return the claims of a token signed with `secret` that has not expired at `now`.
    Raises AuthError (403) otherwise.
    """
    try:
        claims = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise AuthError("Invalid token", status_code=403) from e

    expires_at = claims.get("exp")
    current = (now or datetime.now(timezone.utc)).timestamp()
    if not isinstance(expires_at, (int, float)) or current >= expires_at:
        logger.debug("Token rejected: expired")
        raise AuthError("Invalid token", status_code=403)

    return claims
