"""
Session tokens - signed JWTs carrying the user's email claim.
Stateless: a pure function of SECRET_KEY.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from app.config import settings
from app.utils.errors import Unauthenticated, Forbidden


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token embedding the given claims (must include email)"""
    if not data.get("email"):
        raise ValueError("Token claims must include an email")

    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: Optional[str]) -> dict:
    """
    Validate signature and expiry and return the claims.

    Raises:
        Unauthenticated: token missing, malformed, expired or without an email claim
        Forbidden: signature does not match
    """
    if not token:
        raise Unauthenticated("Unauthorized")

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except jwt.InvalidSignatureError:
        raise Forbidden("Forbidden")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token")

    if not payload.get("email"):
        raise Unauthenticated("Invalid token")

    return payload
