from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from flashquiz.core.config import settings

TOKEN_TYPE = "access"


def create_access_token(username: str, expires_delta: timedelta | None = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    claims = {
        "sub": username,
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Claims of a valid, unexpired access token; None otherwise."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None
    return payload
