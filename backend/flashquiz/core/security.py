from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from flashquiz.auth.jwt import decode_access_token
from flashquiz.core.exceptions import Unauthorized
from flashquiz.db.session import get_db
from flashquiz.models.user import User

# reads "Authorization: Bearer <token>"; a missing header is ours to report
security = HTTPBearer(auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise Unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        raise Unauthorized()

    user = db.query(User).filter(User.username == payload["sub"]).first()
    if not user:
        # same answer as a bad token, so usernames cannot be probed
        raise Unauthorized()

    return user
