import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from flashquiz.auth.jwt import create_access_token
from flashquiz.core.security import get_current_user, hash_password, verify_password
from flashquiz.db.session import get_db
from flashquiz.models.user import User
from flashquiz.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
):
    username = data.username.strip()
    existing_user = db.query(User).filter(User.username == username).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        username=username,
        password_hash=hash_password(data.password),
        fname=data.fname,
        lname=data.lname,
    )
    db.add(user)
    db.commit()
    logger.info(f"Registered user {username}")

    return TokenResponse(access_token=create_access_token(user.username))


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.username == data.username.strip()).first()

    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return TokenResponse(access_token=create_access_token(user.username))
