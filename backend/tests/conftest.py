"""Pytest fixtures: in-memory SQLite, fresh schema per test."""
import os
import logging
from itertools import cycle

import pytest
from fastapi.testclient import TestClient

logging.getLogger("sqlalchemy").setLevel(logging.ERROR)

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from flashquiz.main import app
from flashquiz.core.enums import DifficultyLevel
from flashquiz.core.security import hash_password
from flashquiz.db.base import Base
from flashquiz.db.session import SessionLocal, engine, get_db
from flashquiz.models import Category, Flashcard, User


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db) -> TestClient:
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_user(db) -> User:
    user = User(
        username="testuser",
        password_hash=hash_password("password123"),
        fname="Test",
        lname="User",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def other_user(db) -> User:
    user = User(username="otheruser", password_hash=hash_password("password123"))
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def auth_token(client: TestClient, test_user: User) -> str:
    response = client.post(
        "/api/auth/login",
        json={"username": test_user.username, "password": "password123"},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture(scope="function")
def auth_headers(auth_token: str) -> dict:
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture(scope="function")
def make_flashcards(db, test_user):
    """Factory: make_flashcards("Biology", 10) -> list of committed flashcards."""

    def _make(category: str, count: int, username: str | None = None) -> list[Flashcard]:
        owner = username or test_user.username
        levels = cycle(DifficultyLevel.ordered())
        cards = [
            Flashcard(
                username=owner,
                question=f"{category} question {i}",
                answer=f"{category} answer {i}",
                category=category,
                difficulty_level=next(levels),
            )
            for i in range(count)
        ]
        if count and not db.query(Category).filter_by(username=owner, category=category).first():
            db.add(Category(username=owner, category=category))
        db.add_all(cards)
        db.commit()
        return cards

    return _make
