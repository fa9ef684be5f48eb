import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from flashquiz.core.timeutils import utcnow
from flashquiz.db.base import Base

if TYPE_CHECKING:
    from flashquiz.models.flashcard import Flashcard


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String)
    fname: Mapped[str | None] = mapped_column(String, nullable=True)
    lname: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    flashcards: Mapped[list["Flashcard"]] = relationship(
        "Flashcard",
        back_populates="owner",
        cascade="all, delete-orphan"
    )
