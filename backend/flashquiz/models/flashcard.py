import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flashquiz.core.enums import DifficultyLevel
from flashquiz.core.timeutils import utcnow
from flashquiz.db.base import Base

difficulty_enum = Enum(
    DifficultyLevel,
    name="difficulty_level",
    values_callable=lambda levels: [level.value for level in levels],
)


class Flashcard(Base):
    __tablename__ = "flashcards"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    username: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    question: Mapped[str] = mapped_column(Text)
    answer: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String, index=True)

    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        difficulty_enum,
        nullable=False
    )

    is_auto: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    owner = relationship("User", back_populates="flashcards")
