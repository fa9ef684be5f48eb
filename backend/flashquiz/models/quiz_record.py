import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from flashquiz.core.enums import DifficultyLevel
from flashquiz.db.base import Base
from flashquiz.models.flashcard import difficulty_enum


class QuizRecord(Base):
    """One attempted (or scheduled) flashcard of a quiz."""

    __tablename__ = "quiz_records"

    __table_args__ = (
        UniqueConstraint("quiz_id", "flashcard_id", name="uq_quiz_flashcard"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    # no FK: records outlive the flashcard they were drawn from
    flashcard_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    username: Mapped[str] = mapped_column(String, nullable=False, index=True)

    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        difficulty_enum,
        nullable=False
    )
    category: Mapped[str] = mapped_column(String, nullable=False)

    start_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
