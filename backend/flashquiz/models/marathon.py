import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from flashquiz.db.base import Base


class Marathon(Base):
    """One (day, slot) quiz of a marathon; all rows of a marathon share marathon_id."""

    __tablename__ = "marathons"

    __table_args__ = (
        UniqueConstraint("marathon_id", "quiz_id", name="uq_marathon_quiz"),
        CheckConstraint("day >= 0 AND day < total_days", name="ck_marathon_day_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    marathon_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    quiz_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    username: Mapped[str] = mapped_column(String, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String, nullable=False)

    day: Mapped[int] = mapped_column(Integer, nullable=False)
    slot: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_days: Mapped[int] = mapped_column(Integer, nullable=False)

    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
