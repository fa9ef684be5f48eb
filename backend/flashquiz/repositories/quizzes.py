from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from flashquiz.core.enums import DifficultyLevel
from flashquiz.models.marathon import Marathon
from flashquiz.models.quiz_record import QuizRecord


class QuizRecordStore:
    """Data access layer for quiz records. Never commits."""

    def __init__(self, session: Session):
        self.session = session

    def insert(
        self,
        quiz_id: UUID,
        flashcard_id: UUID,
        username: str,
        difficulty_level: DifficultyLevel,
        category: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        completed: bool = False,
        position: int = 0,
    ) -> QuizRecord:
        record = QuizRecord(
            quiz_id=quiz_id,
            flashcard_id=flashcard_id,
            username=username,
            difficulty_level=difficulty_level,
            category=category,
            start_time=start_time,
            end_time=end_time,
            completed=completed,
            position=position,
        )
        self.session.add(record)
        return record

    def update(self, quiz_id: UUID, flashcard_id: UUID, fields: dict) -> int:
        """Returns the number of rows touched (0 or 1)."""
        stmt = (
            update(QuizRecord)
            .where(
                QuizRecord.quiz_id == quiz_id,
                QuizRecord.flashcard_id == flashcard_id,
            )
            .values(**fields)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount or 0

    def list_by_quiz(self, quiz_id: UUID) -> List[QuizRecord]:
        stmt = (
            select(QuizRecord)
            .where(QuizRecord.quiz_id == quiz_id)
            .order_by(QuizRecord.position.asc(), QuizRecord.id.asc())
        )
        return list(self.session.scalars(stmt))


class MarathonStore:
    """Data access layer for marathon rows. Never commits."""

    def __init__(self, session: Session):
        self.session = session

    def insert(
        self,
        marathon_id: UUID,
        quiz_id: UUID,
        username: str,
        category: str,
        day: int,
        total_days: int,
        start_date: datetime,
        completed: bool = False,
        slot: int = 0,
    ) -> Marathon:
        if not 0 <= day < total_days:
            raise ValueError(f"day {day} is outside 0..{total_days - 1}")
        row = Marathon(
            marathon_id=marathon_id,
            quiz_id=quiz_id,
            username=username,
            category=category,
            day=day,
            slot=slot,
            total_days=total_days,
            start_date=start_date,
            completed=completed,
        )
        self.session.add(row)
        return row

    def get_by_ids(
        self, marathon_id: UUID, quiz_id: UUID, username: Optional[str] = None
    ) -> Optional[Marathon]:
        stmt = select(Marathon).where(
            Marathon.marathon_id == marathon_id,
            Marathon.quiz_id == quiz_id,
        )
        if username is not None:
            stmt = stmt.where(Marathon.username == username)
        return self.session.scalars(stmt).first()

    def update(self, marathon_id: UUID, quiz_id: UUID, fields: dict) -> int:
        stmt = (
            update(Marathon)
            .where(
                Marathon.marathon_id == marathon_id,
                Marathon.quiz_id == quiz_id,
            )
            .values(**fields)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount or 0

    def list_by_user(self, username: str) -> List[Marathon]:
        stmt = (
            select(Marathon)
            .where(Marathon.username == username)
            .order_by(
                Marathon.start_date.asc(),
                Marathon.marathon_id.asc(),
                Marathon.day.asc(),
                Marathon.slot.asc(),
            )
        )
        return list(self.session.scalars(stmt))

    def list_by_marathon(self, marathon_id: UUID) -> List[Marathon]:
        stmt = (
            select(Marathon)
            .where(Marathon.marathon_id == marathon_id)
            .order_by(Marathon.day.asc(), Marathon.slot.asc())
        )
        return list(self.session.scalars(stmt))
