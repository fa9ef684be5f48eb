import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashquiz.core.exceptions import NotFound, PartialWriteFailure
from flashquiz.core.timeutils import utcnow
from flashquiz.domain.quiz import Quiz, QuizSizePolicy, UsageBitmap, normalize_category
from flashquiz.models.marathon import Marathon
from flashquiz.models.quiz_record import QuizRecord
from flashquiz.repositories import FlashcardStore, MarathonStore, QuizRecordStore
from flashquiz.services.practice_service import default_policy

logger = logging.getLogger(__name__)


@dataclass
class CurrentMarathonQuiz:
    marathon_id: UUID
    marathon: Optional[Marathon]
    records: List[QuizRecord] = field(default_factory=list)
    quiz: Optional[Quiz] = None


class MarathonService:
    """Builds multi-day marathons and serves their quizzes."""

    def __init__(
        self,
        db: Session,
        *,
        policy: Optional[QuizSizePolicy] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.flashcards = FlashcardStore(db)
        self.records = QuizRecordStore(db)
        self.marathons = MarathonStore(db)
        self.policy = policy or default_policy()
        self.rng = rng
        self.clock = clock

    def generate(
        self,
        username: str,
        category: str,
        total_days: int,
        num_questions: Optional[int] = None,
        num_quiz_per_day: Optional[int] = None,
    ) -> UUID:
        """
        Schedule ``total_days * num_quiz_per_day`` quizzes over one category.

        One usage bitmap covers the whole marathon, so every card is drawn once
        before any card is drawn twice. Each (day, slot) quiz is committed on
        its own; a store error raises PartialWriteFailure with how many were
        committed.
        """
        category = normalize_category(category)
        pool = self.flashcards.list(username, category)
        plan = self.policy.resolve_marathon_plan(
            category=category,
            pool_size=len(pool),
            total_days=total_days,
            num_questions=num_questions,
            num_quiz_per_day=num_quiz_per_day,
        )

        marathon_id = uuid4()
        start_date = self.clock()
        bitmap = UsageBitmap(len(pool))
        completed_units = 0

        for day in range(plan.total_days):
            for slot in range(plan.num_quiz_per_day):
                quiz_id = uuid4()
                draw = bitmap.draw(plan.num_questions, self.rng)

                try:
                    for position, index in enumerate(draw.indices):
                        card = pool[index]
                        self.records.insert(
                            quiz_id=quiz_id,
                            flashcard_id=card.id,
                            username=username,
                            difficulty_level=card.difficulty_level,
                            category=category,
                            position=position,
                        )
                    self.marathons.insert(
                        marathon_id=marathon_id,
                        quiz_id=quiz_id,
                        username=username,
                        category=category,
                        day=day,
                        slot=slot,
                        total_days=plan.total_days,
                        start_date=start_date,
                        completed=False,
                    )
                    self.db.commit()
                except SQLAlchemyError as e:
                    self.db.rollback()
                    logger.error(
                        f"Marathon {marathon_id} failed at day {day} slot {slot}: {e}"
                    )
                    raise PartialWriteFailure(
                        marathon_id, completed_units, plan.total_units
                    ) from e

                completed_units += 1
                if draw.cycle_completed:
                    logger.debug(f"Marathon {marathon_id} used up its pool at day {day}")

        logger.info(
            f"Marathon {marathon_id} for {username}: {plan.total_days} days x "
            f"{plan.num_quiz_per_day} quizzes x {plan.num_questions} questions in {category}"
        )
        return marathon_id

    def list(self, username: str) -> List[Marathon]:
        return self.marathons.list_by_user(username)

    def current_quiz(self, username: str, marathon_id: UUID) -> CurrentMarathonQuiz:
        rows = [r for r in self.marathons.list_by_marathon(marathon_id) if r.username == username]
        if not rows:
            raise NotFound("Marathon", marathon_id)

        current = next((r for r in rows if not r.completed), None)
        if current is None:
            return CurrentMarathonQuiz(marathon_id=marathon_id, marathon=None)

        records = self.records.list_by_quiz(current.quiz_id)
        if not records:
            raise NotFound("Quiz", current.quiz_id)

        cards = self.flashcards.get_many([r.flashcard_id for r in records])
        quiz = Quiz.from_records(
            title=f"Quiz - Day {current.day + 1}",
            records=records,
            flashcards_by_id=cards,
        )
        return CurrentMarathonQuiz(
            marathon_id=marathon_id,
            marathon=current,
            records=records,
            quiz=quiz,
        )
