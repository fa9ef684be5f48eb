import logging
import random
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from flashquiz.core.config import settings
from flashquiz.domain.quiz import Quiz, QuizSizePolicy, UsageBitmap, normalize_category
from flashquiz.repositories import FlashcardStore

logger = logging.getLogger(__name__)


def default_policy() -> QuizSizePolicy:
    return QuizSizePolicy(
        default_size=settings.DEFAULT_QUIZ_SIZE,
        min_size=settings.MIN_QUIZ_SIZE,
    )


class PracticeQuizService:
    """Splits category pools into practice quizzes. Read-only: nothing is persisted."""

    def __init__(
        self,
        db: Session,
        *,
        policy: Optional[QuizSizePolicy] = None,
        rng: Optional[random.Random] = None,
    ):
        self.flashcards = FlashcardStore(db)
        self.policy = policy or default_policy()
        self.rng = rng

    def generate(
        self,
        username: str,
        categories: Sequence[str],
        quiz_size: Optional[int] = None,
    ) -> List[Quiz]:
        size = self.policy.resolve_quiz_size(quiz_size)
        quizzes: List[Quiz] = []

        for position, raw_category in enumerate(categories, start=1):
            category = normalize_category(raw_category)
            pool = self.flashcards.list(username, category)
            count = self.policy.practice_quiz_count(
                category=category, pool_size=len(pool), quiz_size=size
            )

            # shared by every quiz of this category so none repeats a card
            bitmap = UsageBitmap(len(pool))
            for _ in range(count):
                draw = bitmap.draw(size, self.rng)
                quizzes.append(
                    Quiz.from_cards(
                        id=f"Quiz_{position}",
                        title=f"Quiz {position}",
                        categories=[category],
                        cards=[pool[i] for i in draw.indices],
                    )
                )

            logger.info(
                f"Generated {count} practice quizzes of {size} for {username} in {category}"
            )

        return quizzes
