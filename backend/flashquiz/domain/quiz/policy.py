# backend/flashquiz/domain/quiz/policy.py

from flashquiz.core.exceptions import InsufficientPool, QuizTooSmall

from .dto import MarathonPlan
from .sampler import MIN_QUIZ_SIZE


class QuizSizePolicy:
    """
    Shape of practice quizzes and marathons.
    Pure domain logic: works on pool sizes only.
    """

    def __init__(self, *, default_size: int = MIN_QUIZ_SIZE, min_size: int = MIN_QUIZ_SIZE):
        if min_size < MIN_QUIZ_SIZE:
            raise ValueError(f"min_size cannot be below {MIN_QUIZ_SIZE}")
        self.default_size = max(default_size, min_size)
        self.min_size = min_size

    def resolve_quiz_size(self, requested: int | None) -> int:
        # 0 is what an untouched form field sends
        if not requested:
            return self.default_size
        if requested < self.min_size:
            raise QuizTooSmall(requested, self.min_size)
        return requested

    def practice_quiz_count(self, *, category: str, pool_size: int, quiz_size: int) -> int:
        if pool_size < quiz_size or pool_size < self.min_size:
            raise InsufficientPool(category, pool_size, max(quiz_size, self.min_size))
        return pool_size // quiz_size

    def resolve_marathon_plan(
        self,
        *,
        category: str,
        pool_size: int,
        total_days: int,
        num_questions: int | None = None,
        num_quiz_per_day: int | None = None,
    ) -> MarathonPlan:
        if total_days < 1:
            raise ValueError("total_days must be at least 1")
        num_quiz_per_day = num_quiz_per_day or 1
        if num_quiz_per_day < 1:
            raise ValueError("num_quiz_per_day must be at least 1")

        if num_questions is None:
            num_questions = pool_size // (total_days * num_quiz_per_day)
        num_questions = max(num_questions, self.min_size)

        if pool_size < num_questions or pool_size < self.min_size:
            raise InsufficientPool(category, pool_size, num_questions)

        return MarathonPlan(
            total_days=total_days,
            num_quiz_per_day=num_quiz_per_day,
            num_questions=num_questions,
        )
