from flashquiz.domain.quiz.dto import AttemptWindow, MarathonPlan, SubmittedCard
from flashquiz.domain.quiz.entities import Quiz, normalize_category, sort_difficulty_levels
from flashquiz.domain.quiz.policy import QuizSizePolicy
from flashquiz.domain.quiz.sampler import MIN_QUIZ_SIZE, DrawResult, UsageBitmap, sample_indices

__all__ = [
    "AttemptWindow",
    "MarathonPlan",
    "SubmittedCard",
    "QuizSizePolicy",
    "Quiz",
    "normalize_category",
    "sort_difficulty_levels",
    "MIN_QUIZ_SIZE",
    "DrawResult",
    "UsageBitmap",
    "sample_indices",
]
