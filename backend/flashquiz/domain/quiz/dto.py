from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from flashquiz.core.enums import DifficultyLevel


@dataclass(frozen=True)
class MarathonPlan:
    total_days: int
    num_quiz_per_day: int
    num_questions: int

    @property
    def total_units(self) -> int:
        return self.total_days * self.num_quiz_per_day


@dataclass(frozen=True)
class SubmittedCard:
    flashcard_id: UUID
    difficulty_level: DifficultyLevel
    category: str


@dataclass(frozen=True)
class AttemptWindow:
    start_time: datetime | None
    end_time: datetime | None
