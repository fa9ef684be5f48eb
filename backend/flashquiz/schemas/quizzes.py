from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from flashquiz.core.enums import DifficultyLevel, QuizMode
from flashquiz.core.timeutils import to_naive_utc
from flashquiz.schemas.flashcards import FlashcardResponse


class GenerateQuizzesRequest(BaseModel):
    categories: List[str] = Field(..., min_length=1)
    # None or 0 means "use the default size"
    quiz_size: Optional[int] = None


class QuizResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    categories: List[str]
    flashcards: List[FlashcardResponse]
    difficulty_levels: List[DifficultyLevel]


class SubmittedFlashcard(BaseModel):
    """A card as the client shows it; anything beyond these fields is ignored."""

    id: UUID
    difficulty_level: DifficultyLevel
    category: str


class SubmitQuizRequest(BaseModel):
    flashcards: List[SubmittedFlashcard] = Field(..., min_length=1)
    quiz_id: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    mode: QuizMode = QuizMode.practice
    marathon_id: Optional[UUID] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_marathon_fields(self):
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time cannot be before start_time")

        if self.mode == QuizMode.marathon:
            if self.marathon_id is None:
                raise ValueError("marathon_id is required for marathon submissions")
            if self.quiz_id is None:
                raise ValueError("quiz_id is required for marathon submissions")
            UUID(self.quiz_id)  # ValueError surfaces as a 422

        return self

    @property
    def marathon_quiz_id(self) -> Optional[UUID]:
        return UUID(self.quiz_id) if self.mode == QuizMode.marathon else None


class SubmissionAckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: UUID
    mode: QuizMode
    applied: bool
    records_written: int
    reason: Optional[str] = None
