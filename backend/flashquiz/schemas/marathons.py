from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from flashquiz.core.enums import DifficultyLevel
from flashquiz.schemas.quizzes import QuizResponse


class GenerateMarathonRequest(BaseModel):
    category: str = Field(..., min_length=1)
    total_days: int = Field(..., ge=1)
    # None: spread the pool evenly over every quiz of the marathon
    num_questions: Optional[int] = Field(None, ge=1)
    num_quiz_per_day: Optional[int] = Field(None, ge=1)


class MarathonCreatedResponse(BaseModel):
    marathon_id: UUID


class MarathonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    marathon_id: UUID
    quiz_id: UUID
    username: str
    category: str
    day: int
    slot: int
    total_days: int
    start_date: datetime
    completed: bool


class QuizRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: UUID
    flashcard_id: UUID
    username: str
    difficulty_level: DifficultyLevel
    category: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    completed: bool


class CurrentMarathonQuizResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    marathon_id: UUID
    marathon: Optional[MarathonResponse] = None
    records: List[QuizRecordResponse] = []
    quiz: Optional[QuizResponse] = None
