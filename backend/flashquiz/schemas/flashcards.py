from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from flashquiz.core.enums import DifficultyLevel


class FlashcardCreate(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    category: str = Field(min_length=1)
    difficulty_level: DifficultyLevel
    is_auto: bool = False


class FlashcardUpdate(BaseModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    difficulty_level: Optional[DifficultyLevel] = None
    is_auto: Optional[bool] = None


class FlashcardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    question: str
    answer: str
    category: str
    difficulty_level: DifficultyLevel
    is_auto: bool
    created_at: Optional[datetime] = None


class CategoryResponse(BaseModel):
    username: str
    category: str
