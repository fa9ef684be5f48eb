from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from flashquiz.core.enums import DifficultyLevel
from flashquiz.core.security import get_current_user
from flashquiz.db.session import get_db
from flashquiz.models.user import User
from flashquiz.schemas.flashcards import (
    CategoryResponse,
    FlashcardCreate,
    FlashcardResponse,
    FlashcardUpdate,
)
from flashquiz.services.flashcard_service import FlashcardService

router = APIRouter(tags=["flashcards"])
categories_router = APIRouter(tags=["categories"])


@router.get("/", response_model=List[FlashcardResponse])
def list_flashcards(
    category: Optional[str] = Query(None),
    difficulty_level: Optional[DifficultyLevel] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FlashcardService(db).list(current_user.username, category, difficulty_level)


@router.get("/{flashcard_id}", response_model=FlashcardResponse)
def get_flashcard(
    flashcard_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FlashcardService(db).get(current_user.username, flashcard_id)


@router.post("/", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
def create_flashcard(
    payload: FlashcardCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FlashcardService(db).create(current_user.username, **payload.model_dump())


@router.put("/{flashcard_id}", response_model=FlashcardResponse)
def update_flashcard(
    flashcard_id: UUID,
    payload: FlashcardUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    return FlashcardService(db).update(current_user.username, flashcard_id, fields)


@router.delete("/{flashcard_id}")
def delete_flashcard(
    flashcard_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    FlashcardService(db).delete(current_user.username, flashcard_id)
    return {"message": f"Flashcard with ID {flashcard_id} deleted successfully"}


@categories_router.get("/", response_model=List[CategoryResponse])
def list_categories(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [
        CategoryResponse(username=current_user.username, category=category)
        for category in FlashcardService(db).list_categories(current_user.username)
    ]
