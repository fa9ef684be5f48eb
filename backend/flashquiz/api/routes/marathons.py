from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from flashquiz.core.security import get_current_user
from flashquiz.db.session import get_db
from flashquiz.models.user import User
from flashquiz.schemas.marathons import (
    CurrentMarathonQuizResponse,
    GenerateMarathonRequest,
    MarathonCreatedResponse,
    MarathonResponse,
)
from flashquiz.services.marathon_service import MarathonService

router = APIRouter(tags=["marathons"])


@router.post("/", response_model=MarathonCreatedResponse, status_code=status.HTTP_201_CREATED)
def generate_marathon(
    payload: GenerateMarathonRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    marathon_id = MarathonService(db).generate(
        current_user.username,
        payload.category,
        payload.total_days,
        num_questions=payload.num_questions,
        num_quiz_per_day=payload.num_quiz_per_day,
    )
    return MarathonCreatedResponse(marathon_id=marathon_id)


@router.get("/", response_model=List[MarathonResponse])
def list_marathons(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MarathonService(db).list(current_user.username)


@router.get("/{marathon_id}/current", response_model=CurrentMarathonQuizResponse)
def get_current_marathon_quiz(
    marathon_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    current = MarathonService(db).current_quiz(current_user.username, marathon_id)
    return CurrentMarathonQuizResponse.model_validate(current)
