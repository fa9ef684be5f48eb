from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from starlette import status

from flashquiz.core.security import get_current_user
from flashquiz.db.session import get_db
from flashquiz.domain.quiz import AttemptWindow, SubmittedCard
from flashquiz.models.user import User
from flashquiz.schemas.quizzes import (
    GenerateQuizzesRequest,
    QuizResponse,
    SubmissionAckResponse,
    SubmitQuizRequest,
)
from flashquiz.services.practice_service import PracticeQuizService
from flashquiz.services.submission_service import SubmissionService

router = APIRouter(tags=["quizzes"])


@router.post("/generate", response_model=List[QuizResponse])
def generate_quizzes(
    payload: GenerateQuizzesRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    quizzes = PracticeQuizService(db).generate(
        current_user.username,
        payload.categories,
        payload.quiz_size,
    )
    return [QuizResponse.model_validate(q) for q in quizzes]


@router.post("/submit", response_model=SubmissionAckResponse)
def submit_quiz(
    payload: SubmitQuizRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ack = SubmissionService(db).submit(
        current_user.username,
        mode=payload.mode,
        cards=[
            SubmittedCard(
                flashcard_id=card.id,
                difficulty_level=card.difficulty_level,
                category=card.category,
            )
            for card in payload.flashcards
        ],
        window=AttemptWindow(start_time=payload.start_time, end_time=payload.end_time),
        quiz_id=payload.marathon_quiz_id,
        marathon_id=payload.marathon_id,
    )
    # accepted but not applied: the caller may retry against the right quiz
    if not ack.applied:
        response.status_code = status.HTTP_202_ACCEPTED
    return SubmissionAckResponse.model_validate(ack)
