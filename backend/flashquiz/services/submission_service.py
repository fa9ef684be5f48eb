import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashquiz.core.enums import QuizMode
from flashquiz.core.exceptions import NotFound
from flashquiz.domain.quiz import AttemptWindow, SubmittedCard, normalize_category
from flashquiz.models.flashcard import Flashcard
from flashquiz.repositories import CategoryStore, FlashcardStore, MarathonStore, QuizRecordStore

logger = logging.getLogger(__name__)

MARATHON_QUIZ_NOT_FOUND = "marathon_quiz_not_found"


@dataclass(frozen=True)
class SubmissionAck:
    quiz_id: UUID
    mode: QuizMode
    applied: bool
    records_written: int
    reason: Optional[str] = None


def _unique_cards(cards: Sequence[SubmittedCard]) -> list[SubmittedCard]:
    # a repeated card keeps its first position and its last answer
    by_id: dict[UUID, SubmittedCard] = {}
    for card in cards:
        by_id[card.flashcard_id] = replace(card, category=normalize_category(card.category))
    return list(by_id.values())


class SubmissionService:
    """
    Reconciles a finished quiz with storage.

    Practice submissions become a brand new set of quiz records; marathon
    submissions complete the scheduled (marathon, quiz) row and fill in the
    records created when the marathon was generated. In both modes the
    difficulty and category the user gave each of their cards are written back
    to the flashcard. Either way the whole submission is one transaction.
    """

    def __init__(self, db: Session):
        self.db = db
        self.flashcards = FlashcardStore(db)
        self.categories = CategoryStore(db)
        self.records = QuizRecordStore(db)
        self.marathons = MarathonStore(db)

    def submit(
        self,
        username: str,
        *,
        mode: QuizMode,
        cards: Sequence[SubmittedCard],
        window: AttemptWindow,
        quiz_id: Optional[UUID] = None,
        marathon_id: Optional[UUID] = None,
    ) -> SubmissionAck:
        cards = _unique_cards(cards)
        if mode == QuizMode.marathon:
            if marathon_id is None or quiz_id is None:
                raise ValueError("marathon submissions need marathon_id and quiz_id")
            return self._submit_marathon(username, marathon_id, quiz_id, cards, window)
        return self._submit_practice(username, cards, window)

    def _owned_flashcards(self, username: str, cards: list[SubmittedCard]) -> dict[UUID, Flashcard]:
        found = self.flashcards.get_many([card.flashcard_id for card in cards])
        return {card_id: card for card_id, card in found.items() if card.username == username}

    def _apply_ratings(
        self,
        username: str,
        cards: list[SubmittedCard],
        owned: dict[UUID, Flashcard],
    ) -> None:
        for card in cards:
            flashcard = owned.get(card.flashcard_id)
            if flashcard is None:
                continue
            self.categories.relocate(username, flashcard.category, card.category)
            self.flashcards.update(
                flashcard.id,
                {"difficulty_level": card.difficulty_level, "category": card.category},
            )

    def _submit_marathon(
        self,
        username: str,
        marathon_id: UUID,
        quiz_id: UUID,
        cards: list[SubmittedCard],
        window: AttemptWindow,
    ) -> SubmissionAck:
        existing = self.marathons.get_by_ids(marathon_id, quiz_id, username)
        if existing is None:
            logger.warning(
                f"Marathon quiz {marathon_id}/{quiz_id} not found for {username}, submission not applied"
            )
            return SubmissionAck(
                quiz_id=quiz_id,
                mode=QuizMode.marathon,
                applied=False,
                records_written=0,
                reason=MARATHON_QUIZ_NOT_FOUND,
            )

        written = 0
        try:
            owned = self._owned_flashcards(username, cards)
            self._apply_ratings(username, cards, owned)
            self.marathons.update(marathon_id, quiz_id, {"completed": True})
            for card in cards:
                written += self.records.update(
                    quiz_id,
                    card.flashcard_id,
                    {
                        "difficulty_level": card.difficulty_level,
                        "category": card.category,
                        "start_time": window.start_time,
                        "end_time": window.end_time,
                        "completed": True,
                    },
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Marathon submission {marathon_id}/{quiz_id} rolled back: {e}")
            raise

        if written < len(cards):
            logger.warning(
                f"{len(cards) - written} submitted flashcards were not scheduled in quiz {quiz_id}"
            )
        logger.info(f"Marathon quiz {quiz_id} of {marathon_id} completed by {username}")
        return SubmissionAck(
            quiz_id=quiz_id,
            mode=QuizMode.marathon,
            applied=True,
            records_written=written,
        )

    def _submit_practice(
        self,
        username: str,
        cards: list[SubmittedCard],
        window: AttemptWindow,
    ) -> SubmissionAck:
        owned = self._owned_flashcards(username, cards)
        for card in cards:
            if card.flashcard_id not in owned:
                raise NotFound("Flashcard", card.flashcard_id)

        quiz_id = uuid4()
        try:
            self._apply_ratings(username, cards, owned)
            for position, card in enumerate(cards):
                self.records.insert(
                    quiz_id=quiz_id,
                    flashcard_id=card.flashcard_id,
                    username=username,
                    difficulty_level=card.difficulty_level,
                    category=card.category,
                    start_time=window.start_time,
                    end_time=window.end_time,
                    completed=True,
                    position=position,
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Practice submission for {username} rolled back: {e}")
            raise

        logger.info(f"Practice quiz {quiz_id} recorded for {username} ({len(cards)} flashcards)")
        return SubmissionAck(
            quiz_id=quiz_id,
            mode=QuizMode.practice,
            applied=True,
            records_written=len(cards),
        )
