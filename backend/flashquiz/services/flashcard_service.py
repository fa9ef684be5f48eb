import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from flashquiz.core.enums import DifficultyLevel
from flashquiz.core.exceptions import NotFound
from flashquiz.domain.quiz import normalize_category
from flashquiz.models.flashcard import Flashcard
from flashquiz.repositories import CategoryStore, FlashcardStore

logger = logging.getLogger(__name__)


class FlashcardService:
    """Flashcard CRUD that keeps the category index in step with the cards."""

    def __init__(self, db: Session):
        self.db = db
        self.flashcards = FlashcardStore(db)
        self.categories = CategoryStore(db)

    def list(
        self,
        username: str,
        category: Optional[str] = None,
        difficulty_level: Optional[DifficultyLevel] = None,
    ) -> List[Flashcard]:
        if category:
            category = normalize_category(category)
        return self.flashcards.list(username, category, difficulty_level)

    def list_categories(self, username: str) -> List[str]:
        return self.categories.list(username)

    def get(self, username: str, flashcard_id: UUID) -> Flashcard:
        flashcard = self.flashcards.get(flashcard_id)
        if flashcard is None or flashcard.username != username:
            raise NotFound("Flashcard", flashcard_id)
        return flashcard

    def create(
        self,
        username: str,
        *,
        question: str,
        answer: str,
        category: str,
        difficulty_level: DifficultyLevel,
        is_auto: bool = False,
    ) -> Flashcard:
        category = normalize_category(category)
        # category row first, the card references it
        self.categories.add(username, category)
        flashcard = self.flashcards.insert(
            Flashcard(
                username=username,
                question=question,
                answer=answer,
                category=category,
                difficulty_level=difficulty_level,
                is_auto=is_auto,
            )
        )
        self.db.commit()
        logger.info(f"Flashcard {flashcard.id} created for {username} in {category}")
        return flashcard

    def update(self, username: str, flashcard_id: UUID, fields: dict) -> Flashcard:
        flashcard = self.get(username, flashcard_id)
        fields = dict(fields)

        if fields.get("category"):
            fields["category"] = normalize_category(fields["category"])
            self.categories.relocate(username, flashcard.category, fields["category"])
        else:
            fields.pop("category", None)

        self.flashcards.update(flashcard_id, fields)
        self.db.commit()
        return flashcard

    def delete(self, username: str, flashcard_id: UUID) -> None:
        flashcard = self.get(username, flashcard_id)
        if self.categories.count_users(username, flashcard.category) <= 1:
            self.categories.remove(username, flashcard.category)
        self.flashcards.delete(flashcard_id)
        self.db.commit()
        logger.info(f"Flashcard {flashcard_id} deleted for {username}")
