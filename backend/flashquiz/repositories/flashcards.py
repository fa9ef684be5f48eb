from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from flashquiz.core.enums import DifficultyLevel
from flashquiz.models.category import Category
from flashquiz.models.flashcard import Flashcard

# columns a caller may change through FlashcardStore.update
UPDATABLE_FIELDS = ("question", "answer", "category", "difficulty_level", "is_auto")


class FlashcardStore:
    """Data access layer for flashcards. Never commits: the caller owns the transaction."""

    def __init__(self, session: Session):
        self.session = session

    def list(
        self,
        username: str,
        category: Optional[str] = None,
        difficulty_level: Optional[DifficultyLevel] = None,
    ) -> List[Flashcard]:
        # stable order: pool positions must mean the same card for a whole call
        stmt = select(Flashcard).where(Flashcard.username == username)
        if category:
            stmt = stmt.where(Flashcard.category == category)
        if difficulty_level:
            stmt = stmt.where(Flashcard.difficulty_level == difficulty_level)
        stmt = stmt.order_by(Flashcard.created_at.asc(), Flashcard.id.asc())
        return list(self.session.scalars(stmt))

    def get(self, flashcard_id: UUID) -> Optional[Flashcard]:
        return self.session.get(Flashcard, flashcard_id)

    def get_many(self, flashcard_ids: List[UUID]) -> dict[UUID, Flashcard]:
        if not flashcard_ids:
            return {}
        stmt = select(Flashcard).where(Flashcard.id.in_(flashcard_ids))
        return {card.id: card for card in self.session.scalars(stmt)}

    def insert(self, flashcard: Flashcard) -> Flashcard:
        self.session.add(flashcard)
        self.session.flush()
        return flashcard

    def update(self, flashcard_id: UUID, fields: dict) -> Optional[Flashcard]:
        flashcard = self.get(flashcard_id)
        if flashcard is None:
            return None
        for key, value in fields.items():
            if key not in UPDATABLE_FIELDS:
                raise ValueError(f"field {key} cannot be updated")
            setattr(flashcard, key, value)
        self.session.flush()
        return flashcard

    def delete(self, flashcard_id: UUID) -> bool:
        result = self.session.execute(delete(Flashcard).where(Flashcard.id == flashcard_id))
        return bool(result.rowcount)


class CategoryStore:
    """(username, category) index kept in step with the flashcards table."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, username: str, category: str) -> bool:
        stmt = select(Category.id).where(
            Category.username == username,
            Category.category == category,
        ).limit(1)
        return self.session.execute(stmt).first() is not None

    def add(self, username: str, category: str) -> None:
        """Insert-if-absent; safe against concurrent writers thanks to uq_user_category."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            if not self.exists(username, category):
                self.session.add(Category(username=username, category=category))
                self.session.flush()
            return

        stmt = (
            insert(Category)
            .values(username=username, category=category)
            .on_conflict_do_nothing(index_elements=["username", "category"])
        )
        self.session.execute(stmt)

    def remove(self, username: str, category: str) -> None:
        self.session.execute(
            delete(Category).where(
                Category.username == username,
                Category.category == category,
            )
        )

    def relocate(self, username: str, previous: str, current: str) -> None:
        """Move one flashcard from `previous` to `current`; call before the card itself changes."""
        if previous == current:
            return
        if self.count_users(username, previous) <= 1:
            self.remove(username, previous)
        self.add(username, current)

    def count_users(self, username: str, category: str) -> int:
        """Number of the user's flashcards that still reference the category."""
        stmt = select(func.count(Flashcard.id)).where(
            Flashcard.username == username,
            Flashcard.category == category,
        )
        return self.session.execute(stmt).scalar_one()

    def list(self, username: str) -> List[str]:
        stmt = (
            select(Category.category)
            .where(Category.username == username)
            .order_by(Category.category.asc())
        )
        return list(self.session.scalars(stmt))
