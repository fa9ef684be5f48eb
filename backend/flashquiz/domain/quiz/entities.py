# backend/flashquiz/domain/quiz/entities.py

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from flashquiz.core.enums import DifficultyLevel


def normalize_category(category: str) -> str:
    """First character upper-cased, the rest left alone ("biology" -> "Biology")."""
    category = category.strip()
    return category[:1].upper() + category[1:]


def sort_difficulty_levels(levels: Iterable[DifficultyLevel | str]) -> list[DifficultyLevel]:
    order = DifficultyLevel.ordered()
    present = {DifficultyLevel(level) for level in levels}
    return [level for level in order if level in present]


@dataclass
class Quiz:
    """
    Ephemeral selection of flashcards.
    Never stored: persisted quizzes exist only as QuizRecord rows sharing a quiz id.
    """

    id: str
    title: str
    categories: list[str]
    flashcards: list[Any] = field(default_factory=list)
    difficulty_levels: list[DifficultyLevel] = field(default_factory=list)

    def __post_init__(self):
        self._validate()

    def _validate(self):
        ids = [card.id for card in self.flashcards]
        if len(ids) != len(set(ids)):
            raise ValueError("a quiz cannot contain the same flashcard twice")

    @classmethod
    def from_cards(
        cls,
        *,
        id: str,
        title: str,
        categories: list[str],
        cards: Sequence[Any],
    ) -> "Quiz":
        return cls(
            id=id,
            title=title,
            categories=list(categories),
            flashcards=list(cards),
            difficulty_levels=sort_difficulty_levels(c.difficulty_level for c in cards),
        )

    @classmethod
    def from_records(
        cls,
        *,
        title: str,
        records: Sequence[Any],
        flashcards_by_id: Mapping[Any, Any],
    ) -> "Quiz":
        """
        Rebuild a quiz from its QuizRecord rows.

        Records whose flashcard has since been deleted are skipped; their
        difficulty still counts since it was recorded at draw time.
        """
        if not records:
            raise ValueError("cannot assemble a quiz without records")

        quiz_ids = {r.quiz_id for r in records}
        if len(quiz_ids) != 1:
            raise ValueError("records belong to more than one quiz")

        categories: list[str] = []
        for r in records:
            if r.category not in categories:
                categories.append(r.category)

        return cls(
            id=str(quiz_ids.pop()),
            title=title,
            categories=categories,
            flashcards=[flashcards_by_id[r.flashcard_id] for r in records if r.flashcard_id in flashcards_by_id],
            difficulty_levels=sort_difficulty_levels(r.difficulty_level for r in records),
        )
