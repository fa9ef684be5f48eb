from flashquiz.repositories.flashcards import CategoryStore, FlashcardStore
from flashquiz.repositories.quizzes import MarathonStore, QuizRecordStore

__all__ = ["CategoryStore", "FlashcardStore", "MarathonStore", "QuizRecordStore"]
