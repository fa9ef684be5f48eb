from flashquiz.models.user import User
from flashquiz.models.flashcard import Flashcard
from flashquiz.models.category import Category
from flashquiz.models.quiz_record import QuizRecord
from flashquiz.models.marathon import Marathon

__all__ = ["User", "Flashcard", "Category", "QuizRecord", "Marathon"]
