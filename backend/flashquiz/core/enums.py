from enum import Enum


class DifficultyLevel(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"

    @classmethod
    def ordered(cls) -> list["DifficultyLevel"]:
        return [cls.easy, cls.medium, cls.hard]


class QuizMode(str, Enum):
    marathon = "marathon"
    practice = "practice"
