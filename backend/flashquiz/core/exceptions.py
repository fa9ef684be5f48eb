from uuid import UUID


class FlashquizError(Exception):
    """Base error of the quiz engine. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> dict:
        return {"error": type(self).__name__, "message": self.message}


class InsufficientPool(FlashquizError):
    status_code = 400

    def __init__(self, category: str | None, available: int, required: int):
        self.category = category
        self.available = available
        self.required = required
        where = f"Category '{category}'" if category else "Pool"
        super().__init__(
            f"{where} has {available} flashcards, at least {required} are required"
        )

    @property
    def detail(self) -> dict:
        return {
            **super().detail,
            "category": self.category,
            "available": self.available,
            "required": self.required,
        }


class QuizTooSmall(FlashquizError):
    status_code = 400

    def __init__(self, requested: int, minimum: int):
        self.requested = requested
        self.minimum = minimum
        super().__init__(
            f"Cannot generate a quiz with {requested} flashcards, minimum is {minimum}"
        )

    @property
    def detail(self) -> dict:
        return {**super().detail, "requested": self.requested, "minimum": self.minimum}


class NotFound(FlashquizError):
    status_code = 404

    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} not found")


class Unauthorized(FlashquizError):
    status_code = 401

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class PartialWriteFailure(FlashquizError):
    """A store error interrupted marathon generation.

    Units committed before the failure stay in place; ``completed_units`` tells
    the caller how far generation got so it can discard or regenerate.
    """

    status_code = 500

    def __init__(self, marathon_id: UUID, completed_units: int, total_units: int):
        self.marathon_id = marathon_id
        self.completed_units = completed_units
        self.total_units = total_units
        super().__init__(
            f"Marathon {marathon_id} stopped after {completed_units} of {total_units} quizzes"
        )

    @property
    def detail(self) -> dict:
        return {
            **super().detail,
            "marathon_id": str(self.marathon_id),
            "completed_units": self.completed_units,
            "total_units": self.total_units,
        }
