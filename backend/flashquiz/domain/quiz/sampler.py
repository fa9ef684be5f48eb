# backend/flashquiz/domain/quiz/sampler.py

import random
from dataclasses import dataclass

from flashquiz.core.exceptions import InsufficientPool, QuizTooSmall

MIN_QUIZ_SIZE = 3


@dataclass(frozen=True)
class DrawResult:
    indices: list[int]
    cycle_completed: bool


class UsageBitmap:
    """
    Which pool positions have already been drawn in the current cycle.

    Unused positions are kept in an explicit list so a pick is a uniform
    choice over that list followed by a swap-remove. ``_slot[i]`` is the
    position of pool index ``i`` inside ``_unused`` (meaningless while used).
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError("size cannot be negative")
        self.size = size
        self.cycles = 0
        self._used = [False] * size
        self._unused = list(range(size))
        self._slot = list(range(size))

    def __len__(self) -> int:
        return self.size

    def is_used(self, index: int) -> bool:
        return self._used[index]

    @property
    def used_count(self) -> int:
        return self.size - len(self._unused)

    def reset(self) -> None:
        self._used = [False] * self.size
        self._unused = list(range(self.size))
        self._slot = list(range(self.size))

    def _swap(self, a: int, b: int) -> None:
        if a == b:
            return
        unused = self._unused
        unused[a], unused[b] = unused[b], unused[a]
        self._slot[unused[a]] = a
        self._slot[unused[b]] = b

    def _take(self, position: int, eligible: int) -> int:
        # the picked entry leaves through the end of the eligible head,
        # then through the end of the list, so parked entries stay at the tail
        self._swap(position, eligible - 1)
        self._swap(eligible - 1, len(self._unused) - 1)
        index = self._unused.pop()
        self._used[index] = True
        return index

    def _park(self, indices: list[int]) -> None:
        tail = len(self._unused) - 1
        for offset, index in enumerate(indices):
            self._swap(self._slot[index], tail - offset)

    def draw(self, count: int, rng: random.Random | None = None) -> DrawResult:
        """
        Pick ``count`` distinct unused indices and mark them used.

        When the last unused index is taken the bitmap resets. A reset in the
        middle of a draw keeps the indices this draw already returned out of
        reach for the rest of the draw.
        """
        if count < MIN_QUIZ_SIZE:
            raise QuizTooSmall(count, MIN_QUIZ_SIZE)
        if self.size < MIN_QUIZ_SIZE or count > self.size:
            raise InsufficientPool(None, self.size, max(count, MIN_QUIZ_SIZE))

        rng = rng or random
        picked: list[int] = []
        parked = 0
        cycle_completed = False

        while len(picked) < count:
            eligible = len(self._unused) - parked
            index = self._take(rng.randrange(eligible), eligible)
            picked.append(index)

            if not self._unused:
                self.reset()
                self.cycles += 1
                cycle_completed = True
                if len(picked) < count:
                    self._park(picked)
                    parked = len(picked)

        return DrawResult(indices=picked, cycle_completed=cycle_completed)


def sample_indices(
    pool_size: int,
    count: int,
    bitmap: UsageBitmap | None = None,
    rng: random.Random | None = None,
) -> DrawResult:
    bitmap = bitmap if bitmap is not None else UsageBitmap(pool_size)
    if len(bitmap) != pool_size:
        raise ValueError("bitmap does not match the pool size")
    return bitmap.draw(count, rng)
