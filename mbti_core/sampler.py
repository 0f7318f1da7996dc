from __future__ import annotations
import logging, random
from typing import List, Optional, Sequence, TypeVar

from .config import SAMPLE_SIZE
from .errors import NoEligibleQuestions
from .types import Question

log = logging.getLogger(__name__)

_T = TypeVar("_T")


def partial_shuffle(pool: Sequence[_T], k: int, rng: random.Random) -> List[_T]:
    """First ``k`` slots of a Fisher-Yates shuffle over a copy of ``pool``."""

    items = list(pool)
    k = min(k, len(items))
    for i in range(k):
        j = rng.randrange(i, len(items))
        items[i], items[j] = items[j], items[i]
    return items[:k]


def sample_questions(
    eligible: Sequence[Question],
    age: int,
    size: int = SAMPLE_SIZE,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    if not eligible:
        raise NoEligibleQuestions(age)
    picked = partial_shuffle(eligible, size, rng or random.Random())
    if len(picked) < size:
        log.warning("only %d eligible questions for age %d, requested %d", len(picked), age, size)
    return picked
