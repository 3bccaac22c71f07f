from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a Fisher-Yates shuffled copy of items. The input is not mutated."""
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def select_random_reviewers(
    available: Sequence[str],
    excluded: Iterable[str],
    count: int,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Pick up to count reviewers uniformly at random from available minus excluded."""
    if count <= 0:
        return []
    excluded = set(excluded)
    eligible = [reviewer for reviewer in dict.fromkeys(available) if reviewer not in excluded]
    return shuffle(eligible, rng)[:count]
