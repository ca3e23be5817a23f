from __future__ import annotations

import random
from typing import AbstractSet, Iterable, Optional, Sequence, TypeVar

from ..profiles.model import Candidate
from .model import FilterCriteria

T = TypeVar("T")


def compute_available(
    pool: Iterable[Candidate],
    presented_ids: AbstractSet[str],
    criteria: FilterCriteria,
) -> list[Candidate]:
    """Candidates that have not presented yet and pass the filter."""
    return [c for c in pool if c.id not in presented_ids and criteria.matches(c)]


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Fisher-Yates shuffle into a new list; the input is left untouched."""
    rng = rng or random
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
