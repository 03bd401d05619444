"""Pure list operations over scored items: sort, threshold, sample.

Items are anything carrying a match score: objects with a ``match_score``
attribute (MatchResult, RankedCandidate) or mappings with a
``match_score`` key. Pass ``key=`` to read the score another way.
"""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import numpy as np

T = TypeVar("T")
ScoreKey = Callable[[Any], float | None]


def default_score(item: Any) -> float | None:
    if isinstance(item, dict):
        return item.get("match_score")
    return getattr(item, "match_score", None)


def sort_by_match_score(items: Sequence[T], key: ScoreKey = default_score) -> list[T]:
    """Stable descending sort; items without a score go last."""
    def sort_key(item: T) -> float:
        score = key(item)
        return -1 if score is None else score

    return sorted(items, key=sort_key, reverse=True)


def filter_by_min_score(items: Sequence[T], min_score: float, key: ScoreKey = default_score) -> list[T]:
    result = []
    for item in items:
        score = key(item)
        if score is not None and score >= min_score:
            result.append(item)
    return result


def weighted_random_select(
    items: Sequence[T],
    count: int,
    rng: np.random.Generator | None = None,
    key: ScoreKey = default_score,
) -> list[T]:
    """Sample ``count`` items without replacement, biased towards high scores.

    Each item weighs (score + 1) ** 2, so a zero (or missing) score still
    has a chance of being drawn. Roulette-wheel selection over the
    remaining pool, O(n * count).
    """
    if len(items) <= count:
        return list(items)
    if count <= 0:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    pool = list(items)
    weights = np.array([((key(item) or 0) + 1) ** 2 for item in pool], dtype=float)

    selected: list[T] = []
    while len(selected) < count:
        cumulative = np.cumsum(weights)
        target = rng.uniform(0, cumulative[-1])
        idx = int(np.searchsorted(cumulative, target, side="right"))
        idx = min(idx, len(pool) - 1)
        selected.append(pool.pop(idx))
        weights = np.delete(weights, idx)
    return selected
