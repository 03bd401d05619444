"""Partner finder: scores a candidate pool for one user.

Flow:
    user + candidates
      ├─ drop the user themself
      ├─ calculate_match_score(user, candidate)   → MatchResult per candidate
      ├─ drop insufficient results
      └─ find_best_matches:  threshold → sort → top N
         discover_partners:  weighted random sample (quality-biased variety)
"""

import logging
from collections.abc import Sequence

import numpy as np

from models.schemas.match_result import RankedCandidate
from models.schemas.weights import DEFAULT_WEIGHTS, MatchWeights
from services.matching.aggregator import ProfileLike, as_profile, calculate_match_score
from services.matching.synonyms import DEFAULT_SYNONYM_INDEX, SynonymIndex
from services.selection import filter_by_min_score, sort_by_match_score, weighted_random_select

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_MIN_SCORE = 40


def _score_pool(
    user: ProfileLike,
    candidates: Sequence[ProfileLike],
    weights: MatchWeights,
    index: SynonymIndex,
) -> list[RankedCandidate]:
    me = as_profile(user)
    scored: list[RankedCandidate] = []
    skipped = 0
    for raw in candidates:
        candidate = as_profile(raw)
        if me.identity is not None and candidate.identity == me.identity:
            continue
        result = calculate_match_score(me, candidate, weights, index)
        if result.match_data_insufficient:
            skipped += 1
            continue
        scored.append(RankedCandidate(profile=candidate, result=result))
    logger.debug(
        "Scored %d of %d candidates (%d with insufficient data)", len(scored), len(candidates), skipped
    )
    return scored


def find_best_matches(
    user: ProfileLike,
    candidates: Sequence[ProfileLike],
    limit: int = DEFAULT_LIMIT,
    min_score: int = DEFAULT_MIN_SCORE,
    weights: MatchWeights = DEFAULT_WEIGHTS,
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> list[RankedCandidate]:
    """Top ``limit`` candidates scoring at least ``min_score``, best first."""
    scored = _score_pool(user, candidates, weights, index)
    return sort_by_match_score(filter_by_min_score(scored, min_score))[:limit]


def discover_partners(
    user: ProfileLike,
    candidates: Sequence[ProfileLike],
    count: int,
    rng: np.random.Generator | None = None,
    weights: MatchWeights = DEFAULT_WEIGHTS,
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> list[RankedCandidate]:
    """A varied discovery feed, biased towards better matches.

    The sample is returned best first so the feed still reads top-down.
    """
    scored = _score_pool(user, candidates, weights, index)
    return sort_by_match_score(weighted_random_select(scored, count, rng))


def get_match_quality_label(score: int | None) -> str:
    if score is None:
        return "Not Enough Data"
    if score >= 80:
        return "Excellent Match"
    if score >= 70:
        return "Great Match"
    if score >= 60:
        return "Good Match"
    if score >= 50:
        return "Fair Match"
    if score >= 40:
        return "Possible Match"
    return "Low Match"


def get_match_quality_color(score: int | None) -> str:
    """UI colour for a match badge."""
    if score is None:
        return "gray"
    if score >= 80:
        return "green"
    if score >= 70:
        return "blue"
    if score >= 60:
        return "cyan"
    if score >= 50:
        return "yellow"
    if score >= 40:
        return "orange"
    return "gray"
