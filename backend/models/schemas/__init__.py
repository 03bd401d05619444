"""Pydantic contracts shared by the matching and search services."""

from models.schemas.match_result import (
    ComponentScore,
    MatchDetail,
    MatchResult,
    MatchSummary,
    MatchTier,
    RankedCandidate,
)
from models.schemas.profile import ProfileData
from models.schemas.search_result import SearchableEntity, SmartSearchResult
from models.schemas.weights import DEFAULT_WEIGHTS, MatchWeights

__all__ = [
    "ComponentScore",
    "MatchDetail",
    "MatchResult",
    "MatchSummary",
    "MatchTier",
    "RankedCandidate",
    "ProfileData",
    "SearchableEntity",
    "SmartSearchResult",
    "DEFAULT_WEIGHTS",
    "MatchWeights",
]
