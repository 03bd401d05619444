"""Aggregator output: per-attribute scores and the explainable match result."""

from enum import Enum

from pydantic import BaseModel

from models.schemas.profile import ProfileData


class MatchTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    LOW = "low"
    INSUFFICIENT = "insufficient"


class ComponentScore(BaseModel):
    """Score for one compared attribute family."""
    score: float = 0.0  # 0.0-1.0
    weight: float = 0.0
    weighted_score: float = 0.0  # score * weight
    details: str = ""
    match_items: list[str] = []
    both_have_data: bool = False


class MatchDetail(BaseModel):
    """UI-facing restatement of a component in a fixed shape."""
    count: int = 0
    items: list[str] = []
    score: int = 0  # 0-100
    has_data: bool = False
    note: str = ""


class MatchSummary(BaseModel):
    matched_components: int = 0
    total_components: int = 0
    top_matches: list[str] = []
    missing_fields_a: list[str] = []
    missing_fields_b: list[str] = []
    compatibility: str = ""


class MatchResult(BaseModel):
    """Compatibility of one ordered pair of profiles.

    match_score is None (and match_data_insufficient True) when either
    profile is too sparse to recommend on.
    """
    match_score: int | None = None
    match_data_insufficient: bool = False
    match_reasons: list[str] = []
    match_details: dict[str, MatchDetail] = {}
    component_scores: dict[str, ComponentScore] = {}
    match_tier: MatchTier = MatchTier.INSUFFICIENT
    missing_fields_a: list[str] = []
    missing_fields_b: list[str] = []
    summary: MatchSummary = MatchSummary()


class RankedCandidate(BaseModel):
    """A candidate profile paired with its match against the requesting user."""
    profile: ProfileData
    result: MatchResult

    @property
    def match_score(self) -> int | None:
        return self.result.match_score
