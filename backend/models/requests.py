from pydantic import BaseModel, Field

from models.schemas.profile import ProfileData
from models.schemas.search_result import SearchableEntity


class MatchRequest(BaseModel):
    profile_a: ProfileData = Field(..., description="Requesting user's profile")
    profile_b: ProfileData = Field(..., description="Candidate partner's profile")
    weights: dict[str, float] | None = Field(None, description="Per-attribute weight overrides")


class RankRequest(BaseModel):
    profile: ProfileData
    candidates: list[ProfileData] = []
    limit: int | None = Field(None, ge=1, le=100)
    min_score: int | None = Field(None, ge=0, le=100)


class DiscoverRequest(BaseModel):
    profile: ProfileData
    candidates: list[ProfileData] = []
    count: int = Field(10, ge=1, le=100)
    seed: int | None = Field(None, description="Seed for a reproducible feed")


class SearchRequest(BaseModel):
    query: str = Field("", max_length=200)
    candidates: list[SearchableEntity] = []
    min_score: int | None = Field(None, ge=0, le=100)
    expand_synonyms: bool = True
    fuzzy_match: bool = True
