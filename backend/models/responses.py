from pydantic import BaseModel

from models.schemas.match_result import MatchResult
from models.schemas.profile import ProfileData
from models.schemas.search_result import SearchableEntity, SmartSearchResult


class RankedMatch(BaseModel):
    profile: ProfileData
    result: MatchResult
    quality_label: str = ""
    quality_color: str = "gray"


class RankResponse(BaseModel):
    matches: list[RankedMatch] = []
    total_candidates: int = 0


class SearchHit(BaseModel):
    entity: SearchableEntity
    search: SmartSearchResult = SmartSearchResult()
    relevance_score: int = 0


class SearchResponse(BaseModel):
    query: str = ""
    hits: list[SearchHit] = []
    total_candidates: int = 0
