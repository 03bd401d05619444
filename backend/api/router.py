import numpy as np
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_match_weights, get_synonym_index
from config import settings
from models.requests import DiscoverRequest, MatchRequest, RankRequest, SearchRequest
from models.responses import RankedMatch, RankResponse, SearchHit, SearchResponse
from models.schemas.match_result import MatchResult, RankedCandidate
from models.schemas.weights import MatchWeights
from services import partner_finder, smart_search
from services.matching.aggregator import calculate_match_score
from services.matching.synonyms import SynonymIndex

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _check_pool_size(size: int) -> None:
    if size > settings.max_candidates:
        raise HTTPException(
            status_code=400,
            detail=f"Too many candidates. Max per request: {settings.max_candidates}",
        )


def _to_ranked_match(candidate: RankedCandidate) -> RankedMatch:
    score = candidate.result.match_score
    return RankedMatch(
        profile=candidate.profile,
        result=candidate.result,
        quality_label=partner_finder.get_match_quality_label(score),
        quality_color=partner_finder.get_match_quality_color(score),
    )


@router.get("/health")
async def health(index: SynonymIndex = Depends(get_synonym_index)):
    return {
        "status": "ok",
        "synonym_families": len(index),
    }


@router.post("/match", response_model=MatchResult)
@limiter.limit("60/minute")
async def match(
    request: Request,
    body: MatchRequest,
    weights: MatchWeights = Depends(get_match_weights),
    index: SynonymIndex = Depends(get_synonym_index),
):
    if body.weights:
        try:
            weights = weights.with_overrides(body.weights)
        except ValidationError:
            raise HTTPException(status_code=400, detail="Invalid weight overrides")
    return calculate_match_score(body.profile_a, body.profile_b, weights, index)


@router.post("/match/rank", response_model=RankResponse)
@limiter.limit("30/minute")
async def rank(
    request: Request,
    body: RankRequest,
    weights: MatchWeights = Depends(get_match_weights),
    index: SynonymIndex = Depends(get_synonym_index),
):
    _check_pool_size(len(body.candidates))
    ranked = partner_finder.find_best_matches(
        body.profile,
        body.candidates,
        limit=body.limit or settings.rank_limit,
        min_score=settings.rank_min_score if body.min_score is None else body.min_score,
        weights=weights,
        index=index,
    )
    return RankResponse(
        matches=[_to_ranked_match(c) for c in ranked],
        total_candidates=len(body.candidates),
    )


@router.post("/match/discover", response_model=RankResponse)
@limiter.limit("30/minute")
async def discover(
    request: Request,
    body: DiscoverRequest,
    weights: MatchWeights = Depends(get_match_weights),
    index: SynonymIndex = Depends(get_synonym_index),
):
    _check_pool_size(len(body.candidates))
    rng = np.random.default_rng(body.seed)
    feed = partner_finder.discover_partners(
        body.profile, body.candidates, body.count, rng=rng, weights=weights, index=index
    )
    return RankResponse(
        matches=[_to_ranked_match(c) for c in feed],
        total_candidates=len(body.candidates),
    )


@router.post("/search", response_model=SearchResponse)
@limiter.limit("60/minute")
async def search(
    request: Request,
    body: SearchRequest,
    index: SynonymIndex = Depends(get_synonym_index),
):
    _check_pool_size(len(body.candidates))
    min_score = settings.search_min_score if body.min_score is None else body.min_score

    hits: list[SearchHit] = []
    for entity in body.candidates:
        result = smart_search.smart_search(
            body.query,
            entity.text_fields(),
            expand_synonyms=body.expand_synonyms,
            fuzzy_match=body.fuzzy_match,
            min_score=min_score,
            index=index,
        )
        if not result.matches:
            continue
        hits.append(SearchHit(
            entity=entity,
            search=result,
            relevance_score=smart_search.calculate_relevance_score(body.query, entity, index),
        ))

    hits.sort(key=lambda h: (h.relevance_score, h.search.score), reverse=True)
    return SearchResponse(query=body.query, hits=hits, total_candidates=len(body.candidates))
