"""Synonym-aware fuzzy search over free-text entity fields.

Like a video-site search box:
- "CS" matches "Computer Science"
- "math" matches "Mathematics", "Calculus", "Algebra"
- "calclus" still finds "Calculus" through edit-distance fallback

smart_search() answers "does this entity match the query, and how well"
on a 0-100 scale; calculate_relevance_score() is an unbounded additive
score meant only for ordering a result set.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from models.schemas.search_result import SearchableEntity, SmartSearchResult
from services.matching.synonyms import DEFAULT_SYNONYM_INDEX, SynonymIndex
from services.text_similarity import calculate_similarity, match_score, tokenize

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 20
FUZZY_THRESHOLD = 0.7

# Per-field weights for relevance ranking
NAME_WEIGHT = 10
NAME_EXACT_BONUS = 5
SUBJECT_WEIGHT = 8
TAG_WEIGHT = 7
DESCRIPTION_WEIGHT = 6
CUSTOM_DESCRIPTION_WEIGHT = 5
SKILL_LEVEL_WEIGHT = 4


def expand_search_terms(
    terms: Iterable[str],
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> list[str]:
    """Query terms followed by their synonym expansion, without duplicates."""
    originals = [t.lower().strip() for t in terms if t and t.strip()]
    expanded = list(dict.fromkeys(originals))
    seen = set(expanded)
    for term in sorted(index.expand_many(originals)):
        if term not in seen:
            seen.add(term)
            expanded.append(term)
    return expanded


def smart_search(
    query: str,
    target_fields: Sequence[str | None],
    expand_synonyms: bool = True,
    fuzzy_match: bool = True,
    min_score: int = DEFAULT_MIN_SCORE,
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> SmartSearchResult:
    """Match a query against the concatenated target fields.

    Each (optionally synonym-expanded) term is scored against the whole
    haystack; the sum is normalized by the number of query tokens and
    capped at 100. Below min_score, a fuzzy pass compares every query
    token with every haystack word and accepts the first close pair.
    """
    tokens = tokenize(query)
    if not tokens:
        return SmartSearchResult(matches=True, score=100, matched_terms=[])

    terms = expand_search_terms(tokens, index) if expand_synonyms else list(dict.fromkeys(tokens))
    haystack = " ".join(f for f in target_fields if f).lower()
    if not haystack.strip():
        return SmartSearchResult(matches=False, score=0, matched_terms=[])

    total = 0
    matched_terms: list[str] = []
    for term in terms:
        term_score = match_score(term, haystack)
        if term_score > 0:
            total += term_score
            matched_terms.append(term)

    # Normalized by query tokens, not by expanded terms
    score = min(100, round(total / len(tokens)))
    if score >= min_score:
        return SmartSearchResult(matches=True, score=score, matched_terms=matched_terms)

    if fuzzy_match:
        words = tokenize(haystack)
        for token in tokens:
            for word in words:
                similarity = calculate_similarity(token, word)
                if similarity > FUZZY_THRESHOLD:
                    logger.debug("Fuzzy match %r ~ %r (%.2f)", token, word, similarity)
                    return SmartSearchResult(
                        matches=True, score=round(similarity * 50), matched_terms=[token]
                    )

    return SmartSearchResult(matches=False, score=score, matched_terms=matched_terms)


def _contains(term: str, text: str | None) -> bool:
    return bool(text) and term in text.lower()


def calculate_relevance_score(
    query: str,
    entity: SearchableEntity | Mapping[str, Any],
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> int:
    """Additive relevance of an entity to a query, for sorting only."""
    if not isinstance(entity, SearchableEntity):
        entity = SearchableEntity.model_validate(entity)

    normalized_query = (query or "").lower().strip()
    if not normalized_query:
        return 0

    terms = expand_search_terms(tokenize(normalized_query), index)
    score = 0

    if entity.name and entity.name.lower().strip() == normalized_query:
        score += NAME_EXACT_BONUS

    tags = [t.lower() for t in entity.tags if t]
    for term in terms:
        if _contains(term, entity.name):
            score += NAME_WEIGHT
        if _contains(term, entity.subject):
            score += SUBJECT_WEIGHT
        if any(term in tag for tag in tags):
            score += TAG_WEIGHT
        if _contains(term, entity.description):
            score += DESCRIPTION_WEIGHT
        if _contains(term, entity.subject_custom_description):
            score += CUSTOM_DESCRIPTION_WEIGHT
        if _contains(term, entity.skill_level):
            score += SKILL_LEVEL_WEIGHT

    return score
