"""Shared dependencies for API routes."""

import logging
from functools import lru_cache

from config import settings
from models.schemas.weights import DEFAULT_WEIGHTS, MatchWeights
from services.matching.synonyms import DEFAULT_SYNONYM_INDEX, SynonymIndex

logger = logging.getLogger(__name__)


@lru_cache
def get_match_weights() -> MatchWeights:
    """Default weight table with any MATCH_WEIGHTS overrides applied."""
    if settings.match_weights:
        logger.info("Applying match weight overrides: %s", settings.match_weights)
    return DEFAULT_WEIGHTS.with_overrides(settings.match_weights)


def get_synonym_index() -> SynonymIndex:
    return DEFAULT_SYNONYM_INDEX
