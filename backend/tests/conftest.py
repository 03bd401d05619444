"""Shared test configuration, pytest markers and profile fixtures."""

import pytest

from services.matching.synonyms import SynonymIndex


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the HTTP layer through TestClient"
    )


@pytest.fixture
def small_index():
    """A tiny thesaurus so tests do not depend on the production tables."""
    return SynonymIndex.build(
        subjects={"music": ["guitar", "piano", "singing"]},
        skill_levels={"beginner": ["novice"]},
        study_styles={"visual": ["diagrams"]},
    )


@pytest.fixture
def study_profile():
    """Five-field profile used across aggregator and API tests."""
    return {
        "subjects": ["math", "physics"],
        "interests": ["chess"],
        "skillLevel": "INTERMEDIATE",
        "studyStyle": "VISUAL",
        "availableDays": ["Mon", "Wed"],
    }
