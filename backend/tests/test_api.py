import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app

client = TestClient(app)

pytestmark = pytest.mark.api

CANDIDATES = [
    {"userId": "twin", "subjects": ["math", "physics"], "interests": ["chess"],
     "skillLevel": "INTERMEDIATE", "studyStyle": "VISUAL", "availableDays": ["Mon", "Wed"]},
    {"userId": "close", "subjects": ["calculus"], "interests": ["chess"],
     "skillLevel": "ADVANCED", "availableDays": ["Mon"]},
    {"userId": "sparse", "subjects": ["math"]},
]


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["synonym_families"] == 26


def test_match(study_profile):
    response = client.post("/match", json={"profile_a": study_profile, "profile_b": study_profile})
    assert response.status_code == 200
    data = response.json()
    assert data["match_score"] == 100
    assert data["match_tier"] == "excellent"
    assert data["match_data_insufficient"] is False
    assert "subjects" in data["component_scores"]
    assert "subjects" in data["match_details"]
    assert data["summary"]["compatibility"] == "Highly Compatible"


def test_match_insufficient(study_profile):
    response = client.post(
        "/match", json={"profile_a": study_profile, "profile_b": {"subjects": ["math"]}}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["match_score"] is None
    assert data["match_data_insufficient"] is True
    assert data["match_tier"] == "insufficient"


def test_match_weight_overrides(study_profile):
    other = {**study_profile, "skillLevel": "EXPERT"}
    default = client.post("/match", json={"profile_a": study_profile, "profile_b": other}).json()
    heavier = client.post(
        "/match",
        json={"profile_a": study_profile, "profile_b": other, "weights": {"skill_level": 1.0}},
    ).json()
    assert heavier["match_score"] < default["match_score"]


def test_match_rejects_invalid_weights(study_profile):
    response = client.post(
        "/match",
        json={"profile_a": study_profile, "profile_b": study_profile, "weights": {"hobbies": 1}},
    )
    assert response.status_code == 400


def test_match_requires_both_profiles(study_profile):
    response = client.post("/match", json={"profile_a": study_profile})
    assert response.status_code == 422


def test_rank(study_profile):
    response = client.post(
        "/match/rank", json={"profile": study_profile, "candidates": CANDIDATES, "min_score": 0}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total_candidates"] == 3
    ids = [m["profile"]["user_id"] for m in data["matches"]]
    assert ids == ["twin", "close"]
    top = data["matches"][0]
    assert top["result"]["match_score"] == 100
    assert top["quality_label"] == "Excellent Match"
    assert top["quality_color"] == "green"


def test_rank_limit(study_profile):
    response = client.post(
        "/match/rank",
        json={"profile": study_profile, "candidates": CANDIDATES, "limit": 1, "min_score": 0},
    )
    assert len(response.json()["matches"]) == 1


def test_discover_seeded(study_profile):
    body = {"profile": study_profile, "candidates": CANDIDATES, "count": 1, "seed": 5}
    first = client.post("/match/discover", json=body).json()
    second = client.post("/match/discover", json=body).json()
    assert len(first["matches"]) == 1
    assert first == second


def test_pool_too_large(study_profile, monkeypatch):
    monkeypatch.setattr(settings, "max_candidates", 2)
    response = client.post("/match/rank", json={"profile": study_profile, "candidates": CANDIDATES})
    assert response.status_code == 400
    assert "Too many candidates" in response.json()["detail"]


def test_search():
    response = client.post(
        "/search",
        json={
            "query": "math",
            "candidates": [
                {"id": "g1", "name": "Calculus Crew", "subject": "Mathematics"},
                {"id": "g2", "name": "Chess Club", "tags": ["strategy"]},
                {"id": "g3", "name": "Study Hall", "subjectCustomDescription": "algebra drills"},
            ],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "math"
    assert data["total_candidates"] == 3
    ids = [hit["entity"]["id"] for hit in data["hits"]]
    assert ids == ["g1", "g3"]
    assert all(hit["search"]["matches"] for hit in data["hits"])


def test_search_empty_query_matches_all():
    response = client.post(
        "/search", json={"query": "", "candidates": [{"name": "A"}, {"name": "B"}]}
    )
    assert len(response.json()["hits"]) == 2
