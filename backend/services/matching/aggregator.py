"""Match aggregator: weighted, explainable compatibility between two profiles.

Flow:
    profile_a + profile_b
      ├─ gate 1: enough filled fields on both sides?      → else insufficient
      ├─ one ComponentScore per attribute family
      │     (inactive unless both sides have the attribute)
      ├─ gate 2: >= 2 active components incl. subjects/interests?
      ├─ weights renormalized over active components      → raw 0-100
      ├─ confidence factor when few components are active
      └─ tier, ranked reasons, per-attribute details, summary
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from models.schemas.match_result import (
    ComponentScore,
    MatchDetail,
    MatchResult,
    MatchSummary,
    MatchTier,
)
from models.schemas.profile import ProfileData, clean_list, is_present
from models.schemas.weights import DEFAULT_WEIGHTS, MatchWeights
from services.matching import component_scorers as scorers
from services.matching.synonyms import DEFAULT_SYNONYM_INDEX, SynonymIndex
from services.matching.term_equivalence import get_intersection, jaccard, smart_jaccard

logger = logging.getLogger(__name__)

MIN_FIELDS_FOR_MATCHING = 3
MIN_ACTIVE_COMPONENTS = 2
FULL_CONFIDENCE_COMPONENTS = 4
MAX_REASONS = 5
SUMMARY_TOP_N = 3

TIER_THRESHOLDS: dict[MatchTier, int] = {
    MatchTier.EXCELLENT: 85,
    MatchTier.GOOD: 70,
    MatchTier.FAIR: 50,
}

COMPATIBILITY_LABELS: dict[MatchTier, str] = {
    MatchTier.EXCELLENT: "Highly Compatible",
    MatchTier.GOOD: "Compatible",
    MatchTier.FAIR: "Moderately Compatible",
    MatchTier.LOW: "Low Compatibility",
    MatchTier.INSUFFICIENT: "Insufficient Data",
}

# Fields counted towards the minimum-data gate, in prompt order
MATCHING_FIELDS = [
    "subjects",
    "interests",
    "goals",
    "available_days",
    "available_hours",
    "skill_level",
    "study_style",
    "school",
    "timezone",
]

ProfileLike = ProfileData | Mapping[str, Any]


def as_profile(profile: ProfileLike) -> ProfileData:
    if isinstance(profile, ProfileData):
        return profile
    return ProfileData.model_validate(profile or {})


def count_filled_fields(profile: ProfileLike) -> int:
    """Number of matching-relevant fields the profile has filled in."""
    p = as_profile(profile)
    return sum(1 for name in MATCHING_FIELDS if is_present(getattr(p, name)))


def get_missing_fields(profile: ProfileLike) -> list[str]:
    """Matching-relevant fields the profile is missing, most important first."""
    p = as_profile(profile)
    return [name for name in MATCHING_FIELDS if not is_present(getattr(p, name))]


def _has_coords(p: ProfileData) -> bool:
    return p.location_lat is not None and p.location_lng is not None


def _locations_comparable(a: ProfileData, b: ProfileData) -> bool:
    """Both sides give coordinates, a city, or a country."""
    return (
        (_has_coords(a) and _has_coords(b))
        or (is_present(a.location_city) and is_present(b.location_city))
        or (is_present(a.location_country) and is_present(b.location_country))
    )


def get_match_tier(score: int) -> MatchTier:
    for tier, threshold in TIER_THRESHOLDS.items():
        if score >= threshold:
            return tier
    return MatchTier.LOW


# ---------------------------------------------------------------------------
# Component builders
# ---------------------------------------------------------------------------

def _inactive(weight: float, details: str) -> ComponentScore:
    return ComponentScore(score=0.0, weight=weight, weighted_score=0.0, details=details)


def _component(score: float, weight: float, details: str, items: list[str]) -> ComponentScore:
    score = max(0.0, min(1.0, score))
    return ComponentScore(
        score=score,
        weight=weight,
        weighted_score=score * weight,
        details=details,
        match_items=items,
        both_have_data=True,
    )


def _tag_component(
    label: str,
    values_a: list[str] | None,
    values_b: list[str] | None,
    weight: float,
    index: SynonymIndex,
) -> ComponentScore:
    if not (is_present(values_a) and is_present(values_b)):
        return _inactive(weight, f"{label.capitalize()} not provided by both users")

    result = smart_jaccard(clean_list(values_a), clean_list(values_b), index)
    parts: list[str] = []
    if result.direct_matches:
        parts.append(f"Shared {label}: {', '.join(result.direct_matches)}")
    if result.synonym_matches:
        parts.append(f"Related {label}: {', '.join(result.synonym_matches)}")
    details = "; ".join(parts) or f"No shared {label}"
    return _component(result.score, weight, details, result.direct_matches + result.synonym_matches)


def _overlap_component(
    label: str,
    values_a: list[str] | None,
    values_b: list[str] | None,
    weight: float,
) -> ComponentScore:
    if not (is_present(values_a) and is_present(values_b)):
        return _inactive(weight, f"{label.capitalize()} not provided by both users")

    a = clean_list(values_a)
    b = clean_list(values_b)
    shared = get_intersection(a, b)
    details = f"Common {label}: {', '.join(shared)}" if shared else f"No common {label}"
    return _component(jaccard(a, b), weight, details, shared)


def _skill_level_component(a: ProfileData, b: ProfileData, weight: float) -> ComponentScore:
    if not (is_present(a.skill_level) and is_present(b.skill_level)):
        return _inactive(weight, "Skill level not provided by both users")

    score = scorers.skill_level_closeness(a.skill_level, b.skill_level)
    level_a = a.skill_level.strip()
    level_b = b.skill_level.strip()
    if score == 1.0:
        return _component(score, weight, f"Same skill level ({level_a})", [level_a])
    if score > 0:
        return _component(score, weight, f"Similar skill levels ({level_a} and {level_b})", [level_a, level_b])
    return _component(score, weight, f"Different skill levels ({level_a} and {level_b})", [])


def _study_style_component(a: ProfileData, b: ProfileData, weight: float) -> ComponentScore:
    if not (is_present(a.study_style) and is_present(b.study_style)):
        return _inactive(weight, "Study style not provided by both users")

    score = scorers.study_style_compatibility(a.study_style, b.study_style)
    style_a = a.study_style.strip()
    style_b = b.study_style.strip()
    if score == 1.0:
        return _component(score, weight, f"Same study style ({style_a})", [style_a])
    if score >= 0.7:
        return _component(score, weight, f"Compatible study styles ({style_a} and {style_b})", [style_a, style_b])
    return _component(score, weight, f"Different study styles ({style_a} and {style_b})", [])


def _location_component(a: ProfileData, b: ProfileData, weight: float) -> ComponentScore:
    if not _locations_comparable(a, b):
        return _inactive(weight, "Location not provided by both users")

    prox = scorers.location_proximity(
        a.location_lat, a.location_lng, b.location_lat, b.location_lng,
        a.location_city, b.location_city, a.location_country, b.location_country,
    )
    if prox.same_city:
        city = a.location_city.strip()
        return _component(prox.score, weight, f"Both located in {city}", [city])
    if prox.distance_km is not None:
        km = round(prox.distance_km)
        if prox.score > 0:
            return _component(prox.score, weight, f"About {km} km apart", [f"{km} km"])
        return _component(prox.score, weight, f"Far apart ({km} km)", [])
    if prox.same_country:
        country = a.location_country.strip()
        return _component(prox.score, weight, f"Both located in {country}", [country])
    return _component(prox.score, weight, "Different locations", [])


def _timezone_component(a: ProfileData, b: ProfileData, weight: float) -> ComponentScore:
    if not (is_present(a.timezone) and is_present(b.timezone)):
        return _inactive(weight, "Timezone not provided by both users")

    prox = scorers.timezone_proximity(a.timezone, b.timezone)
    tz_a = a.timezone.strip()
    if prox.score == 1.0:
        return _component(prox.score, weight, f"Same timezone ({tz_a})", [tz_a])
    if prox.offset_hours is None:
        return _component(prox.score, weight, "Timezone difference unknown", [])
    items = [tz_a, b.timezone.strip()] if prox.score >= 0.75 else []
    return _component(prox.score, weight, f"{prox.offset_hours}h timezone difference", items)


def _exact_component(label: str, value_a: str | None, value_b: str | None, weight: float) -> ComponentScore:
    if not (is_present(value_a) and is_present(value_b)):
        return _inactive(weight, f"{label.capitalize()} not provided by both users")

    score = scorers.exact_match(value_a, value_b)
    if score:
        value = value_a.strip()
        return _component(score, weight, f"Same {label} ({value})", [value])
    return _component(score, weight, f"Different {label}", [])


def _strengths_component(a: ProfileData, b: ProfileData, weight: float) -> ComponentScore:
    comp = scorers.complementary_skills(a.strengths, a.weaknesses, b.strengths, b.weaknesses)
    if comp.directions == 0:
        return _inactive(weight, "Strengths and weaknesses not provided by both users")
    if comp.covered:
        return _component(
            comp.score, weight, f"Complementary strengths: {', '.join(comp.covered)}", comp.covered
        )
    return _component(comp.score, weight, "No complementary strengths", [])


def build_component_scores(
    a: ProfileData,
    b: ProfileData,
    weights: MatchWeights = DEFAULT_WEIGHTS,
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> dict[str, ComponentScore]:
    """Score every attribute family for one ordered pair of profiles."""
    builders: dict[str, Callable[[], ComponentScore]] = {
        "subjects": lambda: _tag_component("subjects", a.subjects, b.subjects, weights.subjects, index),
        "interests": lambda: _tag_component("interests", a.interests, b.interests, weights.interests, index),
        "goals": lambda: _tag_component("goals", a.goals, b.goals, weights.goals, index),
        "available_days": lambda: _overlap_component(
            "available days", a.available_days, b.available_days, weights.available_days
        ),
        "available_hours": lambda: _overlap_component(
            "available hours", a.available_hours, b.available_hours, weights.available_hours
        ),
        "skill_level": lambda: _skill_level_component(a, b, weights.skill_level),
        "location": lambda: _location_component(a, b, weights.location),
        "languages": lambda: _overlap_component("languages", a.languages, b.languages, weights.languages),
        "role": lambda: _exact_component("role", a.role, b.role, weights.role),
        "study_style": lambda: _study_style_component(a, b, weights.study_style),
        "strengths_weaknesses": lambda: _strengths_component(a, b, weights.strengths_weaknesses),
        "school": lambda: _exact_component("school", a.school, b.school, weights.school),
        "timezone": lambda: _timezone_component(a, b, weights.timezone),
    }
    return {name: build() for name, build in builders.items()}


# ---------------------------------------------------------------------------
# Result assembly
# ---------------------------------------------------------------------------

def _match_details(components: dict[str, ComponentScore]) -> dict[str, MatchDetail]:
    return {
        name: MatchDetail(
            count=len(c.match_items),
            items=c.match_items,
            score=round(c.score * 100),
            has_data=c.both_have_data,
            note=c.details,
        )
        for name, c in components.items()
    }


def _insufficient(
    missing_a: list[str],
    missing_b: list[str],
    components: dict[str, ComponentScore] | None = None,
) -> MatchResult:
    components = components or {}
    active = sum(1 for c in components.values() if c.both_have_data)
    return MatchResult(
        match_score=None,
        match_data_insufficient=True,
        match_reasons=[],
        match_details=_match_details(components),
        component_scores=components,
        match_tier=MatchTier.INSUFFICIENT,
        missing_fields_a=missing_a,
        missing_fields_b=missing_b,
        summary=MatchSummary(
            matched_components=0,
            total_components=active,
            top_matches=[],
            missing_fields_a=missing_a[:SUMMARY_TOP_N],
            missing_fields_b=missing_b[:SUMMARY_TOP_N],
            compatibility=COMPATIBILITY_LABELS[MatchTier.INSUFFICIENT],
        ),
    )


def confidence_factor(active_count: int) -> float:
    """Penalty for scores built on few independent signals."""
    if active_count >= FULL_CONFIDENCE_COMPONENTS:
        return 1.0
    return min(1.0, 0.85 + 0.05 * active_count)


def calculate_match_score(
    profile_a: ProfileLike,
    profile_b: ProfileLike,
    weights: MatchWeights = DEFAULT_WEIGHTS,
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> MatchResult:
    """Compatibility of profile_a with profile_b as an explainable MatchResult.

    Returns the insufficient sentinel (match_score None) rather than a low
    score when either profile lacks the data to judge compatibility.
    """
    a = as_profile(profile_a)
    b = as_profile(profile_b)
    missing_a = get_missing_fields(a)
    missing_b = get_missing_fields(b)

    filled_a = len(MATCHING_FIELDS) - len(missing_a)
    filled_b = len(MATCHING_FIELDS) - len(missing_b)
    has_core = any(is_present(v) for v in (a.subjects, a.interests, b.subjects, b.interests))
    if filled_a < MIN_FIELDS_FOR_MATCHING or filled_b < MIN_FIELDS_FOR_MATCHING or not has_core:
        logger.debug(
            "Insufficient profile data (filled: %d/%d, core fields: %s)", filled_a, filled_b, has_core
        )
        return _insufficient(missing_a, missing_b)

    components = build_component_scores(a, b, weights, index)
    active = {name: c for name, c in components.items() if c.both_have_data}
    core_active = "subjects" in active or "interests" in active
    total_weight = sum(c.weight for c in active.values())
    if len(active) < MIN_ACTIVE_COMPONENTS or not core_active or total_weight <= 0:
        logger.debug(
            "Insufficient overlapping data (active components: %s)", sorted(active)
        )
        return _insufficient(missing_a, missing_b, components)

    raw = 100 * sum(c.weighted_score for c in active.values()) / total_weight
    score = round(raw * confidence_factor(len(active)))
    score = max(0, min(100, score))
    tier = get_match_tier(score)

    ranked = sorted(
        (c for c in active.values() if c.score > 0 and c.match_items),
        key=lambda c: c.weighted_score,
        reverse=True,
    )
    reasons = [c.details for c in ranked[:MAX_REASONS]]

    return MatchResult(
        match_score=score,
        match_data_insufficient=False,
        match_reasons=reasons,
        match_details=_match_details(components),
        component_scores=components,
        match_tier=tier,
        missing_fields_a=missing_a,
        missing_fields_b=missing_b,
        summary=MatchSummary(
            matched_components=sum(1 for c in active.values() if c.score > 0),
            total_components=len(active),
            top_matches=reasons[:SUMMARY_TOP_N],
            missing_fields_a=missing_a[:SUMMARY_TOP_N],
            missing_fields_b=missing_b[:SUMMARY_TOP_N],
            compatibility=COMPATIBILITY_LABELS[tier],
        ),
    )
