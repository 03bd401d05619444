"""Independent scorers, one per profile attribute family.

Each returns a score in [0, 1]. Absent or unrecognized values score 0
(or neutral 0.5 for timezones that cannot be parsed); none of them raise.
"""

import math
import re
from collections.abc import Iterable
from typing import NamedTuple

from services.matching.term_equivalence import get_intersection

EARTH_RADIUS_KM = 6371.0
MAX_LOCATION_DISTANCE_KM = 500.0

# Ordinal rank of each skill level
_SKILL_RANK = {"BEGINNER": 0, "INTERMEDIATE": 1, "ADVANCED": 2, "EXPERT": 3}

# Score by rank distance: same level, adjacent, two apart
_SKILL_DISTANCE_SCORE = {0: 1.0, 1: 0.7, 2: 0.4}

# Styles each style pairs well with (besides itself)
COMPATIBLE_STYLES: dict[str, frozenset[str]] = {
    "VISUAL": frozenset({"MIXED", "READING_WRITING"}),
    "AUDITORY": frozenset({"MIXED", "COLLABORATIVE"}),
    "KINESTHETIC": frozenset({"MIXED", "COLLABORATIVE"}),
    "READING_WRITING": frozenset({"MIXED", "VISUAL", "INDEPENDENT"}),
    "COLLABORATIVE": frozenset({"MIXED", "AUDITORY", "KINESTHETIC"}),
    "INDEPENDENT": frozenset({"MIXED", "SOLO", "READING_WRITING"}),
    "SOLO": frozenset({"MIXED", "INDEPENDENT"}),
    "MIXED": frozenset({
        "VISUAL", "AUDITORY", "KINESTHETIC", "READING_WRITING",
        "COLLABORATIVE", "INDEPENDENT", "SOLO",
    }),
}

# Leading signed hour offset, optionally prefixed: "UTC+8", "GMT-5", "+3", "-07:00"
_TZ_OFFSET = re.compile(r"^\s*(?:utc|gmt)?\s*([+-]?\d{1,2})(?!\d)", re.IGNORECASE)


class LocationProximity(NamedTuple):
    score: float
    distance_km: float | None
    same_city: bool
    same_country: bool


class TimezoneProximity(NamedTuple):
    score: float
    offset_hours: int | None  # absolute difference between the two offsets


class Complementarity(NamedTuple):
    score: float
    covered: list[str]  # weaknesses of one side covered by the other's strengths
    directions: int  # how many of the two directions had data


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


def _enum_key(value: str | None) -> str:
    return re.sub(r"[\s-]+", "_", (value or "").strip().upper())


def skill_level_closeness(a: str | None, b: str | None) -> float:
    rank_a = _SKILL_RANK.get(_enum_key(a))
    rank_b = _SKILL_RANK.get(_enum_key(b))
    if rank_a is None or rank_b is None:
        return 0.0
    return _SKILL_DISTANCE_SCORE.get(abs(rank_a - rank_b), 0.0)


def study_style_compatibility(a: str | None, b: str | None) -> float:
    style_a = _enum_key(a)
    style_b = _enum_key(b)
    if style_a not in COMPATIBLE_STYLES or style_b not in COMPATIBLE_STYLES:
        return 0.0
    if style_a == style_b:
        return 1.0
    if style_b in COMPATIBLE_STYLES.get(style_a, frozenset()):
        return 0.7
    return 0.3


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def distance_score(distance_km: float) -> float:
    """Tiered decay: proximity matters far more at short range."""
    if distance_km <= 50:
        return 0.9
    if distance_km <= 100:
        return 0.7
    if distance_km <= 200:
        return 0.5
    if distance_km <= MAX_LOCATION_DISTANCE_KM:
        return 0.3 * (1 - (distance_km - 200) / (MAX_LOCATION_DISTANCE_KM - 200))
    return 0.0


def location_proximity(
    lat1: float | None,
    lng1: float | None,
    lat2: float | None,
    lng2: float | None,
    city1: str | None = None,
    city2: str | None = None,
    country1: str | None = None,
    country2: str | None = None,
) -> LocationProximity:
    same_country = bool(_norm(country1)) and _norm(country1) == _norm(country2)

    if _norm(city1) and _norm(city1) == _norm(city2):
        return LocationProximity(1.0, 0.0, True, same_country)

    if None not in (lat1, lng1, lat2, lng2):
        distance = haversine_km(lat1, lng1, lat2, lng2)
        return LocationProximity(distance_score(distance), distance, False, same_country)

    if same_country:
        return LocationProximity(0.4, None, False, True)

    return LocationProximity(0.0, None, False, False)


def parse_utc_offset(tz: str | None) -> int | None:
    match = _TZ_OFFSET.match(tz or "")
    if not match:
        return None
    return int(match.group(1))


def timezone_proximity(tz1: str | None, tz2: str | None) -> TimezoneProximity:
    if tz1 is not None and tz1 == tz2:
        return TimezoneProximity(1.0, 0)

    offset1 = parse_utc_offset(tz1)
    offset2 = parse_utc_offset(tz2)
    if offset1 is None or offset2 is None:
        # Unknown, not penalized
        return TimezoneProximity(0.5, None)

    diff = abs(offset1 - offset2)
    return TimezoneProximity(max(0.0, 1 - diff / 12), diff)


def exact_match(a: str | None, b: str | None) -> float:
    if not _norm(a) or not _norm(b):
        return 0.0
    return 1.0 if _norm(a) == _norm(b) else 0.0


def complementary_skills(
    strengths_a: Iterable[str] | None,
    weaknesses_a: Iterable[str] | None,
    strengths_b: Iterable[str] | None,
    weaknesses_b: Iterable[str] | None,
) -> Complementarity:
    """How well each side's strengths cover the other side's weaknesses.

    Coverage per direction is |strengths ∩ weaknesses| / |weaknesses|;
    the score is the mean over the directions where both lists exist.
    """
    coverages: list[float] = []
    covered: list[str] = []
    for strengths, weaknesses in ((strengths_b, weaknesses_a), (strengths_a, weaknesses_b)):
        weak = [w for w in weaknesses or [] if isinstance(w, str) and w.strip()]
        strong = [s for s in strengths or [] if isinstance(s, str) and s.strip()]
        if not weak or not strong:
            continue
        hits = get_intersection(weak, strong)
        unique_weak = {w.strip().lower() for w in weak}
        coverages.append(len(hits) / len(unique_weak))
        for hit in hits:
            if hit.lower() not in {c.lower() for c in covered}:
                covered.append(hit)

    if not coverages:
        return Complementarity(0.0, [], 0)
    return Complementarity(sum(coverages) / len(coverages), covered, len(coverages))
