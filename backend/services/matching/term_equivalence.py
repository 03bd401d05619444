"""Set similarity for free-text tag lists, with synonym awareness.

jaccard() is the plain overlap ratio. smart_jaccard() additionally
credits tags that are different words for the same thing ("math" vs
"calculus") at a discount relative to exact matches.
"""

from collections.abc import Iterable
from typing import NamedTuple

from services.matching.synonyms import DEFAULT_SYNONYM_INDEX, SynonymIndex

# Credit for a synonym match relative to a direct match
SYNONYM_MATCH_WEIGHT = 0.7


class SmartJaccardResult(NamedTuple):
    score: float
    direct_matches: list[str]
    synonym_matches: list[str]


def _normalized_set(values: Iterable[str] | None) -> set[str]:
    return {v.lower().strip() for v in values or [] if isinstance(v, str) and v.strip()}


def jaccard(a: Iterable[str] | None, b: Iterable[str] | None) -> float:
    """|A ∩ B| / |A ∪ B| over lowercased, trimmed values.

    Two empty sets score 0: missing data is never a match.
    """
    set_a = _normalized_set(a)
    set_b = _normalized_set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def get_intersection(a: Iterable[str] | None, b: Iterable[str] | None) -> list[str]:
    """Case-insensitive intersection, keeping a's original spelling."""
    set_b = _normalized_set(b)
    seen: set[str] = set()
    result: list[str] = []
    for value in a or []:
        if not isinstance(value, str) or not value.strip():
            continue
        key = value.lower().strip()
        if key in set_b and key not in seen:
            seen.add(key)
            result.append(value.strip())
    return result


def smart_jaccard(
    a: Iterable[str] | None,
    b: Iterable[str] | None,
    index: SynonymIndex = DEFAULT_SYNONYM_INDEX,
) -> SmartJaccardResult:
    """Synonym-aware overlap score between two tag lists.

    score = min(1, (direct + 0.7 * synonym) / max(|a|, |b|))

    The denominator is the larger list so a small list fully contained in
    a large one does not score as a perfect match.
    """
    list_a = [v.strip() for v in a or [] if isinstance(v, str) and v.strip()]
    list_b = [v.strip() for v in b or [] if isinstance(v, str) and v.strip()]
    size_a = len(_normalized_set(list_a))
    size_b = len(_normalized_set(list_b))
    if size_a == 0 and size_b == 0:
        return SmartJaccardResult(0.0, [], [])

    direct_matches = get_intersection(list_a, list_b)
    direct_keys = {m.lower() for m in direct_matches}

    remaining_b = [t for t in list_b if t.lower() not in direct_keys]
    # Expand each remaining target once instead of once per source term
    expanded_b = [index.expand(t) for t in remaining_b]

    synonym_matches: list[str] = []
    seen: set[str] = set(direct_keys)
    for term in list_a:
        key = term.lower()
        if key in seen:
            continue
        seen.add(key)
        expanded = index.expand(term)
        if any(expanded & other for other in expanded_b):
            synonym_matches.append(term)

    raw = (len(direct_matches) * 1.0 + len(synonym_matches) * SYNONYM_MATCH_WEIGHT) / max(size_a, size_b)
    return SmartJaccardResult(min(1.0, raw), direct_matches, synonym_matches)
