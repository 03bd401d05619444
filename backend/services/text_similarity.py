"""Typo-tolerant string similarity for search and fuzzy matching.

Normalized Levenshtein similarity with two shortcuts (exact and
substring matches), plus the tiered 0-100 relevance score used when a
single search term is matched against a block of text.
"""

import re

from rapidfuzz.distance import Levenshtein

_WORD_SPLIT = re.compile(r"[^\w+#.-]+")


def tokenize(text: str) -> list[str]:
    """Lowercase and split text into non-empty words."""
    return [w for w in _WORD_SPLIT.split((text or "").lower()) if w]


def calculate_similarity(s1: str, s2: str) -> float:
    """Similarity of two strings in [0, 1].

    Exact match is 1.0; if one contains the other the ratio of their
    lengths; otherwise 1 - edit_distance / longer_length.
    """
    a = (s1 or "").lower().strip()
    b = (s2 or "").lower().strip()

    if a == b:
        return 1.0

    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if shorter in longer:
        return len(shorter) / len(longer)

    distance = Levenshtein.distance(a, b)
    return 1.0 - distance / max(len(a), len(b))


def match_score(search_term: str, target_text: str) -> int:
    """Score how well one search term matches a target text (0-100).

    Tiers:
        100  exact match
         90  search term found inside target
         80  target found inside search term
      40-70  word-level hits (2 points per exact word, 1 per partial word)
       0-60  edit-distance fallback for typos
    """
    search = (search_term or "").lower().strip()
    target = (target_text or "").lower().strip()
    if not search or not target:
        return 0

    if search == target:
        return 100
    if search in target:
        return 90
    if target in search:
        return 80

    target_words = tokenize(target)
    points = 0
    for word in tokenize(search):
        if word in target_words:
            points += 2
        elif any(word in tw or tw in word for tw in target_words):
            points += 1
    if points > 0:
        return min(70, 40 + points * 10)

    similarity = calculate_similarity(search, target)
    if similarity > 0.7:
        return round(similarity * 60)
    if similarity > 0.5:
        return round(similarity * 40)
    return 0
