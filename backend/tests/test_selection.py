import numpy as np
import pytest

from services.selection import filter_by_min_score, sort_by_match_score, weighted_random_select


@pytest.fixture
def scored():
    return [
        {"id": "a", "match_score": 40},
        {"id": "b", "match_score": None},
        {"id": "c", "match_score": 90},
        {"id": "d", "match_score": 65},
        {"id": "e", "match_score": 90},
    ]


def _ids(items):
    return [item["id"] for item in items]


def test_sort_descending_none_last(scored):
    assert _ids(sort_by_match_score(scored)) == ["c", "e", "d", "a", "b"]


def test_sort_does_not_mutate(scored):
    before = list(scored)
    sort_by_match_score(scored)
    assert scored == before


def test_sort_custom_key():
    items = [("x", 1), ("y", 3), ("z", 2)]
    assert sort_by_match_score(items, key=lambda item: item[1]) == [("y", 3), ("z", 2), ("x", 1)]


def test_filter_inclusive_threshold(scored):
    assert _ids(filter_by_min_score(scored, 65)) == ["c", "d", "e"]


def test_filter_drops_missing_scores(scored):
    assert "b" not in _ids(filter_by_min_score(scored, 0))


def test_filter_reads_attributes():
    class Item:
        def __init__(self, match_score):
            self.match_score = match_score

    items = [Item(10), Item(50)]
    assert filter_by_min_score(items, 20) == [items[1]]


class TestWeightedRandomSelect:
    def test_count_covers_pool(self, scored):
        assert weighted_random_select(scored, 10) == scored
        assert weighted_random_select(scored, 5) == scored

    def test_non_positive_count(self, scored):
        assert weighted_random_select(scored, 0) == []

    def test_without_replacement(self, scored):
        picked = weighted_random_select(scored, 3, rng=np.random.default_rng(7))
        assert len(picked) == 3
        assert len(set(_ids(picked))) == 3
        assert set(_ids(picked)) <= set(_ids(scored))

    def test_seeded_is_reproducible(self, scored):
        first = weighted_random_select(scored, 3, rng=np.random.default_rng(42))
        second = weighted_random_select(scored, 3, rng=np.random.default_rng(42))
        assert first == second

    def test_biased_towards_high_scores(self):
        items = [{"id": "high", "match_score": 100}] + [
            {"id": f"low{i}", "match_score": 0} for i in range(9)
        ]
        rng = np.random.default_rng(0)
        hits = sum(
            1 for _ in range(200)
            if weighted_random_select(items, 1, rng=rng)[0]["id"] == "high"
        )
        # high weighs 101**2 against 9 * 1 for the rest
        assert hits > 190

    def test_zero_scores_still_selectable(self):
        items = [{"id": str(i), "match_score": 0} for i in range(4)]
        picked = weighted_random_select(items, 2, rng=np.random.default_rng(1))
        assert len(picked) == 2
