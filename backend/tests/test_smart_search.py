"""Tests for synonym-aware smart search and relevance ranking."""

from models.schemas.search_result import SearchableEntity
from services.smart_search import (
    NAME_EXACT_BONUS,
    NAME_WEIGHT,
    calculate_relevance_score,
    expand_search_terms,
    smart_search,
)


class TestExpandSearchTerms:
    def test_originals_first(self):
        terms = expand_search_terms(["Math"])
        assert terms[0] == "math"
        assert "calculus" in terms

    def test_no_duplicates(self):
        terms = expand_search_terms(["math", "math", "calculus"])
        assert len(terms) == len(set(terms))
        assert terms[:2] == ["math", "calculus"]

    def test_injected_index(self, small_index):
        assert expand_search_terms(["guitar"], small_index) == [
            "guitar", "music", "piano", "singing",
        ]

    def test_blank_terms_dropped(self, small_index):
        assert expand_search_terms(["", "  "], small_index) == []


class TestSmartSearch:
    def test_empty_query_matches_everything(self):
        result = smart_search("   ", ["anything"])
        assert result.matches is True
        assert result.score == 100
        assert result.matched_terms == []

    def test_empty_haystack_never_matches(self):
        result = smart_search("math", [None, "", "  "])
        assert result.matches is False
        assert result.score == 0

    def test_abbreviation_finds_full_name(self):
        result = smart_search("cs", ["Computer Science 101"])
        assert result.matches is True
        assert "computer science" in result.matched_terms

    def test_synonym_match(self):
        result = smart_search("math", ["Calculus"])
        assert result.matches is True
        assert result.score == 100
        assert "calculus" in result.matched_terms

    def test_synonyms_disabled(self):
        result = smart_search("math", ["Calculus"], expand_synonyms=False, fuzzy_match=False)
        assert result.matches is False

    def test_fuzzy_fallback(self):
        result = smart_search("calclus", ["Calculus 101"], expand_synonyms=False, min_score=50)
        assert result.matches is True
        assert result.score == 44
        assert result.matched_terms == ["calclus"]

    def test_fuzzy_disabled(self):
        result = smart_search("zebra", ["Calculus"], fuzzy_match=False)
        assert result.matches is False
        assert result.score == 0

    def test_score_capped(self):
        result = smart_search("math", ["math calculus algebra geometry"])
        assert result.score == 100

    def test_score_normalized_by_query_tokens(self):
        result = smart_search("chess zzzz", ["Chess club"], expand_synonyms=False, fuzzy_match=False)
        # "chess" scores 90 against the haystack, "zzzz" nothing
        assert result.score == 45
        assert result.matched_terms == ["chess"]

    def test_entity_text_fields(self):
        entity = SearchableEntity(name="Orgo Night", tags=["exam prep"])
        result = smart_search("chemistry", entity.text_fields())
        assert result.matches is True


class TestRelevanceScore:
    def test_exact_name_bonus(self):
        score = calculate_relevance_score("Chess Club", {"name": "Chess Club"})
        assert score == 2 * NAME_WEIGHT + NAME_EXACT_BONUS

    def test_custom_description_only(self):
        entity = {"name": "Study Group", "subjectCustomDescription": "chess openings"}
        assert calculate_relevance_score("chess", entity) == 5

    def test_field_weights_ordered(self):
        by_name = calculate_relevance_score("chess", {"name": "chess"})
        by_subject = calculate_relevance_score("chess", {"subject": "chess"})
        by_tag = calculate_relevance_score("chess", {"tags": ["chess"]})
        by_description = calculate_relevance_score("chess", {"description": "chess"})
        by_level = calculate_relevance_score("chess", {"skillLevel": "chess"})
        assert by_name > by_subject > by_tag > by_description > by_level > 0

    def test_synonym_in_name(self):
        assert calculate_relevance_score("math", {"name": "Calculus Crew"}) == NAME_WEIGHT

    def test_blank_query(self):
        assert calculate_relevance_score("", {"name": "Chess"}) == 0

    def test_accepts_entity_model(self):
        entity = SearchableEntity(name="Chess", subject="Strategy games")
        assert calculate_relevance_score("chess", entity) == NAME_WEIGHT + NAME_EXACT_BONUS
