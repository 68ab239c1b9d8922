"""Unit tests for keyword-based language scoring."""

import pytest
from nutrition_scanner.domain.services.language_scoring import (
    contains_keyword,
    count_distinct_keywords,
    determine_label_language,
    score_languages,
)
from nutrition_scanner.domain.value_objects.language import (
    KEYWORDS_BY_LANGUAGE,
    LabelLanguage,
    keywords_for,
)


class TestKeywordTables:
    """Tests for the keyword tables."""

    def test_every_language_has_keywords(self):
        for language in LabelLanguage:
            assert keywords_for(language)

    def test_keywords_are_lowercase(self):
        for keywords in KEYWORDS_BY_LANGUAGE.values():
            for keyword in keywords:
                assert keyword == keyword.lower()

    def test_language_from_string(self):
        assert LabelLanguage("german") == LabelLanguage.GERMAN


class TestDetermineLabelLanguage:
    """Tests for determine_label_language."""

    def test_english_label(self):
        texts = ["Nutrition Facts", "Calories 120", "Total Fat 3g", "Sodium 10mg"]
        assert determine_label_language(texts) == LabelLanguage.ENGLISH

    def test_german_label(self):
        texts = ["Nährwerte", "Brennwert 1200 kJ", "Kohlenhydrate 20 g", "Zucker 5 g"]
        assert determine_label_language(texts) == LabelLanguage.GERMAN

    def test_case_insensitive(self):
        assert determine_label_language(["KOHLENHYDRATE", "ZUCKER"]) == LabelLanguage.GERMAN

    def test_tie_goes_to_earlier_language(self):
        """German is declared before French."""
        assert determine_label_language(["zucker", "glucides"]) == LabelLanguage.GERMAN

    def test_tie_is_stable_across_calls(self):
        texts = ["glucides", "zucker"]
        results = {determine_label_language(list(texts)) for _ in range(20)}
        results |= {determine_label_language(list(reversed(texts))) for _ in range(20)}
        assert results == {LabelLanguage.GERMAN}

    @pytest.mark.parametrize("texts", [[], ["hello", "world"], ["   "]])
    def test_no_keyword_returns_default(self, texts):
        assert determine_label_language(texts) == LabelLanguage.ENGLISH
        assert determine_label_language(texts, LabelLanguage.DUTCH) == LabelLanguage.DUTCH

    def test_repeated_keywords_count_every_time(self):
        scores = score_languages(["calories", "calories", "calories"])
        assert scores[LabelLanguage.ENGLISH] == 3

    def test_scores_cover_every_language(self):
        scores = score_languages(["nothing here"])
        assert set(scores) == set(LabelLanguage)
        assert all(score == 0 for score in scores.values())


class TestKeywordCounting:
    """Tests for distinct keyword counting and matching."""

    def test_repeated_keyword_counts_once(self):
        texts = ["Calories", "calories 120", "CALORIES"]
        assert count_distinct_keywords(texts, LabelLanguage.ENGLISH) == 1

    def test_distinct_keywords(self):
        texts = ["Calories 120", "Protein 3g", "Sodium 5mg"]
        assert count_distinct_keywords(texts, LabelLanguage.ENGLISH) == 3

    def test_other_language_keywords_ignored(self):
        assert count_distinct_keywords(["Zucker", "Salz"], LabelLanguage.ENGLISH) == 0

    def test_contains_keyword(self):
        assert contains_keyword("Total Fat 3g", LabelLanguage.ENGLISH)
        assert not contains_keyword("Best before 2026", LabelLanguage.ENGLISH)
        assert contains_keyword("Matières grasses", LabelLanguage.FRENCH)
