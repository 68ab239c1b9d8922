"""Keyword-based label language scoring."""

from __future__ import annotations

from typing import Iterable

from ..value_objects.language import LabelLanguage, KEYWORDS_BY_LANGUAGE, keywords_for


def score_languages(texts: Iterable[str]) -> dict[LabelLanguage, int]:
    """Count keyword hits per language.

    Every keyword found in every text counts, so a keyword repeated across
    many lines scores repeatedly.

    Args:
        texts: Recognized text strings

    Returns:
        Score for every language, in declaration order
    """
    scores = {language: 0 for language in LabelLanguage}
    for text in texts:
        search_text = text.lower()
        for language in LabelLanguage:
            keywords = KEYWORDS_BY_LANGUAGE.get(language, ())
            scores[language] += sum(1 for keyword in keywords if keyword in search_text)
    return scores


def determine_label_language(
    texts: Iterable[str],
    default: LabelLanguage = LabelLanguage.ENGLISH
) -> LabelLanguage:
    """Pick the language whose keywords appear most often.

    Ties go to the language declared first. Without any keyword hit the
    default is returned.
    """
    best = default
    best_score = 0
    for language, score in score_languages(texts).items():
        if score > best_score:
            best = language
            best_score = score
    return best


def count_distinct_keywords(texts: Iterable[str], language: LabelLanguage) -> int:
    """Number of different keywords of a language found across texts."""
    keywords = keywords_for(language)
    found: set[str] = set()
    for text in texts:
        search_text = text.lower()
        found.update(keyword for keyword in keywords if keyword in search_text)
    return len(found)


def contains_keyword(text: str, language: LabelLanguage) -> bool:
    """Check if a text contains any keyword of a language."""
    search_text = text.lower()
    return any(keyword in search_text for keyword in keywords_for(language))
