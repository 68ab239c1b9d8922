"""Domain services - pure business logic, no external dependencies."""

from .regression import LinearRegression
from .language_scoring import (
    score_languages,
    determine_label_language,
    count_distinct_keywords,
    contains_keyword,
)
from .line_tracing import CharacterLine, trace_character_line
from .skew_estimation import SkewEstimate, estimate_skew

__all__ = [
    'LinearRegression',
    'score_languages',
    'determine_label_language',
    'count_distinct_keywords',
    'contains_keyword',
    'CharacterLine',
    'trace_character_line',
    'SkewEstimate',
    'estimate_skew',
]
