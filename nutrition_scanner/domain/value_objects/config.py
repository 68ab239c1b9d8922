"""Configuration value objects with validation."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ...config import DETECTION_DEFAULTS
from .language import LabelLanguage


class DetectorConfig(BaseModel):
    """Tuning for one detection session."""

    model_config = {"frozen": True}

    # Character-line tracing
    max_character_distance_sq: float = Field(
        default=DETECTION_DEFAULTS.max_character_distance_sq, gt=0.0, le=1.0
    )
    max_direction_delta: float = Field(
        default=DETECTION_DEFAULTS.max_direction_delta, gt=0.0, le=3.15
    )
    min_line_length: float = Field(default=DETECTION_DEFAULTS.min_line_length, ge=0.0, le=1.0)

    # Skew histogram
    histogram_window: int = Field(default=DETECTION_DEFAULTS.histogram_window, ge=0, le=45)
    min_skew_score: float = Field(default=DETECTION_DEFAULTS.min_skew_score, ge=0.0)
    min_skew_degrees: int = Field(default=DETECTION_DEFAULTS.min_skew_degrees, ge=0, le=90)

    # Locators
    label_margin: float = Field(default=DETECTION_DEFAULTS.label_margin, ge=1.0, le=3.0)
    default_language: LabelLanguage = LabelLanguage.ENGLISH
    parallel_candidates: bool = False

    @field_validator('default_language', mode='before')
    @classmethod
    def normalize_language(cls, v: object) -> object:
        """Accept language names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


__all__ = ['DetectorConfig']
