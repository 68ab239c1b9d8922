"""Unit tests for configuration value objects."""

import pytest
from pydantic import ValidationError
from nutrition_scanner.config import DETECTION_DEFAULTS, PADDLE_MODELS
from nutrition_scanner.domain.entities.observations import RecognitionLevel
from nutrition_scanner.domain.value_objects.config import DetectorConfig
from nutrition_scanner.domain.value_objects.language import LabelLanguage


class TestDetectorConfig:
    """Tests for DetectorConfig."""

    def test_defaults(self):
        config = DetectorConfig()
        assert config.max_character_distance_sq == 0.001
        assert config.max_direction_delta == 0.05
        assert config.min_line_length == 0.03
        assert config.histogram_window == 2
        assert config.min_skew_score == 5.0
        assert config.min_skew_degrees == 3
        assert config.label_margin == 1.1
        assert config.default_language == LabelLanguage.ENGLISH
        assert config.parallel_candidates is False

    def test_defaults_match_constants(self):
        config = DetectorConfig()
        assert config.label_margin == DETECTION_DEFAULTS.label_margin
        assert config.max_character_distance_sq == DETECTION_DEFAULTS.max_character_distance_sq

    def test_language_name_normalized(self):
        config = DetectorConfig(default_language=" German ")
        assert config.default_language == LabelLanguage.GERMAN

    def test_unknown_language(self):
        with pytest.raises(ValidationError):
            DetectorConfig(default_language="klingon")

    @pytest.mark.parametrize("field,value", [
        ("label_margin", 0.9),
        ("label_margin", 3.5),
        ("max_character_distance_sq", 0.0),
        ("max_direction_delta", -0.1),
        ("histogram_window", -1),
        ("min_skew_degrees", 91),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            DetectorConfig(**{field: value})

    def test_frozen(self):
        config = DetectorConfig()
        with pytest.raises(ValidationError):
            config.label_margin = 1.5


class TestPaddleModels:
    """Tests for the text engine model table."""

    def test_every_level_has_models(self):
        for level in RecognitionLevel:
            det_model, rec_model = PADDLE_MODELS[level.value]
            assert det_model.endswith("_det")
            assert rec_model.endswith("_rec")
