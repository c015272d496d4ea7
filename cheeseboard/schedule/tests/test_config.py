"""
Tests for schedule configuration loading.

Run with: pytest cheeseboard/schedule/tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from cheeseboard.schedule.config import (
    DEFAULT_CONFIG_PATH,
    BucketThresholds,
    NormalizationConfig,
    ScheduleConfig,
    ScoringSettings,
    SourceConfig,
    load_config,
)
from cheeseboard.schedule.models import Bucket
from cheeseboard.schedule.normalizer import normalize


class TestDefaults:

    def test_packaged_config_exists(self):
        assert DEFAULT_CONFIG_PATH.exists()

    def test_packaged_config_matches_defaults(self):
        assert load_config() == ScheduleConfig()

    def test_default_values(self):
        config = ScheduleConfig()

        assert config.extraction.section_marker == "### Pizza"
        assert config.scoring.liked_weight == 1
        assert config.scoring.disliked_weight == -2
        assert config.scoring.thresholds.bucket_for(-1) == Bucket.POOR
        assert config.source.page_url.startswith("https://cheeseboardcollective.coop/")
        assert config.source.max_tokens == 4000


class TestLoadConfig:

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scoring:\n  disliked_weight: -3\n")

        config = load_config(path)

        assert config.scoring.disliked_weight == -3
        assert config.scoring.liked_weight == 1
        assert config.extraction.section_marker == "### Pizza"

    def test_empty_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scoring:\nextraction:\n")

        assert load_config(path) == ScheduleConfig()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(path) == ScheduleConfig()

    def test_normalization_tables(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "normalization:\n"
            "  quality_adjectives: [fresh, organic]\n"
            "  synonyms:\n"
            "    pecorino romano: pecorino\n"
            "  plural_s: [artichoke]\n"
        )

        rules = load_config(path).normalization.to_rules()

        assert normalize("Organic Pecorino Romano", rules) == "pecorino"
        assert normalize("artichokes", rules) == "artichoke"
        # plural_es left at its default
        assert normalize("tomatoes", rules) == "tomato"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("source:\n  max_tokens: 0\n")

        with pytest.raises(ValueError):
            load_config(path)


class TestValidation:

    def test_thresholds_must_descend(self):
        with pytest.raises(ValidationError, match="descend"):
            BucketThresholds(great=1, good=2)

    def test_liked_weight_not_negative(self):
        with pytest.raises(ValidationError):
            ScoringSettings(liked_weight=-1)

    def test_disliked_weight_not_positive(self):
        with pytest.raises(ValidationError):
            ScoringSettings(disliked_weight=1)

    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            SourceConfig(timeout_seconds=0)

    @pytest.mark.parametrize("synonyms,message", [
        ({"green onion": "scallion"}, "plural tables fold"),
        ({"green onions": "scallion"}, "plural tables fold"),
        ({"basil leaves": "fresh basil"}, "not a canonical key"),
        ({"heirloom tomato varieties": "tomatoes"}, "plural tables fold"),
        ({"roma": "tomatoes"}, "not a canonical key"),
        ({"grana": "parmigiano reggiano", "parmigiano reggiano": "parmesan"}, "not a canonical key"),
        ({"nothing": ""}, "not a canonical key"),
    ])
    def test_unstable_synonyms_rejected(self, synonyms, message):
        with pytest.raises(ValidationError, match=message):
            NormalizationConfig(synonyms=synonyms)

    def test_unstable_synonyms_rejected_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("normalization:\n  synonyms:\n    green onion: scallion\n")

        with pytest.raises(ValueError, match="green onion"):
            load_config(path)

    def test_stable_synonyms_keep_normalize_idempotent(self):
        rules = NormalizationConfig(
            synonyms={"fior di latte": "mozzarella", "grana padano": "parmesan"},
        ).to_rules()

        for raw in ["Fior di Latte", "grana padano", "scallions", "Green Onions"]:
            once = normalize(raw, rules)
            assert normalize(once, rules) == once

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)
