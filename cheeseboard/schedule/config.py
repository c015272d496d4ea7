"""
Configuration for the Cheeseboard schedule.

Parsing tables, scoring weights and bucket thresholds.
Config is declarative YAML - edit schedule_config.yaml, not the code.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .models import Bucket
from .normalizer import (
    DEFAULT_PLURAL_ES,
    DEFAULT_PLURAL_S,
    DEFAULT_QUALITY_ADJECTIVES,
    DEFAULT_SYNONYMS,
    NormalizationRules,
    normalize,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "schedule_config.yaml"
DEFAULT_PAGE_URL = "https://cheeseboardcollective.coop/home/pizza/pizza-schedule/"
DEFAULT_WEB_READ_ENDPOINT = "http://localhost:8000/api/agent-tools/web-read"


class SourceConfig(BaseModel):
    """Where the schedule text comes from."""
    page_url: str = DEFAULT_PAGE_URL
    web_read_endpoint: str = DEFAULT_WEB_READ_ENDPOINT
    max_tokens: int = Field(4000, gt=0)
    timeout_seconds: float = Field(30.0, gt=0)


class ExtractionConfig(BaseModel):
    """Entry extractor settings."""
    section_marker: str = "### Pizza"


class NormalizationConfig(BaseModel):
    """
    Ingredient normalization tables.

    Synonym values must already be canonical keys, and synonym keys must not
    contain a word the plural tables fold. Either would let normalize()
    change its own output.
    """
    quality_adjectives: list[str] = Field(default_factory=lambda: list(DEFAULT_QUALITY_ADJECTIVES))
    synonyms: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SYNONYMS))
    plural_es: list[str] = Field(default_factory=lambda: list(DEFAULT_PLURAL_ES))
    plural_s: list[str] = Field(default_factory=lambda: list(DEFAULT_PLURAL_S))

    def to_rules(self) -> NormalizationRules:
        """Compile the tables for the normalizer."""
        return NormalizationRules(
            quality_adjectives=tuple(self.quality_adjectives),
            synonyms=dict(self.synonyms),
            plural_es=tuple(self.plural_es),
            plural_s=tuple(self.plural_s),
        )

    @model_validator(mode="after")
    def _check_synonyms_stable(self):
        rules = self.to_rules()
        plural_words = set(rules.plural_es) | set(rules.plural_s)

        for key, value in rules.synonyms.items():
            if plural_words & set(key.split()) or rules.singularize(key) != key:
                raise ValueError(
                    f"Synonym key {key!r} contains a word the plural tables fold"
                )
            canonical = normalize(value, rules)
            if not value or canonical != value:
                raise ValueError(
                    f"Synonym value {value!r} is not a canonical key "
                    f"(normalizes to {canonical!r})"
                )
        return self


class BucketThresholds(BaseModel):
    """Inclusive lower bounds, checked from highest to lowest."""
    great: int = 4
    good: int = 2
    neutral: int = 0
    poor: int = -2

    @model_validator(mode="after")
    def _check_descending(self):
        if not (self.great >= self.good >= self.neutral >= self.poor):
            raise ValueError(
                "Bucket thresholds must descend: great >= good >= neutral >= poor"
            )
        return self

    def bucket_for(self, total: int) -> Bucket:
        """Map a score total to its bucket."""
        if total >= self.great:
            return Bucket.GREAT
        if total >= self.good:
            return Bucket.GOOD
        if total >= self.neutral:
            return Bucket.NEUTRAL
        if total >= self.poor:
            return Bucket.POOR
        return Bucket.AVOID


class ScoringSettings(BaseModel):
    """
    Weights for the scorer.

    Liked weight is never negative and disliked weight never positive, so a
    new like never lowers a score and a new dislike never raises one.
    """
    liked_weight: int = Field(1, ge=0)
    disliked_weight: int = Field(-2, le=0)
    thresholds: BucketThresholds = Field(default_factory=BucketThresholds)


class ScheduleConfig(BaseModel):
    """Full configuration for the schedule pipeline."""
    source: SourceConfig = Field(default_factory=SourceConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)

    @field_validator("source", "extraction", "normalization", "scoring", mode="before")
    @classmethod
    def _empty_section_is_default(cls, value):
        # A bare "scoring:" line in YAML parses as None
        return {} if value is None else value


def load_config(config_path: Optional[str | Path] = None) -> ScheduleConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to a YAML config. When omitted, the packaged
            schedule_config.yaml is used, or built-in defaults if that's gone.

    Returns:
        Validated ScheduleConfig

    Raises:
        FileNotFoundError: An explicit config_path does not exist
        ValueError: The file is not a mapping or fails validation
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not path.exists():
        if config_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        logger.info(f"No config at {path}, using defaults")
        return ScheduleConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    config = ScheduleConfig(**data)
    logger.info(f"Loaded schedule config from {path}")
    return config
