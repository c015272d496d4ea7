"""
Data models for the Cheeseboard pizza schedule.

All structured data uses dataclasses for type hints, __eq__, and __repr__.
Enums subclass str so their values go straight into JSON, CSV and SQLite.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Sentiment(str, Enum):
    """A user's stated feeling about an ingredient. No record means neutral."""
    LIKED = "liked"
    DISLIKED = "disliked"


class Bucket(str, Enum):
    """
    Qualitative label for a pizza's score.

    Declared from most to least desirable; report ordering relies on it.
    """
    GREAT = "great"      # total >= 4 with default thresholds
    GOOD = "good"        # total >= 2
    NEUTRAL = "neutral"  # total >= 0
    POOR = "poor"        # total >= -2
    AVOID = "avoid"      # anything lower


@dataclass
class Ingredient:
    """
    A single ingredient phrase pulled out of a pizza description.

    `raw` is what we show people, `normalized` is what preferences key on.
    """
    raw: str
    normalized: str


@dataclass
class MenuEntry:
    """One dated pizza from the schedule page."""
    date: str                   # Label as printed, e.g. "Tue Mar 4"
    description: str            # Unsplit description text
    ingredients: list[Ingredient] = field(default_factory=list)


@dataclass
class Preference:
    """Stored sentiment for one canonical ingredient key."""
    ingredient: str
    sentiment: Sentiment


@dataclass
class Score:
    """
    Derived desirability of a pizza. Never persisted, always recomputable.

    `liked` and `disliked` list the normalized keys that moved the total,
    in ingredient order, so reports can explain the bucket.
    """
    entry_date: str
    total: int
    bucket: Bucket
    liked: list[str] = field(default_factory=list)
    disliked: list[str] = field(default_factory=list)


@dataclass
class ScoredEntry:
    """A menu entry paired with its score for the current preferences."""
    entry: MenuEntry
    score: Score


@dataclass
class ContentMetadata:
    """Metadata returned alongside fetched page text."""
    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    word_count: int = 0


@dataclass
class WebReadResult:
    """Page text plus metadata, as returned by a content provider."""
    content: str
    metadata: ContentMetadata = field(default_factory=ContentMetadata)
