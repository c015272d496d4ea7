"""
Scorer - how much will I like this pizza?

Per ingredient (default weights):
- liked:     +1
- disliked:  -2
- no record:  0

Buckets (inclusive lower bounds, highest first):
| total | bucket  |
|-------|---------|
| >= 4  | great   |
| >= 2  | good    |
| >= 0  | neutral |
| >= -2 | poor    |
| < -2  | avoid   |
"""

from typing import Iterable, Mapping, Optional

from .config import ScoringSettings
from .models import Bucket, MenuEntry, Score, ScoredEntry, Sentiment

DEFAULT_SETTINGS = ScoringSettings()


def bucket_for(total: int, settings: Optional[ScoringSettings] = None) -> Bucket:
    """Map a score total to its bucket."""
    settings = settings or DEFAULT_SETTINGS
    return settings.thresholds.bucket_for(total)


def score_entry(
    entry: MenuEntry,
    preferences: Mapping[str, Sentiment],
    settings: Optional[ScoringSettings] = None,
) -> Score:
    """
    Score a single menu entry against a preference snapshot.

    Args:
        entry: Parsed menu entry (ingredients filled in)
        preferences: ingredient -> sentiment, e.g. PreferenceStore.snapshot()
        settings: Weights and thresholds (default: +1 / -2, 4/2/0/-2)

    Returns:
        Score with total, bucket, and contributing ingredients
    """
    settings = settings or DEFAULT_SETTINGS

    total = 0
    liked = []
    disliked = []
    for ingredient in entry.ingredients:
        sentiment = preferences.get(ingredient.normalized)
        if sentiment == Sentiment.LIKED:
            total += settings.liked_weight
            liked.append(ingredient.normalized)
        elif sentiment == Sentiment.DISLIKED:
            total += settings.disliked_weight
            disliked.append(ingredient.normalized)

    return Score(
        entry_date=entry.date,
        total=total,
        bucket=settings.thresholds.bucket_for(total),
        liked=liked,
        disliked=disliked,
    )


def score_entries(
    entries: Iterable[MenuEntry],
    preferences: Mapping[str, Sentiment],
    settings: Optional[ScoringSettings] = None,
) -> list[ScoredEntry]:
    """Score every entry, keeping schedule order."""
    return [
        ScoredEntry(entry=entry, score=score_entry(entry, preferences, settings))
        for entry in entries
    ]


def rank_entries(scored: Iterable[ScoredEntry]) -> list[ScoredEntry]:
    """
    Sort scored entries best first.

    Ties keep schedule order (sorted() is stable).
    """
    return sorted(scored, key=lambda s: -s.score.total)


def summarize_scores(scored: list[ScoredEntry]) -> dict:
    """Generate summary statistics for scored entries."""
    counts = {"total": len(scored)}
    for bucket in Bucket:
        counts[bucket.value] = 0

    for item in scored:
        counts[item.score.bucket.value] += 1

    counts["recommended"] = counts[Bucket.GREAT.value] + counts[Bucket.GOOD.value]
    return counts
