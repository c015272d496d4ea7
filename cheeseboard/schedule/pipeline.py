"""
Pipeline - page text to scored pizzas.

Pull-based: nothing is cached. Call `build_menu` again when the page text
changes and `score_menu` again after any preference toggle.
"""

import logging
from typing import Mapping, Optional

from .config import ScheduleConfig
from .extractor import extract_entries
from .models import MenuEntry, ScoredEntry, Sentiment
from .parser import parse_ingredients
from .scorer import rank_entries, score_entries

logger = logging.getLogger(__name__)


def build_menu(text: Optional[str], config: Optional[ScheduleConfig] = None) -> list[MenuEntry]:
    """
    Extract entries from page text and parse their ingredients.

    Args:
        text: Raw page content
        config: Schedule config (default: built-in defaults)

    Returns:
        MenuEntry list with ingredients filled in
    """
    config = config or ScheduleConfig()
    rules = config.normalization.to_rules()

    entries = extract_entries(text, config.extraction.section_marker)
    for entry in entries:
        entry.ingredients = parse_ingredients(entry.description, rules)

    logger.info(f"Built menu with {len(entries)} pizza(s)")
    return entries


def score_menu(
    entries: list[MenuEntry],
    preferences: Mapping[str, Sentiment],
    config: Optional[ScheduleConfig] = None,
    ranked: bool = False,
) -> list[ScoredEntry]:
    """
    Score parsed entries against a preference snapshot.

    Args:
        entries: Output of build_menu
        preferences: ingredient -> sentiment snapshot
        config: Schedule config (default: built-in defaults)
        ranked: Sort best first instead of schedule order

    Returns:
        ScoredEntry list
    """
    config = config or ScheduleConfig()
    scored = score_entries(entries, preferences, config.scoring)
    return rank_entries(scored) if ranked else scored
