"""
Ingredient Parser - split a pizza description into ingredient phrases.

Splits on commas, " and " and " with ", so "salt and pepper" becomes two
ingredients.
"""

import re
from typing import Iterable, Optional

from .models import Ingredient, MenuEntry
from .normalizer import DEFAULT_RULES, NormalizationRules, normalize

DELIMITER_RE = re.compile(r",|\s+and\s+|\s+with\s+")

# Cosmetic cleanup
BOLD_RE = re.compile(r"\*\*|__")
LABEL_RE = re.compile(r"^the\s+[^:]+:\s*", re.IGNORECASE)   # "The Classic: "
TRAILING_PAREN_RE = re.compile(r"\s*\([^()]*\)\s*$")       # "(vegan)"
MADE_IN_RE = re.compile(r"\s+made in\b.*$", re.IGNORECASE)  # "made in house"


def clean_phrase(phrase: str, rules: Optional[NormalizationRules] = None) -> str:
    """
    Tidy an ingredient phrase for display.

    Strips bold markers, a "The X:" label, trailing parentheticals, a
    trailing "made in ..." clause and leading quality adjectives.
    """
    rules = rules or DEFAULT_RULES

    text = BOLD_RE.sub("", phrase).strip()
    text = LABEL_RE.sub("", text)
    while True:
        stripped = TRAILING_PAREN_RE.sub("", text)
        if stripped == text:
            break
        text = stripped
    text = MADE_IN_RE.sub("", text)
    text = rules.strip_leading_adjectives(text.strip())
    return text.strip()


def split_description(description: Optional[str]) -> list[str]:
    """Split a description on the delimiters, dropping empty segments."""
    if not description or not description.strip():
        return []

    parts = [part.strip() for part in DELIMITER_RE.split(description)]
    parts = [part for part in parts if part]

    # A category label fused to the first ingredient: "Special: mozzarella"
    if parts and ":" in parts[0]:
        parts[0] = parts[0].split(":", 1)[1].strip()

    return parts


def parse_ingredients(
    description: Optional[str],
    rules: Optional[NormalizationRules] = None,
) -> list[Ingredient]:
    """
    Parse a pizza description into ingredients.

    Args:
        description: Free-text description from the schedule
        rules: Normalization tables (default: built-in tables)

    Returns:
        Ingredients in description order; empty for blank input
    """
    rules = rules or DEFAULT_RULES

    ingredients = []
    for part in split_description(description):
        raw = clean_phrase(part, rules)
        if not raw:
            continue
        ingredients.append(Ingredient(raw=raw, normalized=normalize(raw, rules)))
    return ingredients


def unique_ingredients(entries: Iterable[MenuEntry]) -> list[Ingredient]:
    """
    Distinct ingredients across entries, keyed by normalized form.

    First-seen order; the first raw phrase wins for display.
    """
    seen: dict[str, Ingredient] = {}
    for entry in entries:
        for ingredient in entry.ingredients:
            if ingredient.normalized and ingredient.normalized not in seen:
                seen[ingredient.normalized] = ingredient
    return list(seen.values())
