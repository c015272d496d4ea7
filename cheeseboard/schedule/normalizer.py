"""
Ingredient Normalizer - canonical keys for preference lookups.

Maps a human-readable ingredient phrase ("Fresh Tomatoes") to the key that
preferences are stored under ("tomato"). The rules are a small explicit
table, not a stemmer:

1. lower-case
2. trim
3. fold accents (NFD, drop combining marks)
4. drop quality adjectives ("fresh ", "aged ") anywhere in the phrase
5. trim
6. exact synonym lookup
7. whole-word plural folding for whitelisted words

Order matters. Synonym keys are unaccented and adjective-free, so steps 3-5
have to run first.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Optional


DEFAULT_QUALITY_ADJECTIVES = ("fresh", "aged")

DEFAULT_SYNONYMS = {
    "parmigiano reggiano": "parmesan",
    "parmesan cheese": "parmesan",
    "sea salt": "salt",
    "kosher salt": "salt",
    "mozzarella cheese": "mozzarella",
    "feta cheese": "feta",
}

# Words folded from either "-es" or "-s" ("tomatoes", "onions")
DEFAULT_PLURAL_ES = ("tomato", "onion", "pepper", "olive", "mushroom", "jalapeno")

# Words folded from "-s" only
DEFAULT_PLURAL_S = ("scallion", "zucchini")


def _word_alternation(words: tuple[str, ...]) -> str:
    # Longest first so the alternation never settles on a shorter prefix
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


@dataclass
class NormalizationRules:
    """
    Lookup tables for `normalize`.

    Patterns are compiled once at construction; build one instance per
    config load and reuse it.
    """
    quality_adjectives: tuple[str, ...] = DEFAULT_QUALITY_ADJECTIVES
    synonyms: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SYNONYMS))
    plural_es: tuple[str, ...] = DEFAULT_PLURAL_ES
    plural_s: tuple[str, ...] = DEFAULT_PLURAL_S

    _adjective_re: Optional[re.Pattern] = field(init=False, repr=False, compare=False, default=None)
    _leading_adjective_re: Optional[re.Pattern] = field(init=False, repr=False, compare=False, default=None)
    _plural_es_re: Optional[re.Pattern] = field(init=False, repr=False, compare=False, default=None)
    _plural_s_re: Optional[re.Pattern] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        self.quality_adjectives = tuple(w.lower().strip() for w in self.quality_adjectives if w.strip())
        self.plural_es = tuple(w.lower().strip() for w in self.plural_es if w.strip())
        self.plural_s = tuple(w.lower().strip() for w in self.plural_s if w.strip())
        self.synonyms = {
            k.lower().strip(): v.lower().strip() for k, v in self.synonyms.items()
        }

        if self.quality_adjectives:
            adjectives = _word_alternation(self.quality_adjectives)
            self._adjective_re = re.compile(rf"\b(?:{adjectives})\s+")
            self._leading_adjective_re = re.compile(
                rf"^(?:(?:{adjectives})\s+)+", re.IGNORECASE
            )
        if self.plural_es:
            self._plural_es_re = re.compile(
                rf"\b({_word_alternation(self.plural_es)})(?:es|s)\b"
            )
        if self.plural_s:
            self._plural_s_re = re.compile(
                rf"\b({_word_alternation(self.plural_s)})s\b"
            )

    def strip_adjectives(self, text: str) -> str:
        if self._adjective_re is None:
            return text
        return self._adjective_re.sub("", text)

    def strip_leading_adjectives(self, text: str) -> str:
        """Case-insensitive, start of phrase only. Used for display text."""
        if self._leading_adjective_re is None:
            return text
        return self._leading_adjective_re.sub("", text)

    def singularize(self, text: str) -> str:
        if self._plural_es_re is not None:
            text = self._plural_es_re.sub(r"\1", text)
        if self._plural_s_re is not None:
            text = self._plural_s_re.sub(r"\1", text)
        return text


DEFAULT_RULES = NormalizationRules()


def fold_accents(text: str) -> str:
    """Remove diacritics: "jalapeño" -> "jalapeno"."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(raw: str, rules: Optional[NormalizationRules] = None) -> str:
    """
    Normalize an ingredient phrase to its canonical key.

    Pure and total: any string (even empty) maps to a string, and the result
    depends only on `raw` and the rules table.

    Args:
        raw: Ingredient phrase as shown to the user
        rules: Lookup tables (default: built-in tables)

    Returns:
        Canonical key, e.g. "Fresh Tomatoes" -> "tomato"
    """
    rules = rules or DEFAULT_RULES
    if not raw:
        return ""

    text = raw.lower().strip()
    text = fold_accents(text)
    text = rules.strip_adjectives(text).strip()
    text = rules.synonyms.get(text, text)
    return rules.singularize(text)
