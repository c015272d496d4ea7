# Cheeseboard pizza schedule: parse, normalize, prefer, score.
# Siloed module - the HTTP app and CLI sit on top, nothing below imports them.

from .models import (
    Bucket,
    ContentMetadata,
    Ingredient,
    MenuEntry,
    Preference,
    Score,
    ScoredEntry,
    Sentiment,
    WebReadResult,
)
from .config import ScheduleConfig, ScoringSettings, load_config
from .extractor import extract_entries, extract_pairs
from .parser import parse_ingredients, unique_ingredients
from .normalizer import NormalizationRules, normalize
from .preferences import (
    JsonPreferenceStore,
    PreferenceStore,
    SqlitePreferenceStore,
    open_store,
    toggle_preference,
)
from .scorer import rank_entries, score_entries, score_entry, summarize_scores
from .pipeline import build_menu, score_menu
from .providers import (
    ContentFetchError,
    ContentProvider,
    FileContentProvider,
    InMemoryContentProvider,
    WebReadContentProvider,
)
from .report import export_csv, format_console

__version__ = "1.0.0"

__all__ = [
    # Models
    "Bucket",
    "ContentMetadata",
    "Ingredient",
    "MenuEntry",
    "Preference",
    "Score",
    "ScoredEntry",
    "Sentiment",
    "WebReadResult",
    # Config
    "ScheduleConfig",
    "ScoringSettings",
    "load_config",
    # Parsing
    "extract_entries",
    "extract_pairs",
    "parse_ingredients",
    "unique_ingredients",
    "NormalizationRules",
    "normalize",
    # Preferences
    "PreferenceStore",
    "JsonPreferenceStore",
    "SqlitePreferenceStore",
    "open_store",
    "toggle_preference",
    # Scoring
    "score_entry",
    "score_entries",
    "rank_entries",
    "summarize_scores",
    "build_menu",
    "score_menu",
    # Providers
    "ContentProvider",
    "ContentFetchError",
    "FileContentProvider",
    "InMemoryContentProvider",
    "WebReadContentProvider",
    # Report
    "format_console",
    "export_csv",
]
