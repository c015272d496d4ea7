"""
Preference Store - per-ingredient liked/disliked sentiment.

Toggling behaves like a pair of thumbs-up / thumbs-down buttons:

| Current   | Requested | Result    |
|-----------|-----------|-----------|
| none      | liked     | liked     |
| liked     | liked     | none      |
| disliked  | liked     | liked     |

The store is keyed by canonical ingredient, so there is never more than one
sentiment per ingredient. The pipeline only reads `snapshot()` copies; all
writes go through `toggle`, serialized by a lock.
"""

import json
import logging
import os
import sqlite3
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional, Union

from .models import Preference, Sentiment

logger = logging.getLogger(__name__)

SentimentLike = Union[Sentiment, str]

SQLITE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


def coerce_sentiment(value: SentimentLike) -> Sentiment:
    """
    Turn "liked" / "disliked" (any case) into a Sentiment.

    Raises:
        ValueError: Anything else
    """
    if isinstance(value, Sentiment):
        return value
    try:
        return Sentiment(str(value).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown sentiment {value!r}, expected 'liked' or 'disliked'"
        ) from None


def toggle_preference(
    preferences: Mapping[str, SentimentLike],
    ingredient: str,
    sentiment: SentimentLike,
) -> dict[str, Sentiment]:
    """
    Apply one toggle and return the new preference mapping.

    Pure: `preferences` is not modified, and the same inputs always give
    the same output.

    Args:
        preferences: Current ingredient -> sentiment mapping
        ingredient: Canonical ingredient key
        sentiment: Requested sentiment

    Returns:
        New mapping with the toggle applied
    """
    requested = coerce_sentiment(sentiment)
    updated = {key: coerce_sentiment(value) for key, value in preferences.items()}

    if updated.get(ingredient) is requested:
        del updated[ingredient]
    else:
        updated[ingredient] = requested

    return updated


class PreferenceStore:
    """
    In-memory preference store. Owner of the mutable preference state.

    Subclasses add persistence by overriding `_load` and `_persist`.
    """

    def __init__(self, preferences: Optional[Mapping[str, SentimentLike]] = None):
        self._lock = threading.RLock()
        initial = preferences if preferences is not None else self._load()
        self._preferences: dict[str, Sentiment] = self._validate(initial)

    def _load(self) -> Mapping[str, SentimentLike]:
        """Read persisted preferences. In-memory stores start empty."""
        return {}

    def _persist(
        self,
        updated: dict[str, Sentiment],
        ingredient: str,
        sentiment: Optional[Sentiment],
    ) -> None:
        """Write one change. Called under the lock, before memory is updated."""
        pass

    @staticmethod
    def _validate(raw: Mapping[str, SentimentLike]) -> dict[str, Sentiment]:
        """Keep well-formed records, skip the rest with a warning."""
        preferences = {}
        for ingredient, value in raw.items():
            if not isinstance(ingredient, str) or not ingredient.strip():
                logger.warning(f"Skipping preference with empty ingredient key: {value!r}")
                continue
            try:
                preferences[ingredient] = coerce_sentiment(value)
            except ValueError:
                logger.warning(f"Skipping preference {ingredient!r} with unknown sentiment {value!r}")
        return preferences

    def toggle(self, ingredient: str, sentiment: SentimentLike) -> Optional[Sentiment]:
        """
        Toggle a sentiment for an ingredient.

        Args:
            ingredient: Canonical ingredient key
            sentiment: "liked" or "disliked"

        Returns:
            The ingredient's sentiment after the toggle, None if cleared

        Raises:
            ValueError: If the ingredient key is empty or the sentiment unknown
        """
        if not isinstance(ingredient, str) or not ingredient.strip():
            raise ValueError("Ingredient key must not be empty")
        requested = coerce_sentiment(sentiment)

        with self._lock:
            updated = toggle_preference(self._preferences, ingredient, requested)
            result = updated.get(ingredient)
            self._persist(updated, ingredient, result)
            self._preferences = updated

        logger.debug(f"Toggled {ingredient!r} {requested.value} -> {result.value if result else 'none'}")
        return result

    def get(self, ingredient: str) -> Optional[Sentiment]:
        """Current sentiment for an ingredient, None if neutral."""
        with self._lock:
            return self._preferences.get(ingredient)

    def snapshot(self) -> dict[str, Sentiment]:
        """Copy of the current state for scoring."""
        with self._lock:
            return dict(self._preferences)

    def preferences(self) -> list[Preference]:
        """All preferences as records, sorted by ingredient."""
        with self._lock:
            return [
                Preference(ingredient=ingredient, sentiment=sentiment)
                for ingredient, sentiment in sorted(self._preferences.items())
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._preferences)

    def __contains__(self, ingredient: object) -> bool:
        with self._lock:
            return ingredient in self._preferences


class JsonPreferenceStore(PreferenceStore):
    """
    Preferences persisted as a flat JSON object:

        {"mozzarella": "liked", "olive": "disliked"}

    The file is rewritten atomically on every toggle.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        super().__init__()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Mapping[str, SentimentLike]:
        if not self._path.exists():
            logger.info(f"No preferences file at {self._path}, starting empty")
            return {}

        with open(self._path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Preferences file is not valid JSON: {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Preferences file must contain a JSON object: {self._path}")

        logger.info(f"Loaded {len(data)} preference(s) from {self._path}")
        return data

    def _persist(self, updated, ingredient, sentiment):
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: value.value for key, value in sorted(updated.items())}

        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".prefs_", suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(payload, f, indent=2)
                f.write("\n")
            os.replace(tmp_name, self._path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class SqlitePreferenceStore(PreferenceStore):
    """
    Preferences persisted in a SQLite table keyed by ingredient.

    Needs a file path; every operation opens its own connection.
    """

    def __init__(self, db_path: str | Path):
        self._db_path = Path(db_path)
        self._init_db()
        super().__init__()

    @contextmanager
    def _connect(self):
        """Context manager for database connections."""
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self):
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    ingredient TEXT PRIMARY KEY,
                    sentiment TEXT NOT NULL,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)

    def _load(self) -> Mapping[str, SentimentLike]:
        with self._connect() as conn:
            rows = conn.execute("SELECT ingredient, sentiment FROM preferences").fetchall()
        logger.info(f"Loaded {len(rows)} preference(s) from {self._db_path}")
        return {row["ingredient"]: row["sentiment"] for row in rows}

    def _persist(self, updated, ingredient, sentiment):
        with self._connect() as conn:
            if sentiment is None:
                conn.execute("DELETE FROM preferences WHERE ingredient = ?", (ingredient,))
            else:
                conn.execute("""
                    INSERT OR REPLACE INTO preferences (ingredient, sentiment, updated_at)
                    VALUES (?, ?, ?)
                """, (ingredient, sentiment.value, datetime.now(timezone.utc).isoformat()))


def open_store(path: Optional[str | Path] = None) -> PreferenceStore:
    """
    Open a preference store for a path.

    No path gives an in-memory store, a .db/.sqlite/.sqlite3 suffix gives
    SQLite, anything else is treated as JSON.
    """
    if path is None:
        return PreferenceStore()

    path = Path(path)
    if path.suffix.lower() in SQLITE_SUFFIXES:
        return SqlitePreferenceStore(path)
    return JsonPreferenceStore(path)
