"""
Pizza schedule API router.

Thin HTTP surface over the pipeline: list scored pizzas, read
preferences, toggle a preference. Scores are recomputed on every request.
"""
import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Query

from .api_models import (
    EntryListResponse,
    EntryResponse,
    PreferenceListResponse,
    PreferenceResponse,
    StatusResponse,
    ToggleRequest,
    ToggleResponse,
)
from .config import ScheduleConfig, load_config
from .normalizer import normalize
from .pipeline import build_menu, score_menu
from .preferences import PreferenceStore, open_store
from .providers import (
    ContentFetchError,
    ContentProvider,
    FileContentProvider,
    WebReadContentProvider,
)
from .report import to_dict
from .scorer import summarize_scores
from .settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/schedule", tags=["Pizza Schedule"])

# Global state (loaded on first use, or injected with configure())
_schedule_state = {
    "config": None,
    "rules": None,
    "provider": None,
    "store": None,
    "initialized": False,
}


def configure(
    provider: ContentProvider,
    store: PreferenceStore,
    config: ScheduleConfig | None = None,
):
    """Wire explicit components, e.g. from tests or an embedding app."""
    config = config or ScheduleConfig()
    _schedule_state.update(
        config=config,
        rules=config.normalization.to_rules(),
        provider=provider,
        store=store,
        initialized=True,
    )


def reset():
    """Forget all state; the next request re-initializes from settings."""
    _schedule_state.update(
        config=None, rules=None, provider=None, store=None, initialized=False
    )


def _init_schedule():
    """Initialize schedule components from settings if not already done."""
    if _schedule_state["initialized"]:
        return

    settings = get_settings()
    config = load_config(settings.CONFIG_PATH or None)

    if settings.SOURCE_FILE:
        provider = FileContentProvider(Path(settings.SOURCE_FILE))
    else:
        provider = WebReadContentProvider.from_config(config.source)
        if settings.WEB_READ_URL:
            provider.endpoint = settings.WEB_READ_URL

    store = open_store(settings.PREFS_PATH or None)
    configure(provider, store, config)
    logger.info(f"Schedule initialized with {type(provider).__name__} and {type(store).__name__}")


@router.get("/status", response_model=StatusResponse)
def schedule_status():
    """Get schedule system status."""
    _init_schedule()
    provider = _schedule_state["provider"]
    store = _schedule_state["store"]
    return StatusResponse(
        initialized=_schedule_state["initialized"],
        provider=type(provider).__name__ if provider is not None else None,
        store=type(store).__name__ if store is not None else None,
        preference_count=len(store) if store is not None else 0,
    )


@router.get("/entries", response_model=EntryListResponse)
def list_entries(ranked: bool = Query(False, description="Best pizzas first")):
    """Fetch the schedule and score every pizza against current preferences."""
    _init_schedule()
    config = _schedule_state["config"]
    store = _schedule_state["store"]

    try:
        result = _schedule_state["provider"].fetch()
    except ContentFetchError as e:
        logger.warning(f"Schedule fetch failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=503, detail=str(e))

    preferences = store.snapshot()
    entries = build_menu(result.content, config)
    scored = score_menu(entries, preferences, config, ranked=ranked)

    return EntryListResponse(
        entries=[EntryResponse(**to_dict(item, preferences)) for item in scored],
        count=len(scored),
        source_title=result.metadata.title,
        summary=summarize_scores(scored),
    )


@router.get("/preferences", response_model=PreferenceListResponse)
def list_preferences():
    """List all stored ingredient preferences."""
    _init_schedule()
    preferences = _schedule_state["store"].preferences()
    return PreferenceListResponse(
        preferences=[
            PreferenceResponse(ingredient=p.ingredient, sentiment=p.sentiment)
            for p in preferences
        ],
        count=len(preferences),
    )


@router.post("/preferences/toggle", response_model=ToggleResponse)
def toggle_preference(request: ToggleRequest):
    """
    Toggle a thumbs up / thumbs down on an ingredient.

    The ingredient is normalized first, so "Fresh Tomatoes" and "tomato"
    toggle the same preference. Canonical keys pass through unchanged.
    """
    _init_schedule()
    store = _schedule_state["store"]

    key = normalize(request.ingredient, _schedule_state["rules"])
    if not key:
        raise HTTPException(status_code=400, detail="Ingredient is empty after normalization")

    sentiment = store.toggle(key, request.sentiment)
    return ToggleResponse(ingredient=key, sentiment=sentiment, preference_count=len(store))
