"""Pydantic v2 models for API request/response validation."""

from typing import Optional
from pydantic import BaseModel, Field

from .models import Bucket, Sentiment


class ToggleRequest(BaseModel):
    ingredient: str = Field(..., min_length=1, max_length=200)
    sentiment: Sentiment


class ToggleResponse(BaseModel):
    ingredient: str
    sentiment: Optional[Sentiment]
    preference_count: int


class PreferenceResponse(BaseModel):
    ingredient: str
    sentiment: Sentiment


class PreferenceListResponse(BaseModel):
    preferences: list[PreferenceResponse]
    count: int


class IngredientResponse(BaseModel):
    raw: str
    normalized: str
    sentiment: Optional[Sentiment] = None


class EntryResponse(BaseModel):
    date: str
    description: str
    ingredients: list[IngredientResponse]
    score: int
    bucket: Bucket


class EntryListResponse(BaseModel):
    entries: list[EntryResponse]
    count: int
    source_title: Optional[str] = None
    summary: dict[str, int]


class StatusResponse(BaseModel):
    initialized: bool
    provider: Optional[str]
    store: Optional[str]
    preference_count: int
