"""Pydantic models for API responses."""

from typing import Optional
from pydantic import BaseModel, Field


class DictionaryInfoResponse(BaseModel):
    """Capabilities of one dictionary site."""
    name: str
    languages: list[str]
    features: list[str]
    priority: int = Field(..., description="Lower number is tried first")


class LanguageSupportResponse(BaseModel):
    """Response model for language pair support check."""
    supported: bool
    supported_by: list[str] = Field(default_factory=list, description="Dictionary keys covering the pair")
    normalized_from: Optional[str] = None
    normalized_to: Optional[str] = None
    error: Optional[str] = None


class StatsResponse(BaseModel):
    total_dictionaries: int
    total_languages: int
    approximate_pairs: int = Field(..., description="Sum of ordered pairs over each dictionary")
    dictionaries: dict[str, DictionaryInfoResponse]


class LanguageResponse(BaseModel):
    """A supported language and its spellings."""
    code: str = Field(..., description="ISO 639-1 code")
    name: str
    native: str
    long: str = Field(..., description="Long form used in some dictionary URLs")
