"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

MAX_BATCH_URLS = 10000


class ShortenerInfo(BaseModel):
    """Registry entry for one shortener."""
    name: str
    host: str
    prefix: str
    alphabet: str
    pattern: Optional[str] = Field(None, description="Validation pattern, null when any shortcode is accepted")
    has_clean_func: bool
    has_vanity_func: bool


class CleanRequest(BaseModel):
    """Request model for the batch cleaning endpoint."""
    urls: List[str] = Field(..., max_length=MAX_BATCH_URLS, description="Observed URLs for the shortener")


class ShortcodeEntry(BaseModel):
    shortcode: str
    is_vanity: bool


class CleanResponse(BaseModel):
    """Response model for the batch cleaning endpoint."""
    shortener: str
    shortcodes: List[ShortcodeEntry] = Field(..., description="Unique shortcodes in ranked order")


class RefreshResponse(BaseModel):
    """Response model for a catalog refresh."""
    shortener: str
    count: int


class RefreshAllResponse(BaseModel):
    """Response model for a scheduled refresh of every catalog."""
    scheduled: List[str]


class CatalogEntry(BaseModel):
    shortcode: str
    rank: int
    is_vanity: bool
    fetched_at: datetime


class CatalogResponse(BaseModel):
    """Response model for a stored catalog."""
    shortener: str
    total: int
    shortcodes: List[CatalogEntry]


class ReleasesResponse(BaseModel):
    """Response model for the tinytown release listing."""
    count: int
    identifiers: List[str]
    torrent_urls: List[str]
