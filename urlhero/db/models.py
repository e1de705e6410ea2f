"""
Database Models for the Shortcode Catalog

This module defines the SQLModel schema for:
- ArchivedShortcode: One cleaned shortcode found on the Internet Archive,
  with its rank in the shortener's catalog

Design Decisions:
- A catalog is replaced as a whole on refresh, so rank is stored instead of
  being recomputed on read
- Unique (shortener, shortcode): the same code text may exist for several
  shorteners, but only once per shortener
- Index on (shortener, rank) for ordered catalog reads
"""

from sqlmodel import SQLModel, Field, Column, Index
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, Integer, Boolean, UniqueConstraint


class ArchivedShortcode(SQLModel, table=True):
    """
    Catalog entry for a shortcode known to the Internet Archive.

    Fields:
    - id: Auto-incrementing primary key
    - shortener: Name of the shortener in the registry
    - shortcode: The cleaned, validated shortcode
    - rank: Position in the ranked catalog (0 is crawled first)
    - is_vanity: Whether the shortener's heuristic flags it as a vanity code
    - fetched_at: When the catalog containing this row was fetched
    """
    __tablename__ = "archived_shortcodes"
    __table_args__ = (
        UniqueConstraint("shortener", "shortcode", name="uq_archived_shortcodes_shortener_shortcode"),
        Index("ix_archived_shortcodes_shortener_rank", "shortener", "rank"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    shortener: str = Field(sa_column=Column(String(50), nullable=False))
    shortcode: str = Field(sa_column=Column(String(255), nullable=False))
    rank: int = Field(sa_column=Column(Integer, nullable=False))
    is_vanity: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False)
    )
    fetched_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
