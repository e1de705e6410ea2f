"""
Shortcode Catalog Service

This service stores the ranked shortcode catalog of each shortener so it
can be served without querying the Internet Archive again.

Design Decisions:
- A refresh replaces a shortener's catalog as a whole, in one transaction
- Rank is the position in the shortener's sort order, so reading the
  catalog in rank order gives the crawl priority
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

import httpx
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from urlhero.core.exceptions import DatabaseError
from urlhero.db.models import ArchivedShortcode
from urlhero.services.archive_service import fetch_known_codes
from urlhero.shorteners.shortener import Shortener

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Reads and replaces shortcode catalogs.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the catalog service with a database session.

        Args:
            session: Async database session for database operations
        """
        self.session = session

    async def replace_catalog(self, shortener: Shortener, shortcodes: Sequence[str]) -> int:
        """
        Replace the stored catalog of a shortener.

        Args:
            shortener: The shortener the shortcodes belong to
            shortcodes: Shortcodes in ranked order

        Returns:
            Number of stored shortcodes

        Raises:
            DatabaseError: If the catalog cannot be written
        """
        fetched_at = datetime.utcnow()
        try:
            await self.session.execute(
                delete(ArchivedShortcode).where(ArchivedShortcode.shortener == shortener.name)
            )
            self.session.add_all([
                ArchivedShortcode(
                    shortener=shortener.name,
                    shortcode=shortcode,
                    rank=rank,
                    is_vanity=shortener.is_vanity(shortcode),
                    fetched_at=fetched_at,
                )
                for rank, shortcode in enumerate(shortcodes)
            ])
            await self.session.flush()
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Failed to store catalog for {shortener.name}: {e}", exc_info=True)
            raise DatabaseError(
                f"Failed to store catalog for {shortener.name}: {e}",
                original_error=e
            )

        logger.info(f"Stored {len(shortcodes)} shortcodes for {shortener.name}")
        return len(shortcodes)

    async def get_catalog(
        self,
        shortener_name: str,
        limit: Optional[int] = None,
        include_vanity: bool = True
    ) -> List[ArchivedShortcode]:
        """
        Get the stored catalog of a shortener in rank order.

        Args:
            shortener_name: Name of the shortener
            limit: Maximum number of entries to return
            include_vanity: Whether to include vanity codes
        """
        statement = (
            select(ArchivedShortcode)
            .where(ArchivedShortcode.shortener == shortener_name)
            .order_by(ArchivedShortcode.rank)
        )
        if not include_vanity:
            statement = statement.where(ArchivedShortcode.is_vanity == False)  # noqa: E712
        if limit is not None:
            statement = statement.limit(limit)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count(self, shortener_name: str) -> int:
        """Count the stored shortcodes of a shortener."""
        statement = (
            select(func.count(ArchivedShortcode.id))
            .where(ArchivedShortcode.shortener == shortener_name)
        )
        result = await self.session.execute(statement)
        return result.scalar() or 0


async def refresh_catalog(
    shortener: Shortener,
    client: httpx.AsyncClient,
    session: AsyncSession
) -> int:
    """
    Fetch a shortener's shortcodes from the Internet Archive and store them.

    Returns:
        Number of stored shortcodes
    """
    shortcodes = await fetch_known_codes(shortener, client)
    return await CatalogService(session).replace_catalog(shortener, shortcodes)
