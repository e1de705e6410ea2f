"""
Background Task Helpers

Provides helper functions for background tasks that create their own database sessions.
Background tasks cannot use the endpoint's session as it's closed after the endpoint returns.
"""

import logging

import httpx

from urlhero.db.session import async_session_maker
from urlhero.services.catalog_service import refresh_catalog
from urlhero.shorteners.shortener import Shortener

logger = logging.getLogger(__name__)


async def refresh_catalog_background(shortener: Shortener, client: httpx.AsyncClient) -> None:
    """
    Background task to refresh the catalog of one shortener.

    Failures are logged; the stored catalog is left untouched.

    Args:
        shortener: The shortener to refresh
        client: Shared HTTP client
    """
    try:
        async with async_session_maker() as session:
            await refresh_catalog(shortener, client, session)
    except Exception as e:
        logger.error(
            f"Failed to refresh catalog for {shortener.name}: {str(e)}",
            exc_info=True
        )
