"""
HTTP Client Manager

This module manages the shared httpx client used to query the Internet
Archive. The client is created once on application startup and closed on
shutdown, so all requests share one connection pool.
"""

import logging
from typing import Optional

import httpx

from urlhero.core.setting import settings

logger = logging.getLogger(__name__)

# Global client instance (initialized on startup)
_client: Optional[httpx.AsyncClient] = None


def create_http_client(**kwargs) -> httpx.AsyncClient:
    """Create an httpx client configured from settings."""
    kwargs.setdefault("timeout", settings.HTTP_TIMEOUT)
    kwargs.setdefault("headers", {"User-Agent": settings.USER_AGENT})
    kwargs.setdefault("follow_redirects", True)
    return httpx.AsyncClient(**kwargs)


async def get_http_client() -> httpx.AsyncClient:
    """
    FastAPI dependency returning the shared HTTP client.

    Creates the client lazily if startup did not run (e.g. in scripts).
    """
    global _client
    if _client is None:
        _client = create_http_client()
    return _client


async def initialize_client() -> None:
    """Create the shared HTTP client."""
    global _client

    if _client is not None:
        logger.warning("HTTP client already initialized")
        return

    _client = create_http_client()
    logger.info(f"HTTP client initialized: timeout={settings.HTTP_TIMEOUT}s")


async def shutdown_client() -> None:
    """Close the shared HTTP client."""
    global _client

    if _client is not None:
        logger.info("Closing HTTP client")
        await _client.aclose()
        _client = None
