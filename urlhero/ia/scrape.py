"""
Tinytown Release Listing

URLTeam publishes the shortcodes found by its Terror of Tiny Town crawler
as incremental Internet Archive items. This module lists their
identifiers; downloading the releases is left to a torrent client.
"""

import logging
from typing import List, Optional

import httpx

from urlhero.core.exceptions import ArchiveQueryError
from urlhero.core.setting import settings

logger = logging.getLogger(__name__)

TINYTOWN_QUERY = "subject:terroroftinytown"
TINYTOWN_COUNT = 10000


async def get_tinytown_list(
    client: httpx.AsyncClient,
    api_url: Optional[str] = None
) -> List[str]:
    """
    Query the Internet Archive for the identifiers of all incremental
    terroroftinytown releases.

    Raises:
        ArchiveQueryError: If the request fails or the response cannot be
            decoded
    """
    api_url = api_url or settings.SCRAPE_API_URL
    params = {"q": TINYTOWN_QUERY, "count": str(TINYTOWN_COUNT)}

    try:
        response = await client.get(api_url, params=params)
    except httpx.HTTPError as e:
        raise ArchiveQueryError(f"release listing: {e}", original_error=e) from e

    if response.status_code != 200:
        raise ArchiveQueryError(
            f"release listing: status {response.status_code}",
            status_code=response.status_code
        )

    try:
        items = response.json()["items"] or []
        identifiers = [item["identifier"] for item in items]
    except (ValueError, KeyError, TypeError) as e:
        raise ArchiveQueryError(f"release listing: {e!r}", original_error=e) from e

    logger.info(f"Found {len(identifiers)} tinytown releases")
    return identifiers


def release_torrent_url(identifier: str, base_url: Optional[str] = None) -> str:
    """Build the URL of the torrent file for a release."""
    base_url = (base_url or settings.DOWNLOAD_BASE_URL).rstrip("/")
    return f"{base_url}/{identifier}/{identifier}_archive.torrent"
