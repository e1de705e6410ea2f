"""
Archive Query Service

Turns the Wayback Machine's captures of a shortener's host into the
shortener's ranked list of shortcodes.
"""

import logging
from typing import List

import httpx

from urlhero.core.setting import settings
from urlhero.ia.timemap import TimemapOptions, get_timemap
from urlhero.shorteners.shortener import Shortener

logger = logging.getLogger(__name__)


def known_codes_options() -> TimemapOptions:
    """One capture per distinct original URL under the host."""
    return TimemapOptions(
        collapse="original",
        fields=["original"],
        match_prefix=True,
        limit=settings.TIMEMAP_LIMIT,
    )


async def fetch_known_codes(shortener: Shortener, client: httpx.AsyncClient) -> List[str]:
    """
    Query all the shortcodes of a shortener that have been archived on
    the Internet Archive.

    Args:
        shortener: The shortener whose host is queried
        client: HTTP client used for the query

    Returns:
        Unique shortcodes in ranked order

    Raises:
        ArchiveQueryError: If the timemap query fails
        MalformedURLError: If an archived URL cannot be parsed
        ShortcodeMismatchError: If a cleaned shortcode fails the pattern
    """
    timemap = await get_timemap(client, shortener.host, known_codes_options())
    urls = [capture[0] for capture in timemap]
    shortcodes = shortener.clean_urls(urls)
    logger.info(
        f"{shortener.name}: {len(shortcodes)} shortcodes from {len(urls)} archived URLs"
    )
    return shortcodes
