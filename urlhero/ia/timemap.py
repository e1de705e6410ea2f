"""
Wayback Machine Timemap Client

Queries the CDX server for the captures of a URL or a URL prefix.

Design Decisions:
- One request per call: no retries, no pagination, no backoff. Callers
  decide whether to re-run a failed query
- The httpx client is passed in so the application can share one
  connection pool and tests can use a mock transport
- Every failure (transport, status, decoding) surfaces as ArchiveQueryError
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import httpx

from urlhero.core.exceptions import ArchiveQueryError
from urlhero.core.setting import settings

logger = logging.getLogger(__name__)


@dataclass
class TimemapOptions:
    """
    Options for a CDX query.

    Fields:
    - collapse: Field to collapse adjacent captures on (e.g. "original")
    - fields: Fields to return for each capture; all fields when empty
    - match_prefix: Match every URL starting with the requested URL
    - limit: Maximum number of captures to return
    """
    collapse: Optional[str] = None
    fields: Sequence[str] = field(default_factory=list)
    match_prefix: bool = False
    limit: Optional[int] = None

    def to_params(self, url: str) -> List[Tuple[str, str]]:
        params = [("url", url), ("output", "json")]
        if self.fields:
            params.append(("fl", ",".join(self.fields)))
        if self.collapse:
            params.append(("collapse", self.collapse))
        if self.match_prefix:
            params.append(("matchType", "prefix"))
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        return params


async def get_timemap(
    client: httpx.AsyncClient,
    url: str,
    options: Optional[TimemapOptions] = None,
    api_url: Optional[str] = None
) -> List[List[str]]:
    """
    Get the captures of a URL from the Wayback Machine.

    Args:
        client: HTTP client used for the request
        url: URL or URL prefix to look up
        options: Query options
        api_url: CDX endpoint (defaults to settings.CDX_API_URL)

    Returns:
        One row per capture, with the header row removed

    Raises:
        ArchiveQueryError: If the request fails or the response is not a
            JSON table
    """
    options = options or TimemapOptions()
    api_url = api_url or settings.CDX_API_URL

    try:
        response = await client.get(api_url, params=options.to_params(url))
    except httpx.HTTPError as e:
        raise ArchiveQueryError(f"timemap request for {url}: {e}", original_error=e) from e

    if response.status_code != 200:
        raise ArchiveQueryError(
            f"timemap request for {url}: status {response.status_code}",
            status_code=response.status_code
        )

    # The CDX server answers an empty body when nothing matches
    if not response.content.strip():
        return []
    try:
        rows = response.json()
    except ValueError as e:
        raise ArchiveQueryError(f"timemap for {url}: {e}", original_error=e) from e
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise ArchiveQueryError(f"timemap for {url}: expected a list of rows")

    captures = rows[1:]
    logger.info(f"Timemap for {url}: {len(captures)} captures")
    return captures
