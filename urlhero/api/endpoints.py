"""
FastAPI Endpoints for urlhero

This module defines the REST API with minimal logic.
Endpoints only handle:
- Request validation (Pydantic models)
- Rate limiting
- Error handling and HTTP responses
- Delegating to the shortener pipeline and the service layer

The registry and the HTTP client are dependencies, so tests can override
them with synthetic shorteners and mock transports.
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from urlhero.api.schemas import (
    CatalogEntry,
    CatalogResponse,
    CleanRequest,
    CleanResponse,
    RefreshAllResponse,
    RefreshResponse,
    ReleasesResponse,
    ShortcodeEntry,
    ShortenerInfo,
)
from urlhero.core.client_manager import get_http_client
from urlhero.core.exceptions import (
    ArchiveQueryError,
    DatabaseError,
    MalformedURLError,
    ShortcodeMismatchError,
    ShortenerNotFoundError,
)
from urlhero.core.rate_limit import limiter, RATE_LIMITS
from urlhero.db.session import get_session
from urlhero.ia.scrape import get_tinytown_list, release_torrent_url
from urlhero.services.background_tasks import refresh_catalog_background
from urlhero.services.catalog_service import CatalogService, refresh_catalog
from urlhero.shorteners.registry import ShortenerRegistry, default_registry
from urlhero.shorteners.shortener import Shortener

logger = logging.getLogger(__name__)

router = APIRouter()

_registry = default_registry()


def get_registry() -> ShortenerRegistry:
    """Dependency returning the shortener registry."""
    return _registry


def lookup_shortener(registry: ShortenerRegistry, name: str) -> Shortener:
    try:
        return registry.get(name)
    except ShortenerNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/shorteners",
    response_model=list[ShortenerInfo],
    summary="List shorteners",
    description="Returns every shortener in the registry, in registry order"
)
@limiter.limit(RATE_LIMITS["read"])
async def list_shorteners(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    registry: ShortenerRegistry = Depends(get_registry)
) -> list[ShortenerInfo]:
    return [
        ShortenerInfo(
            name=shortener.name,
            host=shortener.host,
            prefix=shortener.prefix,
            alphabet=shortener.alphabet,
            pattern=shortener.pattern.pattern if shortener.pattern is not None else None,
            has_clean_func=shortener.clean_func is not None,
            has_vanity_func=shortener.is_vanity_func is not None,
        )
        for shortener in registry
    ]


@router.post(
    "/shorteners/{name}/clean",
    response_model=CleanResponse,
    summary="Clean a batch of URLs",
    description="Extracts, validates, deduplicates and ranks the shortcodes in a list of URLs"
)
@limiter.limit(RATE_LIMITS["clean"])
async def clean_urls(
    name: str,
    request: Request,
    body: CleanRequest,
    registry: ShortenerRegistry = Depends(get_registry)
) -> CleanResponse:
    """
    Clean a batch of observed URLs for one shortener.

    Raises:
        HTTPException 404: If the shortener is unknown
        HTTPException 400: If a URL cannot be parsed
        HTTPException 422: If a cleaned shortcode does not match the pattern
    """
    shortener = lookup_shortener(registry, name)

    try:
        shortcodes = shortener.clean_urls(body.urls)
    except MalformedURLError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ShortcodeMismatchError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return CleanResponse(
        shortener=shortener.name,
        shortcodes=[
            ShortcodeEntry(shortcode=shortcode, is_vanity=shortener.is_vanity(shortcode))
            for shortcode in shortcodes
        ]
    )


@router.post(
    "/shorteners/{name}/refresh",
    response_model=RefreshResponse,
    summary="Refresh a catalog",
    description="Queries the Wayback Machine for the shortener's host and stores the ranked shortcodes"
)
@limiter.limit(RATE_LIMITS["refresh"])
async def refresh_shortener(
    name: str,
    request: Request,
    registry: ShortenerRegistry = Depends(get_registry),
    client: httpx.AsyncClient = Depends(get_http_client),
    session: AsyncSession = Depends(get_session)
) -> RefreshResponse:
    """
    Raises:
        HTTPException 404: If the shortener is unknown
        HTTPException 502: If the Internet Archive query fails
        HTTPException 500: If cleaning or storing the catalog fails
    """
    shortener = lookup_shortener(registry, name)

    try:
        count = await refresh_catalog(shortener, client, session)
    except ArchiveQueryError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except (MalformedURLError, ShortcodeMismatchError, DatabaseError) as e:
        logger.error(f"Refresh of {shortener.name} failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return RefreshResponse(shortener=shortener.name, count=count)


@router.post(
    "/refresh",
    response_model=RefreshAllResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Refresh every catalog",
    description="Schedules a background refresh for each shortener in the registry"
)
@limiter.limit(RATE_LIMITS["refresh"])
async def refresh_all(
    request: Request,
    background_tasks: BackgroundTasks,
    registry: ShortenerRegistry = Depends(get_registry),
    client: httpx.AsyncClient = Depends(get_http_client)
) -> RefreshAllResponse:
    for shortener in registry:
        background_tasks.add_task(refresh_catalog_background, shortener, client)
    return RefreshAllResponse(scheduled=registry.names)


@router.get(
    "/shorteners/{name}/shortcodes",
    response_model=CatalogResponse,
    summary="Get a stored catalog",
    description="Returns the stored shortcodes of a shortener in crawl priority order"
)
@limiter.limit(RATE_LIMITS["read"])
async def get_catalog(
    name: str,
    request: Request,
    limit: Optional[int] = Query(None, ge=1),
    include_vanity: bool = True,
    registry: ShortenerRegistry = Depends(get_registry),
    session: AsyncSession = Depends(get_session)
) -> CatalogResponse:
    shortener = lookup_shortener(registry, name)

    catalog_service = CatalogService(session)
    rows = await catalog_service.get_catalog(
        shortener.name, limit=limit, include_vanity=include_vanity
    )
    total = await catalog_service.count(shortener.name)

    return CatalogResponse(
        shortener=shortener.name,
        total=total,
        shortcodes=[
            CatalogEntry(
                shortcode=row.shortcode,
                rank=row.rank,
                is_vanity=row.is_vanity,
                fetched_at=row.fetched_at,
            )
            for row in rows
        ]
    )


@router.get(
    "/tinytown/releases",
    response_model=ReleasesResponse,
    summary="List tinytown releases",
    description="Lists the URLTeam terroroftinytown releases on the Internet Archive"
)
@limiter.limit(RATE_LIMITS["read"])
async def list_releases(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client)
) -> ReleasesResponse:
    try:
        identifiers = await get_tinytown_list(client)
    except ArchiveQueryError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return ReleasesResponse(
        count=len(identifiers),
        identifiers=identifiers,
        torrent_urls=[release_torrent_url(identifier) for identifier in identifiers],
    )
