"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Rate limiting
- The shared HTTP client and the catalog tables on startup
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from urlhero.api import endpoints
from urlhero.core.client_manager import initialize_client, shutdown_client
from urlhero.core.logging_config import setup_logging
from urlhero.core.rate_limit import limiter
from urlhero.core.setting import settings
from urlhero.db.session import create_tables
from urlhero.middleware.logging import add_logging_middleware

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="urlhero",
    description="Shortcode catalogs for URL shorteners, built from the Internet Archive",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint for health checks."""
    return {
        "message": "urlhero",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["Shorteners"])


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    await create_tables()
    await initialize_client()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    await shutdown_client()
