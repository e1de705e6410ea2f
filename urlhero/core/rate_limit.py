"""
Rate Limiting Configuration

Limits how often clients may call this service. Refreshing a catalog sends
a large query to the Internet Archive, so it has the tightest limit.

Design Decisions:
- Uses slowapi for rate limiting (lightweight, FastAPI-compatible)
- Different limits for different endpoints
- IP-based limiting
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Format: "count/period" (e.g., "10/minute" means 10 requests per minute)
RATE_LIMITS = {
    "refresh": "5/minute",  # Archive queries: 5 per minute per IP
    "clean": "60/minute",  # Batch cleaning: 60 per minute per IP
    "read": "100/minute",  # Registry and catalog reads: 100 per minute per IP
}
