"""
Shortener Registry

The registry is an ordered, read-only collection of shortener descriptors.
It is constructed explicitly and passed to whatever needs it (the API gets
it through a FastAPI dependency), so tests can substitute their own
descriptors.
"""

from typing import Iterable, Iterator, List, Optional

from urlhero.core.exceptions import ShortenerNotFoundError
from urlhero.shorteners.allst import Allst
from urlhero.shorteners.debli import Debli
from urlhero.shorteners.qrcx import Qrcx
from urlhero.shorteners.redht import Redht
from urlhero.shorteners.shortener import Shortener
from urlhero.shorteners.uconn import Uconn

DEFAULT_SHORTENERS = (
    Allst,
    Debli,
    Qrcx,
    Redht,
    Uconn,
)


class ShortenerRegistry:
    """Ordered collection of shorteners looked up by name or host."""

    def __init__(self, shorteners: Iterable[Shortener]):
        self._shorteners = tuple(shorteners)
        self._by_name = {}
        for shortener in self._shorteners:
            if shortener.name in self._by_name:
                raise ValueError(f"Duplicate shortener name: {shortener.name}")
            self._by_name[shortener.name] = shortener

    def __iter__(self) -> Iterator[Shortener]:
        return iter(self._shorteners)

    def __len__(self) -> int:
        return len(self._shorteners)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> List[str]:
        return [shortener.name for shortener in self._shorteners]

    def get(self, name: str) -> Shortener:
        """
        Look up a shortener by name.

        Raises:
            ShortenerNotFoundError: If no shortener has that name
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise ShortenerNotFoundError(name) from None

    def find_by_host(self, host: str) -> Optional[Shortener]:
        """Return the shortener for a host, ignoring case and a www. prefix."""
        host = host.lower()
        if host.startswith("www."):
            host = host[4:]
        for shortener in self._shorteners:
            if shortener.host == host:
                return shortener
        return None


def default_registry() -> ShortenerRegistry:
    """Build the registry of built-in shorteners."""
    return ShortenerRegistry(DEFAULT_SHORTENERS)
