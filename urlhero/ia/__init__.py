"""
Clients for the Internet Archive APIs.
"""

from urlhero.ia.scrape import get_tinytown_list, release_torrent_url
from urlhero.ia.timemap import TimemapOptions, get_timemap

__all__ = [
    "TimemapOptions",
    "get_timemap",
    "get_tinytown_list",
    "release_torrent_url",
]
