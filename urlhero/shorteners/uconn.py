"""
University of Connecticut (s.uconn.edu).

Shortcodes are case-insensitive, so they are folded to lowercase.
"""

import re
from urllib.parse import SplitResult

from urlhero.shorteners.shortener import Shortener

_GENERATED_RE = re.compile(r"^[0-9a-z]{1,4}\Z")


def clean_uconn(shortcode: str, u: SplitResult) -> str:
    return shortcode.lower()


def is_uconn_vanity(shortcode: str) -> bool:
    return _GENERATED_RE.match(shortcode) is None


Uconn = Shortener(
    name="uconn",
    host="s.uconn.edu",
    prefix="https://s.uconn.edu/",
    alphabet="0-9a-z_-",
    pattern=re.compile(r"^[0-9a-z_-]+\Z"),
    clean_func=clean_uconn,
    is_vanity_func=is_uconn_vanity,
)
