"""
Debian URL shortener (deb.li).

Keys are either generated or picked by the submitter. Every key also has
a preview page under /p/.
"""

import re
from urllib.parse import SplitResult

from urlhero.shorteners.shortener import Shortener

_GENERATED_RE = re.compile(r"^[0-9A-Za-z]{2,6}\Z")


def clean_debli(shortcode: str, u: SplitResult) -> str:
    # https://deb.li/p/<key>
    if shortcode.startswith("p/"):
        shortcode = shortcode[2:]
    return shortcode


def is_debli_vanity(shortcode: str) -> bool:
    return _GENERATED_RE.match(shortcode) is None


Debli = Shortener(
    name="debli",
    host="deb.li",
    prefix="https://deb.li/",
    alphabet="0-9A-Za-z_-",
    pattern=re.compile(r"^[0-9A-Za-z_-]+\Z"),
    clean_func=clean_debli,
    is_vanity_func=is_debli_vanity,
)
