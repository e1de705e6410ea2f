"""Red Hat (red.ht), a Bitly branded domain."""

from urlhero.shorteners.bitly import BITLY_PATTERN, clean_bitly, is_bitly_vanity
from urlhero.shorteners.shortener import Shortener

Redht = Shortener(
    name="redht",
    host="red.ht",
    prefix="https://red.ht/",
    alphabet="0-9A-Za-z_-",
    pattern=BITLY_PATTERN,
    clean_func=clean_bitly,
    is_vanity_func=is_bitly_vanity,
)
