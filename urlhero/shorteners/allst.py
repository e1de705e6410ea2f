"""Allstate (a.ll.st), a Bitly branded domain."""

from urlhero.shorteners.bitly import BITLY_PATTERN, clean_bitly, is_bitly_vanity
from urlhero.shorteners.shortener import Shortener

Allst = Shortener(
    name="allst",
    host="a.ll.st",
    prefix="http://a.ll.st/",
    alphabet="0-9A-Za-z_-",
    pattern=BITLY_PATTERN,
    clean_func=clean_bitly,
    is_vanity_func=is_bitly_vanity,
)
