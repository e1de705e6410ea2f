"""
Helpers shared by shorteners hosted on Bitly branded domains.

Bitly generated codes have been seven characters starting with a digit
since 2012 (1zzgkXp, 2k3DNz3, 13LslKt). Anything else is either a custom
back-half or an older generated code.
"""

import re
from urllib.parse import SplitResult

BITLY_PATTERN = re.compile(r"^[0-9A-Za-z_-]+\Z")

_GENERATED_RE = re.compile(r"^[0-9][0-9A-Za-z]{6}\Z")


def clean_bitly(shortcode: str, u: SplitResult) -> str:
    # A trailing + opens the stats page of the link
    return shortcode.rstrip("+")


def is_bitly_vanity(shortcode: str) -> bool:
    return _GENERATED_RE.match(shortcode) is None
