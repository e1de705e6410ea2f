"""
Shortener Descriptors and Shortcode Cleaning

This module holds the per-shortener descriptor and the pipeline that turns
archived URLs into a ranked list of shortcodes:

- clean_url: extracts a single shortcode from a parsed URL
- Shortener.clean_urls: cleans, validates, deduplicates and sorts a batch
- sort_shortcodes: orders shorter codes first and generated codes before
  vanity codes

Design Decisions:
- Shortener is an immutable value; service specific behavior is plugged in
  as optional functions rather than subclasses
- Unparseable URLs and pattern mismatches abort the whole batch, since both
  indicate bad input or a cleaning bug rather than a transient condition
- Cleaning is pure and synchronous; safe to run one batch per shortener
  concurrently
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional
from urllib.parse import SplitResult, unquote, urlsplit

from urlhero.core.exceptions import MalformedURLError, ShortcodeMismatchError

logger = logging.getLogger(__name__)

CleanFunc = Callable[[str, SplitResult], str]
IsVanityFunc = Callable[[str], bool]

# Characters that never occur in a shortcode but show up when links are
# captured from HTML attributes, JSON, BBCode or Markdown:
#   http://a.ll.st/Instagram","isCrawlable":true,"thumbnail
#   http://qr.cx/plvd]http:/qr.cx/plvd[/link]
#   http://qr.cx/)
#   https://red.ht/sig>
#   https://red.ht/1zzgkXp&esheet=51687448&newsitemid=20170921005271
#   https://red.ht/13LslKt&quot
#   https://red.ht/2k3DNz3’
#   https://red.ht/21Krw4z%C2%A0   (nbsp)
JUNK_CHARS = "\"])>&\u2019\u00a0"
_JUNK_RE = re.compile("[" + re.escape(JUNK_CHARS) + "]")

IGNORED_PATHS = frozenset({"favicon.ico", "robots.txt"})

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# ASCII characters allowed in a host; non-ASCII (IDN) hosts pass through
_BAD_HOST_RE = re.compile(r"[^0-9A-Za-z\-._~!$&'()*+,;=:\[\]<>\"%\x80-\U0010ffff]")


def parse_url(raw_url: str) -> SplitResult:
    """
    Parse an observed URL.

    urlsplit accepts almost anything, so the checks a strict parser would
    make are done here: control characters, invalid host characters,
    invalid IPv6 literals, non-numeric ports and broken percent escapes
    in the host, path or fragment.

    Raises:
        MalformedURLError: If the URL cannot be parsed
    """
    if _CONTROL_RE.search(raw_url):
        raise MalformedURLError(raw_url, reason="Control character in URL")
    try:
        parts = urlsplit(raw_url)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise MalformedURLError(raw_url, reason=str(e)) from e

    host = parts.netloc.rpartition("@")[2]
    match = _BAD_HOST_RE.search(host)
    if match:
        raise MalformedURLError(
            raw_url, reason=f"Invalid character {match.group()!r} in host name"
        )
    for name, value in (("host", host), ("path", parts.path), ("fragment", parts.fragment)):
        if _BAD_ESCAPE_RE.search(value):
            raise MalformedURLError(raw_url, reason=f"Invalid percent escape in {name}")
    return parts


def _pattern_matches(pattern: re.Pattern, shortcode: str) -> bool:
    # A "$" anchor also matches before a trailing newline, which a decoded
    # %0A can put at the end of a shortcode
    match = pattern.search(shortcode)
    if match is None:
        return False
    return not (shortcode.endswith("\n") and match.end() == len(shortcode) - 1)


def _trim_slash(shortcode: str) -> str:
    if shortcode.endswith("/"):
        return shortcode[:-1]
    return shortcode


def clean_url(parts: SplitResult, clean_func: Optional[CleanFunc] = None) -> str:
    """
    Extract the shortcode from a parsed URL.

    Args:
        parts: The parsed URL
        clean_func: Optional shortener specific cleaning step

    Returns:
        The shortcode, or an empty string when the URL holds no shortcode
    """
    shortcode = unquote(parts.path)
    if shortcode.startswith("/"):
        shortcode = shortcode[1:]

    # Placeholders in documentation:
    #   https://deb.li/<key>
    #   https://deb.li/<name>
    if len(shortcode) >= 2 and shortcode[0] == "<" and shortcode[-1] == ">":
        return ""

    match = _JUNK_RE.search(shortcode)
    if match:
        shortcode = shortcode[:match.start()]
    shortcode = _trim_slash(shortcode)
    if not shortcode:
        return ""

    if clean_func is not None:
        shortcode = clean_func(shortcode, parts)
    shortcode = _trim_slash(shortcode)

    if shortcode in IGNORED_PATHS:
        return ""
    return shortcode


def sort_shortcodes(
    shortcodes: Iterable[str],
    is_vanity: Optional[IsVanityFunc] = None
) -> List[str]:
    """
    Sort shortcodes with shorter codes first and generated codes before
    vanity codes. Codes of equal length are ordered lexically.
    """
    if is_vanity is None:
        return sorted(shortcodes, key=lambda code: (len(code), code))
    return sorted(shortcodes, key=lambda code: (bool(is_vanity(code)), len(code), code))


@dataclass(frozen=True)
class Shortener:
    """
    Descriptor for one URL shortening service.

    Fields:
    - name: Identifier used in logs, errors and API paths
    - host: Canonical host queried on the Internet Archive
    - prefix: URL prefix that shortcodes are appended to
    - alphabet: Human readable description of the shortcode alphabet
    - pattern: Validation pattern for cleaned shortcodes (None accepts all)
    - clean_func: Extra cleaning applied after the generic steps
    - is_vanity_func: Heuristic that flags human-chosen shortcodes
    """
    name: str
    host: str
    prefix: str
    alphabet: str
    pattern: Optional[re.Pattern] = None
    clean_func: Optional[CleanFunc] = None
    is_vanity_func: Optional[IsVanityFunc] = None

    def clean(self, short_url: str) -> str:
        """
        Extract the shortcode from a URL. An empty string is returned when
        no shortcode can be found.

        Raises:
            MalformedURLError: If the URL cannot be parsed
        """
        return clean_url(parse_url(short_url), self.clean_func)

    def clean_parsed(self, parts: SplitResult) -> str:
        """Extract the shortcode from an already parsed URL."""
        return clean_url(parts, self.clean_func)

    def clean_urls(self, urls: Iterable[str]) -> List[str]:
        """
        Extract, deduplicate and sort the shortcodes in a sequence of URLs.

        Args:
            urls: Raw URLs observed for this shortener

        Returns:
            Unique shortcodes in ranked order

        Raises:
            MalformedURLError: If any URL cannot be parsed
            ShortcodeMismatchError: If a cleaned shortcode fails the pattern
        """
        seen = set()
        shortcodes = []
        for short_url in urls:
            shortcode = self.clean(short_url)
            if not shortcode:
                continue
            if self.pattern is not None and not _pattern_matches(self.pattern, shortcode):
                raise ShortcodeMismatchError(
                    self.name, shortcode, self.pattern.pattern, short_url
                )
            if shortcode not in seen:
                seen.add(shortcode)
                shortcodes.append(shortcode)

        logger.debug(f"{self.name}: cleaned {len(shortcodes)} unique shortcodes")
        return self.sort(shortcodes)

    def is_vanity(self, shortcode: str) -> bool:
        """
        Report whether a shortcode is a vanity code. There are many false
        negatives for vanity codes that are indistinguishable from
        generated codes.
        """
        return self.is_vanity_func is not None and bool(self.is_vanity_func(shortcode))

    def sort(self, shortcodes: Iterable[str]) -> List[str]:
        """Sort shorter codes first and generated codes before vanity codes."""
        return sort_shortcodes(shortcodes, self.is_vanity_func)
