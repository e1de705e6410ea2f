"""
Tests for the shortcode cleaning pipeline: URL cleaning, batch cleaning
and ranking.
"""

import re

import pytest

from urlhero.core.exceptions import MalformedURLError, ShortcodeMismatchError
from urlhero.shorteners.shortener import Shortener, parse_url, sort_shortcodes

PLAIN = Shortener(name="plain", host="x", prefix="http://x/", alphabet="any")


class TestCleanURL:
    """Test extraction of a single shortcode."""

    def test_plain_path(self):
        assert PLAIN.clean("http://x/abc") == "abc"
        assert PLAIN.clean("http://x/abc/") == "abc"

    def test_query_and_fragment_are_not_part_of_the_shortcode(self):
        assert PLAIN.clean("http://x/abc?utm_source=feed") == "abc"
        assert PLAIN.clean("http://x/abc#top") == "abc"

    def test_placeholders(self):
        """Bracketed placeholders from documentation hold no shortcode."""
        assert PLAIN.clean("https://deb.li/<key>") == ""
        assert PLAIN.clean("https://deb.li/<name>") == ""
        assert PLAIN.clean("https://deb.li/%3Ckey%3E") == ""

    def test_lone_bracket_is_not_a_placeholder(self):
        assert PLAIN.clean("http://x/<") == "<"
        assert PLAIN.clean("http://x/<abc") == "<abc"

    @pytest.mark.parametrize("url, expected", [
        ('http://a.ll.st/Instagram","isCrawlable":true,"thumbnail', "Instagram"),
        ("http://qr.cx/plvd]http:/qr.cx/plvd[/link]", "plvd"),
        ("https://red.ht/sig>", "sig"),
        ("https://red.ht/1zzgkXp&esheet=51687448&newsitemid=20170921005271&lan=en-US", "1zzgkXp"),
        ("https://red.ht/13LslKt&quot", "13LslKt"),
        ("https://red.ht/2k3DNz3’", "2k3DNz3"),
        ("https://red.ht/21Krw4z%C2%A0", "21Krw4z"),
        ("http://x/abc)def", "abc"),
        ("http://x/abc/]", "abc"),
    ])
    def test_truncates_at_first_junk_character(self, url, expected):
        assert PLAIN.clean(url) == expected

    def test_junk_only(self):
        assert PLAIN.clean("http://qr.cx/)") == ""

    def test_no_path(self):
        assert PLAIN.clean("http://x") == ""
        assert PLAIN.clean("http://x/") == ""

    def test_ignored_paths(self):
        assert PLAIN.clean("http://x/favicon.ico") == ""
        assert PLAIN.clean("http://x/robots.txt") == ""
        assert PLAIN.clean("http://x/robots.txt.bak") == "robots.txt.bak"

    def test_clean_func_receives_candidate_and_url(self):
        calls = []

        def clean(shortcode, u):
            calls.append((shortcode, u.netloc))
            return shortcode.upper() + "/"

        shortener = Shortener(name="hook", host="x", prefix="http://x/", alphabet="any", clean_func=clean)
        assert shortener.clean("http://x/abc/") == "ABC"
        assert calls == [("abc", "x")]

    def test_clean_func_not_called_without_candidate(self):
        def clean(shortcode, u):
            raise AssertionError("should not be called")

        shortener = Shortener(name="hook", host="x", prefix="http://x/", alphabet="any", clean_func=clean)
        assert shortener.clean("http://x/") == ""
        assert shortener.clean("http://x/<key>") == ""

    def test_clean_func_result_is_checked_against_ignored_paths(self):
        shortener = Shortener(
            name="hook", host="x", prefix="http://x/", alphabet="any",
            clean_func=lambda shortcode, u: "favicon.ico",
        )
        assert shortener.clean("http://x/abc") == ""

    def test_clean_parsed(self):
        assert PLAIN.clean_parsed(parse_url("http://x/abc/")) == "abc"


class TestParseURL:
    """Test rejection of URLs that cannot be parsed."""

    @pytest.mark.parametrize("url", [
        "http://[::1/abc",
        "http://x:port/abc",
        "http://x/ab%zzc",
        "http://x/ab%4",
        "http://x/a\x00b",
        "http://x/a\nb",
        "http://qr cx/plvd",
        "http://x{y/abc",
        "http://x%zz/abc",
        "http://x/abc#%zz",
    ])
    def test_malformed(self, url):
        with pytest.raises(MalformedURLError) as exc_info:
            PLAIN.clean(url)
        assert exc_info.value.url == url

    def test_valid_hosts(self):
        assert PLAIN.clean("http://user@x:8080/abc#top") == "abc"
        assert PLAIN.clean("http://[::1]/abc") == "abc"
        assert PLAIN.clean("http://bücher.example/abc") == "abc"

    def test_valid_escapes(self):
        assert PLAIN.clean("http://x/a%2Db") == "a-b"


class TestCleanURLs:
    """Test batch cleaning."""

    def test_deduplicates(self):
        urls = ["http://x/abc", "http://x/abc", "http://x/abc/"]
        assert PLAIN.clean_urls(urls) == ["abc"]

    def test_sorted(self):
        assert PLAIN.clean_urls(["http://x/bb", "http://x/a", "http://x/ccc"]) == ["a", "bb", "ccc"]

    def test_skips_urls_without_shortcode(self):
        urls = ["http://x/", "http://x/<key>", "http://x/favicon.ico", "http://x/robots.txt", "http://x/ok"]
        assert PLAIN.clean_urls(urls) == ["ok"]

    def test_deterministic(self):
        urls = ["http://x/b", "http://x/aa", "http://x/a", "http://x/b/", "http://x/ab"]
        first = PLAIN.clean_urls(urls)
        assert first == PLAIN.clean_urls(urls)
        assert first == PLAIN.clean_urls(list(reversed(urls)))
        assert first == ["a", "b", "aa", "ab"]

    def test_no_pattern_accepts_anything(self):
        assert PLAIN.clean_urls(["http://x/a.b~c"]) == ["a.b~c"]

    def test_pattern_mismatch_aborts(self):
        shortener = Shortener(
            name="strict", host="x", prefix="http://x/", alphabet="0-9a-z",
            pattern=re.compile(r"^[a-z0-9]{4}$"),
        )
        assert shortener.clean_urls(["http://x/ab12"]) == ["ab12"]

        with pytest.raises(ShortcodeMismatchError) as exc_info:
            shortener.clean_urls(["http://x/ab12", "http://x/AB12", "http://x/cd34"])
        error = exc_info.value
        assert error.shortener == "strict"
        assert error.shortcode == "AB12"
        assert error.pattern == r"^[a-z0-9]{4}$"
        assert error.url == "http://x/AB12"
        assert "strict" in str(error)
        assert "'AB12'" in str(error)

    def test_decoded_trailing_newline_is_rejected(self):
        shortener = Shortener(
            name="strict", host="x", prefix="http://x/", alphabet="0-9a-z",
            pattern=re.compile(r"^[a-z0-9]{4}$"),
        )
        with pytest.raises(ShortcodeMismatchError) as exc_info:
            shortener.clean_urls(["http://x/ab12", "http://x/ab12%0A"])
        assert exc_info.value.shortcode == "ab12\n"

    def test_malformed_url_aborts(self):
        with pytest.raises(MalformedURLError):
            PLAIN.clean_urls(["http://x/abc", "http://x:port/def"])

    def test_empty(self):
        assert PLAIN.clean_urls([]) == []


class TestSort:
    """Test ranking of shortcodes."""

    def test_without_vanity(self):
        assert sort_shortcodes(["bb", "a", "ccc"]) == ["a", "bb", "ccc"]
        assert PLAIN.sort(["bb", "a", "ccc"]) == ["a", "bb", "ccc"]

    def test_equal_length_is_lexical(self):
        assert sort_shortcodes(["b", "B", "a", "1"]) == ["1", "B", "a", "b"]

    def test_vanity_last(self):
        shortener = Shortener(
            name="vanity", host="x", prefix="http://x/", alphabet="any",
            is_vanity_func=lambda shortcode: shortcode == "promo",
        )
        assert shortener.sort(["promo", "zz", "a"]) == ["a", "zz", "promo"]

    def test_vanity_groups_are_sorted_by_length(self):
        is_vanity = lambda shortcode: shortcode.isalpha()  # noqa: E731
        codes = ["summer", "9z", "sale", "1a2b", "0", "ab"]
        assert sort_shortcodes(codes, is_vanity) == ["0", "9z", "1a2b", "ab", "sale", "summer"]

    def test_returns_new_list(self):
        codes = ["bb", "a"]
        assert PLAIN.sort(codes) == ["a", "bb"]
        assert codes == ["bb", "a"]


class TestIsVanity:
    def test_without_predicate(self):
        assert PLAIN.is_vanity("promo") is False

    def test_with_predicate(self):
        shortener = Shortener(
            name="vanity", host="x", prefix="http://x/", alphabet="any",
            is_vanity_func=lambda shortcode: len(shortcode) > 4,
        )
        assert shortener.is_vanity("promo") is True
        assert shortener.is_vanity("ab12") is False
