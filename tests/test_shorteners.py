"""
Tests for the built-in shorteners and the registry.
"""

import pytest

from urlhero.core.exceptions import ShortcodeMismatchError, ShortenerNotFoundError
from urlhero.shorteners import DEFAULT_SHORTENERS, Shortener, ShortenerRegistry, default_registry
from urlhero.shorteners.allst import Allst
from urlhero.shorteners.debli import Debli
from urlhero.shorteners.qrcx import Qrcx
from urlhero.shorteners.redht import Redht
from urlhero.shorteners.uconn import Uconn


class TestRegistry:
    """Test lookup in the shortener registry."""

    def test_default_order(self):
        registry = default_registry()
        assert registry.names == ["allst", "debli", "qrcx", "redht", "uconn"]
        assert list(registry) == list(DEFAULT_SHORTENERS)
        assert len(registry) == 5

    def test_hosts_are_unique(self):
        hosts = [shortener.host for shortener in DEFAULT_SHORTENERS]
        assert len(hosts) == len(set(hosts))

    def test_prefixes_match_hosts(self):
        for shortener in DEFAULT_SHORTENERS:
            assert shortener.prefix.split("/")[2] == shortener.host

    def test_get(self):
        registry = default_registry()
        assert registry.get("redht") is Redht
        assert "redht" in registry
        assert "bitly" not in registry

    def test_get_unknown(self):
        with pytest.raises(ShortenerNotFoundError) as exc_info:
            default_registry().get("bitly")
        assert exc_info.value.name == "bitly"

    def test_find_by_host(self):
        registry = default_registry()
        assert registry.find_by_host("red.ht") is Redht
        assert registry.find_by_host("WWW.Deb.Li") is Debli
        assert registry.find_by_host("bit.ly") is None

    def test_synthetic_registry(self):
        fake = Shortener(name="fake", host="fa.ke", prefix="http://fa.ke/", alphabet="a-z")
        registry = ShortenerRegistry([fake])
        assert registry.get("fake") is fake
        assert registry.names == ["fake"]

    def test_duplicate_names(self):
        fake = Shortener(name="fake", host="fa.ke", prefix="http://fa.ke/", alphabet="a-z")
        with pytest.raises(ValueError):
            ShortenerRegistry([fake, fake])

    def test_descriptors_are_immutable(self):
        with pytest.raises(AttributeError):
            Redht.host = "example.com"


class TestBitlyDomains:
    """Test Allstate and Red Hat, which share Bitly's rules."""

    def test_junk(self):
        assert Allst.clean('http://a.ll.st/Instagram","isCrawlable":true,"thumbnail') == "Instagram"
        assert Redht.clean("https://red.ht/13LslKt&quot") == "13LslKt"

    def test_stats_suffix(self):
        assert Redht.clean("https://red.ht/2k3DNz3+") == "2k3DNz3"
        assert Redht.clean("https://red.ht/2k3DNz3+/") == "2k3DNz3"

    def test_vanity(self):
        assert Redht.is_vanity("1zzgkXp") is False
        assert Redht.is_vanity("sig") is True
        assert Allst.is_vanity("Instagram") is True

    def test_clean_urls(self):
        urls = [
            "https://red.ht/sig>",
            "https://red.ht/2k3DNz3’",
            "https://red.ht/1zzgkXp&esheet=51687448",
            "https://red.ht/ab",
            "https://red.ht/1zzgkXp",
            "https://red.ht/favicon.ico",
        ]
        assert Redht.clean_urls(urls) == ["1zzgkXp", "2k3DNz3", "ab", "sig"]

    def test_mismatch(self):
        with pytest.raises(ShortcodeMismatchError) as exc_info:
            Redht.clean_urls(["https://red.ht/a.b"])
        assert exc_info.value.shortener == "redht"
        assert exc_info.value.shortcode == "a.b"


class TestDebli:
    def test_placeholders(self):
        assert Debli.clean("https://deb.li/<key>") == ""
        assert Debli.clean("https://deb.li/<name>") == ""

    def test_preview(self):
        assert Debli.clean("https://deb.li/p/3nUvY") == "3nUvY"
        assert Debli.clean_urls(["https://deb.li/p/3nUvY", "https://deb.li/3nUvY"]) == ["3nUvY"]

    def test_vanity(self):
        assert Debli.is_vanity("3nUvY") is False
        assert Debli.is_vanity("debconf-2021") is True


class TestQrcx:
    def test_junk(self):
        assert Qrcx.clean("http://qr.cx/plvd]http:/qr.cx/plvd[/link]") == "plvd"
        assert Qrcx.clean("http://qr.cx/)") == ""

    def test_no_vanity_heuristic(self):
        assert Qrcx.is_vanity("plvd") is False
        assert Qrcx.clean_urls(["http://qr.cx/plvd", "http://qr.cx/z", "http://qr.cx/ab"]) == ["z", "ab", "plvd"]

    def test_uppercase_is_rejected(self):
        with pytest.raises(ShortcodeMismatchError):
            Qrcx.clean_urls(["http://qr.cx/PLVD"])

    def test_encoded_newline_is_rejected(self):
        with pytest.raises(ShortcodeMismatchError):
            Qrcx.clean_urls(["http://qr.cx/plvd", "http://qr.cx/plvd%0A"])


class TestUconn:
    def test_case_folding(self):
        assert Uconn.clean("https://s.uconn.edu/ABC/") == "abc"

    def test_clean_urls(self):
        urls = [
            "https://s.uconn.edu/Huskies",
            "https://s.uconn.edu/huskies",
            "https://s.uconn.edu/x7k",
            "https://s.uconn.edu/ab",
        ]
        assert Uconn.clean_urls(urls) == ["ab", "x7k", "huskies"]
