"""Tests for URL normalization and filtering."""
import pytest

from pagecrawler.urls import is_absolute_url, is_crawlable, normalize_url

BASE = "https://x.com/blog/post"


class TestNormalizeUrl:
    def test_protocol_relative_gets_https(self):
        assert normalize_url("//cdn.example.com/a.js", "https://x.com/p") == "https://cdn.example.com/a.js"

    def test_protocol_relative_on_http_base_still_https(self):
        assert normalize_url("//cdn.example.com/a.js", "http://x.com/p") == "https://cdn.example.com/a.js"

    def test_root_relative_drops_base_path_and_query(self):
        assert normalize_url("/about", BASE) == "https://x.com/about"
        assert normalize_url("/about", "https://x.com/blog/post?page=2") == "https://x.com/about"

    def test_root_relative_keeps_base_port(self):
        assert normalize_url("/about", "http://x.com:8080/blog") == "http://x.com:8080/about"

    def test_relative_path(self):
        assert normalize_url("contact.html", BASE) == "https://x.com/blog/contact.html"

    def test_dot_segments_resolved(self):
        assert normalize_url("../img/../x.html", "https://x.com/a/b/c.html") == "https://x.com/a/x.html"

    def test_relative_query_and_fragment(self):
        assert normalize_url("?q=1", BASE) == "https://x.com/blog/post?q=1"
        assert normalize_url("#top", BASE) == "https://x.com/blog/post#top"

    def test_absolute_returned_unchanged(self):
        url = "https://Other.example.org/Path/?a=1#frag"
        assert normalize_url(url, BASE) == url

    @pytest.mark.parametrize("href", ["", "   ", "\t\n", None])
    def test_empty_is_unusable(self, href):
        assert normalize_url(href, "https://x.com/") is None

    def test_surrounding_whitespace_stripped(self):
        assert normalize_url("  /about ", BASE) == "https://x.com/about"

    def test_http_without_host_is_unusable(self):
        assert normalize_url("http:///nohost", BASE) is None

    def test_unparseable_href_is_unusable(self):
        assert normalize_url("http://[::1/broken", BASE) is None

    def test_relative_against_malformed_base_is_unusable(self):
        assert normalize_url("page.html", "not a url") is None
        assert normalize_url("/page.html", "not a url") is None

    def test_non_http_scheme_passes_through_but_is_not_crawlable(self):
        link = normalize_url("mailto:a@b.com", "https://x.com/")
        assert not is_crawlable(link)
        assert not is_crawlable(normalize_url("ftp://files.x.com/a", BASE))
        assert not is_crawlable(normalize_url("javascript:void(0)", BASE))


class TestFilters:
    @pytest.mark.parametrize("url", ["https://x.com", "http://x.com/a?b=c", "ftp://x.com/f"])
    def test_absolute(self, url):
        assert is_absolute_url(url)

    @pytest.mark.parametrize("url", ["", None, "/relative", "page.html", "mailto:a@b.com", "https://"])
    def test_not_absolute(self, url):
        assert not is_absolute_url(url)

    def test_crawlable_schemes(self):
        assert is_crawlable("http://x.com/")
        assert is_crawlable("HTTPS://x.com/")
        assert not is_crawlable("ftp://x.com/")
