"""Tests for tor_snap/utils.py."""

import pytest

from tor_snap.utils import normalize_destination, safe_name


class TestNormalizeDestination:
    """Tests for normalize_destination."""

    def test_bare_host_gets_http(self):
        """A host without scheme should get http://."""
        assert normalize_destination("abc.onion") == "http://abc.onion"

    def test_existing_scheme_kept(self):
        """Explicit http and https schemes should be left alone."""
        assert normalize_destination("https://abc.onion/x") == "https://abc.onion/x"
        assert normalize_destination("http://abc.onion") == "http://abc.onion"

    def test_whitespace_trimmed(self):
        """Surrounding whitespace should be removed."""
        assert normalize_destination("  abc.onion \n") == "http://abc.onion"

    def test_empty_rejected(self):
        """Blank destinations are not valid."""
        with pytest.raises(ValueError):
            normalize_destination("   ")


class TestSafeName:
    """Tests for safe_name."""

    def test_scheme_suffix_and_path(self):
        """Scheme and .onion are stripped, slashes become underscores."""
        assert safe_name("https://example.onion/a/b") == "example_a_b"

    def test_plain_http_host(self):
        """A normalized bare host maps to its label."""
        assert safe_name("http://a.onion") == "a"

    def test_same_name_with_or_without_scheme(self):
        """Raw and normalized forms share artifacts."""
        assert safe_name("b.onion") == safe_name(normalize_destination("b.onion"))

    def test_deterministic(self):
        """Same input should produce the same name every time."""
        url = "http://site.onion/path/page.html"
        assert safe_name(url) == safe_name(url)
        assert safe_name(url) == "site_path_page.html"

    def test_idempotent(self):
        """Applying the derivation to its own output changes nothing."""
        name = safe_name("https://example.onion/a/b")
        assert safe_name(name) == name

    def test_collisions_are_accepted(self):
        """Different destinations may share a name."""
        assert safe_name("http://a.onion/b") == safe_name("https://a_b")


class TestSchemeCase:
    """Scheme detection is shared and case-insensitive."""

    def test_uppercase_scheme_kept(self):
        """An uppercase scheme counts as a scheme."""
        assert normalize_destination("HTTP://a.onion/x") == "HTTP://a.onion/x"

    def test_uppercase_scheme_stripped_from_name(self):
        """Uppercase schemes do not leak into file names."""
        name = safe_name(normalize_destination("HTTPS://a.onion/x"))
        assert name == "a_x"
        assert ":" not in name

    def test_host_starting_with_http(self):
        """A bare host whose name begins with http still gets a scheme."""
        assert normalize_destination("httpfoo.onion") == "http://httpfoo.onion"
        assert safe_name(normalize_destination("httpfoo.onion")) == "httpfoo"
