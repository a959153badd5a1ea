"""Tests for tor_snap/verify.py."""

import requests

from tor_snap.config import CrawlConfig
from tor_snap.verify import is_anonymized, make_tor_session, verify_anonymity


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeSession:
    """Records requests and returns a canned body or raises."""

    def __init__(self, body=None, error=None):
        self.body = body
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body)


class TestIsAnonymized:
    """Tests for the verification page verdict."""

    def test_congratulations(self):
        """The Tor check success page is accepted."""
        body = "<h1>Congratulations. This browser is configured to use Tor.</h1>"
        assert is_anonymized(body)

    def test_successfully(self):
        """Alternative positive wording is accepted."""
        assert is_anonymized("You are successfully connected")

    def test_negative_marker_wins(self):
        """The explicit negative marker overrides any positive word."""
        body = "Sorry. You are not using Tor. Connected successfully though."
        assert not is_anonymized(body)

    def test_unrelated_page(self):
        """A page without markers is not a confirmation."""
        assert not is_anonymized("<html>hello</html>")


class TestVerifyAnonymity:
    """Tests for verify_anonymity."""

    def test_success(self):
        """A confirming page returns True using the configured URL and timeout."""
        config = CrawlConfig()
        session = FakeSession(body="Congratulations.")
        assert verify_anonymity(config, session=session) is True
        assert session.calls == [("https://check.torproject.org", 15.0)]

    def test_not_using_tor(self):
        """The negative page returns False."""
        session = FakeSession(body="Sorry. You are not using Tor.")
        assert verify_anonymity(CrawlConfig(), session=session) is False

    def test_transport_error(self):
        """Connection errors return False instead of raising."""
        session = FakeSession(error=requests.ConnectionError("refused"))
        assert verify_anonymity(CrawlConfig(), session=session) is False

    def test_timeout(self):
        """Timeouts return False."""
        session = FakeSession(error=requests.Timeout("slow"))
        assert verify_anonymity(CrawlConfig(), session=session) is False


class TestMakeTorSession:
    """Tests for make_tor_session."""

    def test_session_uses_proxy(self):
        """The session routes both schemes through the SOCKS proxy."""
        session = make_tor_session(CrawlConfig(proxy_server="socks5://127.0.0.1:9150"))
        assert session.proxies["https"] == "socks5h://127.0.0.1:9150"
        assert session.trust_env is False

    def test_malformed_proxy(self):
        """A proxy URL that cannot be parsed is a failed check, not a crash."""
        config = CrawlConfig(proxy_server="socks5://[::1:9050")
        assert verify_anonymity(config) is False
