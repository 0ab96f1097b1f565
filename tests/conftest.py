"""Pytest configuration and shared fixtures."""

import pendulum
import pytest

from livefeed.cache import QueryCache
from livefeed.errors import TransportError
from livefeed.service import MatchService

NOW = pendulum.datetime(2026, 10, 19, 15, 0, tz="UTC")


class FakeClock:
    """Clock returning a fixed instant that tests can move forward."""

    def __init__(self, now: pendulum.DateTime):
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now.add(**kwargs)


class FakeFetcher:
    """Document fetcher serving canned responses per URL.

    A response that is an exception instance is raised instead of returned.
    URLs without a response raise TransportError, like an unreachable host
    does in fetch_document.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    def __call__(self, url: str, timeout: float) -> str:
        self.calls.append(url)
        response = self.responses.get(url, TransportError(url, "no route to host"))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def make_service(clock):
    """Factory for a MatchService wired to the fake clock."""

    def _make(fetch, ttl_seconds=300):
        return MatchService(
            cache=QueryCache(ttl_seconds=ttl_seconds, clock=clock),
            clock=clock,
            timezone="UTC",
            fetch=fetch,
        )

    return _make


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("LIVEFEED_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("LIVEFEED_CACHE_TTL", "120")
    monkeypatch.setenv("LIVEFEED_TIMEZONE", "UTC")


@pytest.fixture
def listing_html():
    """Mobile listing page with three usable entries and one broken one."""
    return """
    <html>
        <body>
            <ul class="broadcasts">
                <li>
                    <div class="logo"><img src="//cdn.livetv.sx/img/basketball.gif" /></div>
                    <div class="title"><a href="https://cdn.livetv860.me/webplayer.php?t=ifr&amp;c=123&amp;eid=456&amp;lid=789&amp;ci=3&amp;si=1">Los Angeles Lakers vs Boston Celtics</a></div>
                    <div class="note">19 October at 19:30 (Basketball. NBA) Live</div>
                </li>
                <li>
                    <div class="title"><a href="/en/eventinfo/1_tennis/">Novak Djokovic - Carlos Alcaraz</a></div>
                    <div class="note">20 Oct at 14:00 (Tennis. ATP)</div>
                </li>
                <li>
                    <div class="title"><a href="/en/eventinfo/2/">No note here</a></div>
                </li>
                <li>
                    <div class="logo"><img src="/img/snooker.png" /></div>
                    <div class="title"><a href="/en/eventinfo/3/">Snooker Masters</a></div>
                    <div class="note">19 Foo at 10:00</div>
                </li>
            </ul>
        </body>
    </html>
    """


@pytest.fixture
def empty_listing_html():
    return """
    <html>
        <body>
            <ul class="broadcasts"></ul>
        </body>
    </html>
    """


@pytest.fixture
def feed_xml():
    """RSS feed with a live NFL game, a future NHL game and a past tennis final."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
<channel>
    <title>LiveTV upcoming</title>
    <item>
        <title>Buffalo Bills vs Kansas City Chiefs</title>
        <description><![CDATA[American Football. NFL <a href="#" onclick="show_webplayer('ifr', '100', 200, 300, 27, 1, 'en')">Link 1</a> <a href="#" onclick="show_webplayer('ifr', '101', 200, 301, 27, 2, 'en')"></a> <a href="#" onclick="show_webplayer('broken')">Bad</a>]]></description>
        <pubDate>Mon, 19 Oct 2026 14:00:00 +0000</pubDate>
        <link>https://livetv.sx/en/eventinfo/1/</link>
    </item>
    <item>
        <title>Toronto Maple Leafs @ Boston Bruins</title>
        <description>Ice Hockey. NHL</description>
        <pubDate>Tue, 20 Oct 2026 23:00:00 +0000</pubDate>
        <link>https://livetv.sx/en/eventinfo/2/</link>
    </item>
    <item>
        <title>Wimbledon Final</title>
        <description>Tennis (Grand Slam)</description>
        <pubDate>Mon, 19 Oct 2026 11:00:00 +0000</pubDate>
        <link>https://livetv.sx/en/eventinfo/3/</link>
    </item>
</channel>
</rss>
"""


@pytest.fixture
def make_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher
