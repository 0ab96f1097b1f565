"""Match data sources and the fallback fetch chain.

Sources are tried in a fixed order: the listing page, the RSS feed, then
both again through a relay. The first one yielding matches for the query
wins. When all of them fail or come back empty, a small static set is used
so callers always get a non-empty list, whatever the query.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import pendulum
import requests
from fake_useragent import UserAgent

from config.constants import (
    ACCEPT_HEADER,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    FEED_URL,
    LISTING_URL,
    PROXY_URL,
)
from livefeed.errors import ParseError, TransportError
from livefeed.filters import apply_filters
from livefeed.models import Match, Query, StreamSource, Team, Teams
from livefeed.normalizer import normalize_feed_entry, normalize_listing_entry
from livefeed.parsers import parse_feed, parse_listing
from livefeed.utils.date_parser import to_epoch_ms

logger = logging.getLogger(__name__)

STATIC_SOURCE = "static"

# The listing page serves its broadcast list to mobile browsers only
ua = UserAgent(platforms="mobile", fallback=DEFAULT_USER_AGENT)

Fetcher = Callable[[str, float], str]


def _get_headers() -> dict:
    """Generate browser-like request headers.

    Returns:
        Dictionary with Accept and User-Agent headers.
    """
    return {"Accept": ACCEPT_HEADER, "User-Agent": ua.random}


def fetch_document(url: str, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> str:
    """Fetch a document as text.

    Args:
        url: URL to fetch.
        timeout: Seconds before the request is abandoned.

    Returns:
        Response body.

    Raises:
        TransportError: On connection errors, timeouts or HTTP error status.
    """
    logger.info(f"Fetching {url}")
    try:
        response = requests.get(url, headers=_get_headers(), timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransportError(url, f"Request failed: {e}") from e

    logger.info(f"Fetched {url} ({len(response.text)} bytes)")
    return response.text


def proxied_url(target: str, proxy_url: str = PROXY_URL) -> str:
    """Route ``target`` through the relay.

    The target is percent-encoded the way encodeURIComponent does it.
    """
    return proxy_url + quote(target, safe="!~*'()")


@dataclass(frozen=True)
class DataSource:
    """One step of the fallback chain."""

    name: str
    url: str
    parse: Callable[[str, pendulum.DateTime], list[Any]]
    normalize: Callable[[Any], Match]


@dataclass(frozen=True)
class FetchResult:
    """Matches plus the name of the source that produced them."""

    source: str
    matches: list[Match]


def build_sources(proxy_url: str = PROXY_URL) -> tuple[DataSource, ...]:
    """Build the ordered fallback chain.

    Args:
        proxy_url: Relay prefix for the proxied steps.

    Returns:
        Listing, feed, proxied listing, proxied feed.
    """
    return (
        DataSource("listing", LISTING_URL, parse_listing, normalize_listing_entry),
        DataSource("feed", FEED_URL, parse_feed, normalize_feed_entry),
        DataSource(
            "listing-proxied",
            proxied_url(LISTING_URL, proxy_url),
            parse_listing,
            normalize_listing_entry,
        ),
        DataSource(
            "feed-proxied",
            proxied_url(FEED_URL, proxy_url),
            parse_feed,
            normalize_feed_entry,
        ),
    )


def _normalize_entries(source: DataSource, entries: list[Any]) -> list[Match]:
    matches = []
    for entry in entries:
        try:
            matches.append(source.normalize(entry))
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Skipping unreadable {source.name} entry: {e}")
    return matches


def static_matches(now: pendulum.DateTime) -> list[Match]:
    """Deterministic example matches used when every source fails.

    Args:
        now: Reference instant; kickoffs are set relative to it.

    Returns:
        Three matches, each with at least one stream source.
    """
    return [
        Match(
            id="1",
            slug="chiefs-vs-bills",
            title="Kansas City Chiefs vs Buffalo Bills",
            live=True,
            category="Football",
            date=to_epoch_ms(now.add(hours=1)),
            popular=True,
            league="NFL",
            teams=Teams(
                home=Team(name="Kansas City Chiefs", badge="/logos/chiefs.png"),
                away=Team(name="Buffalo Bills", badge="/logos/bills.png"),
            ),
            sources=(
                StreamSource("1", "Stream 1", "https://example.com/stream1"),
                StreamSource("2", "Stream 2", "https://example.com/stream2"),
            ),
        ),
        Match(
            id="2",
            slug="lakers-vs-celtics",
            title="Los Angeles Lakers vs Boston Celtics",
            live=False,
            category="Basketball",
            date=to_epoch_ms(now.add(hours=2)),
            popular=True,
            league="NBA",
            teams=Teams(
                home=Team(name="Los Angeles Lakers", badge="/logos/lakers.png"),
                away=Team(name="Boston Celtics", badge="/logos/celtics.png"),
            ),
            sources=(
                StreamSource("3", "Stream 3", "https://example.com/stream3"),
            ),
        ),
        Match(
            id="3",
            slug="djokovic-vs-alcaraz",
            title="Novak Djokovic vs Carlos Alcaraz",
            live=False,
            category="Tennis",
            date=to_epoch_ms(now.add(days=1, hours=1)),
            popular=False,
            league="ATP US Open",
            sources=(
                StreamSource("4", "Stream 4", "https://example.com/stream4"),
            ),
        ),
    ]


def fetch_with_fallback(
    query: Query,
    now: pendulum.DateTime,
    fetch: Fetcher = fetch_document,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    sources: Sequence[DataSource] | None = None,
) -> FetchResult:
    """Try each source in order until one yields matches for ``query``.

    Sources are tried one at a time and never retried. A transport failure,
    an unreadable document and an empty filtered result all move on to the
    next source. This function does not raise.

    Args:
        query: Sport and result type to fetch.
        now: Current instant used for parsing, filtering and static data.
        fetch: Document fetcher, ``fetch(url, timeout) -> str``.
        timeout: Seconds allowed per fetch.
        sources: Fallback chain; defaults to :func:`build_sources`.

    Returns:
        Filtered, sorted matches tagged with the source that produced
        them, or the whole static set tagged "static" (not filtered).
    """
    if sources is None:
        sources = build_sources()

    for source in sources:
        try:
            document = fetch(source.url, timeout)
            entries = source.parse(document, now)
        except TransportError as e:
            logger.info(f"Source {source.name} unavailable: {e}")
            continue
        except ParseError as e:
            logger.warning(f"Source {source.name} returned unreadable data: {e}")
            continue
        except Exception as e:
            logger.error(
                f"Unexpected error reading source {source.name}: {e}",
                exc_info=True,
            )
            continue

        matches = apply_filters(_normalize_entries(source, entries), query, now)
        if matches:
            logger.info(
                f"Source {source.name} returned {len(matches)} matches "
                f"for {query.cache_key}",
                extra={"source": source.name, "query": query.cache_key},
            )
            return FetchResult(source=source.name, matches=matches)

        logger.info(f"Source {source.name} had no matches for {query.cache_key}")

    logger.warning(
        f"All sources exhausted for {query.cache_key}, using static matches",
        extra={"source": STATIC_SOURCE, "query": query.cache_key},
    )
    return FetchResult(
        source=STATIC_SOURCE,
        matches=static_matches(now),
    )
