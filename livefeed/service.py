"""Query API for live matches.

:class:`MatchService` ties the cache and the fallback chain together. Build
one per process with :func:`create_service` and pass it to whatever needs
match data.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

import pendulum

from config import settings
from config.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SPORTS,
    IFRAME_PLAYER_URL,
    PROXY_URL,
)
from config.validation import validate_config
from livefeed.cache import QueryCache
from livefeed.models import Match, Query, StreamData, StreamParams
from livefeed.sources import (
    STATIC_SOURCE,
    FetchResult,
    Fetcher,
    build_sources,
    fetch_document,
    fetch_with_fallback,
)

logger = logging.getLogger(__name__)

CACHE_SOURCE = "cache"
STREAM_URL_ERROR = "Failed to generate stream URL"


class MatchService:
    """Fetch, cache and query normalized matches."""

    def __init__(
        self,
        cache: QueryCache | None = None,
        clock: Callable[[], pendulum.DateTime] = pendulum.now,
        timezone: str | None = None,
        fetch: Fetcher = fetch_document,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        proxy_url: str = PROXY_URL,
    ):
        """Initialize the service.

        Args:
            cache: Query cache; a default five-minute cache is created when
                omitted.
            clock: Returns the current instant.
            timezone: Zone deciding what "today" means; local when None.
            fetch: Document fetcher used by every source.
            timeout: Seconds allowed per fetch.
            proxy_url: Relay prefix for the proxied sources.
        """
        self.cache = cache if cache is not None else QueryCache(clock=clock)
        self._clock = clock
        self.timezone = timezone or pendulum.local_timezone().name
        self._fetch = fetch
        self.timeout = timeout
        self.sources = build_sources(proxy_url)

    def _now(self) -> pendulum.DateTime:
        return self._clock().in_timezone(self.timezone)

    def fetch_matches_with_source(
        self, sport: str | None = None, result_type: str = "all"
    ) -> FetchResult:
        """Fetch matches and report where they came from.

        Args:
            sport: Sport name, or None / "All" for every sport.
            result_type: One of "all", "live", "today", "top-today".

        Returns:
            FetchResult tagged "cache", a source name, or "static".

        Raises:
            ValueError: If ``result_type`` is unknown.
        """
        query = Query.build(sport, result_type)

        cached = self.cache.get(query.cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {query.cache_key}")
            return FetchResult(source=CACHE_SOURCE, matches=cached)

        result = fetch_with_fallback(
            query,
            self._now(),
            fetch=self._fetch,
            timeout=self.timeout,
            sources=self.sources,
        )

        # Static data stands in for an outage; let the next call retry upstream
        if result.source != STATIC_SOURCE:
            self.cache.set(query.cache_key, result.matches)

        return result

    def fetch_matches(
        self, sport: str | None = None, result_type: str = "all"
    ) -> list[Match]:
        """Fetch matches for a sport and result type.

        Never fails because of upstream problems: when every source is
        down or empty the static example matches are returned.

        Args:
            sport: Sport name, or None / "All" for every sport.
            result_type: One of "all", "live", "today", "top-today".

        Returns:
            Matches sorted by kickoff.
        """
        return self.fetch_matches_with_source(sport, result_type).matches

    def fetch_stream_data(
        self, stream_params: StreamParams | Mapping[str, Any] | None
    ) -> StreamData:
        """Build the embeddable player URL for a stream.

        Pure string construction, no network access.

        Args:
            stream_params: StreamParams or a mapping with the same keys.

        Returns:
            StreamData with either ``stream_url`` or ``error`` set.
        """
        if stream_params is None:
            return StreamData(error=STREAM_URL_ERROR)

        if not isinstance(stream_params, StreamParams):
            stream_params = StreamParams.from_mapping(stream_params)

        if not stream_params.c and not stream_params.eid:
            logger.warning("Stream parameters carry no channel or event id")
            return StreamData(error=STREAM_URL_ERROR)

        query = urlencode(
            {
                "t": stream_params.t,
                "c": stream_params.c,
                "eid": stream_params.eid,
                "lid": stream_params.lid,
                "lang": stream_params.lang,
            }
        )
        return StreamData(stream_url=f"{IFRAME_PLAYER_URL}?{query}&m&dmn=")

    def fetch_sports(self) -> list[str]:
        """List the sports present in the default query.

        Returns:
            Sorted distinct categories, or the default sports list when no
            match is available.
        """
        categories = {match.category for match in self.fetch_matches()}
        if categories:
            return sorted(categories)
        return list(DEFAULT_SPORTS)

    def clear_cache(self) -> None:
        """Drop all cached query results."""
        self.cache.clear()


def create_service() -> MatchService:
    """Build a MatchService from environment settings.

    Returns:
        Configured service.

    Raises:
        ValueError: If any configured value is invalid.
    """
    errors = validate_config(settings.as_dict())
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(
            f"  - {err}" for err in errors
        )
        raise ValueError(error_msg)

    cache = QueryCache(ttl_seconds=settings.get_cache_ttl())
    return MatchService(
        cache=cache,
        timezone=settings.get_timezone(),
        timeout=settings.get_request_timeout(),
        proxy_url=settings.get_proxy_url(),
    )
