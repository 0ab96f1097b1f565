"""livefeed - Live sports listings normalized from an aggregator.

This package turns the aggregator's HTML listing page and RSS feed into
canonical match records:
- Fetching from several sources (listing, feed, and both via a relay)
- Extracting teams, sport, league, kickoff and stream links
- Filtering and sorting per query, with a short-lived cache
- Falling back to static example data when everything is down
"""

from livefeed.cache import QueryCache
from livefeed.errors import LiveFeedError, ParseError, TransportError
from livefeed.models import (
    Match,
    Query,
    StreamData,
    StreamParams,
    StreamSource,
    Team,
    Teams,
)
from livefeed.service import MatchService, create_service
from livefeed.sources import FetchResult, fetch_with_fallback

__all__ = [
    "FetchResult",
    "LiveFeedError",
    "Match",
    "MatchService",
    "ParseError",
    "Query",
    "QueryCache",
    "StreamData",
    "StreamParams",
    "StreamSource",
    "Team",
    "Teams",
    "TransportError",
    "create_service",
    "fetch_with_fallback",
]
