"""Exceptions raised inside the acquisition pipeline.

None of these escape :meth:`livefeed.service.MatchService.fetch_matches`;
the fallback orchestrator catches them per source.
"""


class LiveFeedError(Exception):
    """Base class for pipeline errors."""


class TransportError(LiveFeedError):
    """Network, DNS, timeout or HTTP status failure while fetching a URL."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


class ParseError(LiveFeedError):
    """Document could not be interpreted as the expected format at all."""
