"""Normalize raw listing and feed entries into canonical matches."""

import logging

from config.constants import (
    DEFAULT_STREAM_NAME,
    FEED_POPULAR_SPORTS,
    LISTING_POPULAR_SPORTS,
)
from livefeed.extractors import (
    classify_listing_sport,
    classify_sport,
    create_slug,
    extract_league,
    extract_stream_params_from_url,
    extract_streaming_sources,
    extract_teams,
    listing_league,
)
from livefeed.models import Match, StreamSource
from livefeed.parsers import FeedEntry, ListingEntry

logger = logging.getLogger(__name__)


def _slug_for(title: str, match_id: str) -> str:
    # Titles made only of punctuation would otherwise give an empty slug
    return create_slug(title) or create_slug(match_id)


def normalize_listing_entry(entry: ListingEntry) -> Match:
    """Build a match from a listing page entry.

    Args:
        entry: Raw entry from :func:`livefeed.parsers.parse_listing`.

    Returns:
        Match with a single stream source pointing at the entry's link.
    """
    match_id = f"mobile-{entry.index}"
    category = classify_listing_sport(entry.category or "", entry.logo_src)

    source = StreamSource(
        id=f"mobile-stream-{entry.index}",
        name=DEFAULT_STREAM_NAME,
        embed=entry.stream_url,
        stream_params=extract_stream_params_from_url(entry.stream_url),
    )

    return Match(
        id=match_id,
        slug=_slug_for(entry.title, match_id),
        title=entry.title,
        live=entry.live,
        category=category,
        date=entry.date,
        popular=category in LISTING_POPULAR_SPORTS,
        league=listing_league(entry.category),
        teams=extract_teams(entry.title),
        sources=(source,),
    )


def normalize_feed_entry(entry: FeedEntry) -> Match:
    """Build a match from an RSS item.

    When the description carries no web-player links, the item's own link
    becomes the only source.

    Args:
        entry: Raw entry from :func:`livefeed.parsers.parse_feed`.

    Returns:
        Match with one source per web-player link.
    """
    match_id = f"rss-{entry.index}"
    category = classify_sport(f"{entry.title} {entry.description}")

    try:
        sources = extract_streaming_sources(entry.description, entry.index)
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(
            f"Could not read stream links for feed item {entry.index}: {e}"
        )
        sources = []

    if not sources:
        sources = [
            StreamSource(
                id=f"{entry.title}-{entry.index}",
                name=DEFAULT_STREAM_NAME,
                embed=entry.link,
            )
        ]

    return Match(
        id=match_id,
        slug=_slug_for(entry.title, match_id),
        title=entry.title,
        live=entry.live,
        category=category,
        date=entry.date,
        popular=category in FEED_POPULAR_SPORTS,
        league=extract_league(entry.description),
        teams=extract_teams(entry.title),
        sources=tuple(sources),
    )
