"""Heuristic field extractors.

Every extractor is a pure function. The rules themselves (keywords,
separators, patterns) live in module-level tables so they can be read and
tested without touching the network.
"""

import logging
import re
from urllib.parse import parse_qs, urlencode, urlparse

from bs4 import BeautifulSoup

from config.constants import (
    DEFAULT_BADGE,
    DEFAULT_LEAGUE,
    OTHER_SPORT,
    WEBPLAYER_URL,
)
from livefeed.models import StreamParams, StreamSource, Team, Teams

logger = logging.getLogger(__name__)

# (sport, keywords) checked in order against feed title + description
FEED_SPORT_KEYWORDS = (
    ("Football", ("football", "nfl")),
    ("Basketball", ("basketball", "nba")),
    ("Baseball", ("baseball", "mlb")),
    ("Soccer", ("soccer", "fifa")),
    ("Tennis", ("tennis",)),
    ("Hockey", ("hockey", "nhl")),
    ("Softball", ("softball",)),
)

# (sport, category keywords, logo filename keywords) for the listing page
LISTING_SPORT_KEYWORDS = (
    ("Football", ("football",), ("football",)),
    ("Basketball", ("basketball",), ("basket",)),
    ("Baseball", ("baseball",), ("baseball",)),
    ("Soccer", ("soccer",), ("soccer",)),
    ("Tennis", ("tennis",), ("tennis", "usopen")),
    ("Hockey", ("hockey",), ("hockey",)),
    ("Snooker", ("snooker",), ("snooker",)),
    ("Badminton", ("badminton",), ("badmin",)),
    ("Volleyball", ("volleyball",), ("volley",)),
    ("Boxing", ("boxing",), ("boxing",)),
)

LEAGUE_ABBREVIATIONS = ("NFL", "NBA", "MLB", "NHL", "FIFA", "ATP")
LEAGUE_TOKEN_PATTERN = re.compile(r"\(([^)]+)\)|\[([^\]]+)\]")

# Tried in order; the first separator present in the title wins
TEAM_SEPARATORS = (" vs ", " v ", " @ ", " - ")

WEBPLAYER_SELECTOR = 'a[onclick*="show_webplayer"]'
WEBPLAYER_CALL_PATTERN = re.compile(
    r"show_webplayer\('([^']+)',\s*'([^']+)',\s*(\d+),\s*(\d+),"
    r"\s*(\d+),\s*(\d+),\s*'([^']+)'\)"
)


def classify_sport(text: str) -> str:
    """Classify a feed item's sport from free text.

    Args:
        text: Combined title and description.

    Returns:
        Sport name, or "Other" when no keyword matches.
    """
    lowered = text.lower()
    for sport, keywords in FEED_SPORT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return sport
    return OTHER_SPORT


def classify_listing_sport(category: str, logo_src: str) -> str:
    """Classify a listing entry's sport from its category and logo.

    The logo filename is a secondary signal, checked alongside the category
    for each sport in turn.

    Args:
        category: Parenthesized category text from the note.
        logo_src: Logo image URL (may be empty).

    Returns:
        Sport name, or "Other" when no keyword matches.
    """
    lowered = category.lower()
    logo_name = logo_src.split("/")[-1].lower()
    for sport, category_keywords, logo_keywords in LISTING_SPORT_KEYWORDS:
        if any(keyword in lowered for keyword in category_keywords):
            return sport
        if logo_name and any(keyword in logo_name for keyword in logo_keywords):
            return sport
    return OTHER_SPORT


def extract_league(text: str) -> str:
    """Extract a league name from a feed description.

    Known abbreviations win, then the first parenthesized or bracketed
    token, then the "Live Event" sentinel.
    """
    lowered = text.lower()
    for abbreviation in LEAGUE_ABBREVIATIONS:
        if abbreviation.lower() in lowered:
            return abbreviation

    match = LEAGUE_TOKEN_PATTERN.search(text)
    if match:
        return match.group(1) or match.group(2) or DEFAULT_LEAGUE

    return DEFAULT_LEAGUE


def listing_league(category: str | None) -> str:
    """League for a listing entry: its category token without dots."""
    if not category:
        return DEFAULT_LEAGUE
    return category.replace(".", "") or DEFAULT_LEAGUE


def extract_teams(title: str) -> Teams | None:
    """Split a title into away and home teams.

    Text before the separator is the away team, text after it the home
    team.

    Args:
        title: Event title (e.g., "Buffalo Bills vs Kansas City Chiefs").

    Returns:
        Teams with placeholder badges, or None if no separator is present.
    """
    for separator in TEAM_SEPARATORS:
        if separator in title:
            parts = title.split(separator)
            away, home = parts[0].strip(), parts[1].strip()
            return Teams(
                home=Team(name=home, badge=DEFAULT_BADGE),
                away=Team(name=away, badge=DEFAULT_BADGE),
            )
    return None


def create_slug(title: str) -> str:
    """Create a URL-safe slug from a title.

    Example:
        >>> create_slug("Lakers vs. Celtics (NBA)")
        'lakers-vs-celtics-nba'
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    return slug.strip("-")


def extract_stream_params_from_url(url: str) -> StreamParams | None:
    """Read player parameters from a listing stream link.

    Args:
        url: Absolute stream link.

    Returns:
        StreamParams, or None (an empty bag) when the URL is relative or
        malformed.
    """
    try:
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            return None
        query = parse_qs(parsed.query)
    except ValueError as e:
        logger.debug(f"Malformed stream URL '{url}': {e}")
        return None

    return StreamParams.from_mapping(
        {key: values[0] for key, values in query.items() if values}
    )


def build_webplayer_url(params: StreamParams) -> str:
    """Build the web-player URL for a set of stream parameters."""
    query = urlencode(
        {
            "t": params.t,
            "c": params.c,
            "lang": params.lang,
            "eid": params.eid,
            "lid": params.lid,
            "ci": params.ci,
            "si": params.si,
        }
    )
    return f"{WEBPLAYER_URL}?{query}"


def extract_streaming_sources(
    description: str, index: int
) -> list[StreamSource]:
    """Find web-player links in a feed item's description markup.

    Only anchors whose ``onclick`` matches the seven-argument
    ``show_webplayer`` call produce a source.

    Args:
        description: Description HTML.
        index: Item index in the feed, used for source ids.

    Returns:
        List of stream sources, possibly empty.
    """
    if not description:
        return []

    soup = BeautifulSoup(description, features="html.parser")
    sources = []
    for link_index, link in enumerate(soup.select(WEBPLAYER_SELECTOR)):
        match = WEBPLAYER_CALL_PATTERN.search(link.get("onclick", ""))
        if not match:
            continue

        stream_type, channel_id, event_id, link_id, category_id, source_index, lang = (
            match.groups()
        )
        params = StreamParams(
            t=stream_type,
            c=channel_id,
            eid=event_id,
            lid=link_id,
            lang=lang,
            ci=category_id,
            si=source_index,
        )
        sources.append(
            StreamSource(
                id=f"stream-{index}-{link_index}",
                name=link.get_text(strip=True) or f"Stream {link_index + 1}",
                embed=build_webplayer_url(params),
                stream_params=params,
            )
        )

    return sources
