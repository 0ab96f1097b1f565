"""Parsers for the two upstream document shapes.

The listing parser reads the aggregator's mobile HTML page, the feed parser
its RSS document. Both return raw entries; turning those into matches is the
normalizer's job.
"""

import logging
import re
from dataclasses import dataclass

import pendulum
from bs4 import BeautifulSoup, ParserRejectedMarkup
from lxml import etree

from config.constants import LIVE_WINDOW_HOURS
from livefeed.errors import ParseError
from livefeed.utils.date_parser import (
    parse_note_datetime,
    parse_pub_date,
    to_epoch_ms,
)

logger = logging.getLogger(__name__)

LISTING_ITEM_SELECTOR = "ul.broadcasts li"
LISTING_TITLE_SELECTOR = ".title a"
LISTING_NOTE_SELECTOR = ".note"
LISTING_LOGO_SELECTOR = ".logo img"

NOTE_DATE_PATTERN = re.compile(r"(\d{1,2})\s+(\w+)\s+at\s+(\d{1,2}:\d{2})")
NOTE_CATEGORY_PATTERN = re.compile(r"\(([^)]+)\)")
NOTE_LIVE_MARKER = "Live"

LIVE_WINDOW_MS = LIVE_WINDOW_HOURS * 60 * 60 * 1000


@dataclass(frozen=True)
class ListingEntry:
    """One broadcast item from the listing page."""

    index: int
    title: str
    stream_url: str
    note: str
    logo_src: str
    date: int
    live: bool
    category: str | None = None


@dataclass(frozen=True)
class FeedEntry:
    """One ``<item>`` from the RSS feed."""

    index: int
    title: str
    description: str
    pub_date: str
    link: str
    date: int
    live: bool


def parse_listing(html: str | bytes, now: pendulum.DateTime) -> list[ListingEntry]:
    """Parse broadcast entries from the listing page.

    Items lacking a title link or a note are skipped. Live status comes
    from the literal "Live" marker in the note, not from the kickoff time.

    Args:
        html: Listing page markup.
        now: Reference instant; supplies the year for note dates and the
            fallback time.

    Returns:
        Entries in page order, possibly empty.

    Raises:
        ParseError: If the document is blank or contains no markup.
    """
    if not html or not html.strip():
        raise ParseError("Listing document is empty")

    try:
        soup = BeautifulSoup(html, features="html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Listing document rejected: {e}") from e
    if soup.find() is None:
        raise ParseError("Listing document contains no markup")

    entries = []
    for index, item in enumerate(soup.select(LISTING_ITEM_SELECTOR)):
        title_link = item.select_one(LISTING_TITLE_SELECTOR)
        note_element = item.select_one(LISTING_NOTE_SELECTOR)
        if title_link is None or note_element is None:
            continue

        logo_element = item.select_one(LISTING_LOGO_SELECTOR)
        note = note_element.get_text().strip()

        event_time = now
        date_match = NOTE_DATE_PATTERN.search(note)
        if date_match:
            parsed = parse_note_datetime(*date_match.groups(), now=now)
            if parsed is not None:
                event_time = parsed

        category_match = NOTE_CATEGORY_PATTERN.search(note)

        entries.append(
            ListingEntry(
                index=index,
                title=title_link.get_text().strip(),
                stream_url=title_link.get("href", ""),
                note=note,
                logo_src=logo_element.get("src", "") if logo_element else "",
                date=to_epoch_ms(event_time),
                live=NOTE_LIVE_MARKER in note,
                category=category_match.group(1) if category_match else None,
            )
        )

    logger.info(f"Parsed {len(entries)} listing entries")
    return entries


def _item_text(item, name: str) -> str:
    element = item.find(name)
    if element is None:
        return ""
    return element.get_text()


def _feed_timing(
    pub_date: str, now: pendulum.DateTime, index: int
) -> tuple[int, bool]:
    """Kickoff in epoch ms and live flag for one feed item."""
    if not pub_date.strip():
        return to_epoch_ms(now), True

    try:
        parsed = parse_pub_date(pub_date)
        if parsed is not None:
            date = to_epoch_ms(parsed)
            return date, abs(to_epoch_ms(now) - date) < LIVE_WINDOW_MS
    except (ValueError, OverflowError, OSError) as e:
        logger.warning(f"Feed item {index} has an out-of-range pubDate: {e}")
    else:
        logger.debug(f"Feed item {index} has unparsable pubDate")

    return to_epoch_ms(now), False


def parse_feed(xml: str | bytes, now: pendulum.DateTime) -> list[FeedEntry]:
    """Parse items from the RSS feed.

    An item is live when its pubDate lies strictly within three hours of
    ``now``, on either side. A missing pubDate means "now"; an unparsable
    one also means "now" but never counts as live.

    Args:
        xml: RSS document.
        now: Reference instant.

    Returns:
        Entries in document order, possibly empty.

    Raises:
        ParseError: If the document is blank or has no root element.
    """
    if not xml or not xml.strip():
        raise ParseError("Feed document is empty")

    try:
        soup = BeautifulSoup(xml, features="xml")
    except (ParserRejectedMarkup, etree.XMLSyntaxError) as e:
        raise ParseError(f"Feed document rejected: {e}") from e
    if soup.find() is None:
        raise ParseError("Feed document has no root element")

    entries = []
    for index, item in enumerate(soup.find_all("item")):
        pub_date = _item_text(item, "pubDate")
        date, live = _feed_timing(pub_date, now, index)

        entries.append(
            FeedEntry(
                index=index,
                title=_item_text(item, "title"),
                description=_item_text(item, "description"),
                pub_date=pub_date,
                link=_item_text(item, "link").strip(),
                date=date,
                live=live,
            )
        )

    logger.info(f"Parsed {len(entries)} feed items")
    return entries
