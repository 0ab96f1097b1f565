"""Tests for livefeed.parsers module."""

import pendulum
import pytest

from livefeed.errors import ParseError
from livefeed.parsers import parse_feed, parse_listing
from livefeed.utils.date_parser import to_epoch_ms


def _feed_with_pub_date(pub_date: str) -> str:
    return f"""<?xml version="1.0"?>
<rss><channel>
    <item>
        <title>Lakers vs Celtics</title>
        <description>Basketball. NBA</description>
        <pubDate>{pub_date}</pubDate>
        <link>https://livetv.sx/en/eventinfo/9/</link>
    </item>
</channel></rss>"""


class TestParseListing:
    """Tests for parse_listing function."""

    def test_skips_items_without_note(self, listing_html, now):
        entries = parse_listing(listing_html, now)

        assert [entry.index for entry in entries] == [0, 1, 3]
        assert "No note here" not in [entry.title for entry in entries]

    def test_entry_fields(self, listing_html, now):
        entry = parse_listing(listing_html, now)[0]

        assert entry.title == "Los Angeles Lakers vs Boston Celtics"
        assert entry.stream_url.startswith("https://cdn.livetv860.me/webplayer.php?")
        assert entry.logo_src == "//cdn.livetv.sx/img/basketball.gif"
        assert entry.category == "Basketball. NBA"
        assert entry.date == to_epoch_ms(
            pendulum.datetime(2026, 10, 19, 19, 30, tz="UTC")
        )

    def test_live_flag_is_text_based(self, listing_html, now):
        entries = parse_listing(listing_html, now)

        assert entries[0].live is True
        assert entries[1].live is False

    def test_month_prefix_resolution(self, listing_html, now):
        entry = parse_listing(listing_html, now)[1]

        assert entry.date == to_epoch_ms(
            pendulum.datetime(2026, 10, 20, 14, 0, tz="UTC")
        )
        assert entry.logo_src == ""

    def test_unknown_month_defaults_to_now(self, listing_html, now):
        entry = parse_listing(listing_html, now)[2]

        assert entry.date == to_epoch_ms(now)
        assert entry.category is None

    def test_impossible_date_defaults_to_now(self, now):
        html = """
        <ul class="broadcasts">
            <li>
                <div class="title"><a href="/x">A vs B</a></div>
                <div class="note">31 February at 20:00</div>
            </li>
        </ul>
        """

        assert parse_listing(html, now)[0].date == to_epoch_ms(now)

    def test_year_follows_now(self, listing_html):
        now = pendulum.datetime(2030, 1, 5, 9, 0, tz="UTC")

        entry = parse_listing(listing_html, now)[0]

        assert pendulum.from_timestamp(entry.date / 1000).year == 2030

    def test_empty_list_is_not_an_error(self, empty_listing_html, now):
        assert parse_listing(empty_listing_html, now) == []

    def test_page_without_broadcasts(self, now):
        assert parse_listing("<html><body><p>Down</p></body></html>", now) == []

    @pytest.mark.parametrize("document", ["", "   ", "plain text, no markup"])
    def test_uninterpretable_document(self, document, now):
        with pytest.raises(ParseError):
            parse_listing(document, now)


class TestParseFeed:
    """Tests for parse_feed function."""

    def test_items(self, feed_xml, now):
        entries = parse_feed(feed_xml, now)

        assert [entry.index for entry in entries] == [0, 1, 2]
        assert entries[0].title == "Buffalo Bills vs Kansas City Chiefs"
        assert entries[0].link == "https://livetv.sx/en/eventinfo/1/"
        assert "show_webplayer" in entries[0].description
        assert entries[1].date == to_epoch_ms(
            pendulum.datetime(2026, 10, 20, 23, 0, tz="UTC")
        )

    def test_live_window(self, feed_xml, now):
        entries = parse_feed(feed_xml, now)

        assert [entry.live for entry in entries] == [True, False, False]

    def test_two_hours_ago_is_live(self, now):
        pub_date = now.subtract(hours=2).format("ddd, DD MMM YYYY HH:mm:ss ZZ")

        assert parse_feed(_feed_with_pub_date(pub_date), now)[0].live is True

    def test_four_hours_ago_is_not_live(self, now):
        pub_date = now.subtract(hours=4).format("ddd, DD MMM YYYY HH:mm:ss ZZ")

        assert parse_feed(_feed_with_pub_date(pub_date), now)[0].live is False

    def test_window_is_symmetric(self, now):
        pub_date = now.add(hours=2).format("ddd, DD MMM YYYY HH:mm:ss ZZ")

        assert parse_feed(_feed_with_pub_date(pub_date), now)[0].live is True

    def test_window_bound_is_exclusive(self, now):
        pub_date = now.subtract(hours=3).format("ddd, DD MMM YYYY HH:mm:ss ZZ")

        assert parse_feed(_feed_with_pub_date(pub_date), now)[0].live is False

    def test_iso_pub_date(self, now):
        entry = parse_feed(_feed_with_pub_date("2026-10-19T16:00:00Z"), now)[0]

        assert entry.date == to_epoch_ms(now.add(hours=1))
        assert entry.live is True

    def test_missing_fields_default_to_empty(self, now):
        xml = "<rss><channel><item><title>Only a title</title></item></channel></rss>"

        entry = parse_feed(xml, now)[0]

        assert entry.description == ""
        assert entry.link == ""
        assert entry.pub_date == ""
        assert entry.date == to_epoch_ms(now)

    def test_unparsable_pub_date(self, now):
        entry = parse_feed(_feed_with_pub_date("sometime soon"), now)[0]

        assert entry.date == to_epoch_ms(now)
        assert entry.live is False

    @pytest.mark.parametrize(
        "bad_pub_date",
        ["99999999999999999999", "Thu, 01 Jan 1970 00:00:00 +9999"],
    )
    def test_bad_item_does_not_drop_the_feed(self, bad_pub_date, now):
        xml = f"""<?xml version="1.0"?>
<rss><channel>
    <item>
        <title>Buffalo Bills vs Kansas City Chiefs</title>
        <description>American Football. NFL</description>
        <pubDate>Mon, 19 Oct 2026 14:00:00 +0000</pubDate>
        <link>https://livetv.sx/en/eventinfo/1/</link>
    </item>
    <item>
        <title>Broken clock</title>
        <description>Darts</description>
        <pubDate>{bad_pub_date}</pubDate>
    </item>
</channel></rss>"""

        good, bad = parse_feed(xml, now)

        assert good.live is True
        assert good.date == to_epoch_ms(now.subtract(hours=1))
        assert bad.date == to_epoch_ms(now)
        assert bad.live is False

    def test_feed_without_items(self, now):
        xml = "<rss><channel><title>Empty</title></channel></rss>"

        assert parse_feed(xml, now) == []

    @pytest.mark.parametrize("document", ["", "  \n ", "not xml at all"])
    def test_uninterpretable_document(self, document, now):
        with pytest.raises(ParseError):
            parse_feed(document, now)
