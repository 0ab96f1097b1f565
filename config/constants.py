"""Immutable constants for the livefeed pipeline."""

# Upstream endpoints
LISTING_URL = "https://m.livetv.sx/en/"
FEED_URL = "https://cdn.livetv860.me/rss/upcoming_en.xml"

# Generic relay returning the target resource verbatim
PROXY_URL = "https://api.allorigins.win/raw?url="

# Player endpoints
WEBPLAYER_URL = "https://cdn.livetv860.me/webplayer2.php"
IFRAME_PLAYER_URL = "https://cdn.livetv860.me/export/webplayer.iframe.php"

# Used when fake_useragent cannot produce a mobile user agent
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/139.0.0.0 Mobile Safari/537.36"
)
ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml"

# Defaults for values overridable through the environment
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_CACHE_TTL = 300
DEFAULT_LOG_LEVEL = "INFO"

# Feed items within this many hours of "now" (either side) are live
LIVE_WINDOW_HOURS = 3

# Sentinels and placeholders
DEFAULT_LEAGUE = "Live Event"
DEFAULT_BADGE = "/logos/default.png"
DEFAULT_STREAM_NAME = "Live Stream"
OTHER_SPORT = "Other"
ALL_SPORTS = "All"

# Sports offered when none can be observed upstream
DEFAULT_SPORTS = [
    "Football",
    "Basketball",
    "Tennis",
    "Baseball",
    "Hockey",
    "Soccer",
    "Softball",
]

# Marquee sports. The listing counts Tennis, the feed does not.
LISTING_POPULAR_SPORTS = frozenset(
    {"Football", "Basketball", "Baseball", "Soccer", "Tennis"}
)
FEED_POPULAR_SPORTS = frozenset({"Football", "Basketball", "Baseball", "Soccer"})

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
