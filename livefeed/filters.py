"""Filtering, ordering and grouping of normalized matches.

All functions here are pure: they return new lists and never modify the
matches they are given.
"""

from collections.abc import Iterable

import pendulum

from config.constants import ALL_SPORTS
from livefeed.models import Match, Query
from livefeed.utils.date_parser import from_epoch_ms, is_same_day


def apply_filters(
    matches: Iterable[Match], query: Query, now: pendulum.DateTime
) -> list[Match]:
    """Filter matches for a query and sort them by kickoff.

    Filters apply in order: sport (unless "All"), then result type. The
    sort is stable, so matches sharing a date keep their upstream order.

    Args:
        matches: Candidate matches.
        query: Sport and result type to keep.
        now: Current instant; its timezone decides what "today" means.

    Returns:
        New list sorted ascending by date.
    """
    selected = list(matches)

    if query.sport != ALL_SPORTS:
        selected = [match for match in selected if match.category == query.sport]

    if query.result_type == "live":
        selected = [match for match in selected if match.live]
    elif query.result_type == "today":
        selected = [match for match in selected if is_same_day(match.date, now)]
    elif query.result_type == "top-today":
        selected = [
            match
            for match in selected
            if is_same_day(match.date, now) and match.popular
        ]

    return sorted(selected, key=lambda match: match.date)


def search_matches(matches: Iterable[Match], text: str) -> list[Match]:
    """Keep matches whose title, league or team names contain ``text``.

    Matching is case-insensitive. Blank text keeps everything.
    """
    needle = text.strip().lower()
    if not needle:
        return list(matches)

    def haystack(match: Match) -> str:
        parts = [match.title, match.league]
        if match.teams is not None:
            parts.extend([match.teams.home.name, match.teams.away.name])
        return " ".join(parts).lower()

    return [match for match in matches if needle in haystack(match)]


def group_by_date(
    matches: Iterable[Match], timezone
) -> dict[str, list[Match]]:
    """Group matches by local calendar date.

    Args:
        matches: Matches, normally already sorted.
        timezone: Timezone name or object used to read each date.

    Returns:
        Mapping of "YYYY-MM-DD" to matches, in first-seen order.
    """
    grouped: dict[str, list[Match]] = {}
    for match in matches:
        day = from_epoch_ms(match.date, timezone).to_date_string()
        grouped.setdefault(day, []).append(match)
    return grouped
