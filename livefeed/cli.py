"""Command line entry point.

Examples:
    livefeed --sport Basketball --type live
    livefeed --type today --group
    livefeed --json
    livefeed --sports
    livefeed --stream-url rss-3
"""

import argparse
import json
import logging
import sys

from config import settings
from config.constants import DEFAULT_LOG_LEVEL
from config.paths import LOG_FILE
from config.validation import LOG_LEVELS, validate_log_level
from livefeed.filters import group_by_date, search_matches
from livefeed.logging_config import configure_logging
from livefeed.models import RESULT_TYPES, Match
from livefeed.service import MatchService, create_service
from livefeed.utils.date_parser import from_epoch_ms

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livefeed",
        description="List live and upcoming sports broadcasts",
    )
    parser.add_argument("--sport", help="Sport name (default: all sports)")
    parser.add_argument(
        "--type",
        dest="result_type",
        choices=RESULT_TYPES,
        default="all",
        help="Which matches to keep",
    )
    parser.add_argument("--search", help="Filter by title, league or team")
    parser.add_argument(
        "--group", action="store_true", help="Group output by date"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print matches as JSON"
    )
    parser.add_argument(
        "--sports", action="store_true", help="List available sports"
    )
    parser.add_argument(
        "--stream-url",
        metavar="MATCH_ID",
        help="Print the player URL for a match's first stream",
    )
    parser.add_argument(
        "--log-file",
        nargs="?",
        const=LOG_FILE,
        help=f"Also write JSON logs to this file (default: {LOG_FILE.name})",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: INFO)",
    )
    return parser


def _format_match(match: Match, timezone) -> str:
    kickoff = from_epoch_ms(match.date, timezone).format("YYYY-MM-DD HH:mm")
    marker = "LIVE " if match.live else ""
    return f"{marker}{kickoff}  [{match.category}] {match.title} ({match.league})"


def _print_stream_url(service: MatchService, match_id: str) -> int:
    for match in service.fetch_matches():
        if match.id != match_id:
            continue
        for source in match.sources:
            if source.stream_params is None:
                continue
            stream = service.fetch_stream_data(source.stream_params)
            if stream.stream_url:
                print(stream.stream_url)
                return 0
        print(f"Match {match_id} has no playable stream", file=sys.stderr)
        return 1

    print(f"Match {match_id} not found", file=sys.stderr)
    return 1


def run(args: argparse.Namespace, service: MatchService) -> int:
    """Execute the command described by ``args``.

    Returns:
        Process exit status.
    """
    if args.sports:
        print("\n".join(service.fetch_sports()))
        return 0

    if args.stream_url:
        return _print_stream_url(service, args.stream_url)

    result = service.fetch_matches_with_source(args.sport, args.result_type)
    matches = result.matches
    if args.search:
        matches = search_matches(matches, args.search)

    if args.json:
        payload = {
            "source": result.source,
            "matches": [match.to_dict() for match in matches],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    print(f"{len(matches)} matches (source: {result.source})")
    if args.group:
        for day, day_matches in group_by_date(matches, service.timezone).items():
            print(f"\n{day}")
            for match in day_matches:
                print(f"  {_format_match(match, service.timezone)}")
    else:
        for match in matches:
            print(_format_match(match, service.timezone))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # A bad LIVEFEED_LOG_LEVEL is reported by create_service() below
    level = args.log_level or settings.get_log_level()
    if not validate_log_level(level):
        level = DEFAULT_LOG_LEVEL
    configure_logging(level=level, log_file=args.log_file)

    try:
        service = create_service()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    return run(args, service)


if __name__ == "__main__":
    sys.exit(main())
