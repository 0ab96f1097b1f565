"""Canonical match records and query types."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from config.constants import ALL_SPORTS

SPORT_TYPES = (
    "Football",
    "Basketball",
    "Tennis",
    "Baseball",
    "Hockey",
    "Soccer",
    "Softball",
)

RESULT_TYPES = ("all", "live", "today", "top-today")

STREAM_PARAM_FIELDS = ("t", "c", "eid", "lid", "lang", "ci", "si")


@dataclass(frozen=True)
class Team:
    name: str
    badge: str


@dataclass(frozen=True)
class Teams:
    home: Team
    away: Team


@dataclass(frozen=True)
class StreamParams:
    """Parameters needed to build a web-player URL.

    ``t`` is the stream type, ``c`` the channel id, ``eid`` the event id,
    ``lid`` the link id, ``ci`` the category id and ``si`` the source index.
    """

    t: str = ""
    c: str = ""
    eid: str = ""
    lid: str = ""
    lang: str = "en"
    ci: str = ""
    si: str = ""

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "StreamParams":
        """Build params from a loose mapping, ignoring unknown keys.

        Missing or empty values fall back to the field defaults.
        """
        known = {
            key: str(values[key])
            for key in STREAM_PARAM_FIELDS
            if values.get(key) not in (None, "")
        }
        return cls(**known)

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, key) for key in STREAM_PARAM_FIELDS}


@dataclass(frozen=True)
class StreamSource:
    id: str
    name: str
    embed: str
    stream_params: StreamParams | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "embed": self.embed,
        }
        if self.stream_params is not None:
            data["streamParams"] = self.stream_params.to_dict()
        return data


@dataclass(frozen=True)
class Match:
    """One normalized sporting event.

    ``date`` is milliseconds since the epoch and may be approximate.
    """

    id: str
    slug: str
    title: str
    live: bool
    category: str
    date: int
    popular: bool
    league: str
    teams: Teams | None = None
    sources: tuple[StreamSource, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready mapping with camelCase keys."""
        data: dict[str, Any] = {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "live": self.live,
            "category": self.category,
            "date": self.date,
            "popular": self.popular,
            "league": self.league,
            "sources": [source.to_dict() for source in self.sources],
        }
        if self.teams is not None:
            data["teams"] = {
                "home": {
                    "name": self.teams.home.name,
                    "badge": self.teams.home.badge,
                },
                "away": {
                    "name": self.teams.away.name,
                    "badge": self.teams.away.badge,
                },
            }
        return data


@dataclass(frozen=True)
class StreamData:
    stream_url: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class Query:
    """A (sport, result type) pair identifying one cache slot."""

    sport: str = ALL_SPORTS
    result_type: str = "all"

    def __post_init__(self):
        if self.result_type not in RESULT_TYPES:
            raise ValueError(
                f"Unknown result type '{self.result_type}', "
                f"expected one of {', '.join(RESULT_TYPES)}"
            )

    @classmethod
    def build(cls, sport: str | None = None, result_type: str = "all") -> "Query":
        return cls(sport=sport or ALL_SPORTS, result_type=result_type)

    @property
    def cache_key(self) -> str:
        return f"matches-{self.sport}-{self.result_type}"
