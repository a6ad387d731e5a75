"""Core module for youth-roster-stats."""

from dataclasses import dataclass, field
from typing import Mapping

COMBINED = 'combined'
GIRLS_ONLY = 'girls-only'


@dataclass(frozen=True)
class Player:
    """Represents a confirmed player record from a club roster."""

    club: str
    player_id: str
    name: str
    birth_year: int
    is_girl: bool
    annotations: Mapping[str, str] = field(default_factory=dict)
    age_bracket: str = ''


@dataclass
class Ledger:
    """Why a club's adjusted count differs from its raw count."""

    participations: int = 0
    removals: int = 0
    not_recommended: int = 0
    loans: dict[str, int] = field(default_factory=dict)      # destination -> count
    incoming: dict[str, int] = field(default_factory=dict)   # source -> count

    def merged(self, other: 'Ledger') -> 'Ledger':
        """Return a new ledger holding the key-wise sum of both ledgers."""
        loans = dict(self.loans)
        for code, count in other.loans.items():
            loans[code] = loans.get(code, 0) + count
        incoming = dict(self.incoming)
        for code, count in other.incoming.items():
            incoming[code] = incoming.get(code, 0) + count
        return Ledger(
            participations=self.participations + other.participations,
            removals=self.removals + other.removals,
            not_recommended=self.not_recommended + other.not_recommended,
            loans=loans,
            incoming=incoming,
        )

    def is_empty(self) -> bool:
        """True if the ledger records no adjustment at all."""
        return not (
            self.participations or self.removals or self.not_recommended
            or any(self.loans.values()) or any(self.incoming.values())
        )


@dataclass
class ClubCounts:
    """Per-club counts for one gender view of a bracket."""

    total: int
    raw: dict[str, int]
    adjusted: dict[str, int]
    ledgers: dict[str, Ledger]

    @property
    def raw_total(self) -> int:
        """Raw headcount over all clubs."""
        return sum(self.raw.values())


@dataclass
class Tally:
    """Raw and adjusted statistics of one bracket or group."""

    label: str
    age_category: str
    range_label: str
    min_year: int
    max_year: int
    kind: str
    combined: ClubCounts
    girls: ClubCounts
    players: list[Player] = field(default_factory=list)
    raw_mode: bool = False
