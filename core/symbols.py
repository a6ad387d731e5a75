"""Interpretation of per-player annotation cells.

A cell holds one or more comma separated symbols. Every symbol is
evaluated on its own and all effects apply to the same player, so one
player may be counted for more than one club in a bracket (amalgamated
teams).
"""

from dataclasses import dataclass
from typing import Collection

NORMAL = 'NORMAL'
ADDED = 'ADDED'
REMOVED = 'REMOVED'
NOT_RECOMMENDED = 'NOT_RECOMMENDED'
LOAN = 'LOAN'

SYMBOLS: dict[str, str] = {
    '!': ADDED,
    '/': REMOVED,
    '@': NOT_RECOMMENDED,
}

_COUNTED = {NORMAL, ADDED, LOAN}


@dataclass(frozen=True)
class Effect:
    """One participation effect of a symbol."""

    kind: str
    club: str = ''   # destination club code for loans

    @property
    def counts(self) -> bool:
        """True if the effect adds a participation to some club."""
        return self.kind in _COUNTED


def _is_club_letter(symbol: str) -> bool:
    """True for a single uppercase letter, the only form a loan can take."""
    return len(symbol) == 1 and symbol.isalpha() and symbol.isupper()


def interpret_symbol(symbol: str, home_code: str, known_codes: Collection[str]) -> Effect:
    """Interpret a single trimmed symbol.

    Unknown symbols, the home club's own code and letters that are not a
    registered club code count as normal participation.
    """
    kind = SYMBOLS.get(symbol)
    if kind is not None:
        return Effect(kind)
    if symbol != home_code and _is_club_letter(symbol) and symbol in known_codes:
        return Effect(LOAN, symbol)
    return Effect(NORMAL)


def interpret(cell: str | None, home_code: str, known_codes: Collection[str]) -> list[Effect]:
    """Interpret an annotation cell into its list of effects.

    Args:
        cell: Raw annotation cell, or None if the player has no
            annotation for the category.
        home_code: Code of the player's home club.
        known_codes: Registered club codes, e.g. a ClubRegistry.

    Returns:
        One effect per comma separated symbol. A missing or blank cell
        yields a single normal participation.
    """
    if cell is None:
        return [Effect(NORMAL)]
    return [interpret_symbol(s.strip(), home_code, known_codes) for s in cell.split(',')]


def participation_count(effects: Collection[Effect]) -> int:
    """Number of effects that add a participation to some club."""
    return sum(1 for e in effects if e.counts)
