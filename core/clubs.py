"""Club registry: short club codes and their uniqueness check."""

import logging
from itertools import combinations
from typing import Iterable

from rapidfuzz.distance import JaroWinkler

from core import Player

log = logging.getLogger(__name__)

# Club names at least this similar are reported as possible duplicates
DEFAULT_SIMILARITY_THRESHOLD = 0.92


class ClubCodeError(ValueError):
    """Two or more clubs map onto the same club code."""


def club_code(name: str) -> str:
    """Return the short code of a club (its uppercased first character)."""
    return name.strip()[:1].upper()


def _normalize_key(value: str) -> str:
    return ' '.join(value.split()).upper()


def find_similar_clubs(
    names: Iterable[str],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[tuple[str, str, float]]:
    """Find pairs of club names that are probably the same club.

    Two roster files for one club (e.g. ``Harriers`` and ``Harriers FC``)
    would otherwise be counted as two clubs.

    Args:
        names: Club names.
        threshold: Minimum Jaro-Winkler similarity (0–1).

    Returns:
        List of ``(name_a, name_b, similarity)`` tuples, sorted by name.
    """
    pairs = []
    for a, b in combinations(sorted(set(names)), 2):
        similarity = JaroWinkler.similarity(_normalize_key(a), _normalize_key(b))
        if similarity >= threshold:
            pairs.append((a, b, round(similarity, 4)))
    return pairs


class ClubRegistry:
    """Maps full club names onto unique short codes.

    The club universe is fixed when the registry is built; every bracket
    table uses the same set of codes, even for clubs without players in
    that bracket.
    """

    def __init__(self, names: Iterable[str], allow_shared_codes: bool = False):
        self.names: list[str] = sorted(set(names))
        self._codes: dict[str, str] = {name: club_code(name) for name in self.names}

        by_code: dict[str, list[str]] = {}
        for name, code in self._codes.items():
            by_code.setdefault(code, []).append(name)
        shared = {code: clubs for code, clubs in by_code.items() if len(clubs) > 1}

        if shared:
            details = '; '.join(
                f"{code}: {', '.join(clubs)}" for code, clubs in sorted(shared.items())
            )
            if not allow_shared_codes:
                raise ClubCodeError(f"Mehrdeutige Vereinskuerzel: {details}")
            log.warning("Vereine teilen sich ein Kuerzel und werden zusammengezaehlt: %s", details)

        for a, b, similarity in find_similar_clubs(self.names):
            log.warning(
                "Vereinsnamen sehr aehnlich (%.2f): '%s' und '%s'", similarity, a, b,
            )

        self.codes: list[str] = sorted(by_code)

    @classmethod
    def from_players(
        cls,
        players: Iterable[Player],
        allow_shared_codes: bool = False,
    ) -> 'ClubRegistry':
        """Build the registry from every club seen in the dataset."""
        return cls((p.club for p in players), allow_shared_codes=allow_shared_codes)

    def code_for(self, club: str) -> str:
        """Return the registered code of a club.

        Raises:
            KeyError: If the club is not part of the registry.
        """
        return self._codes[club]

    def is_code(self, symbol: str) -> bool:
        """True if the symbol is the code of a registered club."""
        return symbol in self.codes

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.is_code(symbol)

    def __len__(self) -> int:
        return len(self.names)

    def __repr__(self) -> str:
        return f'ClubRegistry({self.codes!r})'
