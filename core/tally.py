"""Raw and adjusted per-club counts for one bracket."""

import logging
from typing import Iterable, Sequence

from core import ClubCounts, Ledger, Player, Tally
from core.brackets import Bracket
from core.clubs import ClubRegistry
from core.symbols import (
    ADDED,
    LOAN,
    NORMAL,
    NOT_RECOMMENDED,
    REMOVED,
    Effect,
    interpret,
    participation_count,
)

log = logging.getLogger(__name__)


def empty_counts(codes: Iterable[str]) -> ClubCounts:
    """Zeroed counts with an explicit entry for every club code."""
    codes = list(codes)
    return ClubCounts(
        total=0,
        raw={code: 0 for code in codes},
        adjusted={code: 0 for code in codes},
        ledgers={code: Ledger() for code in codes},
    )


def _apply_effect(counts: ClubCounts, effect: Effect, home: str) -> None:
    """Apply one symbol effect of a player from club ``home`` to the counts."""
    ledger = counts.ledgers[home]
    if effect.kind == NORMAL:
        counts.adjusted[home] += 1
    elif effect.kind == ADDED:
        counts.adjusted[home] += 1
        ledger.participations += 1
    elif effect.kind == REMOVED:
        ledger.removals += 1
    elif effect.kind == NOT_RECOMMENDED:
        ledger.not_recommended += 1
    elif effect.kind == LOAN:
        dest = effect.club
        counts.adjusted[dest] += 1
        ledger.loans[dest] = ledger.loans.get(dest, 0) + 1
        incoming = counts.ledgers[dest].incoming
        incoming[home] = incoming.get(home, 0) + 1


def tally_bracket(
    bracket: Bracket,
    players: Sequence[Player],
    registry: ClubRegistry,
    raw_mode: bool = False,
) -> Tally:
    """Count the players of one bracket per club.

    Raw counts only use birth year and home club. Adjusted counts and
    ledgers come from each player's annotation for the bracket's
    category; a player without an annotation participates normally for
    the home club. In raw mode the annotations are ignored.

    Args:
        bracket: Birth-year window to count.
        players: All players of the dataset.
        registry: Club universe; every code gets an explicit entry.
        raw_mode: Skip annotations, adjusted counts equal raw counts.

    Returns:
        A fresh Tally for the bracket.
    """
    selected = [p for p in players if bracket.min_year <= p.birth_year <= bracket.max_year]

    combined = empty_counts(registry.codes)
    girls = empty_counts(registry.codes)

    for player in selected:
        home = registry.code_for(player.club)
        combined.raw[home] += 1
        if player.is_girl:
            girls.raw[home] += 1

    participants: list[Player] = []
    for player in selected:
        home = registry.code_for(player.club)
        if raw_mode:
            effects = [Effect(NORMAL)]
        else:
            effects = interpret(player.annotations.get(bracket.category), home, registry)

        for effect in effects:
            _apply_effect(combined, effect, home)
            if player.is_girl:
                _apply_effect(girls, effect, home)

        if participation_count(effects) > 0:
            participants.append(player)

    combined.total = len(participants)
    girls.total = sum(1 for p in participants if p.is_girl)

    return Tally(
        label=bracket.label,
        age_category=bracket.category,
        range_label=bracket.label,
        min_year=bracket.min_year,
        max_year=bracket.max_year,
        kind=bracket.kind,
        combined=combined,
        girls=girls,
        players=participants,
        raw_mode=raw_mode,
    )


def tally_brackets(
    brackets: Iterable[Bracket],
    players: Sequence[Player],
    registry: ClubRegistry,
    raw_mode: bool = False,
) -> dict[str, Tally]:
    """Tally several brackets, keyed by bracket label in input order."""
    tallies = {b.label: tally_bracket(b, players, registry, raw_mode) for b in brackets}
    log.info("%d Altersbereiche ausgewertet", len(tallies))
    return tallies
