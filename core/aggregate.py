"""Roll single-year bracket tallies up into named groups."""

import logging
from functools import reduce
from typing import Iterable, Sequence

from core import ClubCounts, Ledger, Player, Tally
from core.brackets import GroupDefinition
from core.clubs import ClubRegistry
from core.tally import empty_counts, tally_bracket

log = logging.getLogger(__name__)


def _add_maps(a: dict[str, int], b: dict[str, int]) -> dict[str, int]:
    """Key-wise sum of two count maps as a new dict."""
    result = dict(a)
    for key, value in b.items():
        result[key] = result.get(key, 0) + value
    return result


def add_counts(a: ClubCounts, b: ClubCounts) -> ClubCounts:
    """Field-by-field sum of two ClubCounts; neither input is modified."""
    ledgers = {code: ledger.merged(Ledger()) for code, ledger in a.ledgers.items()}
    for code, ledger in b.ledgers.items():
        ledgers[code] = ledgers[code].merged(ledger) if code in ledgers else ledger.merged(Ledger())
    return ClubCounts(
        total=a.total + b.total,
        raw=_add_maps(a.raw, b.raw),
        adjusted=_add_maps(a.adjusted, b.adjusted),
        ledgers=ledgers,
    )


def ledger_total(ledgers: Iterable[Ledger]) -> Ledger:
    """Sum the ledgers of all clubs, e.g. for a table's total column."""
    return reduce(Ledger.merged, ledgers, Ledger())


def aggregate(
    group: GroupDefinition,
    tallies: Sequence[Tally],
    registry: ClubRegistry,
) -> Tally:
    """Combine the tallies of a group's sub-brackets into one Tally.

    The result does not depend on the order of ``tallies``. Participant
    lists are concatenated; a player's birth year places them in exactly
    one sub-bracket.

    Args:
        group: Group the tallies belong to.
        tallies: Tallies of the group's single-year sub-brackets.
        registry: Club universe; clubs without players keep explicit zeros.

    Returns:
        A new Tally labelled with the group's category.
    """
    combined = reduce(add_counts, (t.combined for t in tallies), empty_counts(registry.codes))
    girls = reduce(add_counts, (t.girls for t in tallies), empty_counts(registry.codes))

    players: list[Player] = []
    for t in sorted(tallies, key=lambda t: t.min_year):
        players.extend(t.players)

    return Tally(
        label=group.category,
        age_category=group.category,
        range_label=group.range_label,
        min_year=group.oldest_year,
        max_year=group.youngest_year,
        kind=group.kind,
        combined=combined,
        girls=girls,
        players=players,
        raw_mode=any(t.raw_mode for t in tallies),
    )


def aggregate_groups(
    groups: Iterable[GroupDefinition],
    players: Sequence[Player],
    registry: ClubRegistry,
    raw_mode: bool = False,
) -> dict[str, Tally]:
    """Tally every group from its single-year sub-brackets.

    Returns:
        Dict keyed by group category, in definition order.
    """
    results: dict[str, Tally] = {}
    for group in groups:
        sub_tallies = [
            tally_bracket(bracket, players, registry, raw_mode)
            for bracket in group.sub_brackets()
        ]
        results[group.category] = aggregate(group, sub_tallies, registry)
        log.debug(
            "Gruppe %s (%s): %d Spieler", group.category, group.range_label,
            results[group.category].combined.total,
        )
    log.info("%d Gruppen ausgewertet", len(results))
    return results
