"""Bracket definitions: sliding birth-year windows and named groups."""

import logging
import re
from dataclasses import dataclass

from core import COMBINED, GIRLS_ONLY
from core.settings import MAX_WINDOW_SPAN, Season

log = logging.getLogger(__name__)

GROUP_PREFIXES: dict[str, str] = {
    'u': COMBINED,
    'g': GIRLS_ONLY,
}

_GROUP_RE = re.compile(r'^([a-z])(\d+)$')


@dataclass(frozen=True)
class Bracket:
    """A contiguous birth-year window tallied as one unit."""

    min_year: int
    max_year: int
    category: str            # annotation category looked up for this bracket
    kind: str = COMBINED

    @property
    def label(self) -> str:
        return f'{self.min_year}-{self.max_year}'


@dataclass(frozen=True)
class GroupDefinition:
    """A named competitive group spanning ``count`` consecutive birth years."""

    category: str
    kind: str
    oldest_year: int
    count: int

    @property
    def youngest_year(self) -> int:
        return self.oldest_year + self.count - 1

    @property
    def range_label(self) -> str:
        return f'{self.oldest_year}-{self.youngest_year}'

    def sub_brackets(self) -> list[Bracket]:
        """Single-year brackets making up the group, oldest first."""
        return [
            Bracket(year, year, self.category, self.kind)
            for year in range(self.oldest_year, self.youngest_year + 1)
        ]


def generate_brackets(season: Season, max_span: int = MAX_WINDOW_SPAN) -> list[Bracket]:
    """Generate every 1..max_span year window inside the season.

    Windows are ordered by start year, then by length. The category of a
    window is the age category of its oldest birth year.
    """
    brackets = []
    for start in range(season.min_birth_year, season.max_birth_year + 1):
        for span in range(1, max_span + 1):
            end = start + span - 1
            if end > season.max_birth_year:
                break
            brackets.append(Bracket(start, end, season.age_category(start)))
    return brackets


def parse_group(item: str, season: Season) -> GroupDefinition | None:
    """Parse a single ``<prefix><age>/<count>`` item such as ``u17/4``.

    Returns:
        GroupDefinition, or None if the item is not a valid definition.
    """
    category, _, count_str = item.strip().partition('/')
    category = category.strip()
    match = _GROUP_RE.match(category)
    if not match:
        return None
    prefix, age = match.group(1), int(match.group(2))
    kind = GROUP_PREFIXES.get(prefix)
    if kind is None:
        return None
    try:
        count = int(count_str)
    except ValueError:
        return None
    if count < 1:
        return None

    # u17 means players born in reference_year - 17 are the oldest
    return GroupDefinition(
        category=category,
        kind=kind,
        oldest_year=season.reference_year - age,
        count=count,
    )


def parse_groups(text: str | None, season: Season) -> list[GroupDefinition]:
    """Parse a comma separated list of group definitions.

    Example: ``u17/4,g16/3,u14/3``. Invalid items are skipped with a
    warning. The definition order is kept; a repeated category replaces
    the earlier definition in place.

    Args:
        text: Group definitions as given on the command line.
        season: Season providing the reference year.

    Returns:
        List of GroupDefinition in definition order.
    """
    if not text:
        return []

    groups: dict[str, GroupDefinition] = {}
    for item in text.split(','):
        if not item.strip():
            continue
        group = parse_group(item, season)
        if group is None:
            log.warning("Ungueltige Gruppendefinition uebersprungen: '%s'", item.strip())
            continue
        groups[group.category] = group
    return list(groups.values())
