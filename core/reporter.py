"""Report generation for bracket statistics (tables, JSON, CSV, HTML, summary)."""

import csv
import dataclasses
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Mapping, Sequence

from jinja2 import Environment, FileSystemLoader

from core import GIRLS_ONLY, ClubCounts, Ledger, Player, Tally
from core.aggregate import ledger_total
from core.clubs import ClubRegistry
from core.settings import DEFAULT_MIN_PLAYERS, Season

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'

BASE_COLUMNS = ['Category', 'Range', 'num teams', 'Total']
SEPARATOR = ' | '


def format_count(
    count: int,
    ledger: Ledger | None,
    raw: int | None = None,
    code: str = '',
) -> str:
    """Format an adjusted count with the reasons it differs from the raw count.

    Layout: ``adjusted(raw,+P!,+Ksrc...,-I@,-R/,-Ldest...)``, e.g.
    ``5(3,+1!,+1H,-1/)``. Without a ledger (raw mode) only the count is
    returned.

    Args:
        count: Adjusted count.
        ledger: Adjustment ledger, or None in raw mode.
        raw: Raw count shown as first detail.
        code: Optional club code appended to the raw count.

    Returns:
        Formatted cell text.
    """
    if ledger is None:
        return str(count)
    details = []
    if raw is not None:
        details.append(f'{raw}{code}')
    if ledger.participations:
        details.append(f'+{ledger.participations}!')
    for src in sorted(ledger.incoming):
        details.append(f'+{ledger.incoming[src]}{src}')
    if ledger.not_recommended:
        details.append(f'-{ledger.not_recommended}@')
    if ledger.removals:
        details.append(f'-{ledger.removals}/')
    for dest in sorted(ledger.loans):
        details.append(f'-{ledger.loans[dest]}{dest}')
    return f"{count}({','.join(details)})" if details else str(count)


def _ordered(tallies: Mapping[str, Tally]) -> list[Tally]:
    """Oldest bracket first; ties keep definition order."""
    return sorted(tallies.values(), key=lambda t: (t.min_year, t.max_year))


def _build_row(tally: Tally, counts: ClubCounts, codes: Sequence[str]) -> list[str]:
    """Build one table row (category, range, teams, total, one cell per club)."""
    if tally.raw_mode:
        total_ledger = None
    else:
        # Incoming loans mirror outgoing ones, only loans are shown in the total
        total_ledger = dataclasses.replace(ledger_total(counts.ledgers.values()), incoming={})
    teams = sum(1 for code in codes if counts.adjusted.get(code, 0) > 0)
    row = [
        tally.age_category,
        tally.range_label,
        str(teams),
        format_count(counts.total, total_ledger, counts.raw_total),
    ]
    for code in codes:
        row.append(format_count(
            counts.adjusted.get(code, 0),
            None if tally.raw_mode else counts.ledgers.get(code, Ledger()),
            counts.raw.get(code, 0),
        ))
    return row


def build_tables(
    tallies: Mapping[str, Tally],
    registry: ClubRegistry,
    grouped: bool = False,
    min_players: int = DEFAULT_MIN_PLAYERS,
) -> tuple[list[list[str]], list[list[str]]]:
    """Build the rows of the combined and the girls-only table.

    Without groups, a bracket is listed when it has at least
    ``min_players`` participants (girls for the girls table). With groups,
    girls-only groups go to the girls table and all others to the
    combined table.

    Returns:
        Tuple ``(combined_rows, girls_rows)``.
    """
    combined_rows: list[list[str]] = []
    girls_rows: list[list[str]] = []
    for tally in _ordered(tallies):
        if grouped:
            show_combined = tally.kind != GIRLS_ONLY
            show_girls = tally.kind == GIRLS_ONLY
        else:
            show_combined = tally.combined.total >= min_players
            show_girls = tally.girls.total >= min_players
        if show_combined:
            combined_rows.append(_build_row(tally, tally.combined, registry.codes))
        if show_girls:
            girls_rows.append(_build_row(tally, tally.girls, registry.codes))
    return combined_rows, girls_rows


def _format_table(header: list[str], rows: list[list[str]], widths: list[int]) -> list[str]:
    """Pad header and rows to the given column widths."""
    header_line = SEPARATOR.join(h.ljust(w) for h, w in zip(header, widths))
    lines = [header_line, '-' * len(header_line)]
    for row in rows:
        lines.append(SEPARATOR.join(cell.ljust(w) for cell, w in zip(row, widths)))
    return lines


def render_amalgamated(tallies: Sequence[Tally], registry: ClubRegistry) -> list[str]:
    """Per-bracket list of available players per club with their reasons."""
    width = 15
    header = SEPARATOR.join(h.ljust(width) for h in ('Club', 'Available Players'))
    lines = []
    for tally in tallies:
        lines.append('')
        lines.append(f'{tally.age_category} ({tally.range_label}):')
        lines.append(header)
        lines.append('-' * len(header))
        for code in registry.codes:
            ledger = tally.combined.ledgers[code]
            reasons = []
            if not tally.raw_mode:
                if ledger.participations:
                    reasons.append(f'+{ledger.participations}!')
                if ledger.removals:
                    reasons.append(f'-{ledger.removals}/')
                for dest in sorted(ledger.loans):
                    reasons.append(f'-{ledger.loans[dest]}{dest}')
            available = str(tally.combined.adjusted[code])
            if reasons:
                available += f" ({', '.join(reasons)})"
            lines.append(f'{code.ljust(width)}{SEPARATOR}{available.ljust(width)}')
    return lines


def render_tables(
    tallies: Mapping[str, Tally],
    registry: ClubRegistry,
    grouped: bool = False,
    min_players: int = DEFAULT_MIN_PLAYERS,
) -> str:
    """Render the combined, girls-only and amalgamated tables as text."""
    header = BASE_COLUMNS + list(registry.codes)
    combined_rows, girls_rows = build_tables(tallies, registry, grouped, min_players)

    # Both tables share one set of column widths
    widths = [len(h) for h in header]
    for row in combined_rows + girls_rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    visible = [
        t for t in _ordered(tallies)
        if grouped or t.combined.total >= min_players or t.girls.total >= min_players
    ]

    lines = ['', 'Combined Table:']
    lines += _format_table(header, combined_rows, widths)
    lines += ['', 'Girls-Only Table:']
    lines += _format_table(header, girls_rows, widths)
    lines += ['', 'Amalgamated Teams Table:']
    lines += render_amalgamated(visible, registry)
    return '\n'.join(lines)


def tally_to_dict(tally: Tally) -> dict:
    """Convert a Tally to plain data for JSON output."""
    data = dataclasses.asdict(tally)
    data['players'] = [
        {'club': p.club, 'id': p.player_id, 'name': p.name,
         'birthYear': p.birth_year, 'isGirl': p.is_girl,
         'ageBracket': p.age_bracket}
        for p in tally.players
    ]
    return data


def dump_json(tallies: Mapping[str, Tally]) -> str:
    """Debug output of all statistics as JSON."""
    stats = {label: tally_to_dict(t) for label, t in tallies.items()}
    return json.dumps({'statistics': stats}, indent=2, ensure_ascii=False)


def write_csv_report(
    tallies: Mapping[str, Tally],
    registry: ClubRegistry,
    output_path: Path,
    grouped: bool = False,
    min_players: int = DEFAULT_MIN_PLAYERS,
) -> None:
    """Write both tables into one CSV file.

    Uses UTF-8 with BOM (utf-8-sig) and semicolon delimiter for
    compatibility with German Excel.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    combined_rows, girls_rows = build_tables(tallies, registry, grouped, min_players)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.writer(f, delimiter=';')
        writer.writerow(['Table'] + BASE_COLUMNS + list(registry.codes))
        for row in combined_rows:
            writer.writerow(['combined'] + row)
        for row in girls_rows:
            writer.writerow([GIRLS_ONLY] + row)

    log.info(
        "CSV-Report geschrieben: %s (%d Zeilen)",
        output_path, len(combined_rows) + len(girls_rows),
    )


def write_html_report(
    tallies: Mapping[str, Tally],
    registry: ClubRegistry,
    output_path: Path,
    title: str = '',
    grouped: bool = False,
    min_players: int = DEFAULT_MIN_PLAYERS,
) -> None:
    """Write both tables as an HTML report using Jinja2."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    combined_rows, girls_rows = build_tables(tallies, registry, grouped, min_players)
    clubs = [(registry.code_for(name), name) for name in registry.names]

    html = template.render(
        title=title,
        columns=BASE_COLUMNS + list(registry.codes),
        combined_rows=combined_rows,
        girls_rows=girls_rows,
        clubs=clubs,
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML-Report geschrieben: %s", output_path)


def age_summary(players: Sequence[Player], season: Season) -> dict[str, int]:
    """Number of players per age category, oldest first."""
    counts = Counter(season.age_category(p.birth_year) for p in players)
    return dict(sorted(counts.items(), key=lambda item: -int(item[0][1:])))


def print_summary(players: Sequence[Player], registry: ClubRegistry, season: Season) -> None:
    """Print a short overview of the dataset to stdout."""
    girls = sum(1 for p in players if p.is_girl)

    print(f"\n=== Turnierdaten (Stichjahr {season.reference_year}) ===")
    print(f"Bestaetigte Spieler:       {len(players):>5}")
    print(f"  davon Maedchen:          {girls:>5}")
    print(f"Vereine:                   {len(registry):>5}")
    for name in registry.names:
        count = sum(1 for p in players if p.club == name)
        print(f"  {registry.code_for(name)} {name:<22} {count:>5}")
    print("---")
    for category, count in age_summary(players, season).items():
        print(f"{category:<27}{count:>5}")
    print()
