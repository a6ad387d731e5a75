"""roster-stats – CLI-Tool fuer Altersklassen-Statistiken von Jugendturnieren."""

import argparse
import logging
import sys
from pathlib import Path

from core.aggregate import aggregate_groups
from core.brackets import generate_brackets, parse_groups
from core.clubs import ClubCodeError, ClubRegistry
from core.reader import read_rosters
from core.reporter import (
    dump_json,
    print_summary,
    render_tables,
    write_csv_report,
    write_html_report,
)
from core.settings import (
    DEFAULT_MAX_BIRTH_YEAR,
    DEFAULT_MIN_BIRTH_YEAR,
    DEFAULT_MIN_PLAYERS,
    DEFAULT_REFERENCE_YEAR,
    Season,
)
from core.tally import tally_brackets

DEFAULT_DATA_ROOT = Path('data')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Spielerzahlen je Verein und Altersklasse aus Turnier-Meldelisten.',
        prog='roster_stats.py',
        epilog='Beispiel: roster_stats.py --data 2025-02 --groups u17/4,g16/3,u14/3',
    )
    parser.add_argument(
        '--data', required=True,
        help='Verzeichnis mit den Meldelisten (*.tsv); ein reiner Name wird unter ./data gesucht',
    )
    parser.add_argument(
        '--groups',
        help='Gruppendefinitionen, z.B. u17/4,g16/3 (u = gemischt, g = nur Maedchen)',
    )
    parser.add_argument(
        '--raw', action='store_true',
        help='Markierungen ignorieren und nur gemeldete Spieler zaehlen',
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='Statistiken als JSON ausgeben',
    )
    parser.add_argument(
        '--reference-year', type=int, default=DEFAULT_REFERENCE_YEAR,
        help=f'Stichjahr fuer Altersklassen (Standard: {DEFAULT_REFERENCE_YEAR})',
    )
    parser.add_argument(
        '--min-year', type=int, default=DEFAULT_MIN_BIRTH_YEAR,
        help=f'Aeltester gueltiger Jahrgang (Standard: {DEFAULT_MIN_BIRTH_YEAR})',
    )
    parser.add_argument(
        '--max-year', type=int, default=DEFAULT_MAX_BIRTH_YEAR,
        help=f'Juengster gueltiger Jahrgang (Standard: {DEFAULT_MAX_BIRTH_YEAR})',
    )
    parser.add_argument(
        '--min-players', type=int, default=DEFAULT_MIN_PLAYERS,
        help=f'Mindestanzahl Spieler fuer eine Tabellenzeile ohne --groups (Standard: {DEFAULT_MIN_PLAYERS})',
    )
    parser.add_argument(
        '--allow-shared-codes', action='store_true',
        help='Vereine mit gleichem Kuerzel zusammenzaehlen statt abzubrechen',
    )
    parser.add_argument(
        '--output', type=Path,
        help='Pfad fuer einen CSV-Report',
    )
    parser.add_argument(
        '--html', type=Path,
        help='Pfad fuer einen HTML-Report',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Zusammenfassung der Meldelisten ausgeben',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Ausfuehrliche Log-Ausgabe',
    )
    return parser


def resolve_data_dir(data: str) -> Path | None:
    """Resolve the data folder: a path as given, or a name under ./data."""
    for candidate in (Path(data), DEFAULT_DATA_ROOT / data):
        if candidate.is_dir():
            return candidate
    return None


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    data_dir = resolve_data_dir(args.data)
    if data_dir is None:
        parser.error(f'Datenverzeichnis nicht gefunden: {args.data}')

    try:
        season = Season(args.reference_year, args.min_year, args.max_year)
    except ValueError as exc:
        parser.error(str(exc))

    groups = parse_groups(args.groups, season)
    if args.groups and not groups:
        parser.error(f'Keine gueltigen Gruppen in --groups: {args.groups}')

    logging.info("Lade Turnierdaten aus %s ...", data_dir)
    players = read_rosters(data_dir, season, [g.category for g in groups])

    try:
        registry = ClubRegistry.from_players(players, allow_shared_codes=args.allow_shared_codes)
    except ClubCodeError as exc:
        logging.error("%s (--allow-shared-codes zum Zusammenzaehlen)", exc)
        return 2

    if not players or not len(registry):
        logging.warning("Keine bestaetigten Spieler in %s gefunden.", data_dir)
        return 1
    logging.info(
        "%d bestaetigte Spieler aus %d Vereinen gefunden", len(players), len(registry),
    )

    if groups:
        tallies = aggregate_groups(groups, players, registry, args.raw)
    else:
        tallies = tally_brackets(generate_brackets(season), players, registry, args.raw)
    grouped = bool(groups)

    if args.summary:
        print_summary(players, registry, season)

    if args.debug:
        print(dump_json(tallies))
    else:
        print(render_tables(tallies, registry, grouped, args.min_players))

    if args.output:
        write_csv_report(tallies, registry, args.output, grouped, args.min_players)
    if args.html:
        write_html_report(
            tallies, registry, args.html, data_dir.name, grouped, args.min_players,
        )
    return 0


if __name__ == '__main__':
    sys.exit(main())
