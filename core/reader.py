"""TSV roster reader with encoding detection and row format detection."""

import logging
import re
from pathlib import Path
from typing import Sequence

from core import Player
from core.clubs import club_code
from core.settings import CONFIRMED_MARKER, UNASSIGNED_ID, Season

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')
# Position indicators like "(GK)" after a player's name
_PARENTHESES_RE = re.compile(r'\s*\([^)]*\)\s*')
_ID_RE = re.compile(r'^\d+$')


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the roster file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def normalize_whitespace(value: str) -> str:
    """Collapse any whitespace run into a single space and strip the ends."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def clean_name(value: str) -> str:
    """Remove parenthetical annotations such as ``(GK)`` from a name."""
    return normalize_whitespace(_PARENTHESES_RE.sub(' ', value))


def parse_player_line(
    line: str,
    club: str,
    season: Season,
    categories: Sequence[str] = (),
) -> Player | None:
    """Parse one roster line into a Player.

    The line is tab separated. With a leading numeric id the layout is
    ``id, confirmed, name, birthYear, girlMarker, ageBracket, annotations...``,
    otherwise the id column is missing.

    Args:
        line: Raw line from the roster file.
        club: Club name (the roster file's stem).
        season: Season defining the valid birth-year window.
        categories: Category names mapped positionally onto the
            annotation columns.

    Returns:
        Player, or None if the row is malformed, unconfirmed or outside
        the season window.
    """
    parts = [normalize_whitespace(p) for p in line.split('\t')]
    if len(parts) < 3:
        return None

    if _ID_RE.match(parts[0]):
        player_id, parts = parts[0], parts[1:]
    else:
        player_id = UNASSIGNED_ID

    # confirmed, name, birthYear, girlMarker, ageBracket, annotations...
    parts += [''] * (5 - len(parts))
    confirmed, name, birth_year, girl_marker, age_bracket = parts[:5]
    cells = parts[5:]

    if confirmed != CONFIRMED_MARKER:
        return None

    try:
        year = int(birth_year)
    except ValueError:
        return None
    if not season.contains(year):
        return None

    home = club_code(club)
    annotations = {}
    for category, cell in zip(categories, cells):
        # A blank cell means normal participation for the home club
        annotations[category] = cell or home

    return Player(
        club=club,
        player_id=player_id,
        name=clean_name(name),
        birth_year=year,
        is_girl=girl_marker != '',
        annotations=annotations,
        age_bracket=age_bracket,
    )


def read_roster(
    path: str | Path,
    season: Season,
    categories: Sequence[str] = (),
) -> list[Player]:
    """Read all confirmed players from one club roster file.

    Rows that cannot be parsed are skipped; they are only reported at
    debug level.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    encoding = detect_encoding(path)

    with open(path, 'r', encoding=encoding) as f:
        content = f.read()

    # Strip BOM if present
    content = content.lstrip('\ufeff')
    club = path.stem

    players: list[Player] = []
    for row_num, line in enumerate(content.split('\n'), start=1):
        if not line.strip():
            continue
        player = parse_player_line(line, club, season, categories)
        if player is None:
            log.debug("Zeile %d in %s uebersprungen", row_num, path.name)
            continue
        players.append(player)
    return players


def read_rosters(
    data_dir: str | Path,
    season: Season,
    categories: Sequence[str] = (),
) -> list[Player]:
    """Read every ``*.tsv`` roster in a directory.

    Each file holds one club; the file name (without extension) is the
    club name. Files are read in name order so the result is stable.

    Args:
        data_dir: Directory containing the roster files.
        season: Season defining the valid birth-year window.
        categories: Category names for the annotation columns, in order.

    Returns:
        List of Player objects across all clubs.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Datenverzeichnis nicht gefunden: {data_dir}")

    players: list[Player] = []
    for path in sorted(data_dir.glob('*.tsv')):
        club_players = read_roster(path, season, categories)
        log.info("%d Spieler gelesen aus %s", len(club_players), path.name)
        players.extend(club_players)
    return players
