"""Season configuration and default constants."""

from dataclasses import dataclass

DEFAULT_REFERENCE_YEAR = 2025
DEFAULT_MIN_BIRTH_YEAR = 2008
DEFAULT_MAX_BIRTH_YEAR = 2022

# Longest sliding window (in birth years) generated without --groups
MAX_WINDOW_SPAN = 4

# Minimum participants for a row to be shown in default mode
DEFAULT_MIN_PLAYERS = 13

CONFIRMED_MARKER = 'x'
UNASSIGNED_ID = 'N/A'


@dataclass(frozen=True)
class Season:
    """Reference year and valid birth-year window of one tournament."""

    reference_year: int = DEFAULT_REFERENCE_YEAR
    min_birth_year: int = DEFAULT_MIN_BIRTH_YEAR
    max_birth_year: int = DEFAULT_MAX_BIRTH_YEAR

    def __post_init__(self) -> None:
        if self.min_birth_year > self.max_birth_year:
            raise ValueError(
                f"Ungueltiger Jahrgangsbereich: {self.min_birth_year}-{self.max_birth_year}"
            )

    def contains(self, birth_year: int) -> bool:
        """True if the birth year lies inside the valid window."""
        return self.min_birth_year <= birth_year <= self.max_birth_year

    def age_category(self, birth_year: int, prefix: str = 'u') -> str:
        """Age category label, e.g. ``u11`` for 2014 with reference year 2025."""
        return f'{prefix}{self.reference_year - birth_year}'
