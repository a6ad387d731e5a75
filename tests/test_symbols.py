"""Tests for core.symbols module."""

from core.clubs import ClubRegistry
from core.symbols import (
    ADDED,
    LOAN,
    NORMAL,
    NOT_RECOMMENDED,
    REMOVED,
    Effect,
    interpret,
    interpret_symbol,
    participation_count,
)

CODES = ['A', 'C', 'H']


def _kinds(cell, home='A'):
    return [e.kind for e in interpret(cell, home, CODES)]


class TestSingleSymbols:
    """Tests for the symbol vocabulary."""

    def test_added(self):
        assert _kinds('!') == [ADDED]

    def test_removed(self):
        assert _kinds('/') == [REMOVED]

    def test_not_recommended(self):
        assert _kinds('@') == [NOT_RECOMMENDED]

    def test_hash_is_normal(self):
        assert _kinds('#') == [NORMAL]

    def test_loan_to_other_club(self):
        assert interpret('H', 'A', CODES) == [Effect(LOAN, 'H')]

    def test_own_code_is_normal(self):
        assert _kinds('A') == [NORMAL]

    def test_blank_is_normal(self):
        assert _kinds('') == [NORMAL]

    def test_unknown_letter_is_normal(self):
        assert _kinds('Z') == [NORMAL]

    def test_unrecognized_symbol_is_normal(self):
        assert _kinds('?') == [NORMAL]
        assert _kinds('h') == [NORMAL]

    def test_missing_cell_is_normal(self):
        assert _kinds(None) == [NORMAL]


class TestMultiSymbolCells:
    """Tests for comma separated cells."""

    def test_added_and_loan(self):
        effects = interpret('!,H', 'A', CODES)
        assert effects == [Effect(ADDED), Effect(LOAN, 'H')]
        assert participation_count(effects) == 2

    def test_whitespace_trimmed(self):
        assert interpret(' ! , H ', 'A', CODES) == [Effect(ADDED), Effect(LOAN, 'H')]

    def test_two_loans(self):
        assert interpret('C,H', 'A', CODES) == [Effect(LOAN, 'C'), Effect(LOAN, 'H')]


class TestParticipationCount:
    """Tests for counting effects."""

    def test_removed_only_does_not_count(self):
        assert participation_count(interpret('/', 'A', CODES)) == 0

    def test_flagged_only_does_not_count(self):
        assert participation_count(interpret('@', 'A', CODES)) == 0

    def test_hash_counts_once(self):
        assert participation_count(interpret('#', 'A', CODES)) == 1

    def test_counted_kinds(self):
        assert Effect(NORMAL).counts
        assert Effect(ADDED).counts
        assert Effect(LOAN, 'H').counts
        assert not Effect(REMOVED).counts


class TestLoanCodes:
    """Only a single uppercase letter can name a loan destination."""

    def test_digit_code_is_not_a_loan(self):
        # "1860 Ost" is registered under the code "1"
        assert interpret_symbol('1', 'A', ['1', 'A', 'H']) == Effect(NORMAL)

    def test_digit_code_from_registry(self):
        registry = ClubRegistry(['1860 Ost', 'Alpha'])
        assert '1' in registry
        assert interpret('1', 'A', registry) == [Effect(NORMAL)]

    def test_registry_as_known_codes(self):
        registry = ClubRegistry(['Alpha', 'Harriers'])
        assert 'H' in registry
        assert 'Z' not in registry
        assert interpret('!,H', 'A', registry) == [Effect(ADDED), Effect(LOAN, 'H')]
        assert interpret('Z', 'A', registry) == [Effect(NORMAL)]
