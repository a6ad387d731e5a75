"""Tests for core.clubs module."""

import logging

import pytest

from core.clubs import ClubCodeError, ClubRegistry, club_code, find_similar_clubs


class TestClubCode:
    """Tests for code derivation."""

    def test_first_letter_uppercased(self):
        assert club_code('alpha') == 'A'
        assert club_code('Harriers') == 'H'


class TestClubRegistry:
    """Tests for the club registry."""

    def test_codes_sorted_and_unique(self):
        registry = ClubRegistry(['Harriers', 'Alpha', 'Comets', 'Alpha'])
        assert registry.codes == ['A', 'C', 'H']
        assert registry.names == ['Alpha', 'Comets', 'Harriers']
        assert len(registry) == 3

    def test_code_for(self):
        registry = ClubRegistry(['Alpha', 'Harriers'])
        assert registry.code_for('Harriers') == 'H'

    def test_unknown_club_raises(self):
        with pytest.raises(KeyError):
            ClubRegistry(['Alpha']).code_for('Nobody')

    def test_is_code(self):
        registry = ClubRegistry(['Alpha', 'Harriers'])
        assert registry.is_code('H')
        assert not registry.is_code('Z')

    def test_collision_rejected(self):
        with pytest.raises(ClubCodeError, match='A: Alpha, Athletic'):
            ClubRegistry(['Alpha', 'Athletic', 'Harriers'])

    def test_collision_allowed_merges(self, caplog):
        with caplog.at_level(logging.WARNING):
            registry = ClubRegistry(['Alpha', 'Athletic'], allow_shared_codes=True)
        assert registry.codes == ['A']
        assert registry.code_for('Athletic') == 'A'
        assert 'Kuerzel' in caplog.text

    def test_empty(self):
        registry = ClubRegistry([])
        assert registry.codes == []
        assert len(registry) == 0

    def test_from_players(self, sample_players):
        registry = ClubRegistry.from_players(sample_players)
        assert registry.codes == ['A', 'C', 'H']


class TestFindSimilarClubs:
    """Tests for near-duplicate club detection."""

    def test_similar_names_reported(self):
        pairs = find_similar_clubs(['Harriers', 'Harriers FC', 'Alpha'])
        assert [(a, b) for a, b, _ in pairs] == [('Harriers', 'Harriers FC')]

    def test_case_and_spacing_ignored(self):
        pairs = find_similar_clubs(['Comets  United', 'comets united'])
        assert pairs[0][2] == 1.0

    def test_distinct_names_not_reported(self):
        assert find_similar_clubs(['Alpha', 'Comets', 'Harriers']) == []
