"""Tests for core.brackets module."""

import pytest

from core import COMBINED, GIRLS_ONLY
from core.brackets import Bracket, GroupDefinition, generate_brackets, parse_group, parse_groups
from core.settings import Season

SEASON = Season()


class TestGenerateBrackets:
    """Tests for the default sliding windows."""

    def test_count(self):
        # 15 birth years, windows of 1..4 years: 15 + 14 + 13 + 12
        assert len(generate_brackets(SEASON)) == 54

    def test_windows_inside_season(self):
        for b in generate_brackets(SEASON):
            assert SEASON.min_birth_year <= b.min_year <= b.max_year <= SEASON.max_birth_year
            assert 1 <= b.max_year - b.min_year + 1 <= 4

    def test_order_and_labels(self):
        brackets = generate_brackets(SEASON)
        assert [b.label for b in brackets[:5]] == [
            '2008-2008', '2008-2009', '2008-2010', '2008-2011', '2009-2009',
        ]
        assert brackets[-1].label == '2022-2022'

    def test_category_from_reference_year(self):
        brackets = {b.label: b for b in generate_brackets(SEASON)}
        assert brackets['2014-2014'].category == 'u11'
        assert brackets['2008-2011'].category == 'u17'

    def test_reference_year_is_configurable(self):
        season = Season(reference_year=2026, min_birth_year=2014, max_birth_year=2014)
        assert generate_brackets(season) == [Bracket(2014, 2014, 'u12')]


class TestParseGroups:
    """Tests for group definitions."""

    def test_combined_group(self):
        g = parse_group('u17/4', SEASON)
        assert g == GroupDefinition('u17', COMBINED, 2008, 4)
        assert g.youngest_year == 2011
        assert g.range_label == '2008-2011'

    def test_girls_group(self):
        g = parse_group('g16/3', SEASON)
        assert g.kind == GIRLS_ONLY
        assert g.range_label == '2009-2011'

    def test_sub_brackets(self):
        g = parse_group('u14/3', SEASON)
        assert g.sub_brackets() == [
            Bracket(2011, 2011, 'u14'),
            Bracket(2012, 2012, 'u14'),
            Bracket(2013, 2013, 'u14'),
        ]

    def test_girls_sub_brackets_carry_kind(self):
        assert all(b.kind == GIRLS_ONLY for b in parse_group('g11/2', SEASON).sub_brackets())

    def test_order_preserved(self):
        groups = parse_groups('u17/4,g16/3,g14/4,u14/3', SEASON)
        assert [g.category for g in groups] == ['u17', 'g16', 'g14', 'u14']

    @pytest.mark.parametrize('item', ['u17', 'u17/', 'u17/x', 'ux/3', 'x12/3', '/3', 'u12/0'])
    def test_invalid_items_skipped(self, item):
        assert parse_group(item, SEASON) is None
        assert parse_groups(f'{item},u12/3', SEASON) == [parse_group('u12/3', SEASON)]

    def test_duplicate_category_replaced_in_place(self):
        groups = parse_groups('u12/3,u10/2,u12/2', SEASON)
        assert [g.category for g in groups] == ['u12', 'u10']
        assert groups[0].count == 2

    def test_empty(self):
        assert parse_groups(None, SEASON) == []
        assert parse_groups('', SEASON) == []


class TestSeason:
    """Tests for the season configuration."""

    def test_age_category(self):
        assert SEASON.age_category(2014) == 'u11'
        assert SEASON.age_category(2014, 'g') == 'g11'

    def test_contains(self):
        assert SEASON.contains(2008)
        assert SEASON.contains(2022)
        assert not SEASON.contains(2023)

    def test_inverted_window_rejected(self):
        with pytest.raises(ValueError):
            Season(min_birth_year=2020, max_birth_year=2010)
