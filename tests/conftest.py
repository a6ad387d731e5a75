"""Shared test fixtures."""

from pathlib import Path

import pytest

from core.clubs import ClubRegistry
from core.reader import read_rosters
from core.settings import Season


DATA_DIR = Path(__file__).resolve().parent.parent / 'data'
SAMPLE_CATEGORIES = ['u11', 'g11']


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the sample roster directory."""
    return DATA_DIR / 'sample'


@pytest.fixture(scope='session')
def season() -> Season:
    """Season of the sample data (reference year 2025)."""
    return Season()


@pytest.fixture(scope='session')
def sample_players(data_dir, season):
    """All confirmed players of the sample data, annotated for u11 and g11."""
    return read_rosters(data_dir, season, SAMPLE_CATEGORIES)


@pytest.fixture(scope='session')
def sample_registry(sample_players):
    """Club registry of the sample data (A, C, H)."""
    return ClubRegistry.from_players(sample_players)
