"""Shared fixtures for the recommendation pipeline tests."""

import pytest

from civicpulse.models.preference import UserPreference
from civicpulse.services.result_cache import LocalResultCache
from civicpulse.services.storage import MemoryStore

from factories import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def cache(store, clock):
    return LocalResultCache(store, clock=clock)


@pytest.fixture
def preferences():
    return [
        UserPreference(issue_id="rent-control", position=2),
        UserPreference(issue_id="wildfire", position=-1),
    ]
