"""Shared test fixtures for the geodesic engine."""

import pytest

from geodesic_core.config import EngineConfig
from geodesic_core.constants import G, SAGITTARIUS_A_MASS, c
from geodesic_core.models import Mass


@pytest.fixture
def mass_for_radius():
    """Factory for a Mass whose Schwarzschild radius is ``rs`` metres."""
    def make(rs: float) -> Mass:
        return Mass(rs * c * c / (2.0 * G))
    return make


@pytest.fixture
def sgr_a():
    """The reference Sagittarius A* mass (rs ~ 1.27e10 m)."""
    return Mass(SAGITTARIUS_A_MASS)


@pytest.fixture
def engine_config():
    return EngineConfig()
