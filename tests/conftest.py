"""Shared test fixtures for GHIS test suite."""

import os

import pytest

# Ensure test environment variables are set before any config import
os.environ.setdefault("GHIS_EFFECT_STRICTNESS", "standard")
os.environ.setdefault("GHIS_CACHE_ENABLED", "true")
os.environ.setdefault("GHIS_LOG_LEVEL", "INFO")

import ghis.config as config_module  # noqa: E402
import ghis.simulation.cache as cache_module  # noqa: E402
from ghis.catalog import get_intervention, get_region  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_globals():
    """Drop the cached config and process-wide result cache between tests."""
    config_module._config = None
    cache_module._default_cache = None
    yield
    config_module._config = None
    cache_module._default_cache = None


@pytest.fixture
def global_region():
    return get_region("global")


@pytest.fixture
def western_europe():
    return get_region("western_europe")


@pytest.fixture
def sub_saharan_africa():
    return get_region("sub_saharan_africa")


def _active(intervention_id, intensity):
    return get_intervention(intervention_id).model_copy(
        update={"intensity": intensity, "active": True},
    )


@pytest.fixture
def make_active():
    """Factory returning an active catalog intervention at a given intensity."""
    return _active


@pytest.fixture
def mixed_portfolio():
    """One intervention from each category at varied intensities."""
    return [
        _active("vax_expanded", 80),
        _active("wash_infra", 60),
        _active("telehealth", 40),
        _active("vector_control", 70),
    ]
