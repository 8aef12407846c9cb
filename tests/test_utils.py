"""Tests for GHIS utilities."""

import logging

from ghis.utils import (
    GHISError,
    InvalidInputError,
    SimulationIntegrityError,
    compute_payload_hash,
    compute_string_hash,
    get_logger,
)


def test_string_hash_is_sha256():
    assert len(compute_string_hash("ghis")) == 64
    assert compute_string_hash("ghis") == compute_string_hash("ghis")


def test_payload_hash_ignores_key_order():
    a = {"region": "global", "strictness": "standard", "interventions": [1, 2]}
    b = {"interventions": [1, 2], "strictness": "standard", "region": "global"}
    assert compute_payload_hash(a) == compute_payload_hash(b)


def test_payload_hash_sensitive_to_values():
    assert compute_payload_hash({"x": 1}) != compute_payload_hash({"x": 2})


def test_exception_hierarchy():
    assert issubclass(InvalidInputError, GHISError)
    assert issubclass(SimulationIntegrityError, GHISError)
    assert not issubclass(InvalidInputError, SimulationIntegrityError)


def test_get_logger():
    logger = get_logger("ghis.test")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "ghis.test"
