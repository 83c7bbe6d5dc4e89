"""Shared fixtures for ecvss tests."""

import random
import pytest
from ecvss.group import SchnorrGroup, get_group

# Safe prime p = 2q + 1; 4 = 2^2 generates the order-q subgroup.
SMALL_P = 2039
SMALL_Q = 1019


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def group():
    return get_group("secp256k1")


@pytest.fixture
def field(group):
    return group.field


@pytest.fixture
def small_group():
    """Tiny Schnorr group: fast, and exercises the non-curve backend."""
    return SchnorrGroup(SMALL_P, SMALL_Q, 4, name="schnorr-test")


@pytest.fixture
def sample_elements(rng, field):
    """10 random field elements for property testing."""
    return [field.random_element(rng) for _ in range(10)]
