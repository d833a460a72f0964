"""Pytest configuration and fixtures for the arena tests."""

import numpy as np
import pytest

from assassin.arena import Rectangle
from assassin.geometry import Vector


@pytest.fixture
def square():
    """The 400x400 arena centered on the origin."""
    return Rectangle(Vector(-200, -200), Vector(200, 200))


@pytest.fixture
def wide_rect():
    """A non-square, off-center arena."""
    return Rectangle(Vector(10, -30), Vector(310, 90))


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return np.random.default_rng(42)
