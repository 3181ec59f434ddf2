"""
Shared fixtures: raw detector outputs on unrelated scales.
"""

from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def raw_scores(rng):
    """Two detectors scoring the same 10x2 cube, one in [0, 1], one in the thousands."""
    return rng.random((10, 2)), rng.normal(1000.0, 250.0, size=(10, 2))
