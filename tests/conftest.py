"""
Shared fixtures.
"""

import pytest
import numpy as np

from glm_sandbox.config import get_settings


@pytest.fixture
def rng():
    """Seeded uniform source so simulated data is reproducible."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; drop the cache around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
