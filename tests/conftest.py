from __future__ import annotations

import random
from collections.abc import Iterator

import pytest

from plotgen.util import rng


@pytest.fixture(autouse=True)
def reset_rng_streams() -> Iterator[None]:
    """Reseed the shared RNG streams before and after each test.

    The provider is reset in place so module-level cached streams keep
    pointing at it.
    """
    rng.init(0)
    yield
    rng.init(0)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)
