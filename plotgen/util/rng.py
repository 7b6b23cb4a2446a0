"""Deterministic random number generation with isolated streams.

Each consumer of randomness (the collapse engine, benchmarks, future layers)
gets its own stream derived from a master seed. This keeps generation
reproducible from one seed, and a change in how much randomness one consumer
draws does not shift the sequence another consumer sees.

Usage:
    from plotgen.util import rng
    rng.init(config.RANDOM_SEED)

    # Cache the stream reference at module or instance level
    _rng = rng.get("plot.wfc")

    def pick(cells: list[GridPos]) -> GridPos:
        return _rng.choice(cells)

    # After rng.reset(), cached references automatically use the new stream

Domain naming convention (hierarchical):
    - "plot.wfc"
    - "bench.wfc"
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from plotgen.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    Callers may cache a stream; every call looks up the provider's current
    Random instance, so the stream survives ``reset()``.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)


# Accept either a plain Random (tests) or a provider stream (production).
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Provides isolated RNG streams keyed by domain name.

    Each domain gets its own Random instance derived deterministically
    from the master seed.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get an RNG stream for the named domain.

        Args:
            domain: Hierarchical name like "plot.wfc".

        Returns:
            An RNGStream proxy with the subset of the Random interface
            plot generation uses.
        """
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                # No seed: system entropy, non-deterministic
                self._streams[domain] = Random()
            else:
                # crc32, not hash(): hash() is salted per process by PYTHONHASHSEED
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reset all streams with a new master seed.

        Existing RNGStream proxies remain valid and will use the new streams.
        """
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize the global RNG provider with a master seed.

    If a provider already exists it is reset instead, so cached RNGStream
    proxies keep working.

    Args:
        master_seed: int, str, or None for non-deterministic behavior.
    """
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get an RNG stream for the named domain.

    Auto-initializes an unseeded provider when ``init()`` has not been called.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reset all RNG streams with a new master seed.

    Raises:
        RuntimeError: If ``init()`` has not been called.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
