"""Per-cell wave states as seen from outside the generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from plotgen.tiles import Tile


@dataclass(frozen=True, slots=True)
class Collapsed:
    """A cell resolved to its final kind."""

    tile: Tile

    @property
    def entropy(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Superposition:
    """A cell that may still become any of ``candidates``.

    A singleton superposition is still open: it is only collapsed once the
    generator selects it.
    """

    candidates: frozenset[Tile]

    @property
    def entropy(self) -> int:
        return len(self.candidates)

    @property
    def is_contradiction(self) -> bool:
        """True when propagation has removed every candidate."""
        return not self.candidates


WaveState: TypeAlias = Collapsed | Superposition
