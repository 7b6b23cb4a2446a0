"""Wave Function Collapse plot generator.

Builds a square terrain plot by repeatedly collapsing the most constrained
cell and restricting its neighbours:

1. Every cell starts as a superposition of all tile kinds
2. Find the open cells with the lowest entropy (fewest candidates)
3. Pick one of them uniformly at random
4. Collapse it to a uniformly chosen candidate kind
5. Propagate the adjacency restriction one hop to its neighbours
6. Repeat until no open cell remains, then extract the finished Plot

Propagation is deliberately single-hop. Multi-hop convergence emerges from
the driver loop re-scanning after every collapse, and a neighbour whose
candidates are narrowed to one kind stays open until the scan picks it.
There is no backtracking: a cell left with no candidates is a fatal
WFCContradiction when it is selected.

Representation:
    Each cell's candidates are a uint8 bitmask in a numpy array, bit i set
    meaning Tile(i) is still possible. A separate boolean array marks
    collapsed cells, so a singleton superposition and a collapsed cell are
    distinguishable. Propagation uses a precomputed 256-entry lookup from a
    source mask to the union of its kinds' valid neighbours.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Sequence
from enum import Enum

import numpy as np

from plotgen import config
from plotgen.plot import Plot
from plotgen.tiles import ALL_TILES, Tile, valid_neighbours
from plotgen.types import GridOffset, GridPos
from plotgen.util import rng
from plotgen.util.rng import RNG
from plotgen.wave import Collapsed, Superposition, WaveState

logger = logging.getLogger(__name__)

_wfc_rng = rng.get(config.WFC_RNG_DOMAIN)


class WFCContradiction(Exception):
    """Raised when a cell selected for collapse has no candidates left.

    Propagation narrowed the cell to an empty set, so no valid plot exists
    from the current state. Generation does not backtrack.
    """

    def __init__(self, pos: GridPos, message: str | None = None) -> None:
        self.pos = pos
        super().__init__(message or f"No valid state possible at {pos}")


class UncollapsedCellError(AssertionError):
    """Raised when a plot is extracted while a cell is still open.

    The driver loop only returns once every cell is collapsed, so this
    indicates a generator bug rather than caller misuse.
    """


class Neighbourhood(Enum):
    """Which cells a collapse constrains."""

    MOORE = "moore"  # 8-connected "#" shape
    VON_NEUMANN = "von_neumann"  # 4-connected "+" shape


NEIGHBOUR_OFFSETS: dict[Neighbourhood, tuple[GridOffset, ...]] = {
    Neighbourhood.MOORE: tuple(
        (dx, dy)
        for dx in (-1, 0, 1)
        for dy in (-1, 0, 1)
        if not (dx == 0 and dy == 0)
    ),
    Neighbourhood.VON_NEUMANN: ((1, 0), (-1, 0), (0, 1), (0, -1)),
}

# Precomputed popcount lookup table for uint8 values (0-255)
_POPCOUNT_TABLE = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)


def _popcount(mask: int) -> int:
    """Count the number of set bits in a uint8 mask."""
    return int(_POPCOUNT_TABLE[mask])


def _mask_to_tiles(mask: int) -> list[Tile]:
    """Expand a candidate mask into tiles in ascending kind order."""
    return [tile for tile in Tile if mask & (1 << tile)]


def _tiles_to_mask(tiles: Iterable[Tile]) -> int:
    mask = 0
    for tile in tiles:
        mask |= 1 << tile
    return mask


class PlotGenerator:
    """Collapse engine owning the wave for one square plot.

    A generator is single use: ``into_plot()`` hands the finished grid to the
    caller and retires the generator.
    """

    def __init__(
        self,
        size: int = config.PLOT_SIZE,
        rng: RNG | None = None,
        tiles: Iterable[Tile] = ALL_TILES,
        neighbourhood: Neighbourhood = Neighbourhood.MOORE,
    ) -> None:
        """Initialize every cell as a superposition of ``tiles``.

        Args:
            size: Side length of the square plot.
            rng: Random source for cell tie-breaks and tile choice. Defaults
                to the shared "plot.wfc" stream; pass a seeded Random for
                reproducible runs.
            tiles: Kinds every cell may initially become.
            neighbourhood: Cells constrained by each collapse. MOORE is the
                reference 8-connected neighbourhood.
        """
        if size < 1:
            raise ValueError(f"Plot size must be positive, got {size}")
        if len(Tile) > 8:
            raise ValueError(
                f"PlotGenerator supports at most 8 tile kinds, got {len(Tile)}. "
                "Extend the wave to uint16 for more kinds."
            )

        initial_mask = _tiles_to_mask(tiles)
        if initial_mask == 0:
            raise ValueError("PlotGenerator needs at least one initial tile kind")

        self.size = size
        self.rng = rng if rng is not None else _wfc_rng
        self.neighbourhood = neighbourhood
        self.offsets = NEIGHBOUR_OFFSETS[neighbourhood]

        # Wave: uint8 candidate bitmask per cell, indexed [x, y]
        self.wave = np.full((size, size), initial_mask, dtype=np.uint8)
        self.collapsed = np.zeros((size, size), dtype=bool)
        self._consumed = False

        self._precompute_propagation_mask()

    def _precompute_propagation_mask(self) -> None:
        """Map every possible source mask to the neighbour kinds it allows.

        ``propagation_mask[m]`` is the union of ``valid_neighbours(k)`` over
        every kind ``k`` set in ``m``. For a collapsed source this is the
        single kind's neighbour set.
        """
        self.propagation_mask = np.zeros(256, dtype=np.uint8)
        for source_mask in range(256):
            allowed = 0
            for tile in _mask_to_tiles(source_mask):
                allowed |= _tiles_to_mask(valid_neighbours(tile))
            self.propagation_mask[source_mask] = allowed

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def _check_bounds(self, pos: GridPos) -> GridPos:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell {pos} is outside the {self.size}x{self.size} plot")
        return x, y

    def _check_live(self) -> None:
        if self._consumed:
            raise RuntimeError("PlotGenerator was already consumed by into_plot()")

    def cell_state(self, pos: GridPos) -> WaveState:
        """Return the state of one cell as a Collapsed or Superposition."""
        x, y = self._check_bounds(pos)
        mask = int(self.wave[x, y])
        if self.collapsed[x, y]:
            return Collapsed(_mask_to_tiles(mask)[0])
        return Superposition(frozenset(_mask_to_tiles(mask)))

    def entropy(self, pos: GridPos) -> int:
        """Number of remaining candidates, 0 once collapsed."""
        x, y = self._check_bounds(pos)
        if self.collapsed[x, y]:
            return 0
        return _popcount(self.wave[x, y])

    @property
    def open_cell_count(self) -> int:
        return int(np.count_nonzero(~self.collapsed))

    @property
    def wave_as_sets(self) -> list[list[set[Tile]]]:
        """Candidate sets indexed [x][y], for debugging and tests."""
        return [
            [set(_mask_to_tiles(int(mask))) for mask in column] for column in self.wave
        ]

    # -------------------------------------------------------------------------
    # Collapse steps
    # -------------------------------------------------------------------------

    def find_lowest_entropy(self) -> list[GridPos]:
        """Return every open cell sharing the lowest entropy.

        Sweeps rows of ``y`` then ``x``; the order only affects which list
        position a tied cell lands in. Collapsed cells are skipped. An empty
        list means the plot is fully collapsed.
        """
        lowest: list[GridPos] = []
        lowest_entropy = sys.maxsize

        for y in range(self.size):
            for x in range(self.size):
                if self.collapsed[x, y]:
                    continue

                entropy = _popcount(self.wave[x, y])
                if entropy < lowest_entropy:
                    lowest_entropy = entropy
                    lowest = [(x, y)]
                elif entropy == lowest_entropy:
                    lowest.append((x, y))

        return lowest

    def select_cell(self, candidates: Sequence[GridPos]) -> GridPos | None:
        """Pick one lowest-entropy cell uniformly at random.

        Returns None when there are no candidates left to collapse.
        """
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def collapse_cell(self, pos: GridPos) -> Tile:
        """Collapse an open cell to one of its candidates, chosen uniformly.

        Raises:
            WFCContradiction: If the cell has no candidates left.
            ValueError: If the cell is already collapsed.
        """
        self._check_live()
        x, y = self._check_bounds(pos)
        if self.collapsed[x, y]:
            raise ValueError(f"Cell {pos} is already collapsed")

        candidates = _mask_to_tiles(int(self.wave[x, y]))
        if not candidates:
            raise WFCContradiction(
                (x, y), f"No valid state possible at ({x}, {y}): no candidates left"
            )

        tile = self.rng.choice(candidates)
        self.wave[x, y] = 1 << tile
        self.collapsed[x, y] = True
        return tile

    def update_neighbours(self, pos: GridPos) -> None:
        """Narrow each open neighbour to kinds the source cell allows.

        The allowed set is the union of ``valid_neighbours`` over the
        source's candidates. Only direct neighbours are touched; a neighbour
        may be left with one candidate (still open) or none (caught when it
        is selected for collapse).
        """
        self._check_live()
        x, y = self._check_bounds(pos)
        allowed = self.propagation_mask[self.wave[x, y]]

        for dx, dy in self.offsets:
            nx, ny = x + dx, y + dy

            # Skip cells off the plot edge
            if not self.in_bounds(nx, ny):
                continue

            if self.collapsed[nx, ny]:
                continue

            old_mask = self.wave[nx, ny]
            new_mask = old_mask & allowed
            if new_mask == old_mask:
                continue

            self.wave[nx, ny] = new_mask
            if new_mask == 0:
                logger.debug(
                    f"Cell ({nx}, {ny}) lost its last candidate to ({x}, {y})"
                )

    def collapse(self) -> int:
        """Collapse cells until none are open.

        Returns:
            The number of cells collapsed, at most ``size * size``.

        Raises:
            WFCContradiction: If a selected cell has no candidates left.
        """
        self._check_live()
        iterations = 0

        while (pos := self.select_cell(self.find_lowest_entropy())) is not None:
            tile = self.collapse_cell(pos)
            self.update_neighbours(pos)
            iterations += 1
            logger.debug(f"Collapsed {pos} to {tile.name} (step {iterations})")

        logger.info(
            f"Collapsed {self.size}x{self.size} plot in {iterations} iterations"
        )
        return iterations

    def into_plot(self) -> Plot:
        """Hand over the finished plot and retire this generator.

        Raises:
            UncollapsedCellError: If any cell is still open.
        """
        self._check_live()

        plot = Plot(self.size)
        for y in range(self.size):
            for x in range(self.size):
                if not self.collapsed[x, y]:
                    raise UncollapsedCellError(
                        f"Found not collapsed tile at ({x}, {y})"
                    )
                plot[x, y] = _mask_to_tiles(int(self.wave[x, y]))[0]

        self._consumed = True
        return plot

    def generate(self) -> Plot:
        """Run ``collapse()`` and return the finished plot."""
        self.collapse()
        return self.into_plot()

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def constrain_cell(
        self, pos: GridPos, allowed: Iterable[Tile], propagate: bool = True
    ) -> None:
        """Restrict an open cell to a subset of its candidates.

        The new candidates are the intersection with ``allowed``, so a cell
        never gains kinds. Useful for boundary conditions before solving.

        Raises:
            WFCContradiction: If no current candidate is allowed.
            ValueError: If the cell is already collapsed.
        """
        self._check_live()
        x, y = self._check_bounds(pos)
        if self.collapsed[x, y]:
            raise ValueError(f"Cell {pos} is already collapsed")

        old_mask = self.wave[x, y]
        new_mask = old_mask & _tiles_to_mask(allowed)
        if new_mask == 0:
            raise WFCContradiction(
                (x, y), f"No valid state possible at ({x}, {y}) after constraint"
            )

        self.wave[x, y] = new_mask
        if propagate and new_mask != old_mask:
            self.update_neighbours((x, y))

    def force_collapse(self, pos: GridPos, tile: Tile, propagate: bool = True) -> None:
        """Collapse a cell to ``tile`` without consulting the RNG.

        ``tile`` must still be a candidate, which keeps candidate sets
        shrinking only.

        Raises:
            WFCContradiction: If ``tile`` is no longer a candidate.
            ValueError: If the cell is already collapsed.
        """
        self.constrain_cell(pos, {tile}, propagate=False)
        x, y = pos
        self.collapsed[x, y] = True
        if propagate:
            self.update_neighbours(pos)
