"""Finished terrain plots and their text rendering."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from plotgen.tiles import DEFAULT_TILE, Tile
from plotgen.types import GridPos


class Plot:
    """A fully collapsed square grid of tiles.

    Tiles are stored as a ``uint8`` array of tile ids indexed ``[x, y]``.
    A row is a fixed ``x``; ``rows()`` walks them in order for renderers.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Plot size must be positive, got {size}")
        self.size = size
        self.tiles = np.full((size, size), int(DEFAULT_TILE), dtype=np.uint8)

    @classmethod
    def from_tiles(cls, tiles: list[list[Tile]]) -> Plot:
        """Build a plot from nested ``tiles[x][y]`` lists."""
        plot = cls(len(tiles))
        for x, row in enumerate(tiles):
            if len(row) != plot.size:
                raise ValueError(
                    f"Plot must be square: row {x} has {len(row)} tiles, "
                    f"expected {plot.size}"
                )
            plot.tiles[x, :] = [int(tile) for tile in row]
        return plot

    def __getitem__(self, pos: GridPos) -> Tile:
        x, y = pos
        return Tile(int(self.tiles[x, y]))

    def __setitem__(self, pos: GridPos, tile: Tile) -> None:
        x, y = pos
        self.tiles[x, y] = int(tile)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plot):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.tiles, other.tiles))

    def rows(self) -> Iterator[list[Tile]]:
        for x in range(self.size):
            yield [Tile(int(tile_id)) for tile_id in self.tiles[x]]

    def to_lists(self) -> list[list[Tile]]:
        return list(self.rows())

    def counts(self) -> dict[Tile, int]:
        """Number of cells per tile kind, including kinds that never appear."""
        ids, totals = np.unique(self.tiles, return_counts=True)
        counts = dict.fromkeys(Tile, 0)
        for tile_id, total in zip(ids, totals, strict=True):
            counts[Tile(int(tile_id))] = int(total)
        return counts

    def __str__(self) -> str:
        return render_plot(self)


def render_plot(plot: Plot) -> str:
    """Render one line of glyphs per row, each row ending in a newline."""
    return "".join(
        "".join(tile.glyph for tile in row) + "\n" for row in plot.rows()
    )
