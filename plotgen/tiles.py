"""Terrain tile kinds and their adjacency rules.

The tile set is closed and small, so compatibility and display glyphs live in
static tables keyed by kind rather than on per-instance behavior.

Adjacency philosophy:
- RIVER <-> WASTELAND (banks are barren)
- WASTELAND <-> FARMLAND (fields border open land)
- RIVER cannot directly touch FARMLAND
"""

from __future__ import annotations

from enum import IntEnum, auto


class Tile(IntEnum):
    """Terrain kinds a plot cell can resolve to.

    Values double as bit indices in the generator's wave bitmasks.
    """

    RIVER = 0
    WASTELAND = auto()
    FARMLAND = auto()

    def valid_neighbours(self) -> frozenset[Tile]:
        """Return the kinds allowed to sit next to this kind."""
        return VALID_NEIGHBOURS[self]

    @property
    def glyph(self) -> str:
        """Two-character display glyph for text rendering."""
        return TILE_GLYPHS[self]

    def __str__(self) -> str:
        return self.glyph


ALL_TILES: frozenset[Tile] = frozenset(Tile)

VALID_NEIGHBOURS: dict[Tile, frozenset[Tile]] = {
    Tile.RIVER: frozenset({Tile.RIVER, Tile.WASTELAND}),
    Tile.WASTELAND: frozenset({Tile.RIVER, Tile.WASTELAND, Tile.FARMLAND}),
    Tile.FARMLAND: frozenset({Tile.FARMLAND, Tile.WASTELAND}),
}

TILE_GLYPHS: dict[Tile, str] = {
    Tile.RIVER: "░░",
    Tile.WASTELAND: "▓▓",
    Tile.FARMLAND: "██",
}

# Placeholder for the finished-plot buffer; every cell is overwritten.
DEFAULT_TILE = Tile.WASTELAND


def valid_neighbours(tile: Tile) -> frozenset[Tile]:
    """Return the fixed set of kinds permitted adjacent to ``tile``."""
    return VALID_NEIGHBOURS[tile]


def _verify_valid_neighbours_symmetric(
    table: dict[Tile, frozenset[Tile]],
) -> None:
    """Verify the adjacency table is symmetric and covers every kind.

    Raises AssertionError on the first asymmetric pair. Called at module load
    so a bad table edit fails on import rather than in generated output.
    """
    assert set(table) == set(Tile), "Adjacency table must cover every tile kind"
    for tile, neighbours in table.items():
        assert neighbours, f"{tile.name} has no valid neighbours"
        for neighbour in neighbours:
            assert tile in table[neighbour], (
                f"Asymmetric adjacency: {tile.name} allows {neighbour.name}, "
                f"but {neighbour.name} does not allow {tile.name}"
            )


_verify_valid_neighbours_symmetric(VALID_NEIGHBOURS)
