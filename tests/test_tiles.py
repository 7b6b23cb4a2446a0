"""Tests for the terrain tile domain."""

from __future__ import annotations

import pytest

from plotgen.tiles import (
    ALL_TILES,
    DEFAULT_TILE,
    TILE_GLYPHS,
    VALID_NEIGHBOURS,
    Tile,
    _verify_valid_neighbours_symmetric,
    valid_neighbours,
)


class TestValidNeighbours:
    """The adjacency table must match the reference exactly."""

    def test_table_matches_reference(self) -> None:
        assert VALID_NEIGHBOURS == {
            Tile.RIVER: frozenset({Tile.RIVER, Tile.WASTELAND}),
            Tile.WASTELAND: frozenset({Tile.RIVER, Tile.WASTELAND, Tile.FARMLAND}),
            Tile.FARMLAND: frozenset({Tile.FARMLAND, Tile.WASTELAND}),
        }

    @pytest.mark.parametrize("tile", list(Tile))
    def test_every_kind_has_neighbours_including_itself(self, tile: Tile) -> None:
        neighbours = valid_neighbours(tile)
        assert neighbours
        assert tile in neighbours

    @pytest.mark.parametrize("tile", list(Tile))
    def test_method_matches_function(self, tile: Tile) -> None:
        assert tile.valid_neighbours() == valid_neighbours(tile)

    def test_river_and_farmland_are_incompatible(self) -> None:
        assert Tile.FARMLAND not in valid_neighbours(Tile.RIVER)
        assert Tile.RIVER not in valid_neighbours(Tile.FARMLAND)

    def test_symmetry_check_rejects_asymmetric_table(self) -> None:
        table = dict(VALID_NEIGHBOURS)
        table[Tile.RIVER] = frozenset({Tile.RIVER, Tile.FARMLAND})

        with pytest.raises(AssertionError, match="Asymmetric adjacency"):
            _verify_valid_neighbours_symmetric(table)

    def test_symmetry_check_requires_every_kind(self) -> None:
        table = {Tile.RIVER: frozenset({Tile.RIVER})}

        with pytest.raises(AssertionError, match="cover every tile kind"):
            _verify_valid_neighbours_symmetric(table)


class TestTileDisplay:
    def test_glyphs(self) -> None:
        assert Tile.RIVER.glyph == "░░"
        assert Tile.WASTELAND.glyph == "▓▓"
        assert Tile.FARMLAND.glyph == "██"
        assert str(Tile.FARMLAND) == "██"

    def test_every_kind_has_a_two_character_glyph(self) -> None:
        assert set(TILE_GLYPHS) == set(Tile)
        assert all(len(glyph) == 2 for glyph in TILE_GLYPHS.values())

    def test_tile_values_fit_a_uint8_bitmask(self) -> None:
        assert [int(tile) for tile in Tile] == [0, 1, 2]
        assert ALL_TILES == frozenset(Tile)
        assert DEFAULT_TILE in ALL_TILES
