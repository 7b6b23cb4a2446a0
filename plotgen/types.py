from __future__ import annotations

# =============================================================================
# GRID COORDINATES
# =============================================================================

GridCoord = int  # Always integer cell position

# Plot coordinates, indexed [x][y] with 0 <= x, y < side length
GridPos = tuple[GridCoord, GridCoord]  # Example: (5, 3) = cell 5,3 on the plot

# Neighbour offset relative to a cell
GridOffset = tuple[int, int]  # Example: (-1, 1)

# =============================================================================
# RANDOMNESS
# =============================================================================

RandomSeed = int | str | None
