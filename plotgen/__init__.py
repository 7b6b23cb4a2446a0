"""Terrain plot generation with Wave Function Collapse."""

from .generators import (
    Neighbourhood,
    PlotGenerator,
    UncollapsedCellError,
    WFCContradiction,
)
from .plot import Plot, render_plot
from .tiles import Tile, valid_neighbours

__all__ = [
    "Neighbourhood",
    "Plot",
    "PlotGenerator",
    "Tile",
    "UncollapsedCellError",
    "WFCContradiction",
    "render_plot",
    "valid_neighbours",
]
