"""Plot generation algorithms.

- PlotGenerator: Wave Function Collapse engine for square terrain plots
- WFCContradiction: raised when a selected cell has no candidates left
- UncollapsedCellError: raised when extracting a plot with open cells
"""

from .plot_generator import (
    Neighbourhood,
    PlotGenerator,
    UncollapsedCellError,
    WFCContradiction,
)

__all__ = [
    "Neighbourhood",
    "PlotGenerator",
    "UncollapsedCellError",
    "WFCContradiction",
]
