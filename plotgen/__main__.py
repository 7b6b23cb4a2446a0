"""Generate a terrain plot and print it."""

from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .generators import Neighbourhood, PlotGenerator, WFCContradiction
from .util import rng

logger = logging.getLogger(__name__)


def _parse_seed(value: str) -> int | str:
    return int(value) if value.lstrip("-").isdigit() else value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="plotgen", description="Generate a terrain plot with WFC"
    )
    parser.add_argument(
        "--seed",
        type=_parse_seed,
        default=config.RANDOM_SEED,
        help="Master seed for reproducible plots (default: random)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=config.PLOT_SIZE,
        help=f"Side length of the square plot (default: {config.PLOT_SIZE})",
    )
    parser.add_argument(
        "--four-connected",
        action="store_true",
        help="Constrain only orthogonal neighbours instead of all eight",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity"
    )
    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)

    rng.init(args.seed)
    neighbourhood = (
        Neighbourhood.VON_NEUMANN if args.four_connected else Neighbourhood.MOORE
    )

    try:
        generator = PlotGenerator(size=args.size, neighbourhood=neighbourhood)
        plot = generator.generate()
    except ValueError as e:
        parser.error(str(e))
    except WFCContradiction as e:
        logger.error(f"Plot generation failed: {e}")
        return 1

    print(plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
