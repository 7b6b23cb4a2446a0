#!/usr/bin/env python3
"""Benchmark Wave Function Collapse plot generation.

For each plot size this reports solve time, collapse iterations and the
resulting tile mix. With ``--seed-density`` a share of cells is restricted
to River or Farmland before solving. Those cells lose Wasteland as an escape
hatch, so they can end up between a River and a Farmland neighbour; the
contradiction rate column counts how often that happens.
"""

from __future__ import annotations

import argparse
import json
import random
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path

from plotgen.generators import PlotGenerator, WFCContradiction
from plotgen.tiles import Tile

PLOT_SIZES: tuple[int, ...] = (8, 16, 32, 64)

# Tiles left to a seeded cell; Wasteland is removed on purpose
SEEDED_TILES = frozenset({Tile.RIVER, Tile.FARMLAND})


@dataclass
class CaseResult:
    """Aggregated outcome of every run for one plot size."""

    size: int
    runs: int
    solved: int = 0
    contradictions: int = 0
    elapsed_ms: float = 0.0
    iterations: float = 0.0
    tile_share: dict[str, float] = field(default_factory=dict)

    @property
    def contradiction_rate(self) -> float:
        return self.contradictions / self.runs if self.runs else 0.0


def seed_cells(generator: PlotGenerator, density: float, rng: random.Random) -> int:
    """Restrict roughly ``density`` of the cells to SEEDED_TILES.

    Returns the number of cells restricted.
    """
    seeded = 0
    for x in range(generator.size):
        for y in range(generator.size):
            if rng.random() < density:
                generator.constrain_cell((x, y), SEEDED_TILES, propagate=False)
                seeded += 1
    return seeded


def run_case(
    size: int, runs: int, seed_density: float = 0.0, base_seed: int = 0
) -> CaseResult:
    """Generate ``runs`` plots of one size and aggregate their statistics.

    Time, iterations and tile share are averaged over solved runs only.
    """
    result = CaseResult(size=size, runs=runs)
    tile_totals = dict.fromkeys(Tile, 0)

    for i in range(runs):
        rng = random.Random(base_seed + size * 1_000 + i)
        generator = PlotGenerator(size, rng=rng)
        seed_cells(generator, seed_density, rng)

        start = time.perf_counter()
        try:
            iterations = generator.collapse()
        except WFCContradiction:
            result.contradictions += 1
            continue
        elapsed = time.perf_counter() - start

        result.solved += 1
        result.elapsed_ms += elapsed * 1000.0
        result.iterations += iterations
        for tile, count in generator.into_plot().counts().items():
            tile_totals[tile] += count

    if result.solved:
        result.elapsed_ms /= result.solved
        result.iterations /= result.solved
        cells = result.solved * size * size
        result.tile_share = {
            tile.name: tile_totals[tile] / cells for tile in Tile
        }

    return result


def print_results(results: list[CaseResult], seed_density: float) -> None:
    print("WFC Plot Benchmark")
    print(f"Seed density: {seed_density:.2f}")
    print()
    share_header = " ".join(f"{tile.name[:5]:>6}" for tile in Tile)
    print(f"{'Size':>8} {'ms':>9} {'Steps':>8} {'Fail%':>6} {share_header}")
    print("-" * (34 + 7 * len(Tile)))

    for result in results:
        shares = " ".join(
            f"{result.tile_share.get(tile.name, 0.0):6.1%}" for tile in Tile
        )
        print(
            f"{result.size:>5}x{result.size:<2} {result.elapsed_ms:9.2f} "
            f"{result.iterations:8.1f} {result.contradiction_rate:6.1%} {shares}"
        )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark WFC plot generation")
    parser.add_argument(
        "--runs", type=int, default=5, help="Plots per size (default: 5)"
    )
    parser.add_argument(
        "--seed-density",
        type=float,
        default=0.0,
        help="Share of cells restricted to River/Farmland before solving",
    )
    parser.add_argument("--save", type=Path, help="Write results as JSON")
    args = parser.parse_args(argv)

    if not 0.0 <= args.seed_density <= 1.0:
        parser.error("--seed-density must be between 0 and 1")

    results = [run_case(size, args.runs, args.seed_density) for size in PLOT_SIZES]
    print_results(results, args.seed_density)

    if args.save:
        args.save.write_text(json.dumps([asdict(r) for r in results], indent=2))
        print(f"\nSaved benchmark results to {args.save}")


if __name__ == "__main__":
    main()
