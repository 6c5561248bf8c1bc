#!/usr/bin/env python3
"""Quick simulation example using a synthetic path.

This example needs no path or question files, making it useful for
exercising the rules engine.

Usage:
    python examples/quick_simulation.py
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from quizrace.analysis import MonteCarloRunner
from quizrace.config import RulesConfig
from quizrace.logging import configure_logging
from quizrace.models import PathModel, TileType
from quizrace.output import ConsoleOutput, Exporter
from quizrace.simulation import AccuracyPolicy, NumpyDie, SyntheticQuestions, TurnEngine, play_game


def create_demo_path() -> PathModel:
    """Create a 40-tile path with three stages and a spread of effects."""
    tags = [TileType.NORMAL] * 40
    specials = {
        4: TileType.MINE,
        6: TileType.REPAIR_ENGINE,
        9: TileType.DOUBLE_DICE,
        12: TileType.DAMAGE_ALL,
        14: TileType.SWAP,
        17: TileType.IMMUNE,
        19: TileType.DROP_TIRE,
        22: TileType.TELEPORT,
        25: TileType.SKIP_TURN,
        27: TileType.REPAIR_ALL,
        30: TileType.DROP_STEERING,
        33: TileType.REPAIR_ONE,
        35: TileType.TRAP,
        39: TileType.FINISH,
    }
    for index, tag in specials.items():
        tags[index] = tag

    return PathModel.from_tags(
        tags,
        checkpoints=[13, 26],
        stage_names=["Start", "Valley", "Capital"],
    )


def main():
    print("Quiz Race Simulation - Quick Example")
    print("=" * 50)

    path = create_demo_path()
    config = RulesConfig()
    accuracy = [0.9, 0.7, 0.5, 0.3]

    print(f"Tiles: {path.length}")
    print(f"Checkpoints: {list(path.checkpoints)}")
    print(f"Teams: {len(accuracy)}")
    print()

    # Run a single game first to show the turn log
    print("Running single game...")
    print("-" * 50)

    rng = np.random.default_rng(42)
    engine = TurnEngine(
        path=path,
        question_source=SyntheticQuestions(rng=rng),
        die=NumpyDie(rng=rng),
        config=config,
        team_count=len(accuracy),
    )
    configure_logging(logging.INFO, engine=engine)

    result = play_game(engine, AccuracyPolicy(accuracy=accuracy, rng=rng))
    ConsoleOutput.print_game_result(result)

    # Monte Carlo runs are quiet
    configure_logging(logging.WARNING)

    print("\n" + "=" * 50)
    print("Running Monte Carlo simulation (200 games)...")
    print("=" * 50)

    runner = MonteCarloRunner(
        path=path,
        team_count=len(accuracy),
        accuracy=accuracy,
        config=config,
        seed=123,
    )

    # Use quick run (non-parallel) for simplicity
    results = runner.run_quick(num_simulations=200)

    ConsoleOutput.print_monte_carlo_summary(results)

    print("\nExporting results...")
    exporter = Exporter(output_dir="output")
    files = exporter.export_all(results, prefix="quick")
    for fmt, filepath in files.items():
        print(f"  {fmt}: {filepath}")

    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
