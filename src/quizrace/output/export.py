"""Export simulation results to CSV and JSON."""

import csv
import json
from pathlib import Path
from typing import Any

from quizrace.analysis.montecarlo import SimulationResults
from quizrace.models import PARTS


class Exporter:
    """Exports simulation results to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_game_results_csv(
        self,
        results: SimulationResults,
        filename: str = "game_results.csv",
    ) -> Path:
        """Export every team's final state in every game to CSV.

        Args:
            results: Simulation results
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "simulation", "rank", "team_id", "team_name", "position",
                "turns", "correct", "wrong", "winner", "finished", "rounds",
                *(part.value for part in PARTS),
            ])

            for sim_idx, game in enumerate(results.game_results, 1):
                for team in game.teams:
                    writer.writerow([
                        sim_idx,
                        team.rank,
                        team.team_id,
                        team.team_name,
                        team.position,
                        team.turns_played,
                        team.correct,
                        team.wrong,
                        int(team.team_id == game.winner_id),
                        int(game.finished),
                        game.rounds,
                        *(team.durability.get(part.value, 0) for part in PARTS),
                    ])

        return filepath

    def export_statistics_json(
        self,
        results: SimulationResults,
        filename: str = "statistics.json",
    ) -> Path:
        """Export aggregated statistics to JSON.

        Args:
            results: Simulation results
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        stats_dict: dict[str, Any] = {
            "metadata": {
                "num_simulations": results.num_simulations,
                "path_length": results.path_length,
                "unfinished_games": results.unfinished_games,
                "avg_rounds": results.avg_rounds,
            },
            "win_probabilities": results.get_win_probabilities(),
            "events": {
                "checkpoints": results.event_stats.checkpoints,
                "mines": results.event_stats.mines,
                "swaps": results.event_stats.swaps,
                "slides": results.event_stats.slides,
                "skipped_turns": results.event_stats.skipped_turns,
                "missing_questions": results.event_stats.missing_questions,
            },
            "team_statistics": {},
        }

        for team_id, stats in results.team_stats.items():
            stats_dict["team_statistics"][team_id] = {
                "team_name": stats.team_name,
                "accuracy": stats.accuracy,
                "wins": stats.wins,
                "win_rate": stats.win_rate,
                "avg_rank": stats.avg_rank,
                "avg_turns": stats.avg_turns,
                "best_rank": stats.best_rank,
                "worst_rank": stats.worst_rank,
                "rank_distribution": results.get_rank_distribution(team_id),
            }

        with open(filepath, "w") as f:
            json.dump(stats_dict, f, indent=2)

        return filepath

    def export_all(
        self,
        results: SimulationResults,
        prefix: str = "",
    ) -> dict[str, Path]:
        """Export all result formats.

        Args:
            results: Simulation results
            prefix: Optional prefix for filenames

        Returns:
            Dictionary of format -> filepath
        """
        prefix = f"{prefix}_" if prefix else ""

        return {
            "games_csv": self.export_game_results_csv(
                results, f"{prefix}game_results.csv"
            ),
            "statistics_json": self.export_statistics_json(
                results, f"{prefix}statistics.json"
            ),
        }
