"""Monte Carlo runner and statistics for headless games."""

from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field

import numpy as np

from quizrace.config import RulesConfig
from quizrace.models import PathModel
from quizrace.simulation.dice import NumpyDie
from quizrace.simulation.events import EventKind, EventLog
from quizrace.simulation.game import AccuracyPolicy, GameResult, SyntheticQuestions, play_game
from quizrace.simulation.turn import TurnEngine


@dataclass
class TeamStatistics:
    """Aggregated statistics for a seat across simulations."""

    team_id: int
    team_name: str
    accuracy: float
    wins: int = 0
    avg_rank: float = 0.0
    avg_turns: float = 0.0
    best_rank: int = 99
    worst_rank: int = 1
    ranks: list[int] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        """Win percentage."""
        return self.wins / len(self.ranks) * 100 if self.ranks else 0


@dataclass
class EventStatistics:
    """Aggregated event counts across simulations."""

    checkpoints: int = 0
    mines: int = 0
    swaps: int = 0
    slides: int = 0
    skipped_turns: int = 0
    missing_questions: int = 0


@dataclass
class SimulationResults:
    """Results from Monte Carlo simulation."""

    num_simulations: int
    path_length: int
    team_stats: dict[int, TeamStatistics]
    game_results: list[GameResult]
    event_stats: EventStatistics = field(default_factory=EventStatistics)

    @property
    def unfinished_games(self) -> int:
        return sum(1 for g in self.game_results if not g.finished)

    @property
    def avg_rounds(self) -> float:
        finished = [g.rounds for g in self.game_results if g.finished]
        return float(np.mean(finished)) if finished else 0.0

    def get_win_probabilities(self) -> dict[int, float]:
        """Win probability per team, best first."""
        return {
            team_id: stats.win_rate
            for team_id, stats in sorted(
                self.team_stats.items(),
                key=lambda x: x[1].wins,
                reverse=True,
            )
        }

    def get_rank_distribution(self, team_id: int) -> dict[int, float]:
        """Finishing rank probability distribution for a team."""
        if team_id not in self.team_stats:
            return {}

        ranks = self.team_stats[team_id].ranks
        counts: dict[int, int] = defaultdict(int)
        for rank in ranks:
            counts[rank] += 1

        return {
            rank: count / len(ranks) * 100
            for rank, count in sorted(counts.items())
        }


def _run_single_simulation(args: tuple) -> tuple[GameResult, dict]:
    """Run a single game (for multiprocessing).

    Args:
        args: Tuple of (path_data, config_data, team_count, accuracy, max_rounds, seed)

    Returns:
        Tuple of (game_result, event_counts)
    """
    path_data, config_data, team_count, accuracy, max_rounds, seed = args

    path = PathModel.model_validate(path_data)
    config = RulesConfig.model_validate(config_data)
    rng = np.random.default_rng(seed)

    log = EventLog()
    engine = TurnEngine(
        path=path,
        question_source=SyntheticQuestions(rng=rng),
        die=NumpyDie(rng=rng),
        sink=log,
        config=config,
        team_count=team_count,
    )
    result = play_game(engine, AccuracyPolicy(accuracy=accuracy, rng=rng), max_rounds=max_rounds)

    effects = log.of_kind(EventKind.TILE_EFFECT)
    event_counts = {
        "checkpoints": len(log.of_kind(EventKind.CHECKPOINT)),
        "mines": sum(1 for e in effects if e.payload["tag"] == "mine"),
        "swaps": sum(1 for e in effects if e.payload.get("swapped_with") is not None),
        "slides": len(log.of_kind(EventKind.BONUS_SLIDE)),
        "skipped_turns": len(log.of_kind(EventKind.TURN_SKIP)),
        "missing_questions": len(log.of_kind(EventKind.QUESTION_MISSING)),
    }

    return result, event_counts


class MonteCarloRunner:
    """Runs many seeded headless games on one path."""

    def __init__(
        self,
        path: PathModel,
        team_count: int = 4,
        accuracy: float | list[float] = 0.7,
        config: RulesConfig | None = None,
        seed: int | None = None,
        max_rounds: int = 200,
    ):
        """Initialize Monte Carlo runner.

        Args:
            path: Race path
            team_count: Teams per game
            accuracy: Answer accuracy, shared or per seat
            config: Rule constants
            seed: Random seed for reproducibility
            max_rounds: Rounds after which a game is abandoned
        """
        self.path = path
        self.team_count = team_count
        self.accuracy = accuracy
        self.config = config if config is not None else RulesConfig()
        self.base_seed = seed if seed is not None else int(np.random.default_rng().integers(0, 2**31))
        self.max_rounds = max_rounds

    def run(
        self,
        num_simulations: int = 1000,
        parallel: bool = True,
        max_workers: int | None = None,
    ) -> SimulationResults:
        """Run Monte Carlo simulations.

        Args:
            num_simulations: Number of games to play
            parallel: Whether to use parallel processing
            max_workers: Maximum parallel workers (None = CPU count)

        Returns:
            SimulationResults with aggregated statistics
        """
        path_data = self.path.model_dump()
        config_data = self.config.model_dump()
        seeds = [self.base_seed + i for i in range(num_simulations)]

        args_list = [
            (path_data, config_data, self.team_count, self.accuracy, self.max_rounds, seed)
            for seed in seeds
        ]

        all_results: list[GameResult] = []
        all_event_counts: list[dict] = []

        if parallel and num_simulations > 1:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                for game_result, event_counts in executor.map(_run_single_simulation, args_list):
                    all_results.append(game_result)
                    all_event_counts.append(event_counts)
        else:
            for args in args_list:
                game_result, event_counts = _run_single_simulation(args)
                all_results.append(game_result)
                all_event_counts.append(event_counts)

        return SimulationResults(
            num_simulations=num_simulations,
            path_length=self.path.length,
            team_stats=self._aggregate_statistics(all_results),
            game_results=all_results,
            event_stats=self._aggregate_event_statistics(all_event_counts),
        )

    def run_quick(self, num_simulations: int = 100) -> SimulationResults:
        """Run without a process pool."""
        return self.run(num_simulations=num_simulations, parallel=False)

    def _accuracy_for(self, team_id: int) -> float:
        if isinstance(self.accuracy, list):
            return self.accuracy[team_id % len(self.accuracy)]
        return self.accuracy

    def _aggregate_statistics(self, results: list[GameResult]) -> dict[int, TeamStatistics]:
        """Aggregate per-seat statistics from all games."""
        stats: dict[int, TeamStatistics] = {}
        turns: dict[int, list[int]] = defaultdict(list)

        for game in results:
            for team in game.teams:
                if team.team_id not in stats:
                    stats[team.team_id] = TeamStatistics(
                        team_id=team.team_id,
                        team_name=team.team_name,
                        accuracy=self._accuracy_for(team.team_id),
                    )
                team_stat = stats[team.team_id]
                team_stat.ranks.append(team.rank)
                turns[team.team_id].append(team.turns_played)

                if game.winner_id == team.team_id:
                    team_stat.wins += 1

                team_stat.best_rank = min(team_stat.best_rank, team.rank)
                team_stat.worst_rank = max(team_stat.worst_rank, team.rank)

        for team_id, team_stat in stats.items():
            if team_stat.ranks:
                team_stat.avg_rank = float(np.mean(team_stat.ranks))
                team_stat.avg_turns = float(np.mean(turns[team_id]))

        return dict(sorted(stats.items()))

    def _aggregate_event_statistics(self, event_counts: list[dict]) -> EventStatistics:
        """Sum event counts from all games."""
        stats = EventStatistics()
        for counts in event_counts:
            stats.checkpoints += counts.get("checkpoints", 0)
            stats.mines += counts.get("mines", 0)
            stats.swaps += counts.get("swaps", 0)
            stats.slides += counts.get("slides", 0)
            stats.skipped_turns += counts.get("skipped_turns", 0)
            stats.missing_questions += counts.get("missing_questions", 0)
        return stats
