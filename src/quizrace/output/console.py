"""Console output formatting."""

from quizrace.analysis.montecarlo import SimulationResults
from quizrace.models import PARTS, Team
from quizrace.simulation.game import GameResult


def _durability_str(durability: dict[str, int]) -> str:
    return "/".join(str(durability.get(part.value, 0)) for part in PARTS)


class ConsoleOutput:
    """Formats game results for console display."""

    @staticmethod
    def print_standings(teams: list[Team], finish_index: int) -> None:
        """Print current standings.

        Args:
            teams: Teams ordered leader first
            finish_index: Index of the finish tile
        """
        print("\n" + "=" * 60)
        print("STANDINGS")
        print("=" * 60)
        print(f"{'Pos':<4} {'Team':<16} {'Tile':<10} {'E/T/S':<8} {'Status':<15}")
        print("-" * 60)

        for pos, team in enumerate(teams, 1):
            tile = f"{team.position}/{finish_index}" if team.on_path else "staging"
            flags = []
            if team.status.is_frozen:
                flags.append("frozen")
            if team.status.immune_turns_remaining or team.status.immune_next_turn:
                flags.append("immune")
            if team.status.has_double_dice:
                flags.append("x2")
            durability = {p.value: v for p, v in team.durability.items()}

            print(
                f"{pos:<4} "
                f"{team.name:<16} "
                f"{tile:<10} "
                f"{_durability_str(durability):<8} "
                f"{','.join(flags):<15}"
            )

        print("=" * 60)

    @staticmethod
    def print_game_result(result: GameResult) -> None:
        """Print the final result of one game.

        Args:
            result: Result from play_game
        """
        print("\n" + "=" * 70)
        if result.finished:
            print(f"GAME RESULT - finished in round {result.rounds}")
        else:
            print(f"GAME RESULT - abandoned after round {result.rounds - 1}")
        print("=" * 70)
        print(f"{'Pos':<4} {'Team':<16} {'Tile':<6} {'Turns':<6} {'Right':<6} {'Wrong':<6} {'E/T/S':<8}")
        print("-" * 70)

        for team in result.teams:
            tile = str(team.position) if team.position >= 0 else "-"
            marker = " WINNER" if team.team_id == result.winner_id else ""
            print(
                f"{team.rank:<4} "
                f"{team.team_name:<16} "
                f"{tile:<6} "
                f"{team.turns_played:<6} "
                f"{team.correct:<6} "
                f"{team.wrong:<6} "
                f"{_durability_str(team.durability):<8}"
                f"{marker}"
            )

        print("=" * 70)

    @staticmethod
    def print_monte_carlo_summary(results: SimulationResults) -> None:
        """Print Monte Carlo simulation summary.

        Args:
            results: Aggregated simulation results
        """
        print("\n" + "=" * 80)
        print(f"MONTE CARLO SIMULATION RESULTS - {results.path_length} tiles")
        print(f"({results.num_simulations} games)")
        print("=" * 80)

        print("\nWIN PROBABILITIES:")
        print("-" * 50)
        for team_id, prob in results.get_win_probabilities().items():
            stats = results.team_stats[team_id]
            bar = "#" * int(prob / 2)
            print(f"{stats.team_name:<16} ({stats.accuracy:.0%}) {prob:5.1f}% {bar}")

        print("\nAVERAGE FINISHING RANK:")
        print("-" * 50)
        avg_sorted = sorted(results.team_stats.values(), key=lambda s: s.avg_rank)
        for stats in avg_sorted:
            if stats.ranks:
                print(
                    f"{stats.team_name:<16} "
                    f"Avg: {stats.avg_rank:4.2f}  "
                    f"Best: {stats.best_rank:2d}  "
                    f"Worst: {stats.worst_rank:2d}  "
                    f"Turns: {stats.avg_turns:5.1f}"
                )

        event_stats = results.event_stats
        n = results.num_simulations
        print("\nGAME EVENT STATISTICS:")
        print("-" * 50)
        print(f"  Average rounds:    {results.avg_rounds:6.1f}")
        print(f"  Unfinished games:  {results.unfinished_games:4d}")
        if n > 0:
            print(f"  Checkpoints:       {event_stats.checkpoints:4d} total ({event_stats.checkpoints / n:.2f}/game)")
            print(f"  Mines:             {event_stats.mines:4d} total ({event_stats.mines / n:.2f}/game)")
            print(f"  Swaps:             {event_stats.swaps:4d} total ({event_stats.swaps / n:.2f}/game)")
            print(f"  Bonus slides:      {event_stats.slides:4d} total ({event_stats.slides / n:.2f}/game)")
            print(f"  Frozen turns:      {event_stats.skipped_turns:4d} total ({event_stats.skipped_turns / n:.2f}/game)")

        print("=" * 80)
