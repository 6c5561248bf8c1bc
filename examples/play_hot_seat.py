#!/usr/bin/env python3
"""Example: play a hot-seat quiz race in the terminal.

Teams share one keyboard. Each turn the active team answers a question
(A-D); a correct answer unlocks the roll.

Usage:
    python examples/play_hot_seat.py PATH_JSON QUESTIONS_JSON [--teams N]

Examples:
    python examples/play_hot_seat.py data/path.json data/questions.json --teams 3
    python examples/play_hot_seat.py data/path.json data/questions.json --checkpoints 20 45 70
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pydantic import ValidationError

from quizrace.config import RulesConfig
from quizrace.data import load_path, load_questions
from quizrace.data.loaders import ANSWER_LETTERS
from quizrace.errors import QuizRaceError
from quizrace.logging import configure_logging
from quizrace.output import ConsoleOutput
from quizrace.simulation import NumpyDie, Phase, SecureDie, TurnEngine
from quizrace.simulation.game import summarize


def ask(question) -> int | None:
    """Prompt until a letter is given. An empty line lets the clock run out."""
    print(f"\n{question.text}")
    for letter, option in zip(ANSWER_LETTERS, question.options):
        print(f"  {letter}. {option}")

    while True:
        answer = input("Answer (A-D, empty = time out): ").strip().upper()
        if not answer:
            return None
        if answer in ANSWER_LETTERS:
            return ANSWER_LETTERS[answer]
        print("Please type A, B, C or D.")


def main():
    parser = argparse.ArgumentParser(description="Play a hot-seat quiz race")
    parser.add_argument("path_file", help="JSON list of {x, y, type} tiles")
    parser.add_argument("questions_file", help="JSON question bank")
    parser.add_argument(
        "--teams",
        "-t",
        type=int,
        default=2,
        help="Number of teams (default: 2)",
    )
    parser.add_argument(
        "--checkpoints",
        type=int,
        nargs="*",
        default=[],
        help="Checkpoint tile indices",
    )
    parser.add_argument(
        "--rules",
        help="JSON file with rule overrides",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed a numpy die instead of the OS entropy die",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show per-step debug logging",
    )
    args = parser.parse_args()

    try:
        path = load_path(args.path_file, checkpoints=args.checkpoints)
        bank = load_questions(args.questions_file)
        config = RulesConfig.from_json(args.rules) if args.rules else RulesConfig()

        die = NumpyDie(np.random.default_rng(args.seed)) if args.seed is not None else SecureDie()

        engine = TurnEngine(
            path=path,
            question_source=bank,
            die=die,
            config=config,
            team_count=args.teams,
        )
    except (QuizRaceError, ValidationError, OSError) as e:
        print(f"Error: {e}")
        return 1

    configure_logging(logging.DEBUG if args.verbose else logging.INFO, engine=engine)

    print(f"{len(bank)} questions, {path.length} tiles, {len(engine.teams)} teams")

    try:
        while not engine.is_over:
            team = engine.current_team
            question = engine.begin_turn()

            if question is not None:
                print(f"\n>>> {team.name}, stage {question.stage}")
                answer = ask(question)
                if answer is None:
                    engine.expire_timer()
                else:
                    engine.submit_answer(answer)

            if engine.phase == Phase.AWAITING_ROLL:
                input(f"{team.name}: press Enter to roll...")
                engine.roll()
                ConsoleOutput.print_standings(engine.standings(), path.finish_index)
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted.")

    ConsoleOutput.print_game_result(summarize(engine))
    return 0


if __name__ == "__main__":
    sys.exit(main())
