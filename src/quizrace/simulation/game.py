"""Headless game driver for bots and batch simulation."""

from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from quizrace.models import Question, Team
from quizrace.simulation.turn import Phase, TurnEngine


class AnswerPolicy(Protocol):
    """Chooses an answer for a team, or None to let the clock run out."""

    def choose(self, team: Team, question: Question) -> int | None:
        ...


class AccuracyPolicy:
    """Answers correctly with a fixed probability per team."""

    def __init__(
        self,
        accuracy: float | list[float] = 0.7,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the policy.

        Args:
            accuracy: Probability of a correct answer, shared or per team id
            rng: Random number generator
        """
        self.accuracy = accuracy
        self.rng = rng if rng is not None else np.random.default_rng()

    def accuracy_for(self, team: Team) -> float:
        if isinstance(self.accuracy, list):
            return self.accuracy[team.id % len(self.accuracy)]
        return self.accuracy

    def choose(self, team: Team, question: Question) -> int | None:
        if self.rng.random() < self.accuracy_for(team):
            return question.correct_index
        wrong = [i for i in range(len(question.options)) if i != question.correct_index]
        return int(self.rng.choice(wrong))


class SyntheticQuestions:
    """Question source producing placeholder questions with a random answer."""

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.asked = 0

    def next_question(self, stage: int) -> Question:
        self.asked += 1
        return Question(
            id=self.asked,
            stage=stage,
            text=f"Question {self.asked}",
            options=["A", "B", "C", "D"],
            correct_index=int(self.rng.integers(0, 4)),
        )


@dataclass
class TeamResult:
    """Final state of a team after a game."""

    team_id: int
    team_name: str
    rank: int
    position: int
    turns_played: int
    correct: int
    wrong: int
    durability: dict[str, int] = field(default_factory=dict)


@dataclass
class GameResult:
    """Outcome of a headless game."""

    winner_id: int | None
    rounds: int
    finished: bool
    teams: list[TeamResult] = field(default_factory=list)


def play_game(engine: TurnEngine, policy: AnswerPolicy, max_rounds: int = 200) -> GameResult:
    """Drive an engine until a team wins or the round limit is hit.

    Args:
        engine: Fresh engine
        policy: Chooses answers for every team
        max_rounds: Rounds to play before giving up

    Returns:
        GameResult with teams ranked by final position
    """
    while not engine.is_over and engine.round_number <= max_rounds:
        team = engine.current_team
        question = engine.begin_turn()

        if question is not None:
            answer = policy.choose(team, question)
            if answer is None:
                engine.expire_timer()
            else:
                engine.submit_answer(answer)

        if engine.phase == Phase.AWAITING_ROLL:
            engine.roll()

    return summarize(engine)


def summarize(engine: TurnEngine) -> GameResult:
    """Build a GameResult from an engine's current state."""
    standings = engine.standings()
    if engine.winner is not None:
        # The winner ranks first even if a swap left others level with it
        standings.remove(engine.winner)
        standings.insert(0, engine.winner)

    results = [
        TeamResult(
            team_id=team.id,
            team_name=team.name,
            rank=rank,
            position=team.position,
            turns_played=team.turn_count,
            correct=team.correct_count,
            wrong=team.wrong_count,
            durability={p.value: v for p, v in team.durability.items()},
        )
        for rank, team in enumerate(standings, 1)
    ]

    return GameResult(
        winner_id=engine.winner.id if engine.winner is not None else None,
        rounds=engine.round_number,
        finished=engine.is_over,
        teams=results,
    )
