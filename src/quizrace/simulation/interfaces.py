"""Collaborator interfaces the engine calls through, with no-op stubs."""

from typing import Protocol

from quizrace.models import Question
from quizrace.simulation.events import GameEvent


class QuestionSource(Protocol):
    """Supplies the question for a turn."""

    def next_question(self, stage: int) -> Question | None:
        """Return a question for the given 1-based stage, or None if none is available."""
        ...


class RandomSource(Protocol):
    """A fair six-sided die."""

    def roll(self) -> int:
        """Return an integer in [1, 6]."""
        ...


class MovementAnimator(Protocol):
    """Animates single-tile steps. The call returns once the step is shown."""

    def animate_step(self, team_id: int, from_index: int, to_index: int) -> None:
        ...


class OutcomeSink(Protocol):
    """Receives outcome events."""

    def emit(self, event: GameEvent) -> None:
        ...


class NullAnimator:
    """Animator for headless play: every step completes immediately."""

    def animate_step(self, team_id: int, from_index: int, to_index: int) -> None:
        return None


class NullSink:
    """Sink that discards every event."""

    def emit(self, event: GameEvent) -> None:
        return None
