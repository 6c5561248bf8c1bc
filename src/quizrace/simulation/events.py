"""Outcome events emitted by the engine for presentation layers."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventKind(str, Enum):
    """Types of game events."""

    TURN_START = "turn_start"
    QUESTION = "question"
    QUESTION_MISSING = "question_missing"
    ANSWER_CORRECT = "answer_correct"
    ANSWER_WRONG = "answer_wrong"
    COMBO = "combo"
    ROLL = "roll"
    MOVE = "move"
    CHECKPOINT = "checkpoint"
    TILE_EFFECT = "tile_effect"
    BONUS_SLIDE = "bonus_slide"
    TURN_SKIP = "turn_skip"
    DECAY = "decay"
    VICTORY = "victory"


@dataclass
class GameEvent:
    """Represents a game event."""

    kind: EventKind
    team_id: int
    round: int = 0
    payload: dict[str, Any] = field(default_factory=dict)


class EventLog:
    """Records events and forwards them to subscribed listeners."""

    def __init__(self):
        self.events: list[GameEvent] = []
        self._listeners: list[Callable[[GameEvent], None]] = []

    def subscribe(self, listener: Callable[[GameEvent], None]) -> None:
        """Call ``listener`` for every event emitted from now on."""
        self._listeners.append(listener)

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)
        for listener in self._listeners:
            listener(event)

    def of_kind(self, kind: EventKind) -> list[GameEvent]:
        """Events of one kind, in emission order."""
        return [e for e in self.events if e.kind == kind]

    def reset(self) -> None:
        """Drop recorded events (listeners stay subscribed)."""
        self.events = []
