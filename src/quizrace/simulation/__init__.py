"""Rules engine components."""

from .decay import DecayOutcome, DecayReport, apply_decay
from .dice import DiceResolver, Movement, MovementRule, NumpyDie, SecureDie
from .events import EventKind, EventLog, GameEvent
from .game import AccuracyPolicy, GameResult, SyntheticQuestions, TeamResult, play_game
from .interfaces import (
    MovementAnimator,
    NullAnimator,
    NullSink,
    OutcomeSink,
    QuestionSource,
    RandomSource,
)
from .tiles import TILE_DESCRIPTIONS, TileEffectResolver, TileOutcome
from .turn import Phase, TurnContext, TurnEngine

__all__ = [
    "AccuracyPolicy",
    "DecayOutcome",
    "DecayReport",
    "DiceResolver",
    "EventKind",
    "EventLog",
    "GameEvent",
    "GameResult",
    "Movement",
    "MovementAnimator",
    "MovementRule",
    "NullAnimator",
    "NullSink",
    "NumpyDie",
    "OutcomeSink",
    "Phase",
    "QuestionSource",
    "RandomSource",
    "SecureDie",
    "SyntheticQuestions",
    "TILE_DESCRIPTIONS",
    "TeamResult",
    "TileEffectResolver",
    "TileOutcome",
    "TurnContext",
    "TurnEngine",
    "apply_decay",
    "play_game",
]
