"""Data models for the quiz race."""

from .path import BONUS_TILES, PathModel, Tile, TileType
from .question import Question, QuestionBank
from .team import DEFAULT_TEAMS, PARTS, STAGING, Part, StatusEffects, Team, create_teams

__all__ = [
    "BONUS_TILES",
    "DEFAULT_TEAMS",
    "PARTS",
    "Part",
    "PathModel",
    "Question",
    "QuestionBank",
    "STAGING",
    "StatusEffects",
    "Team",
    "Tile",
    "TileType",
    "create_teams",
]
