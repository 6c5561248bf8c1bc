import logging
import re
from typing import TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
    from quizrace.simulation.turn import TurnEngine


COLOR = {
    "move": "bold green",
    "checkpoint": "bold cyan",
    "damage": "bold red",
    "victory": "bold yellow",
    "warning": "bold red",
    "prefix": "dim",
}

_HIGHLIGHTS = [
    (re.compile(r"\bMove\b"), COLOR["move"]),
    (re.compile(r"\bCheckpoint\b"), COLOR["checkpoint"]),
    (re.compile(r"\b(Mine!|Melee|wears down|Lost!)"), COLOR["damage"]),
    (re.compile(r"\bVICTORY\b"), COLOR["victory"]),
]


class TurnContextFilter(logging.Filter):
    """Stamp every record with the engine's round and active team."""

    def __init__(self, engine: "TurnEngine", name: str = "") -> None:
        super().__init__(name)
        self.engine = engine

    def filter(self, record: logging.LogRecord) -> bool:
        record.round = self.engine.round_number
        record.team_name = self.engine.current_team.name
        return True


class RichMarkupFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        round_number = getattr(record, "round", 0)
        team_name = getattr(record, "team_name", "_")
        prefix = f"R{round_number}.{team_name}"

        styled = record.getMessage()
        for pattern, style in _HIGHLIGHTS:
            styled = pattern.sub(lambda m, s=style: f"[{s}]{m.group(0)}[/{s}]", styled)

        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['warning']}]{styled}[/{COLOR['warning']}]"

        return f"[{COLOR['prefix']}]{prefix}[/{COLOR['prefix']}]  {styled}"


def configure_logging(level: int = logging.INFO, engine: "TurnEngine | None" = None) -> None:
    logger = logging.getLogger("quizrace")
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(RichMarkupFormatter())
    if engine is not None:
        handler.addFilter(TurnContextFilter(engine))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
