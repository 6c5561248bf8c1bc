"""Load paths and question banks from JSON files."""

import json
import logging
import math
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from quizrace.errors import InvalidPathError, InvalidQuestionError
from quizrace.models import PathModel, Question, QuestionBank, Tile, TileType

logger = logging.getLogger(__name__)

# Questions are grouped into stages of ten by id
QUESTIONS_PER_STAGE = 10

ANSWER_LETTERS = {"A": 0, "B": 1, "C": 2, "D": 3}
_OPTION_PREFIX = re.compile(r"^[A-D]\.\s*")

_KNOWN_TAGS = {tag.value for tag in TileType}


def _read_json(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _parse_tile(node: dict[str, Any], index: int) -> Tile:
    tag = node.get("type") or TileType.NORMAL.value
    if tag not in _KNOWN_TAGS:
        logger.warning(f"Tile {index}: unknown type {tag!r}, treating as normal")
        tag = TileType.NORMAL.value
    return Tile(x=node.get("x", 0.0), y=node.get("y", 0.0), type=TileType(tag))


def load_path(
    path: str | Path,
    checkpoints: list[int] | None = None,
    stage_names: list[str] | None = None,
) -> PathModel:
    """Load a race path from a JSON list of ``{x, y, type}`` nodes.

    Args:
        path: JSON file
        checkpoints: Checkpoint indices (none if omitted)
        stage_names: Optional stage names, starting with the start area

    Returns:
        PathModel

    Raises:
        InvalidPathError: The file is unreadable, not a list, or the path is invalid
    """
    try:
        nodes = _read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidPathError(f"cannot read path file {path}: {e}") from e

    if not isinstance(nodes, list):
        raise InvalidPathError(f"path file {path} must contain a JSON list")

    try:
        tiles = tuple(_parse_tile(node, i) for i, node in enumerate(nodes))
        model = PathModel(
            tiles=tiles,
            checkpoints=tuple(checkpoints or ()),
            stage_names=tuple(stage_names or ()),
        )
    except (AttributeError, ValidationError) as e:
        raise InvalidPathError(f"invalid path in {path}: {e}") from e

    if model.length < 2:
        raise InvalidPathError(f"path in {path} needs at least 2 tiles, got {model.length}")

    logger.info(f"Loaded {model.length} tiles from {path}")
    return model


def _parse_question(raw: dict[str, Any]) -> Question:
    question_id = int(raw["id"])
    answer = str(raw["answer"]).strip().upper()
    if answer not in ANSWER_LETTERS:
        raise ValueError(f"question {question_id}: answer {raw['answer']!r} is not A-D")
    return Question(
        id=question_id,
        stage=max(1, math.ceil(question_id / QUESTIONS_PER_STAGE)),
        text=raw["question"],
        options=[_OPTION_PREFIX.sub("", option) for option in raw["options"]],
        correct_index=ANSWER_LETTERS[answer],
    )


def load_questions(path: str | Path) -> QuestionBank:
    """Load a question bank.

    The file holds ``{"questions": [{"id", "question", "options", "answer"}]}``
    where options may carry "A. " style prefixes and the answer is a letter.

    Raises:
        InvalidQuestionError: The file cannot be read or a question is malformed
    """
    try:
        data = _read_json(path)
        questions = [_parse_question(raw) for raw in data["questions"]]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise InvalidQuestionError(f"cannot load questions from {path}: {e}") from e

    logger.info(f"Loaded {len(questions)} questions from {path}")
    return QuestionBank(questions=questions)
