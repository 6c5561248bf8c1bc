"""
Tests for path and question loaders.
"""

import json

import pytest

from quizrace.data import load_path, load_questions
from quizrace.errors import InvalidPathError, InvalidQuestionError
from quizrace.models import TileType


def write_json(tmp_path, name, data):
    target = tmp_path / name
    target.write_text(json.dumps(data), encoding="utf-8")
    return target


class TestLoadPath:
    """Path files are JSON lists of tiles."""

    def test_load_path(self, tmp_path):
        target = write_json(tmp_path, "path.json", [
            {"x": 10, "y": 20, "type": "normal"},
            {"x": 11, "y": 21, "type": "mine"},
            {"x": 12, "y": 22},
            {"x": 13, "y": 23, "type": "finish"},
        ])
        path = load_path(target, checkpoints=[2], stage_names=["Start", "Hill"])
        assert path.length == 4
        assert path.tile_type(1) == TileType.MINE
        assert path.tile_type(2) == TileType.NORMAL
        assert path.tiles[0].x == 10
        assert path.checkpoints == (2,)
        assert path.stage_name(2) == "Hill"

    def test_unknown_tag_becomes_normal(self, tmp_path):
        target = write_json(tmp_path, "path.json", [{"type": "volcano"}, {"type": "finish"}])
        path = load_path(target)
        assert path.tile_type(0) == TileType.NORMAL

    def test_too_short(self, tmp_path):
        target = write_json(tmp_path, "path.json", [{"type": "finish"}])
        with pytest.raises(InvalidPathError):
            load_path(target)

    def test_not_a_list(self, tmp_path):
        target = write_json(tmp_path, "path.json", {"tiles": []})
        with pytest.raises(InvalidPathError):
            load_path(target)

    def test_bad_checkpoint(self, tmp_path):
        target = write_json(tmp_path, "path.json", [{}, {}, {}])
        with pytest.raises(InvalidPathError):
            load_path(target, checkpoints=[5])

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidPathError):
            load_path(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        target = tmp_path / "path.json"
        target.write_text("[{", encoding="utf-8")
        with pytest.raises(InvalidPathError):
            load_path(target)


class TestLoadQuestions:
    """Question banks use lettered answers."""

    def test_load_questions(self, tmp_path):
        target = write_json(tmp_path, "questions.json", {"questions": [
            {"id": 12, "question": "Second?", "options": ["A. w", "B. x", "C. y", "D. z"], "answer": "c"},
            {"id": 1, "question": "First?", "options": ["A. one", "B. two", "C. three", "D. four"], "answer": "B"},
        ]})
        bank = load_questions(target)
        assert len(bank) == 2

        first, second = bank.questions
        assert first.id == 1
        assert first.options == ["one", "two", "three", "four"]
        assert first.correct_index == 1
        assert first.stage == 1
        assert second.stage == 2
        assert second.correct_index == 2

    def test_stage_boundaries(self, tmp_path):
        options = ["a", "b", "c", "d"]
        target = write_json(tmp_path, "questions.json", {"questions": [
            {"id": 10, "question": "?", "options": options, "answer": "A"},
            {"id": 11, "question": "?", "options": options, "answer": "A"},
        ]})
        bank = load_questions(target)
        assert [q.stage for q in bank.questions] == [1, 2]

    def test_bad_answer_letter(self, tmp_path):
        target = write_json(tmp_path, "questions.json", {"questions": [
            {"id": 1, "question": "?", "options": ["a", "b", "c", "d"], "answer": "E"},
        ]})
        with pytest.raises(InvalidQuestionError):
            load_questions(target)

    def test_wrong_option_count(self, tmp_path):
        target = write_json(tmp_path, "questions.json", {"questions": [
            {"id": 1, "question": "?", "options": ["a", "b"], "answer": "A"},
        ]})
        with pytest.raises(InvalidQuestionError):
            load_questions(target)

    def test_missing_key(self, tmp_path):
        target = write_json(tmp_path, "questions.json", {"items": []})
        with pytest.raises(InvalidQuestionError):
            load_questions(target)
