"""
Tests for the turn engine - phases, movement, checkpoints and victory.
"""

import pytest

from quizrace.errors import InvalidPathError, InvalidTeamCountError
from quizrace.models import STAGING, Part, PathModel
from quizrace.simulation import EventKind, Phase, TurnEngine
from tests.scenario import FixedQuestions, road


class TestEngineSetup:
    """Construction and validation."""

    def test_initial_state(self, scenario):
        game = scenario(road(10), team_count=3)
        engine = game.engine
        assert engine.phase == Phase.AWAITING_QUESTION
        assert engine.current_turn == 0
        assert engine.round_number == 1
        assert engine.winner is None
        assert all(t.position == STAGING for t in engine.teams)

    @pytest.mark.parametrize("tags", [[], ["finish"]])
    def test_short_path_rejected(self, tags):
        with pytest.raises(InvalidPathError):
            TurnEngine(PathModel.from_tags(tags), FixedQuestions())

    def test_single_team_rejected(self):
        with pytest.raises(InvalidTeamCountError):
            TurnEngine(PathModel.from_tags(road(10)), FixedQuestions(), team_count=1)


class TestPhases:
    """Operations are only honored in their own phase."""

    def test_full_turn_phase_flow(self, scenario):
        game = scenario(road(12), [3])
        engine = game.engine

        question = engine.begin_turn()
        assert question is not None
        assert engine.phase == Phase.AWAITING_QUESTION

        assert engine.submit_answer(question.correct_index) is True
        assert engine.phase == Phase.AWAITING_ROLL

        engine.roll()
        assert engine.current_turn == 1
        assert engine.phase == Phase.AWAITING_QUESTION

        kinds = [e.kind for e in game.log.events]
        assert kinds == [
            EventKind.TURN_START,
            EventKind.QUESTION,
            EventKind.ANSWER_CORRECT,
            EventKind.ROLL,
            EventKind.MOVE,
            EventKind.DECAY,
        ]

    def test_roll_before_answer_ignored(self, scenario):
        game = scenario(road(12), [3])
        game.engine.begin_turn()
        assert game.engine.roll() is None
        assert game.mock_die.roll.call_count == 0
        assert game.engine.phase == Phase.AWAITING_QUESTION

    def test_answer_before_question_ignored(self, scenario):
        game = scenario(road(12))
        assert game.engine.submit_answer(0) is None
        game.engine.expire_timer()
        assert game.engine.current_turn == 0
        assert game.log.events == []

    def test_begin_turn_during_roll_ignored(self, scenario):
        game = scenario(road(12))
        question = game.engine.begin_turn()
        game.engine.submit_answer(question.correct_index)
        assert game.engine.begin_turn() is None
        assert game.engine.phase == Phase.AWAITING_ROLL

    def test_begin_turn_twice_returns_pending_question(self, scenario):
        game = scenario(road(12))
        first = game.engine.begin_turn()
        second = game.engine.begin_turn()
        assert first is second
        assert len(game.events(EventKind.TURN_START)) == 1
        assert len(game.questions.stages) == 1

    def test_calls_after_game_over_ignored(self, scenario):
        game = scenario(road(6), [5, 2])
        game.play_correct_turn()
        assert game.engine.is_over
        assert game.engine.begin_turn() is None
        assert game.engine.roll() is None
        assert game.mock_die.roll.call_count == 1


class TestAnswers:
    """Correct, wrong and timed-out answers."""

    def test_correct_answer_enters_path(self, scenario):
        game = scenario(road(12))
        question = game.engine.begin_turn()
        game.engine.submit_answer(question.correct_index)
        team = game.get_team(0)
        assert team.position == 0
        assert team.correct_count == 1
        assert team.combo_count == 1

    def test_wrong_answer_ends_turn(self, scenario):
        game = scenario(road(12))
        team = game.get_team(0)
        team.combo_count = 2
        game.play_wrong_turn()
        assert team.position == STAGING
        assert team.combo_count == 0
        assert team.wrong_count == 1
        assert team.turn_count == 0
        assert game.engine.current_turn == 1
        assert game.mock_die.roll.call_count == 0

    def test_timeout_counts_as_wrong(self, scenario):
        game = scenario(road(12))
        game.engine.begin_turn()
        game.engine.expire_timer()
        (event,) = game.events(EventKind.ANSWER_WRONG)
        assert event.payload["timeout"] is True
        assert game.get_team(0).wrong_count == 1
        assert game.engine.current_turn == 1

    def test_rotation_and_rounds(self, scenario):
        game = scenario(road(12), team_count=3)
        for expected in [1, 2, 0]:
            game.play_wrong_turn()
            assert game.engine.current_turn == expected
        assert game.engine.round_number == 2

    def test_question_stage_follows_position(self, scenario):
        game = scenario(road(12), checkpoints=[5])
        game.place(0, 6)
        game.engine.begin_turn()
        assert game.questions.stages == [2]

    def test_missing_question_unlocks_roll(self, scenario):
        game = scenario(road(12), [3], questions=FixedQuestions(available=False))
        assert game.engine.begin_turn() is None
        assert game.engine.phase == Phase.AWAITING_ROLL
        assert game.get_team(0).position == 0
        assert len(game.events(EventKind.QUESTION_MISSING)) == 1

        game.engine.roll()
        assert game.get_team(0).position == 3


class TestMovement:
    """Rolls move the team one tile at a time."""

    def test_staging_to_mine(self, scenario):
        game = scenario(road(10, {4: "mine"}), [4])
        game.play_correct_turn()
        team = game.get_team(0)
        assert team.position == 4
        assert team.all_broken()
        assert team.turn_count == 1
        assert game.animator.steps == [(0, 0, 1), (0, 1, 2), (0, 2, 3), (0, 3, 4)]
        assert game.engine.current_turn == 1

        (effect,) = game.events(EventKind.TILE_EFFECT)
        assert effect.payload["tag"] == "mine"

    def test_roll_one_jumps_to_next_checkpoint(self, scenario):
        game = scenario(road(12), [1], checkpoints=[7])
        game.play_correct_turn()
        assert game.get_team(0).position == 7
        assert len(game.animator.steps) == 7
        assert game.events(EventKind.CHECKPOINT) == []

    def test_roll_one_stops_at_first_checkpoint(self, scenario):
        game = scenario(road(12), [1], checkpoints=[4, 7])
        game.play_correct_turn()
        assert game.get_team(0).position == 4

    def test_roll_one_without_checkpoint_moves_one(self, scenario):
        game = scenario(road(12), [1])
        game.play_correct_turn()
        assert game.get_team(0).position == 1

    def test_combo_bonus(self, scenario):
        game = scenario(road(12), [2])
        game.get_team(0).combo_count = 2
        game.play_correct_turn()
        assert game.get_team(0).position == 3
        (combo,) = game.events(EventKind.COMBO)
        assert combo.payload["bonus"] == 1

    def test_no_combo_below_threshold(self, scenario):
        game = scenario(road(12), [2])
        game.play_correct_turn()
        assert game.get_team(0).position == 2
        assert game.events(EventKind.COMBO) == []

    def test_double_dice(self, scenario):
        game = scenario(road(12), [3])
        game.get_team(0).status.has_double_dice = True
        game.play_correct_turn()
        team = game.get_team(0)
        assert team.position == 6
        assert not team.status.has_double_dice

    def test_steering_broken_moves_backward(self, scenario):
        game = scenario(road(12), [4, 3])
        team = game.place(0, 6)
        team.break_part(Part.STEERING)
        game.play_correct_turn()
        assert team.position == 2
        assert game.animator.steps == [(0, 6, 5), (0, 5, 4), (0, 4, 3), (0, 3, 2)]

    def test_backward_move_clamped_at_start(self, scenario):
        game = scenario(road(12), [5, 1])
        team = game.place(0, 2)
        team.break_part(Part.STEERING)
        game.play_correct_turn()
        assert team.position == 0

    def test_no_movement_skips_tile(self, scenario):
        game = scenario(road(10, {0: "skip_turn"}), [3])
        team = game.place(0, 0)
        team.damage_all(10)
        game.play_correct_turn()
        assert team.position == 0
        assert not team.status.is_frozen
        assert game.events(EventKind.MOVE) == []
        assert game.events(EventKind.TILE_EFFECT) == []
        assert len(game.events(EventKind.DECAY)) == 1
        assert game.engine.current_turn == 1

    def test_turn_end_decay(self, scenario):
        game = scenario(road(12), [2])
        team = game.place(0, 0)
        team.turn_count = 1
        game.play_correct_turn()
        assert team.turn_count == 2
        assert team.durability[Part.TIRES] == 2


class TestCheckpoints:
    """Passing a checkpoint pauses for repairs."""

    def test_passing_checkpoint_repairs_and_grants_immunity(self, scenario):
        game = scenario(road(12), [5], checkpoints=[3])
        team = game.get_team(0)
        team.damage(Part.ENGINE, 2)
        team.turn_count = 1
        game.play_correct_turn()

        assert team.position == 5
        assert team.durability[Part.ENGINE] == 2
        # The granted immunity is spent on this turn's decay
        assert team.status.immune_turns_remaining == 0
        assert team.durability[Part.TIRES] == 3

        (checkpoint,) = game.events(EventKind.CHECKPOINT)
        assert checkpoint.payload["index"] == 3
        (decay,) = game.events(EventKind.DECAY)
        assert decay.payload["outcome"] == "immune"

    def test_landing_on_checkpoint_is_not_a_pause(self, scenario):
        game = scenario(road(12), [3], checkpoints=[3])
        game.play_correct_turn()
        assert game.events(EventKind.CHECKPOINT) == []

    def test_passing_two_checkpoints(self, scenario):
        game = scenario(road(20), [6], checkpoints=[2, 4])
        team = game.get_team(0)
        team.damage_all(2)
        game.play_correct_turn()
        assert len(game.events(EventKind.CHECKPOINT)) == 2
        assert team.durability[Part.STEERING] == 3
        assert team.status.immune_turns_remaining == 1

    def test_backward_over_checkpoint_is_not_a_pause(self, scenario):
        game = scenario(road(12), [5, 3], checkpoints=[4])
        team = game.place(0, 7)
        team.break_part(Part.STEERING)
        team.damage(Part.ENGINE, 1)
        game.play_correct_turn()
        assert team.position == 2
        assert game.events(EventKind.CHECKPOINT) == []
        assert team.durability == {Part.ENGINE: 2, Part.TIRES: 3, Part.STEERING: 0}
        assert team.status.immune_turns_remaining == 0

    def test_steering_broken_face_one_moves_one_tile(self, scenario):
        game = scenario(road(12), [1, 2], checkpoints=[8])
        team = game.place(0, 2)
        team.break_part(Part.STEERING)
        game.play_correct_turn()
        assert team.position == 3
        assert game.animator.steps == [(0, 2, 3)]


class TestTileResolution:
    """Tile effects applied by the engine."""

    def test_teleport_skips_checkpoint_pause(self, scenario):
        game = scenario(road(12, {3: "teleport"}), [3], checkpoints=[8])
        game.play_correct_turn()
        assert game.get_team(0).position == 8
        assert game.events(EventKind.CHECKPOINT) == []
        assert len(game.events(EventKind.MOVE)) == 2

    def test_bonus_slide(self, scenario):
        game = scenario(road(12, {2: "double_dice"}), [2])
        team = game.get_team(0)
        team.break_part(Part.TIRES)
        game.play_correct_turn()
        assert team.position == 3
        assert not team.status.has_double_dice
        assert len(game.events(EventKind.BONUS_SLIDE)) == 1

    def test_swap_with_nearest(self, scenario):
        game = scenario(road(12, {4: "swap"}), [4])
        other = game.place(1, 7)
        game.play_correct_turn()
        assert game.get_team(0).position == 7
        assert other.position == 4

    def test_immune_tile_protects_next_turn(self, scenario):
        game = scenario(road(12, {3: "immune"}), [3])
        game.play_correct_turn()
        team = game.get_team(0)
        assert team.status.immune_turns_remaining == 1
        assert not team.status.immune_next_turn

    def test_frozen_team_skips_turn(self, scenario):
        game = scenario(road(12))
        team = game.place(0, 2)
        team.status.is_frozen = True
        assert game.engine.begin_turn() is None
        assert not team.status.is_frozen
        assert team.turn_count == 1
        assert game.engine.current_turn == 1
        assert game.questions.stages == []
        assert len(game.events(EventKind.TURN_SKIP)) == 1


class TestVictory:
    """Reaching the last tile ends the game."""

    def test_exact_finish(self, scenario):
        game = scenario(road(6), [5])
        game.play_correct_turn()
        engine = game.engine
        assert engine.is_over
        assert engine.winner is game.get_team(0)
        assert game.get_team(0).turn_count == 0
        assert game.events(EventKind.DECAY) == []
        assert len(game.events(EventKind.VICTORY)) == 1

    def test_overshoot_is_clamped(self, scenario):
        game = scenario(road(6), [6])
        game.play_correct_turn()
        assert game.get_team(0).position == 5
        assert game.engine.is_over

    def test_teleport_to_finish_wins(self, scenario):
        game = scenario(road(10, {3: "teleport"}), [3], checkpoints=[9])
        game.play_correct_turn()
        assert game.engine.winner is game.get_team(0)

    def test_standings_leader_first(self, scenario):
        game = scenario(road(12), team_count=3)
        game.place(1, 5)
        game.place(2, 2)
        assert [t.id for t in game.engine.standings()] == [1, 2, 0]
