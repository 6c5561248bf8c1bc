"""Turn engine: the phase state machine that runs a game."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from quizrace.config import RulesConfig
from quizrace.errors import InvalidPathError, InvalidTeamCountError
from quizrace.models import PathModel, Question, Team, TileType, create_teams
from quizrace.simulation.decay import DecayOutcome, apply_decay
from quizrace.simulation.dice import DiceResolver, Movement, NumpyDie
from quizrace.simulation.events import EventKind, EventLog, GameEvent
from quizrace.simulation.interfaces import (
    MovementAnimator,
    NullAnimator,
    OutcomeSink,
    QuestionSource,
    RandomSource,
)
from quizrace.simulation.tiles import TileEffectResolver

logger = logging.getLogger(__name__)

MIN_TEAMS = 2
MIN_PATH_LENGTH = 2


class Phase(str, Enum):
    """Turn phases."""

    AWAITING_QUESTION = "awaiting_question"
    AWAITING_ROLL = "awaiting_roll"
    MOVING = "moving"
    RESOLVING_TILE = "resolving_tile"
    DECAYING = "decaying"
    GAME_OVER = "game_over"


@dataclass
class TurnContext:
    """State that lives for a single turn."""

    team_id: int
    phase: Phase = Phase.AWAITING_QUESTION
    combo_bonus: int = 0
    question: Question | None = None
    time_expired: bool = False
    movement: Movement | None = None


class TurnEngine:
    """Runs turns for a hot-seat game.

    The engine is driven by four calls, each valid in one phase only:
    ``begin_turn`` and ``submit_answer``/``expire_timer`` while awaiting the
    question, then ``roll`` once the roll is unlocked. ``roll`` performs
    movement, tile resolution and decay before returning. Calls made in the
    wrong phase are ignored.
    """

    def __init__(
        self,
        path: PathModel,
        question_source: QuestionSource,
        die: RandomSource | None = None,
        animator: MovementAnimator | None = None,
        sink: OutcomeSink | None = None,
        config: RulesConfig | None = None,
        teams: list[Team] | None = None,
        team_count: int = MIN_TEAMS,
    ):
        """Initialize the engine.

        Args:
            path: Race path (at least two tiles)
            question_source: Supplies one question per turn
            die: Six-sided die (numpy-backed if None)
            animator: Called once per single-tile step (no-op if None)
            sink: Receives outcome events (an EventLog if None)
            config: Rule constants (defaults if None)
            teams: Pre-built teams; created in staging if None
            team_count: Number of teams to create when ``teams`` is None
        """
        self.config = config if config is not None else RulesConfig()
        self.path = path
        self._require_path()

        self.teams = teams if teams is not None else create_teams(
            team_count, self.config.max_durability
        )
        if len(self.teams) < MIN_TEAMS:
            raise InvalidTeamCountError(
                f"a game needs at least {MIN_TEAMS} teams, got {len(self.teams)}"
            )

        self.question_source = question_source
        self.dice = DiceResolver(die if die is not None else NumpyDie())
        self.animator = animator if animator is not None else NullAnimator()
        self.sink = sink if sink is not None else EventLog()
        self.tiles = TileEffectResolver(path, self.config)

        self.current_turn = 0
        self.round_number = 1
        self.winner: Team | None = None
        self.context = TurnContext(team_id=self.current_turn)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.context.phase

    @property
    def current_team(self) -> Team:
        return self.teams[self.current_turn]

    @property
    def is_over(self) -> bool:
        return self.context.phase == Phase.GAME_OVER

    def get_team(self, team_id: int) -> Team:
        return self.teams[team_id]

    def standings(self) -> list[Team]:
        """Teams ordered by position, leader first. Staging teams come last."""
        return sorted(self.teams, key=lambda t: -t.position)

    # ------------------------------------------------------------------
    # Turn entry points
    # ------------------------------------------------------------------

    def begin_turn(self) -> Question | None:
        """Start the active team's turn.

        Returns:
            The question to ask, or None when the turn was skipped (frozen
            team) or no question was available (roll unlocked directly)
        """
        if not self._in_phase(Phase.AWAITING_QUESTION, "begin_turn"):
            return None
        self._require_path()

        if self.context.question is not None:
            return self.context.question

        team = self.current_team
        logger.info(f"--- Round {self.round_number}: {team.name} ---")
        self._emit(EventKind.TURN_START, team, position=team.position)

        if team.status.is_frozen:
            team.status.is_frozen = False
            logger.info(f"{team.name} is frozen and loses this turn")
            self._emit(EventKind.TURN_SKIP, team)
            self._end_turn()
            return None

        stage = self.path.stage_number(team.position)
        question = self.question_source.next_question(stage)
        if question is None:
            logger.warning(f"No question for stage {stage}; {team.name} may roll directly")
            self._emit(EventKind.QUESTION_MISSING, team, stage=stage)
            self._enter_path(team)
            self._set_phase(Phase.AWAITING_ROLL)
            return None

        self.context.question = question
        self._emit(EventKind.QUESTION, team, question_id=question.id, stage=stage)
        return question

    def submit_answer(self, index: int) -> bool | None:
        """Answer the pending question.

        Returns:
            Whether the answer was correct, or None if no question is pending
        """
        if not self._in_phase(Phase.AWAITING_QUESTION, "submit_answer"):
            return None
        if self.context.question is None:
            logger.debug("Ignoring submit_answer: no question pending")
            return None

        team = self.current_team
        if self.context.question.is_correct(index):
            self._answer_correct(team)
            return True

        self._answer_wrong(team)
        return False

    def expire_timer(self) -> None:
        """The question clock ran out. Treated as a wrong answer."""
        if not self._in_phase(Phase.AWAITING_QUESTION, "expire_timer"):
            return
        if self.context.question is None:
            logger.debug("Ignoring expire_timer: no question pending")
            return

        self.context.time_expired = True
        self._answer_wrong(self.current_team)

    def roll(self) -> Movement | None:
        """Roll for the active team and play out the rest of its turn.

        Returns:
            The computed Movement, or None if rolling is not allowed now
        """
        if not self._in_phase(Phase.AWAITING_ROLL, "roll"):
            return None
        self._require_path()

        team = self.current_team
        assert team.on_path, f"{team.name} rolled from staging"

        movement = self.dice.resolve(team, self.context.combo_bonus)
        self.context.combo_bonus = 0
        self.context.movement = movement

        target = self._destination(team, movement)
        logger.info(
            f"{team.name} rolls {movement.faces} ({movement.rule.value}): "
            f"{team.position} -> {target}"
        )
        self._emit(
            EventKind.ROLL,
            team,
            faces=list(movement.faces),
            rule=movement.rule.value,
            steps=movement.steps,
            direction=movement.direction,
            jump_to_checkpoint=movement.jump_to_checkpoint,
            doubled=movement.doubled,
            combo_bonus=movement.combo_bonus,
            target=target,
        )

        self._set_phase(Phase.MOVING)
        if not self._step_to(team, target, checkpoint_stops=True):
            self._end_turn()
            return movement

        self._set_phase(Phase.RESOLVING_TILE)
        self._resolve_arrival(team)
        return movement

    # ------------------------------------------------------------------
    # Phase internals
    # ------------------------------------------------------------------

    def _answer_correct(self, team: Team) -> None:
        team.correct_count += 1
        team.combo_count += 1
        self._enter_path(team)

        if team.combo_count >= self.config.combo_threshold:
            self.context.combo_bonus = self.config.combo_bonus_tiles
            logger.info(f"{team.name} combo x{team.combo_count}! +{self.context.combo_bonus} tile")
            self._emit(
                EventKind.COMBO,
                team,
                combo=team.combo_count,
                bonus=self.context.combo_bonus,
            )
        else:
            self.context.combo_bonus = 0

        logger.info(f"{team.name} answers correctly (combo {team.combo_count})")
        self._emit(EventKind.ANSWER_CORRECT, team, combo=team.combo_count)
        self._set_phase(Phase.AWAITING_ROLL)

    def _answer_wrong(self, team: Team) -> None:
        team.wrong_count += 1
        team.combo_count = 0
        if self.context.time_expired:
            logger.info(f"{team.name} ran out of time")
        else:
            logger.info(f"{team.name} answers wrong and loses the turn")
        self._emit(EventKind.ANSWER_WRONG, team, timeout=self.context.time_expired)
        self._end_turn()

    def _enter_path(self, team: Team) -> None:
        if not team.on_path:
            team.position = 0
            logger.info(f"{team.name} enters the road at the start")

    def _destination(self, team: Team, movement: Movement) -> int:
        if movement.jump_to_checkpoint:
            checkpoint = self.path.next_checkpoint(team.position)
            if checkpoint is not None:
                return checkpoint
            return self.path.clamp(team.position + 1)
        return self.path.clamp(team.position + movement.direction * movement.steps)

    def _step_to(self, team: Team, target: int, checkpoint_stops: bool) -> bool:
        """Walk ``team`` to ``target`` one tile at a time.

        Returns:
            False if the team did not move at all
        """
        start = team.position
        if target == start:
            logger.info(f"{team.name} stays on tile {start}")
            return False

        step = 1 if target > start else -1
        while team.position != target:
            from_index = team.position
            to_index = from_index + step
            logger.debug(f"Step: {team.name} {from_index} -> {to_index}")
            self.animator.animate_step(team.id, from_index, to_index)
            team.position = to_index

            if (
                checkpoint_stops
                and step > 0
                and to_index != target
                and self.path.is_checkpoint(to_index)
            ):
                self._checkpoint_pause(team, to_index)

        logger.info(f"Move: {team.name} {start} -> {team.position}")
        self._emit(EventKind.MOVE, team, start=start, end=team.position)
        return True

    def _checkpoint_pause(self, team: Team, index: int) -> None:
        team.repair_all(self.config.checkpoint_repair)
        team.status.immune_turns_remaining += self.config.checkpoint_immunity
        stage_name = self.path.stage_name(index)
        logger.info(
            f"Checkpoint: {team.name} passes {stage_name} "
            f"(+{self.config.checkpoint_repair} to every part)"
        )
        self._emit(
            EventKind.CHECKPOINT,
            team,
            index=index,
            stage=stage_name,
            durability={p.value: v for p, v in team.durability.items()},
            immune_turns=team.status.immune_turns_remaining,
        )

    def _resolve_arrival(self, team: Team) -> None:
        if self._check_victory(team):
            return

        outcome = self.tiles.resolve(team, self.teams)
        if outcome.tag != TileType.NORMAL:
            kind = EventKind.BONUS_SLIDE if outcome.slide else EventKind.TILE_EFFECT
            logger.info(f"{outcome.title}: {outcome.text}")
            self._emit(
                kind,
                team,
                tag=outcome.tag.value,
                icon=outcome.icon,
                title=outcome.title,
                text=outcome.text,
                applied=outcome.applied,
                swapped_with=outcome.swapped_with,
            )

        if outcome.move_to is not None:
            self._step_to(team, outcome.move_to, checkpoint_stops=False)

        if self._check_victory(team):
            return
        self._end_turn()

    def _check_victory(self, team: Team) -> bool:
        if team.position != self.path.finish_index:
            return False
        self.winner = team
        self._set_phase(Phase.GAME_OVER)
        logger.info(f"VICTORY: {team.name} reaches the finish in round {self.round_number}")
        self._emit(EventKind.VICTORY, team, turns=team.turn_count)
        return True

    def _end_turn(self) -> None:
        self._set_phase(Phase.DECAYING)
        team = self.current_team
        report = apply_decay(team, self.config)

        if report.outcome == DecayOutcome.IMMUNE:
            logger.info(f"{team.name} is reinforced: no wear this turn")
        elif report.decayed:
            worn = ", ".join(f"{part.value} {value}" for part, value in report.decayed.items())
            logger.info(f"Turn {report.turn_count}: {team.name} wears down ({worn})")
        self._emit(
            EventKind.DECAY,
            team,
            outcome=report.outcome.value,
            turn_count=report.turn_count,
            decayed={p.value: v for p, v in report.decayed.items()},
            immunity_granted=report.immunity_granted,
        )

        self.current_turn = (self.current_turn + 1) % len(self.teams)
        if self.current_turn == 0:
            self.round_number += 1
        self.context = TurnContext(team_id=self.current_turn)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_path(self) -> None:
        if self.path.length < MIN_PATH_LENGTH:
            raise InvalidPathError(
                f"path needs at least {MIN_PATH_LENGTH} tiles, got {self.path.length}"
            )

    def _in_phase(self, phase: Phase, operation: str) -> bool:
        if self.context.phase != phase:
            logger.debug(f"Ignoring {operation} during {self.context.phase.value}")
            return False
        return True

    def _set_phase(self, phase: Phase) -> None:
        self.context.phase = phase

    def _emit(self, kind: EventKind, team: Team, **payload: Any) -> None:
        self.sink.emit(GameEvent(kind=kind, team_id=team.id, round=self.round_number, payload=payload))
