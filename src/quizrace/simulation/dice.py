"""Dice and movement resolution, including degraded-vehicle rules."""

import secrets
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from quizrace.models import Part, Team
from quizrace.simulation.interfaces import RandomSource

DIE_FACES = 6


class NumpyDie:
    """Fair die backed by a numpy Generator."""

    def __init__(self, rng: np.random.Generator | None = None):
        """Initialize the die.

        Args:
            rng: Random number generator (creates new if None)
        """
        self.rng = rng if rng is not None else np.random.default_rng()

    def roll(self) -> int:
        return int(self.rng.integers(1, DIE_FACES + 1))


class SecureDie:
    """Die drawing from the OS entropy pool.

    Raw 32-bit words at or above the largest multiple of six are rejected,
    so every face is equally likely.
    """

    _LIMIT = (2**32 // DIE_FACES) * DIE_FACES

    def roll(self) -> int:
        while True:
            word = secrets.randbits(32)
            if word < self._LIMIT:
                return word % DIE_FACES + 1


class MovementRule(str, Enum):
    """Which movement branch produced a result."""

    ALL_BROKEN = "all_broken"
    STEERING_BROKEN = "steering_broken"
    ENGINE_BROKEN = "engine_broken"
    DEFAULT = "default"


@dataclass
class Movement:
    """Outcome of a roll: how far and which way the team should move."""

    steps: int
    direction: int
    rule: MovementRule
    faces: list[int] = field(default_factory=list)
    jump_to_checkpoint: bool = False
    doubled: bool = False
    combo_bonus: int = 0


def engine_broken_steps(face: int) -> int:
    """A broken engine moves 1 tile on 1-3 and 2 tiles on 4-6."""
    return 1 if face <= 3 else 2


def parity_direction(face: int) -> int:
    """Even faces go forward, odd faces go backward."""
    return 1 if face % 2 == 0 else -1


class DiceResolver:
    """Draws dice and turns them into a Movement for a team."""

    def __init__(self, die: RandomSource):
        """Initialize the resolver.

        Args:
            die: Source of die faces
        """
        self.die = die

    def draw(self) -> int:
        face = self.die.roll()
        if not 1 <= face <= DIE_FACES:
            raise ValueError(f"die returned {face}, expected 1-{DIE_FACES}")
        return face

    def resolve(self, team: Team, combo_bonus: int = 0) -> Movement:
        """Roll for a team and compute its movement.

        Consumes the team's double-dice flag when it applies.

        Args:
            team: Acting team
            combo_bonus: Extra tiles from a combo this turn

        Returns:
            Movement with steps >= 0 and direction +1 or -1
        """
        if team.all_broken():
            face = self.draw()
            return Movement(
                steps=1,
                direction=parity_direction(face),
                rule=MovementRule.ALL_BROKEN,
                faces=[face],
            )

        if team.is_broken(Part.STEERING):
            magnitude_face = self.draw()
            direction_face = self.draw()
            if team.is_broken(Part.ENGINE):
                steps = engine_broken_steps(magnitude_face)
            else:
                steps = magnitude_face
            return Movement(
                steps=steps,
                direction=parity_direction(direction_face),
                rule=MovementRule.STEERING_BROKEN,
                faces=[magnitude_face, direction_face],
            )

        face = self.draw()
        if team.is_broken(Part.ENGINE):
            movement = Movement(
                steps=engine_broken_steps(face),
                direction=1,
                rule=MovementRule.ENGINE_BROKEN,
                faces=[face],
            )
        elif face == 1:
            # Jump to the next checkpoint; modifiers are kept for a later roll
            return Movement(
                steps=0,
                direction=1,
                rule=MovementRule.DEFAULT,
                faces=[face],
                jump_to_checkpoint=True,
            )
        else:
            movement = Movement(steps=face, direction=1, rule=MovementRule.DEFAULT, faces=[face])

        if team.status.has_double_dice:
            movement.steps *= 2
            movement.doubled = True
            team.status.has_double_dice = False

        if combo_bonus > 0:
            movement.steps += combo_bonus
            movement.combo_bonus = combo_bonus

        return movement
