"""Team model: vehicle durability, status effects and answer counters."""

from enum import Enum

from pydantic import BaseModel, Field


class Part(str, Enum):
    """Vehicle subsystems that wear down during the race."""

    ENGINE = "engine"
    TIRES = "tires"
    STEERING = "steering"


PARTS = (Part.ENGINE, Part.TIRES, Part.STEERING)

# Position of a team that has not yet been placed on the path
STAGING = -1

DEFAULT_MAX_DURABILITY = {
    Part.ENGINE: 3,
    Part.TIRES: 3,
    Part.STEERING: 3,
}


class StatusEffects(BaseModel):
    """One-shot and stacked effects granted by tiles and checkpoints."""

    is_frozen: bool = Field(default=False, description="Next turn is skipped")
    immune_turns_remaining: int = Field(
        default=0,
        ge=0,
        description="Stacked future turns in which decay is skipped",
    )
    immune_next_turn: bool = Field(
        default=False,
        description="Immunity to be granted once the current turn has decayed",
    )
    has_double_dice: bool = Field(
        default=False,
        description="Double the step count of the next roll",
    )


class Team(BaseModel):
    """A team and the vehicle it races with."""

    id: int = Field(..., ge=0, description="Stable 0-based identity")
    name: str = Field(..., description="Display name")
    color: str = Field(default="#ffffff", description="Display color")

    position: int = Field(
        default=STAGING,
        ge=STAGING,
        description="Path index, or STAGING before the first correct answer",
    )
    durability: dict[Part, int] = Field(
        default_factory=lambda: dict(DEFAULT_MAX_DURABILITY),
        description="Current durability per part",
    )
    max_durability: dict[Part, int] = Field(
        default_factory=lambda: dict(DEFAULT_MAX_DURABILITY),
        description="Maximum durability per part",
    )
    status: StatusEffects = Field(default_factory=StatusEffects)

    # Counters
    turn_count: int = Field(default=0, ge=0, description="Turns played while on the path")
    combo_count: int = Field(default=0, ge=0, description="Consecutive correct answers")
    correct_count: int = Field(default=0, ge=0)
    wrong_count: int = Field(default=0, ge=0)

    @property
    def on_path(self) -> bool:
        """Whether the team has left the staging area."""
        return self.position != STAGING

    def damage(self, part: Part, amount: int) -> None:
        """Reduce one part's durability, floored at 0."""
        self.durability[part] = max(0, self.durability[part] - amount)
        self._check(part)

    def repair(self, part: Part) -> None:
        """Restore one part to its maximum."""
        self.durability[part] = self.max_durability[part]

    def break_part(self, part: Part) -> None:
        """Force a part to 0."""
        self.durability[part] = 0

    def repair_all(self, amount: int) -> None:
        """Add durability to every part, capped at each part's maximum."""
        for part in PARTS:
            self.durability[part] = min(self.max_durability[part], self.durability[part] + amount)
            self._check(part)

    def damage_all(self, amount: int) -> None:
        """Remove durability from every part, floored at 0."""
        for part in PARTS:
            self.damage(part, amount)

    def restore_all(self) -> None:
        """Restore every part to its maximum."""
        for part in PARTS:
            self.repair(part)

    def is_broken(self, part: Part) -> bool:
        return self.durability[part] <= 0

    def all_broken(self) -> bool:
        return all(self.is_broken(part) for part in PARTS)

    def _check(self, part: Part) -> None:
        assert 0 <= self.durability[part] <= self.max_durability[part], (
            f"{self.name}: {part.value} durability {self.durability[part]} "
            f"outside [0, {self.max_durability[part]}]"
        )


# Default roster, in seating order
DEFAULT_TEAMS = [
    ("Red Team", "#e74c3c"),
    ("Blue Team", "#3498db"),
    ("Green Team", "#2ecc71"),
    ("Orange Team", "#e67e22"),
    ("Purple Team", "#9b59b6"),
    ("Teal Team", "#1abc9c"),
    ("Pink Team", "#e91e63"),
]


def create_teams(
    count: int,
    max_durability: dict[Part, int] | None = None,
    names: list[str] | None = None,
) -> list[Team]:
    """Create teams in staging with full durability.

    Args:
        count: Number of teams
        max_durability: Per-part maximum (defaults to 3/3/3)
        names: Optional display names, falling back to the default roster

    Returns:
        Teams with ids 0..count-1
    """
    maxima = dict(max_durability or DEFAULT_MAX_DURABILITY)
    teams = []
    for idx in range(count):
        default_name, color = DEFAULT_TEAMS[idx % len(DEFAULT_TEAMS)]
        if names and idx < len(names):
            name = names[idx]
        elif idx < len(DEFAULT_TEAMS):
            name = default_name
        else:
            name = f"Team {idx + 1}"
        teams.append(Team(
            id=idx,
            name=name,
            color=color,
            durability=dict(maxima),
            max_durability=dict(maxima),
        ))
    return teams
