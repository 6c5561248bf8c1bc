"""Tunable rule constants."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quizrace.models.team import DEFAULT_MAX_DURABILITY, PARTS, Part

DEFAULT_DECAY_PERIODS = {
    Part.ENGINE: 3,
    Part.TIRES: 2,
    Part.STEERING: 4,
}


class RulesConfig(BaseModel):
    """Rule constants. Every value can be overridden."""

    model_config = ConfigDict(frozen=True)

    max_durability: dict[Part, int] = Field(
        default_factory=lambda: dict(DEFAULT_MAX_DURABILITY),
        description="Maximum durability per part",
    )
    decay_periods: dict[Part, int] = Field(
        default_factory=lambda: dict(DEFAULT_DECAY_PERIODS),
        description="A part decays on turns that are a multiple of its period",
    )
    decay_amount: int = Field(default=1, ge=0, description="Durability lost per decay")

    checkpoint_repair: int = Field(
        default=1,
        ge=0,
        description="Durability restored to every part when passing a checkpoint",
    )
    checkpoint_immunity: int = Field(
        default=1,
        ge=0,
        description="Immune turns granted when passing a checkpoint",
    )

    mine_damage: int = Field(default=10, ge=0, description="Damage to every part on a mine")
    damage_all_amount: int = Field(default=1, ge=0, description="Damage from a melee tile")
    repair_all_amount: int = Field(default=1, ge=0, description="Repair from a repair-all tile")

    combo_threshold: int = Field(
        default=3,
        ge=1,
        description="Consecutive correct answers needed for the combo bonus",
    )
    combo_bonus_tiles: int = Field(default=1, ge=0, description="Extra tiles granted by a combo")

    question_time_limit: int = Field(
        default=30,
        gt=0,
        description="Seconds the external clock allows per question",
    )

    @field_validator("max_durability", "decay_periods")
    @classmethod
    def _all_parts_positive(cls, value: dict[Part, int]) -> dict[Part, int]:
        missing = [part.value for part in PARTS if part not in value]
        if missing:
            raise ValueError(f"missing parts: {', '.join(missing)}")
        for part, amount in value.items():
            if amount < 1:
                raise ValueError(f"{part.value} must be at least 1, got {amount}")
        return value

    @classmethod
    def from_json(cls, path: str | Path) -> "RulesConfig":
        """Load overrides from a JSON file; absent keys keep their defaults."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
