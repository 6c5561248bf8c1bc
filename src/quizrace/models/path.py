"""Path model: the ordered tiles of the race and its checkpoints."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TileType(str, Enum):
    """Tile type tags."""

    NORMAL = "normal"
    MINE = "mine"
    REPAIR_ONE = "repair_one"
    FULL_REPAIR = "full_repair"
    FINISH = "finish"
    DAMAGE_ALL = "damage_all"
    REPAIR_ALL = "repair_all"
    CHECKPOINT = "checkpoint"
    REPAIR_ENGINE = "repair_engine"
    REPAIR_TIRES = "repair_tires"
    REPAIR_STEERING = "repair_steering"
    DOUBLE_DICE = "double_dice"
    IMMUNE = "immune"
    SKIP_TURN = "skip_turn"
    SWAP = "swap"
    TRAP = "trap"
    TELEPORT = "teleport"
    DROP_ENGINE = "drop_engine"
    DROP_TIRE = "drop_tire"
    DROP_STEERING = "drop_steering"


# Tiles a team with broken tires slides past instead of collecting
BONUS_TILES = frozenset({
    TileType.REPAIR_ONE,
    TileType.REPAIR_ALL,
    TileType.DOUBLE_DICE,
    TileType.IMMUNE,
    TileType.TELEPORT,
    TileType.FULL_REPAIR,
    TileType.REPAIR_ENGINE,
    TileType.REPAIR_TIRES,
    TileType.REPAIR_STEERING,
})


class Tile(BaseModel):
    """A single tile. Coordinates are only meaningful to the renderer."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.0, description="Map x coordinate")
    y: float = Field(default=0.0, description="Map y coordinate")
    type: TileType = Field(default=TileType.NORMAL, description="Tile type tag")


class PathModel(BaseModel):
    """Immutable ordered sequence of tiles. The last tile is the finish."""

    model_config = ConfigDict(frozen=True)

    tiles: tuple[Tile, ...] = Field(default=(), description="Tiles in race order")
    checkpoints: tuple[int, ...] = Field(
        default=(),
        description="Strictly increasing path indices of stage checkpoints",
    )
    stage_names: tuple[str, ...] = Field(
        default=(),
        description="Optional names, index 0 for the start, then one per stage",
    )

    @field_validator("checkpoints")
    @classmethod
    def _strictly_increasing(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        for prev, cur in zip(value, value[1:]):
            if cur <= prev:
                raise ValueError(f"checkpoints must be strictly increasing, got {list(value)}")
        return value

    @model_validator(mode="after")
    def _checkpoints_on_path(self) -> "PathModel":
        for checkpoint in self.checkpoints:
            if not 0 <= checkpoint < len(self.tiles):
                raise ValueError(
                    f"checkpoint {checkpoint} outside path of {len(self.tiles)} tiles"
                )
        return self

    @classmethod
    def from_tags(
        cls,
        tags: list[str | TileType],
        checkpoints: list[int] | tuple[int, ...] = (),
        stage_names: list[str] | tuple[str, ...] = (),
    ) -> "PathModel":
        """Build a path from a plain list of tile tags (coordinates left at 0)."""
        return cls(
            tiles=tuple(Tile(type=TileType(tag)) for tag in tags),
            checkpoints=tuple(checkpoints),
            stage_names=tuple(stage_names),
        )

    @property
    def length(self) -> int:
        return len(self.tiles)

    @property
    def finish_index(self) -> int:
        return len(self.tiles) - 1

    def tile_type(self, index: int) -> TileType:
        return self.tiles[index].type

    def is_checkpoint(self, index: int) -> bool:
        return index in self.checkpoints

    def next_checkpoint(self, index: int) -> int | None:
        """Smallest checkpoint strictly ahead of ``index``, or None."""
        for checkpoint in self.checkpoints:
            if checkpoint > index:
                return checkpoint
        return None

    def clamp(self, index: int) -> int:
        """Clamp an index into [0, finish_index]."""
        return max(0, min(index, self.finish_index))

    def stage_number(self, index: int) -> int:
        """1-based stage a position belongs to (staging counts as stage 1)."""
        return 1 + sum(1 for checkpoint in self.checkpoints if checkpoint <= index)

    def stage_name(self, index: int) -> str:
        stage = self.stage_number(index)
        if stage - 1 < len(self.stage_names):
            return self.stage_names[stage - 1]
        return f"Stage {stage}"
