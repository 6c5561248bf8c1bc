"""Tile effect resolution."""

from dataclasses import dataclass

from quizrace.config import RulesConfig
from quizrace.models import BONUS_TILES, Part, PathModel, Team, TileType


@dataclass(frozen=True)
class TileDescription:
    """Presentation strings for a tile effect."""

    icon: str
    title: str
    text: str


TILE_DESCRIPTIONS: dict[TileType, TileDescription] = {
    TileType.NORMAL: TileDescription("", "Road", "Nothing happens."),
    TileType.MINE: TileDescription("💥", "Mine!", "{team} hit a mine. Every part is wrecked."),
    TileType.REPAIR_ONE: TileDescription("🔧", "General Offensive", "{team} fully repairs all three parts."),
    TileType.FULL_REPAIR: TileDescription("🔧", "General Offensive", "{team} fully repairs all three parts."),
    TileType.FINISH: TileDescription("🏆", "General Offensive", "{team} fully repairs all three parts."),
    TileType.DAMAGE_ALL: TileDescription("⚔️", "Melee", "{team} is caught in a melee. -1 to every part."),
    TileType.REPAIR_ALL: TileDescription("⏰", "Opportunity", "{team} seizes the moment. +1 to every part."),
    TileType.CHECKPOINT: TileDescription("🏁", "New Stage", "{team} reaches a new stage. +1 to every part."),
    TileType.REPAIR_ENGINE: TileDescription("⚙️", "Engine", "{team} finds a new engine."),
    TileType.REPAIR_TIRES: TileDescription("🛞", "Tires", "{team} finds new tires."),
    TileType.REPAIR_STEERING: TileDescription("🎡", "Steering", "{team} finds a new steering wheel."),
    TileType.DOUBLE_DICE: TileDescription("⏱️", "Lightning Advance", "{team} doubles its next roll."),
    TileType.IMMUNE: TileDescription("🛡️", "Reinforced", "{team} will not wear down next turn."),
    TileType.SKIP_TURN: TileDescription("❄️", "Frozen", "{team} loses its next turn."),
    TileType.SWAP: TileDescription("🎭", "Decoy", "{team} swaps places with the nearest team."),
    TileType.TRAP: TileDescription("🎭", "Decoy", "{team} swaps places with the nearest team."),
    TileType.TELEPORT: TileDescription("🚀", "Capture Ground", "{team} advances to the next stage."),
    TileType.DROP_ENGINE: TileDescription("⚙️", "Engine Lost!", "{team} loses its engine."),
    TileType.DROP_TIRE: TileDescription("🛞", "Tire Lost!", "{team} loses its tires."),
    TileType.DROP_STEERING: TileDescription("🎡", "Steering Lost!", "{team} loses its steering wheel."),
}

SLIDE_DESCRIPTION = TileDescription("🛞", "Slide", "{team} has flat tires and slides past the bonus.")

_RESTORE_ALL = {TileType.REPAIR_ONE, TileType.FULL_REPAIR, TileType.FINISH}
_REPAIR_ALL = {TileType.REPAIR_ALL, TileType.CHECKPOINT}
_SWAPS = {TileType.SWAP, TileType.TRAP}

_REPAIR_PART = {
    TileType.REPAIR_ENGINE: Part.ENGINE,
    TileType.REPAIR_TIRES: Part.TIRES,
    TileType.REPAIR_STEERING: Part.STEERING,
}

_DROP_PART = {
    TileType.DROP_ENGINE: Part.ENGINE,
    TileType.DROP_TIRE: Part.TIRES,
    TileType.DROP_STEERING: Part.STEERING,
}


@dataclass
class TileOutcome:
    """Result of resolving a tile."""

    tag: TileType
    icon: str
    title: str
    text: str
    applied: bool = True
    slide: bool = False
    move_to: int | None = None
    swapped_with: int | None = None


def nearest_team(team: Team, teams: list[Team]) -> Team | None:
    """Closest other team on the path; on a tie the team ahead wins."""
    candidates = [t for t in teams if t.id != team.id and t.on_path]
    if not candidates:
        return None
    return min(
        candidates,
        key=lambda t: (abs(t.position - team.position), t.position <= team.position),
    )


class TileEffectResolver:
    """Applies the effect of the tile a team stands on."""

    def __init__(self, path: PathModel, config: RulesConfig | None = None):
        """Initialize the resolver.

        Args:
            path: Race path
            config: Rule constants (defaults if None)
        """
        self.path = path
        self.config = config if config is not None else RulesConfig()

    def resolve(self, team: Team, teams: list[Team]) -> TileOutcome:
        """Apply the effect of ``team``'s current tile.

        Movement effects are not performed here: the outcome's ``move_to``
        tells the caller where the team should be stepped to.

        Args:
            team: Acting team, already on its destination tile
            teams: All teams (for swaps)

        Returns:
            TileOutcome describing what happened
        """
        tag = self.path.tile_type(team.position)

        if tag in BONUS_TILES and team.is_broken(Part.TIRES):
            return self._outcome(
                tag,
                team,
                description=SLIDE_DESCRIPTION,
                applied=False,
                slide=True,
                move_to=self.path.clamp(team.position + 1),
            )

        if tag == TileType.MINE:
            team.damage_all(self.config.mine_damage)
        elif tag in _RESTORE_ALL:
            team.restore_all()
        elif tag == TileType.DAMAGE_ALL:
            team.damage_all(self.config.damage_all_amount)
        elif tag in _REPAIR_ALL:
            team.repair_all(self.config.repair_all_amount)
        elif tag in _REPAIR_PART:
            team.repair(_REPAIR_PART[tag])
        elif tag == TileType.DOUBLE_DICE:
            team.status.has_double_dice = True
        elif tag == TileType.IMMUNE:
            team.status.immune_next_turn = True
        elif tag == TileType.SKIP_TURN:
            team.status.is_frozen = True
        elif tag in _SWAPS:
            return self._swap(tag, team, teams)
        elif tag == TileType.TELEPORT:
            target = self.path.next_checkpoint(team.position)
            if target is None:
                return self._outcome(tag, team, applied=False)
            return self._outcome(tag, team, move_to=target)
        elif tag in _DROP_PART:
            team.break_part(_DROP_PART[tag])
        else:
            return self._outcome(tag, team, applied=False)

        return self._outcome(tag, team)

    def _swap(self, tag: TileType, team: Team, teams: list[Team]) -> TileOutcome:
        other = nearest_team(team, teams)
        if other is None:
            outcome = self._outcome(tag, team, applied=False)
            outcome.text = f"{team.name} triggers a decoy but no other team is on the road."
            return outcome

        team.position, other.position = other.position, team.position
        outcome = self._outcome(tag, team, swapped_with=other.id)
        outcome.text = f"{team.name} swaps places with {other.name}."
        return outcome

    @staticmethod
    def _outcome(
        tag: TileType,
        team: Team,
        description: TileDescription | None = None,
        **kwargs,
    ) -> TileOutcome:
        description = description or TILE_DESCRIPTIONS[tag]
        return TileOutcome(
            tag=tag,
            icon=description.icon,
            title=description.title,
            text=description.text.format(team=team.name),
            **kwargs,
        )
