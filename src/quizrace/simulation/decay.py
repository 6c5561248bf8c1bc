"""Turn-end durability decay."""

from dataclasses import dataclass, field
from enum import Enum

from quizrace.config import RulesConfig
from quizrace.models import PARTS, Part, Team


class DecayOutcome(str, Enum):
    """How the decay step treated a team."""

    STAGING = "staging"
    IMMUNE = "immune"
    APPLIED = "applied"


@dataclass
class DecayReport:
    """What happened to a team at turn end."""

    outcome: DecayOutcome
    turn_count: int
    decayed: dict[Part, int] = field(default_factory=dict)
    immunity_granted: bool = False


def apply_decay(team: Team, config: RulesConfig) -> DecayReport:
    """Apply the turn-end decay schedule to a team.

    Teams in staging are untouched and their turn is not counted. An immune
    turn is counted but spends one stacked immunity instead of decaying.
    Otherwise each part loses ``config.decay_amount`` on turns that are a
    multiple of its period. A pending immune-next-turn flag is promoted only
    after decay, so it protects the following turn.

    Args:
        team: Team whose turn just ended
        config: Rule constants

    Returns:
        DecayReport with the parts that lost durability (new values)
    """
    if not team.on_path:
        return DecayReport(outcome=DecayOutcome.STAGING, turn_count=team.turn_count)

    if team.status.immune_turns_remaining > 0:
        team.status.immune_turns_remaining -= 1
        team.turn_count += 1
        report = DecayReport(outcome=DecayOutcome.IMMUNE, turn_count=team.turn_count)
    else:
        team.turn_count += 1
        report = DecayReport(outcome=DecayOutcome.APPLIED, turn_count=team.turn_count)
        for part in PARTS:
            if team.turn_count % config.decay_periods[part] != 0:
                continue
            if team.is_broken(part):
                continue
            team.damage(part, config.decay_amount)
            report.decayed[part] = team.durability[part]

    if team.status.immune_next_turn:
        team.status.immune_turns_remaining = 1
        team.status.immune_next_turn = False
        report.immunity_granted = True

    return report
