from typing import Callable

import numpy as np
import pytest

from quizrace.models import Team, create_teams
from tests.scenario import GameScenario


@pytest.fixture
def scenario() -> Callable[..., GameScenario]:
    """Factory fixture to create scenarios."""

    def _builder(tags: list[str], dice_rolls: list[int] | None = None, **kwargs) -> GameScenario:
        return GameScenario(tags, dice_rolls, **kwargs)

    return _builder


@pytest.fixture
def teams() -> list[Team]:
    """Three fresh teams in staging."""
    return create_teams(3)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)
