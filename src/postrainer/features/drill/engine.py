"""Round engine primitives.

Keeps the RNG and the round-building pipeline together: seats, labels, a
default action scenario, then the question (which may replace the scenario so
it matches an IP/OOP question).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...core.interfaces import RandomSource
from ...core.models import Round
from ...core.settings import DrillConfig
from ...dynamic.actions import generate_actions
from ...dynamic.positions import compute_labels
from ...dynamic.questions import generate_question
from ...dynamic.seating import allocate_seats

__all__ = ["RoundEngine"]

logger = logging.getLogger(__name__)


@dataclass
class RoundEngine:
    """Wraps the RNG for deterministic round generation."""

    rng: RandomSource

    def build_round(self, config: DrillConfig, number: int) -> Round:
        active, button = allocate_seats(config.players, self.rng)
        labels = compute_labels(active, button, config.naming)
        actions = generate_actions(active, self.rng)
        question, scenario = generate_question(config.mode, active, button, labels, self.rng)
        if scenario is not None:
            actions = scenario
        logger.debug(
            "round built",
            extra={"round": number, "mode": config.mode.value, "players": config.players, "button": button},
        )
        return Round(
            number=number,
            active_seats=active,
            button_seat=button,
            labels=labels,
            actions=actions,
            question=question,
        )
