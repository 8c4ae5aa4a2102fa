"""Drill feature: round engine, controller, session service and API router."""

from .controller import AdvanceReason, AnswerOutcome, Phase, RoundController, RoundSnapshot
from .engine import RoundEngine
from .router import create_drill_router
from .schemas import AnswerResult, RoundPayload
from .service import DrillManager

__all__ = [
    "AdvanceReason",
    "AnswerOutcome",
    "AnswerResult",
    "DrillManager",
    "Phase",
    "RoundController",
    "RoundEngine",
    "RoundPayload",
    "RoundSnapshot",
    "create_drill_router",
]
