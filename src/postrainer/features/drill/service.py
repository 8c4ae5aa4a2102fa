from __future__ import annotations

import logging
import random
import secrets
import string
import threading
from dataclasses import dataclass

from ...core.models import Answer
from ...core.settings import DrillConfig
from .concurrency import run_blocking
from .controller import RoundController
from .engine import RoundEngine
from .schemas import AnswerResult, RoundPayload, answer_result, round_payload

__all__ = ["DrillManager", "DrillSession"]

logger = logging.getLogger(__name__)


@dataclass
class DrillSession:
    seed: int
    controller: RoundController


class DrillManager:
    """Owns drill sessions independent of the presentation layer."""

    def __init__(self) -> None:
        self._sessions: dict[str, DrillSession] = {}
        self._lock = threading.Lock()

    def create_session(self, config: DrillConfig | None = None, *, seed: int | None = None) -> str:
        actual_seed = seed if seed is not None else secrets.SystemRandom().getrandbits(32)
        engine = RoundEngine(rng=random.Random(actual_seed))
        controller = RoundController(config if config is not None else DrillConfig.create(), engine=engine)
        session_id = _sid()
        with self._lock:
            self._sessions[session_id] = DrillSession(seed=actual_seed, controller=controller)
        logger.debug("drill session created", extra={"session_id": session_id, "seed": actual_seed})
        return session_id

    async def create_session_async(self, config: DrillConfig | None = None, *, seed: int | None = None) -> str:
        return await run_blocking(self.create_session, config, seed=seed)

    def get_round(self, session_id: str) -> RoundPayload:
        with self._lock:
            controller = self._require_session(session_id).controller
            return round_payload(controller.snapshot())

    async def get_round_async(self, session_id: str) -> RoundPayload:
        return await run_blocking(self.get_round, session_id)

    def configure(
        self,
        session_id: str,
        *,
        players: int | None = None,
        timer_seconds: float | None = None,
        naming: str | None = None,
        mode: str | None = None,
    ) -> RoundPayload:
        with self._lock:
            controller = self._require_session(session_id).controller
            snapshot = controller.configure(players=players, timer_seconds=timer_seconds, naming=naming, mode=mode)
            return round_payload(snapshot)

    async def configure_async(self, session_id: str, **changes: object) -> RoundPayload:
        return await run_blocking(self.configure, session_id, **changes)

    def answer(self, session_id: str, answer: Answer) -> AnswerResult:
        with self._lock:
            controller = self._require_session(session_id).controller
            outcome = controller.submit(answer)
            return answer_result(outcome, controller.snapshot())

    async def answer_async(self, session_id: str, answer: Answer) -> AnswerResult:
        return await run_blocking(self.answer, session_id, answer)

    def tick(self, session_id: str, elapsed_seconds: float) -> RoundPayload:
        with self._lock:
            controller = self._require_session(session_id).controller
            controller.on_tick(elapsed_seconds)
            return round_payload(controller.snapshot())

    async def tick_async(self, session_id: str, elapsed_seconds: float) -> RoundPayload:
        return await run_blocking(self.tick, session_id, elapsed_seconds)

    def close(self, session_id: str) -> None:
        with self._lock:
            self._require_session(session_id)
            del self._sessions[session_id]
        logger.debug("drill session closed", extra={"session_id": session_id})

    async def close_async(self, session_id: str) -> None:
        await run_blocking(self.close, session_id)

    def _require_session(self, session_id: str) -> DrillSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"session '{session_id}' not found")
        return session


def _sid(length: int = 10) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))
