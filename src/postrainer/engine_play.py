from __future__ import annotations

import random
import secrets
import time
from collections.abc import Callable

from .core.interfaces import Presenter
from .core.models import Answer, IpAnswer, LabelAnswer, SeatAnswer
from .core.settings import DrillConfig
from .features.drill.controller import ERROR_FLASH_SECONDS, RoundController


def parse_answer(raw: str) -> Answer | None:
    """Map terminal input onto an answer channel: seat number, ip/oop, or a label."""

    token = raw.strip()
    if not token:
        return None
    lowered = token.lower()
    if lowered in {"ip", "oop"}:
        return IpAnswer(is_ip=lowered == "ip")
    if token.isdigit():
        return SeatAnswer(seat=int(token))
    return LabelAnswer(label=token.upper())


def run_drill(
    config: DrillConfig,
    presenter: Presenter,
    *,
    seed: int | None = None,
    rounds: int | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> list[str]:
    """Play rounds in the terminal until ``rounds`` are finished or the user quits.

    Wall-clock time spent at each prompt is fed to the controller as one tick,
    so a slow answer times the round out before it is graded.
    """

    actual_seed = seed if seed is not None else secrets.randbits(32)
    controller = RoundController(config, rng=random.Random(actual_seed))
    presenter.start_session(rounds)
    results: list[str] = []
    finished = 0

    while rounds is None or finished < rounds:
        round_ = controller.round
        presenter.show_round(round_, controller.snapshot().time_left)
        started = clock()
        raw = presenter.prompt_answer(round_.question)
        if raw is None:
            break
        controller.on_tick(clock() - started)
        if controller.question is None:
            presenter.timed_out(round_.question)
            # Let the expiry flash run out so the next round is dealt.
            controller.on_tick(ERROR_FLASH_SECONDS)
            results.append("timeout")
            finished += 1
            continue
        answer = parse_answer(raw)
        if answer is None:
            continue
        outcome = controller.submit(answer)
        presenter.answer_feedback(outcome.correct, accepted=outcome.accepted)
        if outcome.advanced:
            results.append("correct")
            finished += 1
        elif outcome.accepted:
            results.append("wrong")

    presenter.summary(results)
    return results
