"""Drill configuration and its defaults.

A :class:`DrillConfig` is the only thing the outer surfaces hand to the round
controller.  Numeric fields are clamped into range instead of rejected; an
unknown mode or naming convention is refused with :class:`InvalidConfigError`
so it never reaches round generation.

Defaults can be changed without touching code through environment variables
(read at call time, so tests may set them freely)::

    POSTRAINER_PLAYERS=9 POSTRAINER_MODE=seatIp postrainer

and temporarily overridden in tests via :func:`override`, which stacks.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Final

from .models import MAX_PLAYERS, MIN_PLAYERS, Mode, NamingConvention

__all__ = [
    "DrillConfig",
    "InvalidConfigError",
    "clamp_players",
    "clamp_timer",
    "default_config",
    "override",
    "parse_mode",
    "parse_naming",
]

logger = logging.getLogger(__name__)

MIN_TIMER_SECONDS: Final = 0.5
MAX_TIMER_SECONDS: Final = 60.0

_ENV_PREFIX: Final = "POSTRAINER_"
_ENV_KEYS: Final = {
    "players": _ENV_PREFIX + "PLAYERS",
    "timer_seconds": _ENV_PREFIX + "TIMER",
    "naming": _ENV_PREFIX + "NAMING",
    "mode": _ENV_PREFIX + "MODE",
}


class InvalidConfigError(ValueError):
    """Raised when a configuration value cannot be clamped into range."""


def clamp_players(value: int) -> int:
    return max(MIN_PLAYERS, min(MAX_PLAYERS, int(value)))


def clamp_timer(value: float) -> float:
    seconds = max(MIN_TIMER_SECONDS, min(MAX_TIMER_SECONDS, float(value)))
    return round(seconds, 1)


def parse_naming(value: NamingConvention | str) -> NamingConvention:
    if isinstance(value, NamingConvention):
        return value
    try:
        return NamingConvention(str(value).strip().upper())
    except ValueError as exc:
        raise InvalidConfigError(f"unknown naming convention {value!r}") from exc


_MODE_ALIASES: Final = {mode.value.lower(): mode for mode in Mode}


def parse_mode(value: Mode | str) -> Mode:
    if isinstance(value, Mode):
        return value
    key = str(value).strip().lower()
    mode = _MODE_ALIASES.get(key)
    if mode is None:
        raise InvalidConfigError(f"unknown mode {value!r}")
    return mode


@dataclass(frozen=True)
class DrillConfig:
    players: int = 6
    timer_seconds: float = 10.0
    naming: NamingConvention = NamingConvention.B
    mode: Mode = Mode.POS_TO_SEAT

    @classmethod
    def create(
        cls,
        *,
        players: int | None = None,
        timer_seconds: float | None = None,
        naming: NamingConvention | str | None = None,
        mode: Mode | str | None = None,
        base: DrillConfig | None = None,
    ) -> DrillConfig:
        """Build a normalised config, filling gaps from ``base`` (or the defaults)."""

        start = base if base is not None else default_config()
        return start.updated(players=players, timer_seconds=timer_seconds, naming=naming, mode=mode)

    def updated(
        self,
        *,
        players: int | None = None,
        timer_seconds: float | None = None,
        naming: NamingConvention | str | None = None,
        mode: Mode | str | None = None,
    ) -> DrillConfig:
        changes: dict[str, Any] = {}
        if players is not None:
            clamped = clamp_players(players)
            if clamped != players:
                logger.warning("Player count %s clamped to %s", players, clamped)
            changes["players"] = clamped
        if timer_seconds is not None:
            changes["timer_seconds"] = clamp_timer(timer_seconds)
        if naming is not None:
            changes["naming"] = parse_naming(naming)
        if mode is not None:
            changes["mode"] = parse_mode(mode)
        return replace(self, **changes) if changes else self

    def regenerates(self, other: DrillConfig) -> bool:
        """True when switching to ``other`` invalidates the current round."""

        return (self.players, self.naming, self.mode) != (other.players, other.naming, other.mode)


_OVERRIDE_STACK: list[dict[str, Any]] = []


def _env_defaults(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field, var in _ENV_KEYS.items():
        raw = environ.get(var)
        if raw is None or not raw.strip():
            continue
        try:
            if field == "players":
                values[field] = int(raw)
            elif field == "timer_seconds":
                values[field] = float(raw)
            elif field == "naming":
                values[field] = parse_naming(raw)
            else:
                values[field] = parse_mode(raw)
        except ValueError:
            logger.debug("Ignoring invalid %s=%r; using built-in default", var, raw)
    return values


def default_config() -> DrillConfig:
    """Return the defaults after applying the environment and active overrides."""

    values = _env_defaults(os.environ)
    for layer in _OVERRIDE_STACK:
        values.update(layer)
    return DrillConfig().updated(**values)


@contextmanager
def override(**values: Any):
    """Temporarily replace default config fields within the context."""

    unknown = set(values) - set(_ENV_KEYS)
    if unknown:
        raise TypeError(f"unknown config fields: {sorted(unknown)}")
    _OVERRIDE_STACK.append(dict(values))
    try:
        yield
    finally:
        _OVERRIDE_STACK.pop()
