from __future__ import annotations

import argparse
import sys

from .core.models import Mode, NamingConvention
from .core.settings import DrillConfig, InvalidConfigError, default_config
from .engine_play import run_drill
from .ui.presenters import RichPresenter


def _add_drill_args(p: argparse.ArgumentParser) -> None:
    defaults = default_config()
    p.add_argument("--players", type=int, default=defaults.players, help="Active players, clamped to 2-10")
    p.add_argument(
        "--timer",
        type=float,
        default=defaults.timer_seconds,
        metavar="SECONDS",
        help="Seconds per question, clamped to 0.5-60",
    )
    p.add_argument(
        "--naming",
        default=defaults.naming.value,
        choices=[n.value for n in NamingConvention],
        help="Label set for middle seats: A = MP/MP+1, B = LJ/HJ",
    )
    p.add_argument(
        "--mode",
        default=defaults.mode.value,
        choices=[m.value for m in Mode],
        help="Question type",
    )
    # If omitted, runs with a random seed for variety. Pass an int to reproduce.
    p.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    p.add_argument("--rounds", type=int, default=None, help="Stop after this many rounds (default: until 'q')")
    p.add_argument("--no-color", action="store_true", help="Disable colored output (default is colored)")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="postrainer", description="Poker table-position drill (CLI)")
    _add_drill_args(parser)
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = DrillConfig.create(
            players=args.players,
            timer_seconds=args.timer,
            naming=args.naming,
            mode=args.mode,
        )
    except InvalidConfigError as exc:
        parser.error(str(exc))
    if args.rounds is not None and args.rounds < 1:
        parser.error("--rounds must be at least 1")

    run_drill(
        config,
        RichPresenter(no_color=args.no_color),
        seed=args.seed,
        rounds=args.rounds,
    )


if __name__ == "__main__":
    main()
