from __future__ import annotations

from collections import Counter

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.interfaces import Presenter
from ..core.models import (
    SEAT_COUNT,
    IpToSeatQuestion,
    PosToSeatQuestion,
    Question,
    Round,
    SeatIpQuestion,
    SeatToPosQuestion,
)
from ..dynamic.positions import BB, BTN, SB

_ACTION_STYLE = {
    "OR": "bold red",
    "call": "bold green",
    "3bet": "bold magenta",
    "fold": "dim",
}


def question_prompt(question: Question) -> str:
    match question:
        case PosToSeatQuestion(label=label):
            return f"Which seat is [bold]{label}[/]?"
        case SeatToPosQuestion(target_seat=seat):
            return f"Position of seat [bold]{seat}[/]?"
        case SeatIpQuestion(target_seat=seat):
            return f"Seat [bold]{seat}[/]: [bold]IP[/] or [bold]OOP[/]?"
        case IpToSeatQuestion(ask_who=who):
            return f"Which seat is [bold]{who}[/]?"
    raise TypeError(f"unsupported question type {type(question).__name__}")


def _asked_seat(question: Question) -> int | None:
    if isinstance(question, (SeatToPosQuestion, SeatIpQuestion)):
        return question.target_seat
    return None


class RichPresenter(Presenter):
    def __init__(self, *, no_color: bool = False, input_fn=input):
        if no_color:
            self.console = Console(force_terminal=False, color_system=None)
        else:
            self.console = Console(force_terminal=True, color_system="auto")
        self._input = input_fn
        self.quit_requested = False

    def start_session(self, total_rounds: int | None) -> None:
        rounds = "until you quit" if total_rounds is None else f"{total_rounds} rounds"
        guide = (
            f"[bold]Position drill[/] ({rounds}).\n"
            "- Seats are numbered clockwise 0-9; empty seats are greyed out.\n"
            "- D marks the dealer button; SB/BB chips mark the blinds.\n"
            "- Answer with a seat number, a position label (e.g. HJ) or ip/oop.\n\n"
            "[bold]Controls[/]: answer • h = help • q = quit"
        )
        self.console.print(Panel(guide, title="Session Guide", border_style="green"))
        self.console.print()

    def show_round(self, round_: Round, time_left: float) -> None:
        asked = _asked_seat(round_.question)
        table = Table(show_header=True, header_style="bold blue", box=box.SIMPLE_HEAVY)
        table.add_column("Seat", justify="right", style="cyan", no_wrap=True)
        table.add_column("Chip", justify="center")
        table.add_column("Action", justify="center")
        table.add_column("", justify="left")
        for seat in range(SEAT_COUNT):
            if not round_.is_active(seat):
                table.add_row(f"[dim]{seat}[/]", "", "[dim]empty[/]", "")
                continue
            table.add_row(
                str(seat),
                self._chip(round_.labels[seat]),
                self._action(round_.actions[seat]),
                "[bold yellow]◀ asked[/]" if seat == asked else "",
            )
        self.console.rule(f"Round {round_.number} · {round_.question.mode.value}")
        self.console.print(table)
        self.console.print(f"{question_prompt(round_.question)}  [dim]({time_left:.1f}s)[/]")

    def prompt_answer(self, question: Question) -> str | None:  # noqa: ARG002 - defined by protocol
        while True:
            raw = self._input("Answer: ").strip()
            lowered = raw.lower()
            if lowered == "q":
                self.quit_requested = True
                return None
            if lowered in {"h", "help"}:
                self._print_help()
                continue
            if raw:
                return raw
            self.console.print("[red]Empty answer[/]. Type a seat, a label, ip/oop, or 'q'.")

    def answer_feedback(self, correct: bool, *, accepted: bool = True) -> None:
        if not accepted:
            self.console.print("[dim]That control is not used in this mode.[/]")
        elif correct:
            self.console.print("✓ [green]Correct[/]\n")
        else:
            self.console.print("✗ [red]Wrong[/], try again.")

    def timed_out(self, question: Question) -> None:
        self.console.print(f"[red]Time is up[/]: {self._reveal(question)}\n")

    def summary(self, results: list[str]) -> None:
        if not results:
            self.console.print("No rounds played.")
            return
        counts = Counter(results)
        rounds = counts["correct"] + counts["timeout"]
        table = Table(title="Session Summary", show_header=False)
        table.add_row("Rounds played:", str(rounds))
        table.add_row("Solved:", str(counts["correct"]))
        table.add_row("Timed out:", str(counts["timeout"]))
        table.add_row("Wrong attempts:", str(counts["wrong"]))
        self.console.print("\n")
        self.console.print(table)

    # --- helpers ---
    def _chip(self, label: str) -> str:
        if label == BTN:
            return "[bold blue]D[/]"
        if label == SB:
            return "[yellow]SB[/]"
        if label == BB:
            return "[bold yellow]BB[/]"
        return ""

    def _action(self, tag: str) -> str:
        if not tag:
            return ""
        style = _ACTION_STYLE.get(tag, "")
        return f"[{style}]{tag.upper()}[/]" if style else tag.upper()

    def _reveal(self, question: Question) -> str:
        match question:
            case PosToSeatQuestion(label=label, target_seat=seat):
                return f"{label} was seat {seat}."
            case SeatToPosQuestion(target_seat=seat, correct_label=label):
                return f"seat {seat} was {label}."
            case SeatIpQuestion(target_seat=seat, is_ip=is_ip):
                return f"seat {seat} was {'IP' if is_ip else 'OOP'}."
            case IpToSeatQuestion(ask_who=who, correct_seat=seat):
                return f"{who} was seat {seat}."
        return ""

    def _print_help(self) -> None:
        table = Table(show_header=False)
        table.add_row("Seat answer:", "0-9")
        table.add_row("Position answer:", "UTG, HJ, CO, BTN, SB, BB, ...")
        table.add_row("IP/OOP answer:", "ip / oop")
        table.add_row("Quit:", "q")
        self.console.print(Panel.fit(table, title="Controls", style="dim"))
