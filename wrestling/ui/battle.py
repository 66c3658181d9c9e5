"""Terminal battle view built on Rich.

Shows both wrestlers' HP side by side, lists the four moves, and drives a
:class:`~wrestling.battle.service.BattleService` until the match ends. Input
and output are injectable so tests can script a whole battle.
"""
from __future__ import annotations
from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.columns import Columns
from rich.align import Align
from rich.box import ROUNDED
from rich.prompt import Prompt, Confirm

from wrestling.core.errors import BattleSessionMissing
from wrestling.core.logging import logger
from wrestling.battle.core import Wrestler, MOVE_KEYS
from wrestling.battle.session import BattleSession, BattleState
from wrestling.battle.service import BattleService, BattleOutcome
from wrestling.roster.store import RosterAdd

console = Console()

QUIT_KEYS = {"q", "quit", "run"}

def hp_bar(current: int, max_hp: int, width: int = 20) -> str:
    """HP bar as Rich markup; green above half, yellow above a quarter, red below."""
    if max_hp <= 0:
        return "[red]DOWN[/red]"
    percent = max(0, min(current, max_hp)) / max_hp
    filled = int(percent * width)
    if percent > 0.5:
        color = "green"
    elif percent > 0.25:
        color = "yellow"
    else:
        color = "red"
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/{color}]"

def wrestler_panel(w: Wrestler, title: str) -> Panel:
    body = (
        f"[bold bright_white]{w.name} Lv{w.level}[/bold bright_white]\n"
        f"HP: {w.hp}/{w.max_hp}\n"
        f"{hp_bar(w.hp, w.max_hp)}\n"
        f"[dim]POW {w.power}  SPD {w.speed}  CHA {w.charisma}[/dim]"
    )
    return Panel(body, title=f"[bold]{title}[/bold]", box=ROUNDED, width=40, padding=(0, 1))

def render_hud(session: BattleSession) -> Columns:
    return Columns([wrestler_panel(session.opponent, "OPPONENT"), wrestler_panel(session.player, "YOUR WRESTLER")],
                   equal=True, expand=False, padding=(0, 4))

def move_table(w: Wrestler) -> Table:
    table = Table(title="Moves", box=ROUNDED, show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("Damage", justify="center")
    table.add_column("Type")
    for i, key in enumerate(_move_keys(w), 1):
        mv = w.moves[key]
        lo, hi = mv.damage_range
        table.add_row(str(i), mv.name, f"{lo}-{hi}", mv.type)
    return table

def _move_keys(w: Wrestler) -> list[str]:
    ordered = [k for k in MOVE_KEYS if k in w.moves]
    return ordered + [k for k in w.moves if k not in ordered]

def parse_move_choice(w: Wrestler, raw: str) -> Optional[str]:
    """Accept a menu number, a move key, or a move name (case-insensitive)."""
    text = raw.strip()
    keys = _move_keys(w)
    if text.isdigit():
        idx = int(text) - 1
        return keys[idx] if 0 <= idx < len(keys) else None
    low = text.lower()
    for key in keys:
        if key.lower() == low or w.moves[key].name.lower() == low:
            return key
    return None

def _print_new_log(con: Console, session: BattleSession, seen: int) -> int:
    for line in session.log[seen:]:
        con.print(f"  {line}")
    return len(session.log)

def _report_victory(con: Console, outcome: BattleOutcome):
    lines = [f"You defeated {outcome.opponent_name}!"]
    if outcome.captured:
        lines.append(f"{outcome.opponent_name} joined your roster!")
    elif outcome.roster_result is RosterAdd.FULL:
        lines.append("Roster is full!")
    else:
        lines.append(f"{outcome.opponent_name} is already in your roster!")
    lines.append(f"Experience gained: {outcome.experience}")
    if outcome.levels_gained:
        lines.append(f"Level up! (+{outcome.levels_gained})")
    con.print(Align.center(Panel("\n".join(lines), title="[bold green]VICTORY[/bold green]", box=ROUNDED, width=50)))

def run_battle_ui(service: BattleService, *, con: Optional[Console] = None,
                  ask: Optional[Callable[[str], str]] = None,
                  confirm: Optional[Callable[[str], bool]] = None) -> Optional[BattleOutcome]:
    """Run a posted battle to completion.

    Returns the outcome, or None when there was no handoff or the player walked away.
    """
    con = con or console
    ask = ask or (lambda prompt: Prompt.ask(prompt, console=con))
    confirm = confirm or (lambda prompt: Confirm.ask(prompt, console=con))
    try:
        session = service.begin()
    except BattleSessionMissing as e:
        logger.warn("BattleViewWithoutHandoff", detail=e.detail)
        con.print("[red]No battle to start. Returning to the map.[/red]")
        return None
    seen = 0
    while True:
        con.print(render_hud(session))
        seen = _print_new_log(con, session, seen)
        if session.state == BattleState.PLAYER_TURN:
            con.print(move_table(session.player))
            raw = ask("Choose a move (number/name, q to leave)")
            if raw.strip().lower() in QUIT_KEYS:
                service.abort()
                con.print("You left the ring.")
                return None
            key = parse_move_choice(session.player, raw)
            if key is None:
                con.print("[yellow]Unknown move.[/yellow]")
                continue
            service.select_move(key)
        elif session.state == BattleState.OPPONENT_TURN:
            con.print(f"[dim]{session.opponent.name} is thinking...[/dim]")
            if not service.scheduler.wait() and session.state == BattleState.OPPONENT_TURN:
                session.opponent_turn()
        elif session.state == BattleState.VICTORY:
            outcome = service.last_outcome
            if outcome is not None:
                _report_victory(con, outcome)
            return outcome
        elif session.state == BattleState.DEFEAT:
            if confirm("You were defeated! Try again?"):
                retried = service.retry()
                if retried is None:
                    return service.last_outcome
                session = retried
                seen = 0
                continue
            outcome = service.last_outcome
            service.abandon()
            return outcome
        else:
            return None

__all__ = ["run_battle_ui","render_hud","move_table","hp_bar","parse_move_choice","wrestler_panel"]
