from __future__ import annotations
from typing import Optional

from rich.table import Table
from rich.panel import Panel
from rich.box import ROUNDED

from wrestling.roster.store import RosterStore
from wrestling.ui.battle import hp_bar

def roster_table(roster: RosterStore) -> Table:
    table = Table(title=f"Roster {roster.count}/{roster.max_size}", box=ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Lv", justify="right")
    table.add_column("HP")
    table.add_column("POW", justify="right")
    table.add_column("SPD", justify="right")
    table.add_column("CHA", justify="right")
    for i, w in enumerate(roster.members, 1):
        table.add_row(str(i), w.name, str(w.level), f"{hp_bar(w.hp, w.max_hp, 10)} {w.hp}/{w.max_hp}",
                      str(w.power), str(w.speed), str(w.charisma))
    if not roster.count:
        table.caption = "No wrestlers in roster yet. Battle some wrestlers to add them!"
    return table

def summary_panel(roster: RosterStore, title: Optional[str] = None) -> Panel:
    s = roster.summary()
    p = roster.player
    body = (
        f"Active: [bold]{p.name}[/bold] Lv{p.level}  HP {p.hp}/{p.max_hp}  EXP {p.experience}\n"
        f"Wrestlers: {s.count}  Avg level: {s.average_level}  Highest: {s.highest_level}"
    )
    return Panel(body, title=title or "[bold]Summary[/bold]", box=ROUNDED)
