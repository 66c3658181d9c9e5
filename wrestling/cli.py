from __future__ import annotations
from typing import Callable, List, Optional
import os
import random

from rich.console import Console
from rich.prompt import Prompt

from wrestling.system.settings import Settings
from wrestling.system.storage import KeyValueStore
from wrestling.core.logging import logger
from wrestling.roster.store import RosterStore
from wrestling.encounters.generator import Encounter, build_lineup
from wrestling.encounters.handoff import BattleHandoff, HandoffChannel
from wrestling.battle.scheduler import TurnScheduler
from wrestling.battle.service import BattleService, BattleOutcome
from wrestling.ui.battle import run_battle_ui
from wrestling.ui.roster import roster_table, summary_panel

class GameContext:
    def __init__(self, settings: Settings, storage: Optional[KeyValueStore] = None,
                 rng: Optional[random.Random] = None, scheduler: Optional[TurnScheduler] = None):
        self.settings = settings
        self.rng = rng or self._create_rng()
        self.storage = storage or KeyValueStore(settings.data.resolved_save_dir())
        self.roster = RosterStore(self.storage)
        self.channel = HandoffChannel()
        self.battle_service = BattleService(self.roster, self.channel, settings.data,
                                            rng=self.rng, scheduler=scheduler)
        self.lineup: List[Encounter] = build_lineup(self.roster.defeated_npcs(), self.rng)

    def _create_rng(self) -> random.Random:
        """Create RNG with optional seed from environment."""
        seed = os.environ.get('WRESTLING_RNG_SEED')
        try:
            return random.Random(int(seed)) if seed else random.Random()
        except ValueError:
            return random.Random()

    # --- Walk-map side ---
    def remaining_encounters(self) -> List[Encounter]:
        return [e for e in self.lineup if not self.roster.is_defeated(e.npc_id)]

    def challenge(self, encounter: Encounter) -> BattleHandoff:
        handoff = BattleHandoff(opponent=encounter.wrestler, player_wrestler=self.roster.player, npc_id=encounter.npc_id)
        self.channel.post(handoff)
        logger.debug("ChallengePosted", npc=encounter.npc_id, opponent=encounter.wrestler.name)
        return handoff

    def after_battle(self, outcome: Optional[BattleOutcome]):
        if outcome is not None and outcome.outcome == "PLAYER_WIN":
            self.lineup = [e for e in self.lineup if e.npc_id != outcome.npc_id]

    def rest_player(self) -> bool:
        p = self.roster.player
        return self.roster.heal(p.id, p.max_hp - p.hp)

def _pick_index(console: Console, ask: Callable[[str], str], count: int, prompt: str) -> Optional[int]:
    raw = ask(prompt).strip()
    if not raw.isdigit() or not (1 <= int(raw) <= count):
        if raw:
            console.print("[yellow]Invalid choice.[/yellow]")
        return None
    return int(raw) - 1

def _challenge_menu(ctx: GameContext, console: Console, ask: Callable[[str], str]):
    remaining = ctx.remaining_encounters()
    if not remaining:
        console.print("Every wrestler on the map has been beaten.")
        return
    for i, enc in enumerate(remaining, 1):
        console.print(f"  {i}) {enc.label} -> {enc.wrestler.name} Lv{enc.wrestler.level}")
    idx = _pick_index(console, ask, len(remaining), "Challenge who? (blank to cancel)")
    if idx is None:
        return
    ctx.challenge(remaining[idx])
    outcome = run_battle_ui(ctx.battle_service, con=console, ask=ask)
    ctx.after_battle(outcome)

def _roster_pick(ctx: GameContext, console: Console, ask: Callable[[str], str], verb: str):
    members = ctx.roster.members
    if not members:
        console.print("No wrestlers in roster yet.")
        return None
    console.print(roster_table(ctx.roster))
    idx = _pick_index(console, ask, len(members), f"{verb} which wrestler? (blank to cancel)")
    return None if idx is None else members[idx]

def run(console: Optional[Console] = None, ask: Optional[Callable[[str], str]] = None,
        settings: Optional[Settings] = None):
    settings = settings or Settings.load()
    logger.set_level(settings.data.log_level)
    console = console or Console()
    ask = ask or (lambda prompt: Prompt.ask(prompt, console=console, default=""))
    ctx = GameContext(settings)
    console.print("[bold]Welcome to Wrestling RPG! Find wrestlers to battle![/bold]")
    while True:
        console.print(summary_panel(ctx.roster))
        console.print("1) Challenge  2) Roster  3) Rest  4) Heal roster member  5) Release wrestler  6) Quit")
        choice = ask("Select").strip().lower()
        if choice in ("1", "c", "challenge"):
            _challenge_menu(ctx, console, ask)
        elif choice in ("2", "r", "roster"):
            console.print(roster_table(ctx.roster))
        elif choice in ("3", "rest"):
            ctx.rest_player()
            console.print(f"{ctx.roster.player.name} is fully rested.")
        elif choice in ("4", "h", "heal"):
            w = _roster_pick(ctx, console, ask, "Heal")
            if w is not None and ctx.roster.heal(w.id, w.max_hp):
                console.print(f"{w.name} is back to full health.")
        elif choice in ("5", "release"):
            w = _roster_pick(ctx, console, ask, "Release")
            if w is not None and ctx.roster.remove(w.id):
                console.print(f"{w.name} left your roster.")
        elif choice in ("6", "q", "quit"):
            console.print("Goodbye!")
            break
    settings.save()
