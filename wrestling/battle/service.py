"""Battle service tying sessions to the roster and the walk-map handoff.

One service instance is built per game context. It reads the posted
:class:`~wrestling.encounters.handoff.BattleHandoff`, runs sessions, and on a
terminal state applies the persistence side effects:

- victory: capture the opponent, award experience, persist the player,
  mark the NPC defeated, clear the handoff;
- defeat: nothing persisted; caller picks :meth:`retry` or :meth:`abandon`;
- abort: nothing persisted, handoff cleared.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Optional
import random

from wrestling.core.logging import logger
from wrestling.core.errors import BattleSessionMissing
from wrestling.system.settings import SettingsData
from .experience import experience_reward, award_experience
from .scheduler import TurnScheduler
from .session import BattleSession, BattleState, MoveResult

if TYPE_CHECKING:
    from wrestling.roster.store import RosterStore, RosterAdd
    from wrestling.encounters.handoff import HandoffChannel

@dataclass
class BattleOutcome:
    outcome: Literal["PLAYER_WIN", "PLAYER_LOSS"]
    npc_id: Any
    opponent_name: str
    experience: int = 0
    levels_gained: int = 0
    roster_result: Optional[RosterAdd] = None

    @property
    def captured(self) -> bool:
        return self.roster_result is not None and self.roster_result.ok

class BattleService:
    def __init__(self, roster: RosterStore, channel: HandoffChannel, settings: Optional[SettingsData] = None, *,
                 rng: Optional[random.Random] = None, scheduler: Optional[TurnScheduler] = None):
        self.roster = roster
        self.channel = channel
        self.settings = settings or SettingsData()
        self.rng = rng or random.Random()
        self.scheduler = scheduler or TurnScheduler()
        self.session: Optional[BattleSession] = None
        self.last_outcome: Optional[BattleOutcome] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def begin(self, *, restore_hp: bool = False) -> BattleSession:
        """Start a session from the posted handoff.

        Raises BattleSessionMissing when nothing was posted; the battle view
        should hand control back to the walk map.
        """
        handoff = self.channel.peek()
        if handoff is None:
            raise BattleSessionMissing()
        if self.session is not None and not self.session.state.terminal:
            # Replaced mid-fight: its queued opponent turn must never land
            self.session.abort()
        player = handoff.player_wrestler.copy()
        if restore_hp:
            player.hp = player.max_hp
        session = BattleSession(
            player,
            handoff.opponent.copy(),
            handoff.npc_id,
            rng=self.rng,
            scheduler=self.scheduler,
            opponent_delay=self.settings.opponent_delay,
            message_cb=self._echo if self.settings.debug else None,
            on_finish=self._on_finish,
        )
        self.session = session
        self.last_outcome = None
        session.start()
        return session

    def select_move(self, move_key: str) -> Optional[MoveResult]:
        if self.session is None:
            return None
        return self.session.select_move(move_key)

    def retry(self) -> Optional[BattleSession]:
        """Reissue a fresh session after a defeat. Returns None if not defeated."""
        if self.session is None or self.session.state != BattleState.DEFEAT:
            return None
        logger.info("BattleRetry", npc=self.session.npc_id, restore_hp=self.settings.retry_restores_hp)
        return self.begin(restore_hp=self.settings.retry_restores_hp)

    def abandon(self) -> bool:
        """Give up after a defeat: discard the session with no roster changes."""
        if self.session is None or self.session.state != BattleState.DEFEAT:
            return False
        self._teardown()
        return True

    def abort(self) -> bool:
        """Walk away mid-battle. Nothing is persisted."""
        if self.session is None:
            self.channel.clear()
            return False
        aborted = self.session.abort()
        if aborted or self.session.state == BattleState.DEFEAT:
            self._teardown()
        return aborted

    def _teardown(self):
        self.channel.clear()
        self.session = None

    # ------------------------------------------------------------------
    # Terminal handling
    # ------------------------------------------------------------------
    def _echo(self, text: str):
        print(f"[BATTLE] {text}")

    def _on_finish(self, session: BattleSession):
        if session.state == BattleState.VICTORY:
            self.last_outcome = self._resolve_victory(session)
        elif session.state == BattleState.DEFEAT:
            self.last_outcome = BattleOutcome("PLAYER_LOSS", session.npc_id, session.opponent.name)

    def _resolve_victory(self, session: BattleSession) -> BattleOutcome:
        opponent = session.opponent
        roster_result = self.roster.add(opponent.copy())
        exp = experience_reward(opponent.level)
        levels = 0
        if self.settings.award_experience:
            levels = award_experience(session.player, exp)
        self.roster.save_player_wrestler(session.player.copy())
        self.roster.mark_defeated(session.npc_id)
        self.channel.clear()
        logger.info("BattleVictory", opponent=opponent.name, roster=roster_result.value, exp=exp, levels=levels)
        return BattleOutcome(
            outcome="PLAYER_WIN",
            npc_id=session.npc_id,
            opponent_name=opponent.name,
            experience=exp,
            levels_gained=levels,
            roster_result=roster_result,
        )

__all__ = ["BattleService", "BattleOutcome"]
