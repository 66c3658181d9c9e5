"""Turn state machine for a single player-vs-opponent encounter.

States::

    NOT_STARTED -> PLAYER_TURN <-> OPPONENT_TURN -> VICTORY | DEFEAT

ABORTED is reachable from any non-terminal state via :meth:`BattleSession.abort`.

The player's move resolves synchronously; the opponent's reply is deferred
through a :class:`~wrestling.battle.scheduler.TurnScheduler` so the caller can
show "thinking" time and cancel the reply if the battle is torn down.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
import random

from wrestling.core.logging import logger
from .core import Wrestler, calculate_damage, roll
from .scheduler import ScheduledTurn, TurnScheduler

OPPONENT_DELAY = 1.5

class BattleState(str, Enum):
    NOT_STARTED = "not_started"
    PLAYER_TURN = "player_turn"
    OPPONENT_TURN = "opponent_turn"
    VICTORY = "victory"
    DEFEAT = "defeat"
    ABORTED = "aborted"

    @property
    def terminal(self) -> bool:
        return self in (BattleState.VICTORY, BattleState.DEFEAT, BattleState.ABORTED)

class Turn(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"

@dataclass
class MoveResult:
    attacker: str
    defender: str
    move_key: str
    move_name: str
    base_damage: int
    damage: int
    defender_hp: int
    knocked_out: bool

class BattleSession:
    def __init__(self, player: Wrestler, opponent: Wrestler, npc_id, *,
                 rng: Optional[random.Random] = None,
                 scheduler: Optional[TurnScheduler] = None,
                 opponent_delay: float = OPPONENT_DELAY,
                 message_cb: Optional[Callable[[str], None]] = None,
                 on_finish: Optional[Callable[["BattleSession"], None]] = None):
        self.player = player
        self.opponent = opponent
        self.npc_id = npc_id
        self.rng = rng or random.Random()
        self.scheduler = scheduler or TurnScheduler()
        self.opponent_delay = opponent_delay
        self.message_cb = message_cb
        self.on_finish = on_finish
        self.state = BattleState.NOT_STARTED
        self.turn_counter = 0
        self.log: List[str] = []
        self._pending: Optional[ScheduledTurn] = None
        self._log = logger.bind(npc=npc_id)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        return self.state in (BattleState.PLAYER_TURN, BattleState.OPPONENT_TURN)

    @property
    def turn(self) -> Optional[Turn]:
        if self.state == BattleState.PLAYER_TURN:
            return Turn.PLAYER
        if self.state == BattleState.OPPONENT_TURN:
            return Turn.OPPONENT
        return None

    @property
    def pending_turn(self) -> Optional[ScheduledTurn]:
        if self._pending is not None and self._pending.pending:
            return self._pending
        return None

    def _msg(self, text: str):
        self.log.append(text)
        if self.message_cb:
            self.message_cb(text)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start(self) -> bool:
        if self.state != BattleState.NOT_STARTED:
            return False
        self.state = BattleState.PLAYER_TURN
        self._log.debug("BattleStart", player=self.player.name, opponent=self.opponent.name)
        self._msg(f"Battle started! {self.opponent.name} challenges you!")
        # Someone already down: no move could ever resolve
        if self.player.is_defeated():
            self._finish(BattleState.DEFEAT)
        elif self.opponent.is_defeated():
            self._finish(BattleState.VICTORY)
        else:
            self._msg("Select your move!")
        return True

    def select_move(self, move_key: str) -> Optional[MoveResult]:
        """Resolve the player's move. Out-of-turn or unknown moves are ignored (None)."""
        if self.state != BattleState.PLAYER_TURN:
            return None
        if move_key not in self.player.moves:
            self._log.debug("UnknownMoveIgnored", move=move_key)
            return None
        result = self._strike(self.player, self.opponent, move_key)
        if result is None:
            return None
        self.turn_counter += 1
        if self.opponent.is_defeated():
            self._finish(BattleState.VICTORY)
            return result
        self.state = BattleState.OPPONENT_TURN
        self._pending = self.scheduler.schedule(self.opponent_delay, self.opponent_turn, label="opponent_turn")
        return result

    def opponent_turn(self) -> Optional[MoveResult]:
        if self.state != BattleState.OPPONENT_TURN:
            return None
        if self._pending is not None:
            # Fired early by hand: drop the scheduled copy
            self._pending.cancel()
            self._pending = None
        move_key = self.rng.choice(list(self.opponent.moves))
        result = self._strike(self.opponent, self.player, move_key)
        if result is None:
            return None
        if self.player.is_defeated():
            self._finish(BattleState.DEFEAT)
            return result
        self.state = BattleState.PLAYER_TURN
        self._msg("Select your move!")
        return result

    def abort(self) -> bool:
        """Tear down a non-terminal session; no further moves resolve."""
        if self.state.terminal:
            return False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.state = BattleState.ABORTED
        self._log.debug("BattleAborted")
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _strike(self, attacker: Wrestler, defender: Wrestler, move_key: str) -> Optional[MoveResult]:
        # A defeated side neither acts nor takes further damage
        if attacker.is_defeated() or defender.is_defeated():
            return None
        move = attacker.moves[move_key]
        base = roll(self.rng, *move.damage_range)
        damage = calculate_damage(attacker.power, defender.speed, base, self.rng)
        defender.take_damage(damage)
        self._msg(f"{attacker.name} used {move.name}!")
        self._msg(f"Dealt {damage} damage to {defender.name}!")
        return MoveResult(
            attacker=attacker.name,
            defender=defender.name,
            move_key=move_key,
            move_name=move.name,
            base_damage=base,
            damage=damage,
            defender_hp=defender.hp,
            knocked_out=defender.is_defeated(),
        )

    def _finish(self, state: BattleState):
        self.state = state
        if state == BattleState.VICTORY:
            self._msg(f"{self.player.name} wins the match!")
        else:
            self._msg(f"{self.player.name} was defeated!")
        self._log.info("BattleFinished", outcome=state.value, turns=self.turn_counter)
        if self.on_finish:
            self.on_finish(self)

__all__ = ["BattleSession", "BattleState", "Turn", "MoveResult", "OPPONENT_DELAY"]
