"""One-shot transfer of battle parameters from the walk map to the battle view."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from wrestling.core.logging import logger
from wrestling.battle.core import Wrestler

@dataclass
class BattleHandoff:
    opponent: Wrestler
    player_wrestler: Wrestler
    npc_id: Any

    def to_json(self) -> Dict[str, Any]:
        return {
            "opponent": self.opponent.to_json(),
            "playerWrestler": self.player_wrestler.to_json(),
            "npcId": self.npc_id,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "BattleHandoff":
        return cls(
            opponent=Wrestler.from_json(data["opponent"]),
            player_wrestler=Wrestler.from_json(data["playerWrestler"]),
            npc_id=data.get("npcId"),
        )

class HandoffChannel:
    def __init__(self):
        self._current: Optional[BattleHandoff] = None

    def post(self, handoff: BattleHandoff):
        if self._current is not None:
            logger.warn("HandoffReplaced", npc=self._current.npc_id)
        # Snapshot so later changes on the walk map don't leak into the battle
        self._current = BattleHandoff(handoff.opponent.copy(), handoff.player_wrestler.copy(), handoff.npc_id)

    def peek(self) -> Optional[BattleHandoff]:
        return self._current

    def clear(self) -> bool:
        had = self._current is not None
        self._current = None
        return had

    @property
    def pending(self) -> bool:
        return self._current is not None

__all__ = ["BattleHandoff", "HandoffChannel"]
