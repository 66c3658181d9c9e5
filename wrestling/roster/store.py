"""Roster and active-player persistence with capacity/uniqueness rules."""
from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from wrestling.core.logging import logger
from wrestling.core.errors import ValidationError
from wrestling.battle.core import Wrestler, Move, round_half_up
from wrestling.battle.experience import apply_level_up, clamp_level
from wrestling.battle.factory import default_player_wrestler
from wrestling.system.storage import KeyValueStore, ROSTER_KEY, PLAYER_KEY, DEFEATED_KEY

MAX_ROSTER_SIZE = 6

UPDATABLE_FIELDS = frozenset(f.name for f in fields(Wrestler)) - {"id"}

def _coerce_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and normalise an update. Raises ValidationError on the first bad field."""
    clean: Dict[str, Any] = {}
    for key, value in changes.items():
        if key not in UPDATABLE_FIELDS:
            raise ValidationError(f"{key!r} cannot be updated", field=key)
        if key == "name":
            if not isinstance(value, str) or not value.strip():
                raise ValidationError("name must be a non-empty string", field=key)
            clean[key] = value
            continue
        if key == "moves":
            if not isinstance(value, dict) or not all(isinstance(m, Move) for m in value.values()):
                raise ValidationError("moves must map keys to Move records", field=key)
            clean[key] = dict(value)
            continue
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{key} must be a number, got {value!r}", field=key) from e
        clean[key] = clamp_level(number) if key == "level" else max(0, number)
    return clean

class RosterAdd(str, Enum):
    ADDED = "added"
    FULL = "full"
    DUPLICATE_NAME = "duplicate-name"

    @property
    def ok(self) -> bool:
        return self is RosterAdd.ADDED

@dataclass
class RosterSummary:
    count: int
    average_level: int
    highest_level: int

    def as_dict(self) -> Dict[str, int]:
        return {"count": self.count, "averageLevel": self.average_level, "highestLevel": self.highest_level}

class RosterStore:
    def __init__(self, storage: KeyValueStore, *, max_size: int = MAX_ROSTER_SIZE):
        self.storage = storage
        self.max_size = max_size
        self._roster: List[Wrestler] = self._load_roster()
        self._defeated: List[Any] = list(dict.fromkeys(storage.load(DEFEATED_KEY, []) or []))
        self._player: Wrestler = self._load_player()

    # ------------------------------------------------------------------
    # Loading / saving
    # ------------------------------------------------------------------
    def _load_roster(self) -> List[Wrestler]:
        raw = self.storage.load(ROSTER_KEY, [])
        if not isinstance(raw, list):
            logger.warn("RosterMalformed", kind=type(raw).__name__)
            return []
        roster: List[Wrestler] = []
        for entry in raw:
            try:
                roster.append(Wrestler.from_json(entry))
            except ValidationError as e:
                logger.warn("RosterEntrySkipped", error=str(e))
        return roster[: self.max_size]

    def _load_player(self) -> Wrestler:
        raw = self.storage.load(PLAYER_KEY)
        if raw is not None:
            try:
                return Wrestler.from_json(raw)
            except ValidationError as e:
                logger.warn("PlayerWrestlerInvalidUsingDefault", error=str(e))
        player = default_player_wrestler()
        self.save_player_wrestler(player)
        return player

    def save_roster(self) -> bool:
        return self.storage.save(ROSTER_KEY, [w.to_json() for w in self._roster])

    def save_player_wrestler(self, wrestler: Wrestler) -> bool:
        self._player = wrestler
        return self.storage.save(PLAYER_KEY, wrestler.to_json())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def player(self) -> Wrestler:
        return self._player

    @property
    def members(self) -> List[Wrestler]:
        return list(self._roster)

    @property
    def count(self) -> int:
        return len(self._roster)

    def is_full(self) -> bool:
        return len(self._roster) >= self.max_size

    def get(self, wrestler_id: str) -> Optional[Wrestler]:
        return next((w for w in self._roster if w.id == wrestler_id), None)

    def _find(self, wrestler_id: str) -> tuple[Optional[Wrestler], bool]:
        """Roster entry first, then the active player. Second item is True for the player."""
        w = self.get(wrestler_id)
        if w is not None:
            return w, False
        if self._player.id == wrestler_id:
            return self._player, True
        return None, False

    def _persist(self, is_player: bool) -> bool:
        return self.save_player_wrestler(self._player) if is_player else self.save_roster()

    def summary(self) -> RosterSummary:
        if not self._roster:
            return RosterSummary(0, 0, 0)
        levels = [w.level for w in self._roster]
        return RosterSummary(
            count=len(levels),
            average_level=round_half_up(sum(levels) / len(levels)),
            highest_level=max(levels),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, wrestler: Wrestler) -> RosterAdd:
        if self.is_full():
            logger.info("RosterFull", name=wrestler.name, max=self.max_size)
            return RosterAdd.FULL
        if any(w.name == wrestler.name for w in self._roster):
            logger.info("RosterDuplicate", name=wrestler.name)
            return RosterAdd.DUPLICATE_NAME
        self._roster.append(wrestler)
        self.save_roster()
        logger.info("RosterAdded", name=wrestler.name, count=len(self._roster))
        return RosterAdd.ADDED

    def remove(self, wrestler_id: str) -> bool:
        for i, w in enumerate(self._roster):
            if w.id == wrestler_id:
                removed = self._roster.pop(i)
                self.save_roster()
                logger.info("RosterRemoved", name=removed.name)
                return True
        return False

    def update(self, wrestler_id: str, **changes: Any) -> bool:
        """Apply field changes to a roster entry (or the player). All-or-nothing."""
        w, is_player = self._find(wrestler_id)
        if w is None:
            return False
        try:
            clean = _coerce_changes(changes)
        except ValidationError as e:
            logger.warn("RosterUpdateRejected", name=w.name, field=e.field, error=str(e))
            return False
        for key, value in clean.items():
            setattr(w, key, value)
        w.clamp_hp()
        return self._persist(is_player)

    def heal(self, wrestler_id: str, amount: int) -> bool:
        w, is_player = self._find(wrestler_id)
        if w is None:
            return False
        healed = w.heal(amount)
        logger.debug("WrestlerHealed", name=w.name, amount=healed, hp=w.hp)
        return self._persist(is_player)

    def level_up(self, wrestler_id: str) -> bool:
        w, is_player = self._find(wrestler_id)
        if w is None:
            return False
        apply_level_up(w)
        logger.info("WrestlerLeveledUp", name=w.name, level=w.level)
        return self._persist(is_player)

    # ------------------------------------------------------------------
    # Defeated NPC registry (consumed by the walk map)
    # ------------------------------------------------------------------
    def mark_defeated(self, npc_id: Any) -> bool:
        if npc_id in self._defeated:
            return False
        self._defeated.append(npc_id)
        self.storage.save(DEFEATED_KEY, self._defeated)
        return True

    def defeated_npcs(self) -> List[Any]:
        return list(self._defeated)

    def is_defeated(self, npc_id: Any) -> bool:
        return npc_id in self._defeated

__all__ = ["RosterStore", "RosterAdd", "RosterSummary", "MAX_ROSTER_SIZE"]
