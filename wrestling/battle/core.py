"""Wrestler records and the damage formula.

Everything here is pure data plus small mutation helpers; the turn state
machine lives in :mod:`wrestling.battle.session`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Tuple, Any, Optional
import copy
import math
import random

from wrestling.core.errors import ValidationError

MOVE_KEYS: Tuple[str, ...] = ("bigMove", "signature", "taunt", "finisher")

# Shared generator for callers that do not inject their own
_rng = random.Random()

def round_half_up(value: float) -> int:
    """Round like JavaScript ``Math.round`` (halves go up, not to even)."""
    return int(math.floor(value + 0.5))

def roll(rng: Optional[random.Random], lo: int, hi: int) -> int:
    """Uniform integer in the inclusive range [lo, hi]."""
    return (rng or _rng).randint(int(lo), int(hi))

def calculate_damage(attacker_power: float, defender_speed: float, base_damage: float,
                     rng: Optional[random.Random] = None) -> int:
    """Damage dealt by one hit.

    ``base_damage`` is expected to be pre-rolled from the move's range; the
    result adds a second +/-20% roll on top of the speed-adjusted value.
    """
    speed_reduction = defender_speed * 0.1
    final_damage = max(1, base_damage + attacker_power - speed_reduction)
    lo = round_half_up(final_damage * 0.8)
    hi = round_half_up(final_damage * 1.2)
    return max(1, roll(rng, lo, hi))

@dataclass
class Move:
    name: str
    damage_range: Tuple[int, int]
    type: str

    def __post_init__(self):
        lo, hi = (int(v) for v in self.damage_range)
        if lo <= 0 or hi < lo:
            raise ValidationError(f"Invalid damage range for {self.name}: {self.damage_range}")
        self.damage_range = (lo, hi)

    def widen(self, low: int, high: int):
        lo, hi = self.damage_range
        self.damage_range = (lo + low, hi + high)

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "damageRange": list(self.damage_range), "type": self.type}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Move":
        # Older saves stored the range under "damage"
        rng_val = data.get("damageRange", data.get("damage"))
        if not isinstance(rng_val, (list, tuple)) or len(rng_val) != 2:
            raise ValidationError(f"Move {data.get('name')!r} has no damage range")
        return cls(name=str(data.get("name", "")), damage_range=(rng_val[0], rng_val[1]),
                   type=str(data.get("type", "")))

@dataclass
class Wrestler:
    id: str
    name: str
    level: int
    hp: int
    max_hp: int
    power: int
    speed: int
    charisma: int
    experience: int = 0
    moves: Dict[str, Move] = field(default_factory=dict)

    def __post_init__(self):
        self.clamp_hp()

    def clamp_hp(self):
        self.max_hp = max(0, int(self.max_hp))
        self.hp = max(0, min(int(self.hp), self.max_hp))

    def is_defeated(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: int) -> int:
        """Subtract ``amount`` (floor 0). Returns HP actually lost."""
        old = self.hp
        self.hp = max(0, old - int(amount))
        return old - self.hp

    def heal(self, amount: int) -> int:
        old = self.hp
        self.hp = min(old + int(amount), self.max_hp)
        return self.hp - old

    def copy(self) -> "Wrestler":
        return copy.deepcopy(self)

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "hp": self.hp,
            "maxHp": self.max_hp,
            "power": self.power,
            "speed": self.speed,
            "charisma": self.charisma,
            "experience": self.experience,
            "moves": {k: m.to_json() for k, m in self.moves.items()},
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Wrestler":
        if not isinstance(data, dict):
            raise ValidationError(f"Wrestler record must be an object, got {type(data).__name__}")
        missing = [k for k in ("id", "name", "level", "maxHp") if k not in data]
        if missing:
            raise ValidationError(f"Wrestler record missing {', '.join(missing)}")
        try:
            moves = {k: Move.from_json(m) for k, m in (data.get("moves") or {}).items()}
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                level=max(1, int(data["level"])),
                hp=int(data.get("hp", data["maxHp"])),
                max_hp=int(data["maxHp"]),
                power=int(data.get("power", 0)),
                speed=int(data.get("speed", 0)),
                charisma=int(data.get("charisma", 0)),
                experience=max(0, int(data.get("experience", 0))),
                moves=moves,
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Malformed wrestler record {data.get('name')!r}: {e}") from e

__all__ = [
    "Move", "Wrestler", "MOVE_KEYS", "calculate_damage", "roll", "round_half_up"
]
