"""Factory helpers for constructing Wrestler instances at a given level.

Shared across the roster store, opponent generation and tests.
"""
from __future__ import annotations
from typing import Dict
import uuid
from .core import Wrestler, Move
from .experience import clamp_level

BASE_MOVES: Dict[str, tuple] = {
    "bigMove":   ("Big Move",  (15, 25), "power"),
    "signature": ("Signature", (20, 30), "signature"),
    "taunt":     ("Taunt",     (5, 10),  "charisma"),
    "finisher":  ("Finisher",  (30, 40), "finisher"),
}

DEFAULT_PLAYER_NAME = "Your Custom Wrestler"

def new_wrestler_id() -> str:
    return uuid.uuid4().hex

def derive_stats(level: int) -> Dict[str, int]:
    lv = clamp_level(level) - 1
    return {
        "max_hp": 100 + lv * 20,
        "power": 10 + lv * 2,
        "speed": 8 + lv,
        "charisma": 7 + lv,
    }

def create_wrestler_template(name: str, level: int = 1) -> Wrestler:
    level = clamp_level(level)
    stats = derive_stats(level)
    moves = {key: Move(name=n, damage_range=rng, type=t) for key, (n, rng, t) in BASE_MOVES.items()}
    return Wrestler(
        id=new_wrestler_id(),
        name=name,
        level=level,
        hp=stats["max_hp"],
        max_hp=stats["max_hp"],
        power=stats["power"],
        speed=stats["speed"],
        charisma=stats["charisma"],
        experience=0,
        moves=moves,
    )

def default_player_wrestler() -> Wrestler:
    w = create_wrestler_template(DEFAULT_PLAYER_NAME, 5)
    w.max_hp = 150
    w.hp = 150
    w.power = 25
    w.speed = 20
    w.charisma = 18
    return w

__all__ = ["create_wrestler_template","default_player_wrestler","derive_stats","new_wrestler_id","BASE_MOVES"]
