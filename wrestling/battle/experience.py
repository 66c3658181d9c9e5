"""Experience rewards, level thresholds and the level-up stat bump.

- A win is worth ``opponent level * 50`` experience.
- A wrestler needs ``level * 100`` experience to level; the threshold is
  subtracted on each level gained so leftovers carry over.
"""
from __future__ import annotations
from .core import Wrestler

MIN_LEVEL = 1
EXP_PER_OPPONENT_LEVEL = 50
EXP_PER_LEVEL = 100

# Per-level growth
HP_PER_LEVEL = 20
POWER_PER_LEVEL = 2
SPEED_PER_LEVEL = 1
CHARISMA_PER_LEVEL = 1
MOVE_RANGE_GROWTH = (2, 3)

def clamp_level(level) -> int:
    try:
        return max(MIN_LEVEL, int(level))
    except (TypeError, ValueError):
        return MIN_LEVEL

def experience_reward(opponent_level: int) -> int:
    return clamp_level(opponent_level) * EXP_PER_OPPONENT_LEVEL

def required_exp_for_level(level: int) -> int:
    return clamp_level(level) * EXP_PER_LEVEL

def apply_level_up(wrestler: Wrestler) -> None:
    wrestler.level += 1
    wrestler.max_hp += HP_PER_LEVEL
    wrestler.hp = wrestler.max_hp  # full heal on level up
    wrestler.power += POWER_PER_LEVEL
    wrestler.speed += SPEED_PER_LEVEL
    wrestler.charisma += CHARISMA_PER_LEVEL
    for move in wrestler.moves.values():
        move.widen(*MOVE_RANGE_GROWTH)

def award_experience(wrestler: Wrestler, gained: int) -> int:
    """Add experience and level up while over threshold.

    Returns the number of levels gained.
    """
    wrestler.experience = max(0, wrestler.experience + int(gained))
    levels = 0
    while wrestler.experience >= required_exp_for_level(wrestler.level):
        wrestler.experience -= required_exp_for_level(wrestler.level)
        apply_level_up(wrestler)
        levels += 1
    return levels

__all__ = [
    "experience_reward","required_exp_for_level","award_experience","apply_level_up","clamp_level","MIN_LEVEL"
]
