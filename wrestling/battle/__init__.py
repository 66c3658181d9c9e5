"""
Battle system package.
Modules:
- core.py (Wrestler, Move, damage formula)
- factory.py (wrestler templates)
- experience.py (rewards, thresholds, level-up growth)
- scheduler.py (cancellable deferred turns)
- session.py (turn state machine)
- service.py (roster/handoff side effects)
"""
from .core import Wrestler, Move, calculate_damage
from .factory import create_wrestler_template
from .session import BattleSession, BattleState
from .service import BattleService, BattleOutcome
__all__ = [
    "Wrestler","Move","calculate_damage","create_wrestler_template",
    "BattleSession","BattleState","BattleService","BattleOutcome",
]
