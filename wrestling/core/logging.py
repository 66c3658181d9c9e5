"""
Structured console logger for the game.

Lines look like ``<utc time> [LEVEL] EventName key=value ...``, coloured per
level with colorama. ``bind()`` returns a child that stamps the same fields
on every line (a battle binds its npc id, for example).
"""
from __future__ import annotations
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Literal, Optional, TextIO

from colorama import Fore, Style, init as colorama_init

colorama_init()

Level = Literal["DEBUG","INFO","WARN","ERROR"]

LEVELS: Dict[str, int] = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

COLORS = {
    "DEBUG": Fore.BLUE,
    "INFO": Fore.GREEN,
    "WARN": Fore.YELLOW,
    "ERROR": Fore.RED,
}
RESET = Style.RESET_ALL

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

class Logger:
    def __init__(self, level: Level = "INFO", stream: Optional[TextIO] = None,
                 clock: Callable[[], datetime] = _utc_now, color: bool = True):
        self.threshold = LEVELS[level]
        self.stream = stream
        self.clock = clock
        self.color = color
        self.context: Dict[str, Any] = {}
        self._parent: Optional[Logger] = None

    def set_level(self, level: str):
        """Unknown names fall back to INFO. Children follow their root's level."""
        self._root().threshold = LEVELS.get(str(level).upper(), LEVELS["INFO"])

    def bind(self, **context: Any) -> "Logger":
        child = Logger.__new__(Logger)
        child._parent = self
        child.context = {**self.context, **context}
        return child

    def enabled(self, lvl: Level) -> bool:
        return LEVELS[lvl] >= self._root().threshold

    def _root(self) -> "Logger":
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def format(self, lvl: Level, msg: str, extra: Dict[str, Any]) -> str:
        root = self._root()
        ts = root.clock().isoformat(timespec="seconds")
        fields = {**self.context, **extra}
        line = f"{ts} [{lvl}] {msg}"
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        if root.color:
            line = f"{COLORS[lvl]}{line}{RESET}"
        return line

    def _emit(self, lvl: Level, msg: str, **extra: Any):
        if not self.enabled(lvl):
            return
        out = self._root().stream or sys.stdout
        out.write(self.format(lvl, msg, extra) + "\n")

    def debug(self, msg: str, **kw): self._emit("DEBUG", msg, **kw)
    def info(self, msg: str, **kw): self._emit("INFO", msg, **kw)
    def warn(self, msg: str, **kw): self._emit("WARN", msg, **kw)
    def error(self, msg: str, **kw): self._emit("ERROR", msg, **kw)

logger = Logger("INFO")
