"""
Game exceptions. None of them escape the battle or roster APIs: callers get
``None``/``False`` or a ``RosterAdd`` back, and the failure is logged.
"""
from __future__ import annotations
from typing import Optional

class WrestlingError(Exception):
    pass

class DataLoadError(WrestlingError):
    """A save file exists but could not be read or parsed."""
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(WrestlingError):
    """A wrestler record or change set is malformed; ``field`` names the culprit when known."""
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

class BattleSessionMissing(WrestlingError):
    """Raised when a battle view starts without a posted handoff."""
    def __init__(self, detail: str = "no battle handoff posted"):
        super().__init__(detail)
        self.detail = detail
