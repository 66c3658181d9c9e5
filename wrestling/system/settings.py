from __future__ import annotations
import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from wrestling.core.logging import logger
from wrestling.core.paths import home_dir, default_save_dir, SETTINGS_FILENAME

@dataclass
class SettingsData:
    log_level: str = "INFO"          # DEBUG / INFO / WARN / ERROR
    opponent_delay: float = 1.5      # seconds the opponent "thinks" before acting
    retry_restores_hp: bool = False  # retry after defeat starts at full HP
    award_experience: bool = True    # apply the victory reward to the player's wrestler
    debug: bool = False              # verbose battle prints
    save_dir: Optional[str] = None   # None -> ~/.wrestling_rpg

    def normalize(self):
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        try:
            self.opponent_delay = max(0.0, float(self.opponent_delay))
        except (TypeError, ValueError):
            self.opponent_delay = 1.5
        self.retry_restores_hp = bool(self.retry_restores_hp)
        self.award_experience = bool(self.award_experience)
        self.debug = bool(self.debug)

    def resolved_save_dir(self) -> Path:
        return Path(self.save_dir).expanduser() if self.save_dir else default_save_dir()

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        return home_dir() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path is not None else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self) -> bool:
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))
            return False
        logger.debug("SettingsSaved", path=str(self.path))
        return True
