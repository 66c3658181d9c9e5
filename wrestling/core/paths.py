"""
Centralized path helpers.
"""
from __future__ import annotations
import os
from pathlib import Path

SAVE_DIR_NAME = ".wrestling_rpg"
SETTINGS_FILENAME = ".wrestling_settings.json"

def home_dir() -> Path:
    return Path(os.path.expanduser("~"))

def default_save_dir() -> Path:
    return home_dir() / SAVE_DIR_NAME
