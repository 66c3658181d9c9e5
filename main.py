#!/usr/bin/env python3
"""
Wrestling RPG - terminal edition

Thin wrapper around the package entry point. The game lives in the
wrestling package:
- battle engine (wrestlers, damage, turn state machine)
- roster/progression store
- Rich terminal views

To run: python main.py
"""

from wrestling.cli import run

if __name__ == "__main__":
    run()
