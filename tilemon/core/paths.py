"""
Centralized path helpers for packaged static data.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at tilemon/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
ASSETS = PACKAGE / "assets"
MOVES = ASSETS / "moves"
POKEMON = ASSETS / "pokemon"
ABILITIES = ASSETS / "abilities"
