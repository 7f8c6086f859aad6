"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at wildbattle/core/paths.py
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DATA = PACKAGE_ROOT / "data"
MOVES_FILE = DATA / "moves.json"
SPECIES_FILE = DATA / "species.json"
ITEMS_FILE = DATA / "items.json"
ENCOUNTERS_FILE = DATA / "encounters.json"
SETTINGS_FILENAME = ".wildbattle_settings.json"
