"""Runtime loader for the bundled battle data.

Provides cached access to the JSON documents under ``wildbattle/data``.
Callers get raw dicts; :mod:`wildbattle.battle.factory` turns them into
battle records.
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, List

from wildbattle.core.errors import DataLoadError
from wildbattle.core.paths import MOVES_FILE, SPECIES_FILE, ITEMS_FILE, ENCOUNTERS_FILE

def _read(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise DataLoadError(str(path), "file not found")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataLoadError(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise DataLoadError(str(path), "expected a JSON object at top level")
    return data

@lru_cache(maxsize=None)
def all_moves() -> Dict[str, Dict[str, Any]]:
    return _read(MOVES_FILE)

@lru_cache(maxsize=None)
def all_species() -> Dict[str, Dict[str, Any]]:
    return _read(SPECIES_FILE)

def get_move(move_id: str) -> Dict[str, Any]:
    try:
        return all_moves()[move_id]
    except KeyError:
        raise KeyError(f"Move not found: {move_id}") from None

def get_species(species_id: str) -> Dict[str, Any]:
    try:
        return all_species()[species_id]
    except KeyError:
        raise KeyError(f"Species not found: {species_id}") from None

def item_stock() -> Dict[str, Dict[str, Any]]:
    # Not cached: inventory counts are mutable per battle
    return _read(ITEMS_FILE)

@lru_cache(maxsize=None)
def encounter_table() -> Dict[str, Any]:
    return _read(ENCOUNTERS_FILE)

def encounter_pool() -> List[str]:
    return list(encounter_table().get("pool", []))

__all__ = ["all_moves","all_species","get_move","get_species","item_stock","encounter_table","encounter_pool"]
