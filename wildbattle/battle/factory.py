"""Factory helpers for constructing battle records from species data.

Shared across the engine, the encounter generator, the CLI and tests.
"""
from __future__ import annotations
from typing import Dict, List, Optional

from wildbattle.core.errors import InvalidTemplate, ValidationError
from wildbattle.data.loader import get_move, get_species, item_stock, encounter_table
from .models import Combatant, ItemDefinition, MoveDefinition, SpeciesTemplate
from .state import BattleState

def instantiate(template: SpeciesTemplate, name_override: str | None = None) -> Combatant:
    """Create a fresh combatant at full HP from ``template``."""
    if template.max_hp <= 0:
        raise InvalidTemplate(template.name, f"max_hp must be > 0 (got {template.max_hp})")
    if not template.moves:
        raise InvalidTemplate(template.name, "at least one move is required")
    return Combatant(
        name=name_override or template.name,
        max_hp=template.max_hp,
        current_hp=template.max_hp,
        moves=tuple(template.moves),
        types=frozenset(template.types),
        image_ref=template.image_ref,
    )

def move(move_id: str) -> MoveDefinition:
    md = get_move(move_id)
    return MoveDefinition(name=md["name"], base_power=int(md["power"]), elemental_type=md.get("type") or "Normal")

def species(species_id: str) -> SpeciesTemplate:
    s = get_species(species_id)
    return SpeciesTemplate(
        name=s["name"],
        max_hp=int(s["max_hp"]),
        moves=tuple(move(mid) for mid in s.get("moves", [])),
        types=frozenset(s.get("types", [])),
        image_ref=s.get("img"),
    )

def combatant_from_species(species_id: str, nickname: str | None = None) -> Combatant:
    return instantiate(species(species_id), nickname)

def encounter_templates() -> List[SpeciesTemplate]:
    return [species(sid) for sid in encounter_table().get("pool", [])]

def default_inventory() -> Dict[str, ItemDefinition]:
    inv: Dict[str, ItemDefinition] = {}
    for item_id, raw in item_stock().items():
        try:
            inv[item_id] = ItemDefinition(name=raw["name"], heal_amount=int(raw["heal"]), remaining_count=int(raw.get("count", 0)))
        except KeyError as e:
            raise ValidationError(f"Item '{item_id}' is missing field {e}") from e
    return inv

def new_battle_state(player: Optional[Combatant] = None, opponent: Optional[Combatant] = None,
                     inventory: Optional[Dict[str, ItemDefinition]] = None) -> BattleState:
    """Assemble the opening state: starter vs the first wild opponent, full bag."""
    table = encounter_table()
    return BattleState(
        player=player or combatant_from_species(table.get("starter", "pikachu")),
        opponent=opponent or combatant_from_species(table.get("first_opponent", "wild_bulbasaur")),
        inventory=default_inventory() if inventory is None else inventory,
    )

__all__ = ["instantiate","move","species","combatant_from_species","encounter_templates","default_inventory","new_battle_state"]
