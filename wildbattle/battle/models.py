"""Battle records: moves, species templates, combatants and bag items."""
from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Tuple

from wildbattle.core.errors import ValidationError

@dataclass(frozen=True)
class MoveDefinition:
    name: str
    base_power: int
    elemental_type: str = "Normal"

    def __post_init__(self):
        if not self.name:
            raise ValidationError("Move name must not be empty")
        if self.base_power <= 0:
            raise ValidationError(f"Move '{self.name}' needs base_power > 0 (got {self.base_power})")

@dataclass(frozen=True)
class SpeciesTemplate:
    name: str
    max_hp: int
    moves: Tuple[MoveDefinition, ...]
    types: FrozenSet[str] = frozenset()
    image_ref: str | None = None

@dataclass(eq=False)
class Combatant:
    name: str
    max_hp: int
    current_hp: int
    moves: Tuple[MoveDefinition, ...]
    types: FrozenSet[str] = frozenset()
    image_ref: str | None = None

    def __post_init__(self):
        if self.max_hp <= 0:
            raise ValidationError(f"Combatant '{self.name}' needs max_hp > 0 (got {self.max_hp})")
        if not self.moves:
            raise ValidationError(f"Combatant '{self.name}' needs at least one move")
        self.current_hp = max(0, min(self.max_hp, int(self.current_hp)))

    @property
    def is_defeated(self) -> bool:
        return self.current_hp <= 0

    @property
    def hp_fraction(self) -> float:
        return self.current_hp / self.max_hp

    def set_hp(self, value: int) -> int:
        """Clamp ``value`` into ``[0, max_hp]`` and store it. Returns the old HP."""
        old = self.current_hp
        self.current_hp = max(0, min(self.max_hp, int(value)))
        return old

    def find_move(self, name: str) -> MoveDefinition | None:
        key = name.lower()
        for m in self.moves:
            if m.name.lower() == key:
                return m
        return None

@dataclass
class ItemDefinition:
    name: str
    heal_amount: int
    remaining_count: int = 0

    def __post_init__(self):
        if self.heal_amount <= 0:
            raise ValidationError(f"Item '{self.name}' needs heal_amount > 0 (got {self.heal_amount})")
        if self.remaining_count < 0:
            raise ValidationError(f"Item '{self.name}' cannot start with a negative count")

    @property
    def in_stock(self) -> bool:
        return self.remaining_count > 0

    def consume(self) -> bool:
        if self.remaining_count <= 0:
            return False
        self.remaining_count -= 1
        return True

__all__ = ["MoveDefinition","SpeciesTemplate","Combatant","ItemDefinition"]
