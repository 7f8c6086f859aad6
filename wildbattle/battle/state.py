"""Battle state container plus read-only snapshots handed to presentation code."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple, FrozenSet

from .models import Combatant, ItemDefinition

class Phase(str, Enum):
    AWAITING_PLAYER_ACTION = "awaiting_player_action"
    RESOLVING_PLAYER_ACTION = "resolving_player_action"
    RESOLVING_OPPONENT_ACTION = "resolving_opponent_action"
    PLAYER_DEFEATED = "player_defeated"
    BATTLE_WON = "battle_won"

class ActionOutcome(str, Enum):
    RESOLVED = "resolved"
    NO_OP = "no_op"
    UNKNOWN_ITEM = "unknown_item"
    TARGET_INVALID = "target_invalid"
    NOTHING_TO_CATCH = "nothing_to_catch"
    NO_ALTERNATE_COMBATANT = "no_alternate_combatant"

@dataclass
class BattleState:
    player: Combatant
    opponent: Combatant
    inventory: Dict[str, ItemDefinition]
    phase: Phase = Phase.AWAITING_PLAYER_ACTION
    actions_enabled: bool = True

    def snapshot(self) -> "BattleSnapshot":
        return BattleSnapshot(
            player=CombatantView.of(self.player),
            opponent=CombatantView.of(self.opponent),
            inventory=MappingProxyType({k: v.remaining_count for k, v in self.inventory.items()}),
            phase=self.phase,
            actions_enabled=self.actions_enabled,
        )

@dataclass(frozen=True)
class CombatantView:
    name: str
    current_hp: int
    max_hp: int
    moves: Tuple[str, ...]
    types: FrozenSet[str]
    image_ref: str | None
    is_defeated: bool

    @classmethod
    def of(cls, c: Combatant) -> "CombatantView":
        return cls(
            name=c.name,
            current_hp=c.current_hp,
            max_hp=c.max_hp,
            moves=tuple(m.name for m in c.moves),
            types=frozenset(c.types),
            image_ref=c.image_ref,
            is_defeated=c.is_defeated,
        )

@dataclass(frozen=True)
class BattleSnapshot:
    player: CombatantView
    opponent: CombatantView
    inventory: Mapping[str, int]
    phase: Phase
    actions_enabled: bool

__all__ = ["Phase","ActionOutcome","BattleState","CombatantView","BattleSnapshot"]
