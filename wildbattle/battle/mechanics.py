"""Damage, healing and capture math.

Everything here is pure apart from the random source passed in and the HP of
the combatant being damaged or healed.
"""
from __future__ import annotations
import math

from wildbattle.core.rng import RandomSource
from .models import Combatant, MoveDefinition

DAMAGE_VARIANCE = 3
MIN_DAMAGE = 1
BASE_CATCH_CHANCE = 0.5  # at (almost) zero HP
MIN_CATCH_CHANCE = 0.05

def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)

def compute_damage(move: MoveDefinition, rng: RandomSource) -> int:
    variance = rng.uniform(-DAMAGE_VARIANCE, DAMAGE_VARIANCE)
    return max(MIN_DAMAGE, _round_half_up(move.base_power + variance))

def apply_damage(target: Combatant, amount: int) -> int:
    """Subtract ``amount`` HP (never below 0). Returns HP actually lost."""
    old = target.set_hp(max(0, target.current_hp - int(amount)))
    return old - target.current_hp

def apply_heal(target: Combatant, amount: int) -> int:
    """Restore ``amount`` HP (never above max). Returns HP actually restored."""
    old = target.set_hp(min(target.max_hp, target.current_hp + int(amount)))
    return target.current_hp - old

def compute_catch_chance(opponent: Combatant) -> float:
    return max(MIN_CATCH_CHANCE, BASE_CATCH_CHANCE * (1 - opponent.hp_fraction))

def roll_capture(chance: float, rng: RandomSource) -> bool:
    return rng.random() < chance

def choose_opponent_move(user: Combatant, rng: RandomSource) -> MoveDefinition:
    return rng.choice(user.moves)

__all__ = ["compute_damage","apply_damage","apply_heal","compute_catch_chance","roll_capture","choose_opponent_move"]
