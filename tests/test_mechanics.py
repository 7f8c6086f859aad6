import random

import pytest

from wildbattle.battle.mechanics import (
    apply_damage, apply_heal, choose_opponent_move, compute_catch_chance, compute_damage, roll_capture,
)
from wildbattle.battle.models import Combatant, MoveDefinition
from wildbattle.core.rng import ScriptedRandom

TACKLE = MoveDefinition("Tackle", 12)
VINE_WHIP = MoveDefinition("Vine Whip", 16, "Grass")


def make(hp=70, max_hp=70):
    return Combatant("Wild Bulbasaur", max_hp, hp, (VINE_WHIP, TACKLE))


@pytest.mark.parametrize("power", [1, 2, 3, 4])
def test_damage_floor_with_worst_variance(power):
    rng = ScriptedRandom(uniforms=[-3.0])
    assert compute_damage(MoveDefinition("Weak", power), rng) >= 1


def test_damage_stays_within_variance():
    rng = random.Random(12345)
    seen = set()
    for _ in range(2000):
        dmg = compute_damage(VINE_WHIP, rng)
        assert 13 <= dmg <= 19
        seen.add(dmg)
    # Should have some variation
    assert len(seen) > 3


def test_damage_rounds_half_up():
    assert compute_damage(VINE_WHIP, ScriptedRandom(uniforms=[0.5])) == 17
    assert compute_damage(VINE_WHIP, ScriptedRandom(uniforms=[-0.5])) == 16
    assert compute_damage(VINE_WHIP, ScriptedRandom(uniforms=[0.0])) == 16


def test_apply_damage_and_heal_report_actual_change():
    c = make(hp=10)
    assert apply_damage(c, 25) == 10
    assert c.current_hp == 0
    assert apply_heal(c, 100) == 70
    assert c.current_hp == 70
    assert apply_heal(c, 5) == 0


def test_hp_clamped_over_random_sequences():
    """HP stays inside [0, max] whatever mix of hits and heals lands."""
    rng = random.Random(2024)
    for _ in range(200):
        c = make(hp=rng.randint(0, 70))
        for _ in range(50):
            amount = rng.randint(0, 120)
            if rng.random() < 0.5:
                apply_damage(c, amount)
            else:
                apply_heal(c, amount)
            assert 0 <= c.current_hp <= c.max_hp


def test_catch_chance_bounds():
    assert compute_catch_chance(make(hp=70)) == pytest.approx(0.05)
    assert compute_catch_chance(make(hp=0)) == pytest.approx(0.5)
    assert compute_catch_chance(make(hp=35)) == pytest.approx(0.25)


def test_catch_chance_monotonic_in_hp():
    previous = None
    for hp in range(0, 71):
        chance = compute_catch_chance(make(hp=hp))
        assert 0.05 <= chance <= 0.5
        if previous is not None:
            assert chance <= previous
        previous = chance


def test_roll_capture_is_strict():
    assert roll_capture(0.05, ScriptedRandom(randoms=[0.04]))
    assert not roll_capture(0.05, ScriptedRandom(randoms=[0.05]))


def test_opponent_move_choice_uses_rng():
    c = make()
    assert choose_opponent_move(c, ScriptedRandom(choices=[1])) is TACKLE
    rng = random.Random(7)
    picks = {choose_opponent_move(c, rng).name for _ in range(200)}
    assert picks == {"Vine Whip", "Tackle"}
