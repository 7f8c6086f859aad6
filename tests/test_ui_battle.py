import io

import pytest
from rich.console import Console

from wildbattle.battle.engine import BattleEngine
from wildbattle.battle.factory import new_battle_state
from wildbattle.battle.state import ActionOutcome
from wildbattle.core.rng import ScriptedRandom
from wildbattle.ui.battle import BattleView, TerminalBattle, hp_band, hp_bar, hp_percent


@pytest.mark.parametrize("cur,band", [
    (80, "high"),
    (41, "high"),   # 51%
    (40, "mid"),    # 50%
    (17, "mid"),    # 21%
    (16, "low"),    # 20%
    (1, "low"),
    (0, "low"),
])
def test_hp_band_thresholds(cur, band):
    assert hp_band(cur, 80) == band


def test_hp_percent_rounds_and_clamps():
    assert hp_percent(54, 70) == 77
    assert hp_percent(0, 70) == 0
    assert hp_percent(10, 0) == 0


def test_hp_bar_colour_follows_band():
    assert "[green]" in hp_bar(70, 70)
    assert "[dark_orange]" in hp_bar(30, 70)
    assert "[red]" in hp_bar(5, 70)


def test_view_keeps_only_recent_lines():
    view = BattleView(log_lines=2)
    for text in ("one", "two", "three"):
        view.message(text)
    assert list(view.log) == ["two", "three"]
    view.clear_log()
    assert not view.log


def scripted(*answers):
    it = iter(answers)
    return lambda *a, **k: next(it)


def make_ui(answers, rng=None):
    engine = BattleEngine(new_battle_state(), rng=rng or ScriptedRandom())
    view = BattleView()
    out = Console(file=io.StringIO(), width=100, force_terminal=False)
    sleeps = []
    ui = TerminalBattle(engine, view, out=out, ask=scripted(*answers), sleep=sleeps.append)
    return ui, engine, view, sleeps


def test_fight_then_quit_plays_both_turns():
    ui, engine, view, sleeps = make_ui(["fight", "1", "quit"])
    ui.run()
    # Thunder Shock for 18, then Vine Whip back for 16
    assert engine.state.opponent.current_hp == 52
    assert engine.state.player.current_hp == 64
    assert sleeps == [pytest.approx(0.7)]
    assert any("used Thunder Shock" in line for line in view.log)
    assert view.actions_enabled
    assert "Pikachu" in ui.out.file.getvalue()


def test_bag_back_and_switch_do_not_spend_a_turn():
    ui, engine, view, sleeps = make_ui(["bag", "back", "switch", "clear", "quit"])
    ui.run()
    assert engine.state.inventory["potion"].remaining_count == 3
    assert sleeps == []
    assert view.last_rejection is ActionOutcome.NO_ALTERNATE_COMBATANT
    assert list(view.log) == []


def test_catch_success_brings_new_opponent():
    ui, engine, view, sleeps = make_ui(["catch", "quit"], rng=ScriptedRandom(randoms=[0.01], choices=[1]))
    first = engine.state.opponent
    ui.run()
    assert engine.state.opponent is not first
    assert engine.state.opponent.name == "Wild Pikachu"
    assert sleeps == [pytest.approx(0.9)]
    assert "A wild Pikachu appeared!" in view.log


def test_blackout_ends_the_loop():
    ui, engine, view, _ = make_ui(["fight", "2"])
    engine.state.player.set_hp(1)
    final = ui.run()
    assert engine.is_over
    assert final.player.is_defeated
    assert "GAME OVER" in ui.out.file.getvalue()


def test_pace_scales_waits():
    ui, engine, view, sleeps = make_ui(["bag", "potion", "quit"])
    ui.pace = 0.5
    engine.state.player.set_hp(50)
    ui.run()
    assert engine.state.inventory["potion"].remaining_count == 2
    assert sleeps == [pytest.approx(0.35)]
