from __future__ import annotations
import random
from typing import Iterable

from wildbattle.battle.encounters import EncounterGenerator
from wildbattle.battle.engine import BattleEngine
from wildbattle.battle.events import BattleListener
from wildbattle.battle.factory import new_battle_state
from wildbattle.core.logging import logger
from wildbattle.system.settings import Settings, SettingsData
from wildbattle.ui.battle import BattleView, TerminalBattle, SPEED_SCALE

def build_engine(data: SettingsData, listeners: Iterable[BattleListener] = ()) -> BattleEngine:
    rng = random.Random(data.seed)
    return BattleEngine(
        new_battle_state(),
        rng=rng,
        encounters=EncounterGenerator(rng),
        listeners=listeners,
        follow_up_delay_ms=data.follow_up_delay_ms,
        capture_delay_ms=data.capture_delay_ms,
        spawn_delay_ms=data.spawn_delay_ms,
    )

def run():
    settings = Settings.load()
    logger.set_level(settings.data.log_level)  # type: ignore[arg-type]
    if settings.data.debug:
        logger.set_level("DEBUG")
    view = BattleView(settings.data.log_lines)
    engine = build_engine(settings.data, [view])
    try:
        TerminalBattle(engine, view, pace=SPEED_SCALE.get(settings.data.text_speed, 1.0)).run()
    except (KeyboardInterrupt, EOFError):
        print("\nBye!")
