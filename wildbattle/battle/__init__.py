"""
Battle system package.
- models.py (moves, species templates, combatants, items)
- mechanics.py (damage, healing, capture odds)
- engine.py (turn state machine)
- encounters.py (replacement opponents)
- events.py (listener interface)
- scheduler.py (deferred follow-ups)
"""
from .engine import BattleEngine
from .events import BattleListener, CollectingListener
from .factory import new_battle_state
from .state import ActionOutcome, BattleState, Phase

__all__ = ["BattleEngine","BattleListener","CollectingListener","new_battle_state","ActionOutcome","BattleState","Phase"]
