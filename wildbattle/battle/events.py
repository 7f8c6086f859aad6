"""Battle notifications.

The engine reports everything that happens through :class:`BattleEvents`.
Presentation code subclasses :class:`BattleListener`, overrides the hooks it
cares about and subscribes; the engine never looks at how anything is drawn.
"""
from __future__ import annotations
from typing import Any, List, Literal, Tuple, TYPE_CHECKING

from wildbattle.core.logging import logger

if TYPE_CHECKING:
    from .models import Combatant, ItemDefinition, MoveDefinition
    from .state import ActionOutcome

Side = Literal["player", "opponent"]

class BattleListener:
    """Base listener; every hook is a no-op."""

    def damage_dealt(self, source: "Combatant", target: "Combatant", amount: int, move: "MoveDefinition"): ...
    def fainted(self, combatant: "Combatant", side: Side): ...
    def healed(self, combatant: "Combatant", amount: int, item: "ItemDefinition"): ...
    def capture_attempted(self, opponent: "Combatant", chance: float): ...
    def capture_result(self, success: bool, opponent: "Combatant"): ...
    def opponent_appeared(self, opponent: "Combatant"): ...
    def actions_enabled_changed(self, enabled: bool): ...
    def hp_changed(self, combatant: "Combatant", old_hp: int, new_hp: int): ...
    def blacked_out(self, combatant: "Combatant"): ...
    def action_rejected(self, outcome: "ActionOutcome", reason: str): ...
    def message(self, text: str): ...


class BattleEvents:
    """Fan-out dispatcher. Listeners are called in subscription order."""

    def __init__(self, listeners: List[BattleListener] | None = None):
        self._listeners: List[BattleListener] = list(listeners or [])

    def subscribe(self, listener: BattleListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: BattleListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listeners(self) -> Tuple[BattleListener, ...]:
        return tuple(self._listeners)

    def emit(self, event: str, *args: Any) -> None:
        for listener in list(self._listeners):
            hook = getattr(listener, event, None)
            if hook is None:
                continue
            try:
                hook(*args)
            except Exception as e:
                # listener errors never interrupt a resolution step
                logger.error("ListenerFailed", listener=type(listener).__name__, event=event, error=repr(e))


class CollectingListener(BattleListener):
    """Records every notification as ``(event, args)``; handy for tests and replays."""

    def __init__(self):
        self.events: List[Tuple[str, Tuple[Any, ...]]] = []

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for n, args in self.events if n == name]

    def messages(self) -> List[str]:
        return [args[0] for args in self.of("message")]

    def clear(self) -> None:
        self.events.clear()

    def damage_dealt(self, source, target, amount, move): self.events.append(("damage_dealt", (source, target, amount, move)))
    def fainted(self, combatant, side): self.events.append(("fainted", (combatant, side)))
    def healed(self, combatant, amount, item): self.events.append(("healed", (combatant, amount, item)))
    def capture_attempted(self, opponent, chance): self.events.append(("capture_attempted", (opponent, chance)))
    def capture_result(self, success, opponent): self.events.append(("capture_result", (success, opponent)))
    def opponent_appeared(self, opponent): self.events.append(("opponent_appeared", (opponent,)))
    def actions_enabled_changed(self, enabled): self.events.append(("actions_enabled_changed", (enabled,)))
    def hp_changed(self, combatant, old_hp, new_hp): self.events.append(("hp_changed", (combatant, old_hp, new_hp)))
    def blacked_out(self, combatant): self.events.append(("blacked_out", (combatant,)))
    def action_rejected(self, outcome, reason): self.events.append(("action_rejected", (outcome, reason)))
    def message(self, text): self.events.append(("message", (text,)))

__all__ = ["Side","BattleListener","BattleEvents","CollectingListener"]
