"""Battle engine: the single-battle state machine.

One call per player decision (:meth:`BattleEngine.attack`,
:meth:`~BattleEngine.use_item`, :meth:`~BattleEngine.attempt_catch`,
:meth:`~BattleEngine.switch_active`). Each call resolves the player's part
synchronously and queues whatever follows (the opponent's answer, or a fresh
opponent) on the engine's :class:`DeferredQueue`. Player actions stay disabled
from the moment one starts until the whole chain has played out.

Phases::

    AWAITING_PLAYER_ACTION -> RESOLVING_PLAYER_ACTION -> RESOLVING_OPPONENT_ACTION -> AWAITING_PLAYER_ACTION
                                     |                               |
                                     v                               v
                                BATTLE_WON -- new opponent -->   PLAYER_DEFEATED (final)

Rejected calls never raise; they return an :class:`ActionOutcome` and are
reported through ``action_rejected`` plus a log message.
"""
from __future__ import annotations
import random
from typing import Iterable, Optional

from wildbattle.core.logging import logger
from wildbattle.core.rng import RandomSource
from .encounters import EncounterGenerator
from .events import BattleEvents, BattleListener
from .mechanics import (
    apply_damage, apply_heal, choose_opponent_move, compute_catch_chance, compute_damage, roll_capture,
)
from .models import Combatant, MoveDefinition
from .scheduler import DeferredQueue
from .state import ActionOutcome, BattleSnapshot, BattleState, Phase

FOLLOW_UP_DELAY_MS = 700
CAPTURE_DELAY_MS = 900
SPAWN_DELAY_MS = 900

class BattleEngine:
    def __init__(
        self,
        state: BattleState,
        *,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[DeferredQueue] = None,
        encounters: Optional[EncounterGenerator] = None,
        listeners: Iterable[BattleListener] = (),
        follow_up_delay_ms: int = FOLLOW_UP_DELAY_MS,
        capture_delay_ms: int = CAPTURE_DELAY_MS,
        spawn_delay_ms: int = SPAWN_DELAY_MS,
    ):
        self.state = state
        self.rng: RandomSource = rng or random.Random()
        self.scheduler = scheduler or DeferredQueue()
        self.encounters = encounters or EncounterGenerator(self.rng)
        self.events = BattleEvents(list(listeners))
        self.follow_up_delay_ms = follow_up_delay_ms
        self.capture_delay_ms = capture_delay_ms
        self.spawn_delay_ms = spawn_delay_ms
        self._spawn_pending = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_state(self) -> BattleSnapshot:
        return self.state.snapshot()

    @property
    def busy(self) -> bool:
        return self.scheduler.pending() > 0

    @property
    def is_over(self) -> bool:
        return self.state.phase is Phase.PLAYER_DEFEATED

    def subscribe(self, listener: BattleListener) -> None:
        self.events.subscribe(listener)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _msg(self, text: str):
        self.events.emit("message", text)

    def _ready(self) -> bool:
        return self.state.actions_enabled and self.state.phase is Phase.AWAITING_PLAYER_ACTION

    def _set_actions_enabled(self, enabled: bool):
        if self.state.actions_enabled == enabled:
            return
        self.state.actions_enabled = enabled
        self.events.emit("actions_enabled_changed", enabled)

    def _reject(self, outcome: ActionOutcome, reason: str) -> ActionOutcome:
        logger.debug("ActionRejected", outcome=outcome.value, phase=self.state.phase.value)
        self.events.emit("action_rejected", outcome, reason)
        self._msg(reason)
        return outcome

    def _hit(self, source: Combatant, target: Combatant, move: MoveDefinition) -> int:
        dmg = compute_damage(move, self.rng)
        old = target.current_hp
        apply_damage(target, dmg)
        self.events.emit("damage_dealt", source, target, dmg, move)
        self.events.emit("hp_changed", target, old, target.current_hp)
        logger.debug("HitResolved", source=source.name, move=move.name, damage=dmg, target=target.name, hp=target.current_hp)
        return dmg

    def _resolve_move(self, move: MoveDefinition | str) -> Optional[MoveDefinition]:
        known = self.state.player.moves
        if isinstance(move, MoveDefinition):
            return move if move in known else None
        return self.state.player.find_move(move)

    def _schedule_opponent_turn(self):
        self.scheduler.schedule(self.opponent_turn, self.follow_up_delay_ms, "opponent_turn")

    def _schedule_spawn(self, delay_ms: int):
        if self._spawn_pending:
            return
        self._spawn_pending = True
        self.scheduler.schedule(self._deferred_spawn, delay_ms, "spawn_opponent")

    def _deferred_spawn(self):
        self._spawn_pending = False
        self.spawn_opponent()

    @staticmethod
    def _appeared_text(c: Combatant) -> str:
        name = c.name
        if name.lower().startswith("wild "):
            name = name[5:]
        return f"A wild {name} appeared!"

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def start(self):
        """Announce the opening matchup to listeners."""
        self._msg("Battle started!")
        self.events.emit("actions_enabled_changed", self.state.actions_enabled)
        self._msg(self._appeared_text(self.state.opponent))
        self.events.emit("opponent_appeared", self.state.opponent)
        logger.info("BattleStarted", player=self.state.player.name, opponent=self.state.opponent.name)

    def attack(self, move: MoveDefinition | str) -> ActionOutcome:
        p, o = self.state.player, self.state.opponent
        if p.is_defeated or o.is_defeated or not self._ready():
            return self._reject(ActionOutcome.NO_OP, "You can't attack right now.")
        chosen = self._resolve_move(move)
        if chosen is None:
            label = move.name if isinstance(move, MoveDefinition) else move
            return self._reject(ActionOutcome.NO_OP, f"{p.name} doesn't know {label}.")

        self.state.phase = Phase.RESOLVING_PLAYER_ACTION
        self._set_actions_enabled(False)
        dmg = self._hit(p, o, chosen)
        self._msg(f"{p.name} used {chosen.name}! It dealt {dmg} damage.")

        if o.is_defeated:
            self._msg(f"{o.name} fainted!")
            self.events.emit("fainted", o, "opponent")
            self._msg("You defeated the wild Pokémon!")
            self.state.phase = Phase.BATTLE_WON
            logger.info("OpponentDefeated", opponent=o.name)
            self._schedule_spawn(self.spawn_delay_ms)
        else:
            self._schedule_opponent_turn()
        return ActionOutcome.RESOLVED

    def use_item(self, item_id: str) -> ActionOutcome:
        p = self.state.player
        item = self.state.inventory.get(item_id)
        if item is None or not item.in_stock:
            return self._reject(ActionOutcome.UNKNOWN_ITEM, "You don't have that item.")
        if p.is_defeated:
            return self._reject(ActionOutcome.TARGET_INVALID, f"You can't use items on a fainted {p.name}.")
        if self.state.opponent.is_defeated or not self._ready():
            return self._reject(ActionOutcome.NO_OP, "You can't use an item right now.")

        self.state.phase = Phase.RESOLVING_PLAYER_ACTION
        self._set_actions_enabled(False)
        item.consume()
        old = p.current_hp
        restored = apply_heal(p, item.heal_amount)
        self.events.emit("healed", p, restored, item)
        self.events.emit("hp_changed", p, old, p.current_hp)
        self._msg(f"Used {item.name} on {p.name}. Healed {restored} HP.")
        logger.debug("ItemUsed", item=item_id, restored=restored, left=item.remaining_count)
        self._schedule_opponent_turn()
        return ActionOutcome.RESOLVED

    def attempt_catch(self) -> ActionOutcome:
        o = self.state.opponent
        if o.is_defeated:
            return self._reject(ActionOutcome.NOTHING_TO_CATCH, "There's nothing to catch.")
        if not self._ready():
            return self._reject(ActionOutcome.NO_OP, "You can't throw a ball right now.")

        self.state.phase = Phase.RESOLVING_PLAYER_ACTION
        self._set_actions_enabled(False)
        chance = compute_catch_chance(o)
        self._msg("You throw a Poké Ball...")
        self.events.emit("capture_attempted", o, chance)
        caught = roll_capture(chance, self.rng)
        logger.debug("CaptureRolled", opponent=o.name, chance=round(chance, 3), caught=caught)
        if caught:
            self._msg(f"Gotcha! {o.name} was caught!")
            self.events.emit("capture_result", True, o)
            self.state.phase = Phase.BATTLE_WON
            self._schedule_spawn(self.capture_delay_ms)
        else:
            self._msg(f"{o.name} broke free!")
            self.events.emit("capture_result", False, o)
            self._schedule_opponent_turn()
        return ActionOutcome.RESOLVED

    def switch_active(self) -> ActionOutcome:
        # Single-member party; kept as the hook for multi-member parties
        return self._reject(ActionOutcome.NO_ALTERNATE_COMBATANT, "You don't have other Pokémon to switch to.")

    # ------------------------------------------------------------------
    # Deferred steps
    # ------------------------------------------------------------------
    def opponent_turn(self):
        p, o = self.state.player, self.state.opponent
        if p.is_defeated or o.is_defeated:
            return
        self.state.phase = Phase.RESOLVING_OPPONENT_ACTION
        mv = choose_opponent_move(o, self.rng)
        dmg = self._hit(o, p, mv)
        self._msg(f"{o.name} used {mv.name} and dealt {dmg} damage!")
        if p.is_defeated:
            self._msg(f"{p.name} fainted!")
            self.events.emit("fainted", p, "player")
            self._msg("You have no usable Pokémon. You blacked out...")
            self.events.emit("blacked_out", p)
            self.state.phase = Phase.PLAYER_DEFEATED
            self._set_actions_enabled(False)
            logger.info("PlayerBlackedOut", player=p.name, opponent=o.name)
            return
        self.state.phase = Phase.AWAITING_PLAYER_ACTION
        self._set_actions_enabled(True)

    def spawn_opponent(self) -> Combatant:
        """Replace the opponent with a freshly generated one and hand control back."""
        new = self.encounters.generate()
        self.state.opponent = new
        logger.info("OpponentSpawned", opponent=new.name, hp=new.max_hp)
        self._msg(self._appeared_text(new))
        self.events.emit("opponent_appeared", new)
        self.events.emit("hp_changed", new, new.current_hp, new.current_hp)
        if self.state.player.is_defeated:
            self.state.phase = Phase.PLAYER_DEFEATED
            return new
        self.state.phase = Phase.AWAITING_PLAYER_ACTION
        self._set_actions_enabled(True)
        return new

__all__ = ["BattleEngine","FOLLOW_UP_DELAY_MS","CAPTURE_DELAY_MS","SPAWN_DELAY_MS"]
