"""Terminal battle UI.

Draws both combatants as Rich panels with coloured HP bars, keeps a short
scrolling log of engine messages and turns menu picks into engine actions:

  Fight / Bag / Catch / Switch / Clear log / Quit

While the engine has follow-ups queued the UI waits out each delay (scaled by
the text speed setting) and then lets the queue run, so the opponent's answer
always shows up after the player's move.
"""
from __future__ import annotations
import time
from collections import deque
from typing import Callable, Deque, List, Literal, Optional, Sequence

from rich.align import Align
from rich.box import ROUNDED, DOUBLE
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from wildbattle.battle.engine import BattleEngine
from wildbattle.battle.events import BattleListener
from wildbattle.battle.state import ActionOutcome, BattleSnapshot, CombatantView

HpBand = Literal["high", "mid", "low"]

HP_COLORS = {"high": "green", "mid": "dark_orange", "low": "red"}

TYPE_COLORS_HEX = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
}

# 1 fast, 2 normal, 3 slow
SPEED_SCALE = {1: 0.5, 2: 1.0, 3: 1.5}

console = Console()

def hp_percent(current: int, max_hp: int) -> int:
    if max_hp <= 0:
        return 0
    pct = int(current / max_hp * 100 + 0.5)
    return max(0, min(100, pct))

def hp_band(current: int, max_hp: int) -> HpBand:
    pct = hp_percent(current, max_hp)
    if pct > 50:
        return "high"
    if pct > 20:
        return "mid"
    return "low"

def hp_bar(current: int, max_hp: int, width: int = 20) -> str:
    """Rich markup for an HP bar coloured by :func:`hp_band`."""
    pct = hp_percent(current, max_hp)
    filled = int(round(pct / 100 * width))
    color = HP_COLORS[hp_band(current, max_hp)]
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"

def _type_markup(types) -> str:
    parts = []
    for t in sorted(types):
        hex_color = TYPE_COLORS_HEX.get(t.lower())
        parts.append(f"[{hex_color}]{t}[/{hex_color}]" if hex_color else t)
    return "/".join(parts) or "???"

def combatant_panel(c: CombatantView, title: str) -> Panel:
    status = " [red]FNT[/red]" if c.is_defeated else ""
    body = (
        f"[bold bright_white]{c.name}[/bold bright_white]{status}\n"
        f"({_type_markup(c.types)})\n"
        f"HP: {c.current_hp}/{c.max_hp}\n"
        f"{hp_bar(c.current_hp, c.max_hp)}"
    )
    return Panel(body, title=f"[bold]{title}[/bold]", box=ROUNDED, width=40, padding=(0, 1))


class BattleView(BattleListener):
    """Listener that keeps what the screen needs: the log and the button state."""

    def __init__(self, log_lines: int = 8):
        self.log: Deque[str] = deque(maxlen=max(1, log_lines))
        self.actions_enabled = True
        self.last_rejection: Optional[ActionOutcome] = None

    def message(self, text: str):
        self.log.append(text)

    def actions_enabled_changed(self, enabled: bool):
        self.actions_enabled = enabled

    def action_rejected(self, outcome: ActionOutcome, reason: str):
        self.last_rejection = outcome

    def clear_log(self):
        self.log.clear()

    def render(self, snap: BattleSnapshot):
        panels = Columns(
            [combatant_panel(snap.opponent, "WILD"), combatant_panel(snap.player, "YOURS")],
            equal=True, expand=False, padding=(0, 2),
        )
        log_text = Text("\n".join(self.log) if self.log else " ")
        log_panel = Panel(log_text, title="LOG", box=DOUBLE, width=82)
        return Group(Align.center(panels), Align.center(log_panel))


Ask = Callable[..., str]

class TerminalBattle:
    MAIN_CHOICES = ["fight", "bag", "catch", "switch", "clear", "quit"]

    def __init__(self, engine: BattleEngine, view: BattleView, *, out: Console | None = None,
                 pace: float = 1.0, ask: Ask = Prompt.ask, sleep: Callable[[float], None] = time.sleep):
        self.engine = engine
        self.view = view
        self.out = out or console
        self.pace = pace
        self.ask = ask
        self.sleep = sleep
        if view not in engine.events.listeners:
            engine.subscribe(view)

    def draw(self):
        self.out.print(self.view.render(self.engine.get_state()))

    def pump(self):
        """Play out every queued follow-up, pausing for each one's delay."""
        sched = self.engine.scheduler
        while True:
            due = sched.next_due()
            if due is None:
                return
            wait_ms = max(0, due - sched.now)
            if wait_ms and self.pace > 0:
                self.sleep(wait_ms * self.pace / 1000)
            sched.run_next()
            self.draw()

    def _pick(self, title: str, options: Sequence[str]) -> str:
        return self.ask(f"[bold]{title}[/bold]", choices=list(options), console=self.out)

    def _fight(self) -> Optional[ActionOutcome]:
        moves = self.engine.state.player.moves
        for i, m in enumerate(moves, 1):
            self.out.print(f"  {i}) {m.name} [dim](Power {m.base_power}, {m.elemental_type})[/dim]")
        pick = self._pick("Move", [str(i) for i in range(1, len(moves) + 1)] + ["back"])
        if pick == "back":
            return None
        return self.engine.attack(moves[int(pick) - 1])

    def _bag(self) -> Optional[ActionOutcome]:
        inv = self.engine.state.inventory
        for item_id, item in inv.items():
            self.out.print(f"  {item_id}: {item.name} x{item.remaining_count} [dim](heals {item.heal_amount})[/dim]")
        pick = self._pick("Item", list(inv.keys()) + ["back"])
        if pick == "back":
            return None
        return self.engine.use_item(pick)

    def step(self, choice: str) -> Optional[ActionOutcome]:
        if choice == "fight":
            return self._fight()
        if choice == "bag":
            return self._bag()
        if choice == "catch":
            return self.engine.attempt_catch()
        if choice == "switch":
            return self.engine.switch_active()
        if choice == "clear":
            self.view.clear_log()
        return None

    def run(self) -> BattleSnapshot:
        self.engine.start()
        while True:
            self.draw()
            if self.engine.is_over:
                self.out.print(Align.center("[bold red]GAME OVER[/bold red]"))
                break
            choice = self._pick("Action", self.MAIN_CHOICES)
            if choice == "quit":
                break
            self.step(choice)
            self.pump()
        return self.engine.get_state()

__all__ = ["hp_percent","hp_band","hp_bar","combatant_panel","BattleView","TerminalBattle","SPEED_SCALE","console"]
