"""Random sources for battle rolls.

Everything that rolls dice (damage variance, opponent move choice, capture
rolls, encounter selection) takes a :class:`RandomSource`. ``random.Random``
already satisfies it; :class:`ScriptedRandom` replays fixed values so tests can
pin every roll.
"""
from __future__ import annotations
from collections import deque
from typing import Iterable, Protocol, Sequence, TypeVar

T = TypeVar("T")

class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...
    def random(self) -> float: ...
    def choice(self, seq: Sequence[T]) -> T: ...


class ScriptedRandom:
    """Deterministic source that hands out queued values in order.

    Once a queue runs dry it falls back to a neutral value: the midpoint for
    ``uniform``, ``0.5`` for ``random`` and the first element for ``choice``.
    ``choices`` holds indexes into whatever sequence is passed to ``choice``.
    """

    def __init__(self, *, uniforms: Iterable[float] = (), randoms: Iterable[float] = (), choices: Iterable[int] = ()):
        self._uniforms = deque(uniforms)
        self._randoms = deque(randoms)
        self._choices = deque(choices)
        self.calls: list[str] = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append("uniform")
        if self._uniforms:
            return self._uniforms.popleft()
        return (a + b) / 2

    def random(self) -> float:
        self.calls.append("random")
        if self._randoms:
            return self._randoms.popleft()
        return 0.5

    def choice(self, seq: Sequence[T]) -> T:
        self.calls.append("choice")
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        idx = self._choices.popleft() if self._choices else 0
        return seq[idx % len(seq)]

__all__ = ["RandomSource","ScriptedRandom"]
