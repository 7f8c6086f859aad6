"""Wild encounter generation: picks the next opponent once the current one is gone."""
from __future__ import annotations
from typing import Optional, Sequence

from wildbattle.core.errors import ValidationError
from wildbattle.core.rng import RandomSource
from .factory import encounter_templates, instantiate
from .models import Combatant, SpeciesTemplate

class EncounterGenerator:
    def __init__(self, rng: RandomSource, templates: Optional[Sequence[SpeciesTemplate]] = None):
        self.rng = rng
        self.templates = tuple(templates) if templates is not None else tuple(encounter_templates())
        if not self.templates:
            raise ValidationError("Encounter pool is empty")

    def generate(self) -> Combatant:
        template = self.rng.choice(self.templates)
        return instantiate(template)

__all__ = ["EncounterGenerator"]
