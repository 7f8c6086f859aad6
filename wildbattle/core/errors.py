"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class WildBattleError(Exception):
    pass

class ValidationError(WildBattleError):
    pass

class InvalidTemplate(ValidationError):
    def __init__(self, template: str, detail: str):
        super().__init__(f"Invalid species template '{template}': {detail}")
        self.template = template
        self.detail = detail

class DataLoadError(WildBattleError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail
