from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Callable, List, Optional
from wildbattle.core.logging import logger
from wildbattle.core.paths import SETTINGS_FILENAME

LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    text_speed: int = 2              # 1 fast, 2 normal, 3 slow (scales battle pauses)
    log_level: str = "WARN"          # DEBUG / INFO / WARN / ERROR
    follow_up_delay_ms: int = 700    # pause before the opponent answers
    capture_delay_ms: int = 900      # pause before a caught opponent is replaced
    spawn_delay_ms: int = 900        # pause before a fainted opponent is replaced
    seed: Optional[int] = None       # fixed seed for reproducible battles
    log_lines: int = 8               # visible lines in the battle log
    debug: bool = False

    def normalize(self):
        if self.text_speed not in {1,2,3}:
            self.text_speed = 2
        if self.log_level not in LOG_LEVELS:
            self.log_level = "WARN"
        for name, default in (("follow_up_delay_ms", 700), ("capture_delay_ms", 900), ("spawn_delay_ms", 900)):
            val = getattr(self, name)
            if not isinstance(val, int) or val < 0:
                setattr(self, name, default)
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None
        if not isinstance(self.log_lines, int) or self.log_lines < 1:
            self.log_lines = 8

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path is not None else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def update(self, **changes: Any):
        field_names = {f.name for f in fields(SettingsData)}
        for k, v in changes.items():
            if k not in field_names:
                raise AttributeError(f"Unknown setting: {k}")
            setattr(self.data, k, v)
        self.data.normalize()
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
