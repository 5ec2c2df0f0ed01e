# -*- coding: utf-8 -*-

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Tuple

PHASE_WORK = "work"
PHASE_BREAK = "break"
PHASE_LONG_BREAK = "long_break"

# field -> (min, max), inclusive
SETTINGS_RANGES: Dict[str, Tuple[int, int]] = {
    "work_minutes": (1, 60),
    "break_minutes": (1, 30),
    "long_break_minutes": (5, 60),
    "cycles_before_long_break": (1, 10),
}

# persisted record key -> dataclass field
_RECORD_KEYS = {
    "workDuration": "work_minutes",
    "breakDuration": "break_minutes",
    "longBreakDuration": "long_break_minutes",
    "cyclesBeforeLongBreak": "cycles_before_long_break",
}


@dataclass(frozen=True)
class TimerSettings:
    work_minutes: int = 25
    break_minutes: int = 5
    long_break_minutes: int = 15
    cycles_before_long_break: int = 4

    def duration_minutes(self, phase: str) -> int:
        if phase == PHASE_WORK:
            return self.work_minutes
        if phase == PHASE_LONG_BREAK:
            return self.long_break_minutes
        return self.break_minutes

    def clamped(self) -> "TimerSettings":
        values = {}
        for name, (lo, hi) in SETTINGS_RANGES.items():
            values[name] = min(hi, max(lo, int(getattr(self, name))))
        return replace(self, **values)

    def to_record(self) -> Dict[str, int]:
        return {key: getattr(self, name) for key, name in _RECORD_KEYS.items()}

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TimerSettings":
        defaults = cls()
        values = {}
        for key, name in _RECORD_KEYS.items():
            raw = record.get(key) if isinstance(record, dict) else None
            try:
                value = int(raw)
            except (TypeError, ValueError):
                value = 0
            # 0 / missing => default, same as the old `value || default`
            values[name] = value or getattr(defaults, name)
        return cls(**values).clamped()


@dataclass
class Bookmark:
    id: str  # video id
    description: str
    views: int = 0

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Bookmark":
        return cls(
            id=str(record["id"]),
            description=str(record["description"]),
            views=max(0, int(record.get("views") or 0)),
        )


@dataclass(frozen=True)
class CapacityStatus:
    current: int
    max: int
    is_near_limit: bool
    is_at_limit: bool


@dataclass(frozen=True)
class ImportResult:
    imported: int
    skipped: int
    total: int
