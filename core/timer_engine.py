# -*- coding: utf-8 -*-

from dataclasses import dataclass
from typing import Tuple

from domain.models import PHASE_BREAK, PHASE_LONG_BREAK, PHASE_WORK, TimerSettings


@dataclass
class EngineSnapshot:
    phase: str  # "work" | "break" | "long_break"
    remaining_sec: int
    is_running: bool
    cycle_count: int
    phase_duration_sec: int

    @property
    def is_work(self) -> bool:
        return self.phase == PHASE_WORK

    @property
    def is_idle(self) -> bool:
        return (
            not self.is_running
            and self.phase == PHASE_WORK
            and self.cycle_count == 0
            and self.remaining_sec == self.phase_duration_sec
        )


class TimerEngine:
    """
    Pure countdown engine (no Tkinter).
    Work -> Break (or LongBreak every N cycles) -> Work ...
    The host calls tick() once per second while running.
    """

    def __init__(self, settings: TimerSettings = TimerSettings()):
        self.settings = settings

        self.phase = PHASE_WORK
        self.phase_duration_sec = settings.work_minutes * 60
        self.remaining_sec = self.phase_duration_sec
        self.is_running = False
        self.cycle_count = 0
        # set once the current phase has lost its first second
        self._elapsed = False

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            remaining_sec=self.remaining_sec,
            is_running=self.is_running,
            cycle_count=self.cycle_count,
            phase_duration_sec=self.phase_duration_sec,
        )

    def start(self) -> None:
        self.is_running = True

    def pause(self) -> None:
        self.is_running = False

    def toggle(self) -> None:
        self.is_running = not self.is_running

    def reset(self) -> None:
        self.phase = PHASE_WORK
        self.phase_duration_sec = self.settings.work_minutes * 60
        self.remaining_sec = self.phase_duration_sec
        self.is_running = False
        self.cycle_count = 0
        self._elapsed = False

    def next_phase(self) -> Tuple[str, int, int]:
        """
        (phase, minutes, cycle_count) the current phase would hand over to.
        """
        s = self.settings
        if self.phase == PHASE_WORK:
            completed = self.cycle_count + 1
            if completed >= s.cycles_before_long_break:
                return PHASE_LONG_BREAK, s.long_break_minutes, completed
            return PHASE_BREAK, s.break_minutes, completed

        # any break ends in work; only the long one closes the round
        cycles = 0 if self.phase == PHASE_LONG_BREAK else self.cycle_count
        return PHASE_WORK, s.work_minutes, cycles

    def _advance(self) -> None:
        phase, minutes, cycles = self.next_phase()
        self.cycle_count = cycles
        self.phase = phase
        self.phase_duration_sec = minutes * 60
        self.remaining_sec = self.phase_duration_sec
        self._elapsed = False

    def tick(self) -> bool:
        """
        Returns True if phase changed on this tick.
        The transition happens on the tick that would take remaining below 0.
        """
        if not self.is_running:
            return False

        if self.remaining_sec > 0:
            self.remaining_sec -= 1
            self._elapsed = True
            return False

        self._advance()
        self.is_running = False
        return True

    def skip(self, run_after: bool = True) -> None:
        self._advance()
        self.is_running = run_after

    def apply_settings(self, settings: TimerSettings) -> bool:
        if self.is_running:
            return False

        self.settings = settings
        self.phase_duration_sec = settings.duration_minutes(self.phase) * 60
        if not self._elapsed:
            self.remaining_sec = self.phase_duration_sec
        else:
            self.remaining_sec = min(self.remaining_sec, self.phase_duration_sec)
        return True
