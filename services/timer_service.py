# -*- coding: utf-8 -*-

import threading
from typing import Callable, Optional

from core.timer_engine import EngineSnapshot, TimerEngine
from domain.models import PHASE_LONG_BREAK, PHASE_WORK, TimerSettings
from services.notification_gate import NotificationGate
from storage.repos import SettingsRepo
from utils.logger import get_logger

logger = get_logger(__name__)

ALERT_TITLE = "Timer Finished!"
ALERT_BODY = {
    PHASE_WORK: "Back to work!",
    PHASE_LONG_BREAK: "Time for a long break!",
}
ALERT_BODY_BREAK = "Time for a break!"


class TimerService:
    """
    Orchestrates:
    - TimerEngine state
    - persisted timer settings
    - notification gate (alert permission)
    - Callbacks for UI / video collaborator
    """

    def __init__(
        self,
        settings_repo: SettingsRepo,
        gate: Optional[NotificationGate] = None,
    ):
        self.settings_repo = settings_repo
        self.gate = gate or NotificationGate()

        self.engine = TimerEngine(settings_repo.load())

        # one tick at a time; overlapping callbacks are dropped
        self._tick_lock = threading.Lock()

        self._on_tick: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_phase_change: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_state_change: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_work_time_change: Optional[Callable[[bool], None]] = None
        self._on_alert: Optional[Callable[[str, str], None]] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_tick = fn

    def set_on_phase_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_phase_change = fn

    def set_on_state_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_state_change = fn

    def set_on_work_time_change(self, fn: Callable[[bool], None]) -> None:
        self._on_work_time_change = fn

    def set_on_alert(self, fn: Callable[[str, str], None]) -> None:
        self._on_alert = fn

    def _emit_tick(self) -> None:
        if self._on_tick:
            self._on_tick(self.engine.snapshot())

    def _emit_phase_change(self) -> None:
        if self._on_phase_change:
            self._on_phase_change(self.engine.snapshot())

    def _emit_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.engine.snapshot())

    def _emit_work_time_change(self) -> None:
        if self._on_work_time_change:
            self._on_work_time_change(self.engine.snapshot().is_work)

    def _emit_alert(self) -> None:
        if not self._on_alert or not self.gate.allowed():
            return
        body = ALERT_BODY.get(self.engine.phase, ALERT_BODY_BREAK)
        self._on_alert(ALERT_TITLE, body)

    # ----- Public API -----
    def get_snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    def get_settings(self) -> TimerSettings:
        return self.engine.settings

    def start(self) -> None:
        if self.engine.is_running:
            return
        self.engine.start()
        self._emit_state_change()
        self._emit_tick()

    def pause(self) -> None:
        if not self.engine.is_running:
            return
        self.engine.pause()
        self._emit_state_change()
        self._emit_tick()

    def toggle(self) -> None:
        if self.engine.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self.engine.reset()
        self._emit_phase_change()
        self._emit_work_time_change()
        self._emit_state_change()
        self._emit_tick()

    def skip(self) -> None:
        # a manual skip keeps the clock running into the next phase,
        # unlike a natural finish which stops it
        self.engine.skip(run_after=True)
        logger.debug("Skipped to %s (cycle %d)", self.engine.phase, self.engine.cycle_count)
        self._after_transition()

    def tick(self) -> bool:
        """
        Should be called once per second by the host loop.
        Returns True if the phase changed.
        """
        if not self._tick_lock.acquire(blocking=False):
            return False
        try:
            if not self.engine.is_running:
                return False
            phase_changed = self.engine.tick()
            self._emit_tick()
            if phase_changed:
                logger.debug(
                    "Phase finished, now %s (cycle %d)",
                    self.engine.phase,
                    self.engine.cycle_count,
                )
                self._after_transition()
            return phase_changed
        finally:
            self._tick_lock.release()

    def apply_settings(self, settings: TimerSettings) -> bool:
        """
        Out-of-range values are clamped. Ignored while the timer runs.
        """
        if self.engine.is_running:
            logger.info("Settings not applied: timer is running")
            return False

        settings = settings.clamped()
        if not self.settings_repo.save(settings):
            logger.warning("Timer settings could not be persisted")
        self.engine.apply_settings(settings)
        self._emit_tick()
        return True

    def _after_transition(self) -> None:
        self._emit_phase_change()
        self._emit_work_time_change()
        self._emit_state_change()
        self._emit_alert()
