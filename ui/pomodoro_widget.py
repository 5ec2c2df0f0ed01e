# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk
from typing import Optional

from core.timer_engine import EngineSnapshot
from domain.models import PHASE_LONG_BREAK, PHASE_WORK, SETTINGS_RANGES, TimerSettings
from services.timer_service import TimerService

PHASE_TITLES = {
    PHASE_WORK: "Work Time",
    PHASE_LONG_BREAK: "Long Break",
}


def format_time(seconds: int) -> str:
    m = max(0, seconds) // 60
    s = max(0, seconds) % 60
    return f"{m:02d}:{s:02d}"


class PomodoroWidget(ttk.Frame):
    def __init__(self, master, timer_service: TimerService, tick_ms: int = 1000):
        super().__init__(master)

        self.timer_service = timer_service
        self.tick_ms = tick_ms
        self._tick_job: Optional[str] = None

        self._build_ui()

        # wire callbacks from service -> widget UI
        self.timer_service.set_on_tick(self._render)
        self.timer_service.set_on_phase_change(self._on_phase_change)
        self.timer_service.set_on_state_change(self._on_state_change)

        self._render(self.timer_service.get_snapshot())

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        self.phase_var = tk.StringVar(value="Work Time")
        self.time_var = tk.StringVar(value="25:00")
        self.cycle_var = tk.StringVar(value="")

        ttk.Label(self, textvariable=self.phase_var, font=("Sans", 14, "bold")).grid(
            row=0, column=0, pady=(0, 6)
        )
        ttk.Label(self, textvariable=self.time_var, font=("Sans", 32, "bold")).grid(
            row=1, column=0, pady=(8, 4)
        )
        ttk.Label(self, textvariable=self.cycle_var).grid(row=2, column=0, pady=(0, 10))

        btns = ttk.Frame(self)
        btns.grid(row=3, column=0)

        self.toggle_btn = ttk.Button(btns, text="Start", command=self._toggle)
        self.reset_btn = ttk.Button(btns, text="Reset", command=self._reset)
        self.skip_btn = ttk.Button(btns, text="Skip", command=self._skip)

        self.toggle_btn.grid(row=0, column=0, padx=(0, 6))
        self.reset_btn.grid(row=0, column=1, padx=(0, 6))
        self.skip_btn.grid(row=0, column=2)

        # settings
        box = ttk.Labelframe(self, text="Settings", padding=6)
        box.grid(row=4, column=0, sticky="ew", pady=(10, 0))
        current = self.timer_service.get_settings()
        self.setting_vars = {}
        fields = [
            ("work_minutes", "Work (min)", SETTINGS_RANGES["work_minutes"]),
            ("break_minutes", "Break (min)", SETTINGS_RANGES["break_minutes"]),
            ("long_break_minutes", "Long break (min)", SETTINGS_RANGES["long_break_minutes"]),
            ("cycles_before_long_break", "Cycles", SETTINGS_RANGES["cycles_before_long_break"]),
        ]
        for row, (name, label, (lo, hi)) in enumerate(fields):
            var = tk.IntVar(value=getattr(current, name))
            self.setting_vars[name] = var
            ttk.Label(box, text=label).grid(row=row, column=0, sticky="w")
            ttk.Spinbox(box, from_=lo, to=hi, width=5, textvariable=var).grid(
                row=row, column=1, sticky="w"
            )
        ttk.Button(box, text="Apply", command=self._apply_settings).grid(
            row=len(fields), column=0, columnspan=2, pady=(6, 0)
        )

    def _apply_settings(self):
        try:
            values = {name: int(var.get()) for name, var in self.setting_vars.items()}
        except (tk.TclError, ValueError):
            return
        self.timer_service.apply_settings(TimerSettings(**values))

    def _toggle(self):
        self.timer_service.toggle()

    def _reset(self):
        self.timer_service.reset()

    def _skip(self):
        self.timer_service.skip()

    # ---- Tick loop (UI-driven) ----
    def _ensure_tick_loop(self):
        if self._tick_job is None:
            self._tick_job = self.after(self.tick_ms, self._tick_once)

    def _stop_tick_loop(self):
        if self._tick_job is not None:
            self.after_cancel(self._tick_job)
            self._tick_job = None

    def _tick_once(self):
        self._tick_job = None
        self.timer_service.tick()
        if self.timer_service.get_snapshot().is_running:
            self._ensure_tick_loop()

    # ---- Service callbacks ----
    def _on_phase_change(self, snap: EngineSnapshot):
        self._render(snap)

    def _on_state_change(self, snap: EngineSnapshot):
        # stopping the loop is a pause, never a reset
        if snap.is_running:
            self._ensure_tick_loop()
        else:
            self._stop_tick_loop()
        self.toggle_btn.configure(text="Pause" if snap.is_running else "Start")
        self._render(snap)

    def _render(self, snap: EngineSnapshot):
        self.time_var.set(format_time(snap.remaining_sec))
        self.phase_var.set(PHASE_TITLES.get(snap.phase, "Break Time"))
        cycles = self.timer_service.get_settings().cycles_before_long_break
        done = snap.cycle_count % cycles
        self.cycle_var.set("●" * done + "○" * (cycles - done))
