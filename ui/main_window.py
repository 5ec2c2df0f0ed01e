# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Dict, Optional

from domain.errors import BookmarkError
from services.bookmark_service import BookmarkService
from services.timer_service import TimerService
from ui.pomodoro_widget import PomodoroWidget


class MainWindow:
    def __init__(
        self,
        root: tk.Tk,
        timer_service: TimerService,
        bookmark_service: BookmarkService,
        tick_ms: int = 1000,
    ):
        self.timer_service = timer_service
        self.bookmark_service = bookmark_service
        self.tick_ms = tick_ms

        self.root = root
        self.root.title("Pomodoro + Video Bookmarks")
        self.root.geometry("860x420")

        self.current_video_id: Optional[str] = None
        self._list_index_to_video_id: Dict[int, str] = {}

        self._build_ui()
        self.timer_service.set_on_alert(self._show_alert)
        self.timer_service.set_on_work_time_change(self._on_work_time_change)
        self._refresh_bookmarks()

    def _build_ui(self):
        root = self.root

        outer = ttk.Frame(root, padding=10)
        outer.pack(fill="both", expand=True)

        outer.columnconfigure(0, weight=2)
        outer.columnconfigure(1, weight=1)
        outer.rowconfigure(0, weight=1)

        # LEFT: Bookmarks panel
        left = ttk.Labelframe(outer, text="Bookmarks", padding=10)
        left.grid(row=0, column=0, sticky="nsew", padx=(0, 10))
        left.columnconfigure(0, weight=1)
        left.rowconfigure(3, weight=1)

        add_row = ttk.Frame(left)
        add_row.grid(row=0, column=0, sticky="ew")
        add_row.columnconfigure(0, weight=1)
        add_row.columnconfigure(1, weight=2)

        self.video_var = tk.StringVar()
        self.desc_var = tk.StringVar()
        ttk.Entry(add_row, textvariable=self.video_var).grid(row=0, column=0, sticky="ew")
        ttk.Entry(add_row, textvariable=self.desc_var).grid(
            row=0, column=1, sticky="ew", padx=(6, 0)
        )
        ttk.Button(add_row, text="Add", command=self._add_bookmark).grid(
            row=0, column=2, padx=(6, 0)
        )

        self.err_var = tk.StringVar(value="")
        ttk.Label(left, textvariable=self.err_var, foreground="red").grid(
            row=1, column=0, sticky="w", pady=(6, 0)
        )
        self.capacity_var = tk.StringVar(value="")
        ttk.Label(left, textvariable=self.capacity_var).grid(
            row=2, column=0, sticky="w", pady=(0, 6)
        )

        self.bookmark_list = tk.Listbox(left, height=12)
        self.bookmark_list.grid(row=3, column=0, sticky="nsew")

        actions = ttk.Frame(left)
        actions.grid(row=4, column=0, sticky="ew", pady=(8, 0))
        ttk.Button(actions, text="Load", command=self._load_selected).pack(side="left")
        ttk.Button(actions, text="Remove", command=self._remove_selected).pack(
            side="left", padx=(6, 0)
        )
        ttk.Button(actions, text="Import CSV", command=self._import_csv).pack(side="right")
        ttk.Button(actions, text="Export CSV", command=self._export_csv).pack(
            side="right", padx=(0, 6)
        )

        # RIGHT: Pomodoro
        right = ttk.Frame(outer)
        right.grid(row=0, column=1, sticky="nsew")
        right.columnconfigure(0, weight=1)

        self.pomodoro = PomodoroWidget(right, self.timer_service, tick_ms=self.tick_ms)
        self.pomodoro.grid(row=0, column=0, sticky="ew")

        self.video_status_var = tk.StringVar(value="No video loaded")
        ttk.Label(right, textvariable=self.video_status_var).grid(
            row=1, column=0, sticky="w", pady=(10, 0)
        )

    def run(self):
        self.root.mainloop()

    def _selected_video_id(self) -> Optional[str]:
        sel = self.bookmark_list.curselection()
        if not sel:
            return None
        return self._list_index_to_video_id.get(int(sel[0]))

    # ----- UI actions -----
    def _add_bookmark(self):
        try:
            added = self.bookmark_service.add_from_input(
                self.video_var.get(), self.desc_var.get()
            )
        except BookmarkError as e:
            self.err_var.set(str(e))
            return
        if added is None:
            self.err_var.set("Bookmark could not be saved.")
            return
        self.video_var.set("")
        self.desc_var.set("")
        self.err_var.set("")
        self._refresh_bookmarks()

    def _load_selected(self):
        video_id = self._selected_video_id()
        if not video_id:
            return
        self.bookmark_service.increment_views(video_id)
        self.current_video_id = video_id
        self.video_status_var.set(f"Video: {video_id}")
        self._refresh_bookmarks()

    def _remove_selected(self):
        video_id = self._selected_video_id()
        if video_id:
            self.bookmark_service.remove(video_id)
            self._refresh_bookmarks()

    def _export_csv(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".csv", initialfile="bookmarks.csv"
        )
        if not path:
            return
        try:
            count = self.bookmark_service.export_to_file(path)
        except OSError as e:
            self.err_var.set(str(e))
            return
        self.err_var.set(f"Exported {count} bookmarks")

    def _import_csv(self):
        path = filedialog.askopenfilename(filetypes=[("CSV", "*.csv")])
        if not path:
            return
        replace = messagebox.askyesno(
            "Import bookmarks", "Replace existing bookmarks?\n(No = merge)"
        )
        try:
            result = self.bookmark_service.import_from_file(
                path, mode="replace" if replace else "merge"
            )
        except (BookmarkError, OSError) as e:
            self.err_var.set(str(e))
            return
        if result is None:
            self.err_var.set("Imported bookmarks could not be saved.")
            return
        self.err_var.set(
            f"Imported {result.imported}, skipped {result.skipped}, total {result.total}"
        )
        self._refresh_bookmarks()

    # ----- Timer collaborators -----
    def _show_alert(self, title: str, body: str):
        messagebox.showinfo(title, body)

    def _on_work_time_change(self, is_work: bool):
        if self.current_video_id:
            state = "playing" if is_work else "paused"
            self.video_status_var.set(f"Video: {self.current_video_id} ({state})")

    # ----- Refresh -----
    def _refresh_bookmarks(self):
        self.bookmark_list.delete(0, tk.END)
        self._list_index_to_video_id.clear()

        for i, b in enumerate(self.bookmark_service.list_by_views()):
            self.bookmark_list.insert(tk.END, f"{b.description}  [{b.views}]")
            self._list_index_to_video_id[i] = b.id

        status = self.bookmark_service.capacity_status()
        text = f"{status.current}/{status.max} bookmarks"
        if status.is_at_limit:
            text += " (full)"
        elif status.is_near_limit:
            text += " (almost full)"
        self.capacity_var.set(text)
