#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import messagebox

from config import get_settings
from services.bookmark_service import BookmarkService
from services.notification_gate import NotificationGate
from services.timer_service import TimerService
from storage.db import Database
from storage.repos import AppStateRepo, BookmarkRepo, SettingsRepo
from ui.main_window import MainWindow
from utils.logger import get_logger, setup_logging


def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    logger = get_logger(__name__)

    db = Database(db_path=settings.db_path)
    if not db.init_schema():
        logger.warning("Running without persistence")

    state_repo = AppStateRepo(db)

    root = tk.Tk()
    gate = NotificationGate(
        state_repo,
        request_permission=lambda: messagebox.askyesno(
            "Notifications", "Show a notification when a phase ends?"
        ),
    )
    timer_service = TimerService(SettingsRepo(state_repo), gate=gate)
    bookmark_service = BookmarkService(BookmarkRepo(state_repo))

    app = MainWindow(root, timer_service, bookmark_service, tick_ms=settings.tick_ms)
    try:
        app.run()
    finally:
        db.close()


if __name__ == "__main__":
    main()
