#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sqlite3
from typing import Optional

from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Thin sqlite3 wrapper. If the file cannot be opened the app keeps
    running without persistence (available == False).
    """

    def __init__(self, db_path: str = "pomodoro.db"):
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row
        except sqlite3.Error as exc:
            logger.warning("Storage unavailable (%s): %s", self.db_path, exc)
            self.conn = None

    @property
    def available(self) -> bool:
        return self.conn is not None

    def _table_exists(self, name: str) -> bool:
        r = self.conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (name,),
        ).fetchone()
        return bool(r)

    def init_schema(self) -> bool:
        if not self.available:
            return False
        try:
            # every persisted blob (settings, bookmarks, permission) is one row
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS app_state (
                    key TEXT PRIMARY KEY,
                    value TEXT
                );
            """)
            self.conn.commit()
        except sqlite3.Error as exc:
            logger.warning("Could not initialise schema: %s", exc)
            self.close()
            return False
        return self._table_exists("app_state")

    def close(self):
        if self.conn is None:
            return
        try:
            self.conn.close()
        except sqlite3.Error:
            pass
        self.conn = None
