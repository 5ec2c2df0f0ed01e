#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
import sqlite3
from typing import List, Optional

from domain.models import Bookmark, TimerSettings
from storage.db import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SETTINGS_KEY = "timer_settings"
BOOKMARKS_KEY = "bookmarks"
PERMISSION_KEY = "notification_permission"


class AppStateRepo:
    """
    Key/value blobs in app_state. Reads give None and writes give False
    when storage is unavailable, so callers never see sqlite errors.
    """

    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        if not self.db.available:
            return None
        try:
            row = self.db.conn.execute(
                "SELECT value FROM app_state WHERE key=?",
                (key,),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Read of %r failed: %s", key, exc)
            return None
        return row["value"] if row else None

    def set(self, key: str, value: str) -> bool:
        if not self.db.available:
            return False
        try:
            self.db.conn.execute(
                """
                INSERT INTO app_state(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )
            self.db.conn.commit()
        except sqlite3.Error as exc:
            logger.warning("Write of %r failed: %s", key, exc)
            return False
        return True

    def delete(self, key: str) -> bool:
        if not self.db.available:
            return False
        try:
            self.db.conn.execute("DELETE FROM app_state WHERE key=?", (key,))
            self.db.conn.commit()
        except sqlite3.Error as exc:
            logger.warning("Delete of %r failed: %s", key, exc)
            return False
        return True


class SettingsRepo:
    def __init__(self, state: AppStateRepo):
        self.state = state

    def load(self) -> TimerSettings:
        raw = self.state.get(SETTINGS_KEY)
        if not raw:
            return TimerSettings()
        try:
            return TimerSettings.from_record(json.loads(raw))
        except ValueError:
            logger.warning("Ignoring unreadable timer settings")
            return TimerSettings()

    def save(self, settings: TimerSettings) -> bool:
        return self.state.set(SETTINGS_KEY, json.dumps(settings.to_record()))


class BookmarkRepo:
    """
    The whole collection is one JSON array; every write replaces it.
    """

    def __init__(self, state: AppStateRepo):
        self.state = state

    def load_all(self) -> List[Bookmark]:
        raw = self.state.get(BOOKMARKS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Error loading bookmarks: stored blob is not JSON")
            return []
        if not isinstance(data, list):
            return []

        bookmarks = []
        for record in data:
            try:
                bookmarks.append(Bookmark.from_record(record))
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping malformed bookmark record: %r", record)
        return bookmarks

    def save_all(self, bookmarks: List[Bookmark]) -> bool:
        blob = json.dumps([b.to_record() for b in bookmarks])
        return self.state.set(BOOKMARKS_KEY, blob)
