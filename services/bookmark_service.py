# -*- coding: utf-8 -*-

from __future__ import annotations

import math
from typing import Dict, List, Optional

from core.bookmark_csv import (
    DELIMITER,
    MAX_DESCRIPTION_LENGTH,
    dump_bookmarks,
    parse_bookmarks,
    sort_by_views,
)
from core.video_id import extract_video_id
from domain.errors import CapacityError, ValidationError
from domain.models import Bookmark, CapacityStatus, ImportResult
from storage.repos import BookmarkRepo
from utils.logger import get_logger

logger = get_logger(__name__)

MAX_BOOKMARKS = 1000
WARNING_THRESHOLD = 0.9
IMPORT_MODES = ("merge", "replace")


class BookmarkService:
    def __init__(self, repo: BookmarkRepo, max_bookmarks: int = MAX_BOOKMARKS):
        self.repo = repo
        self.max_bookmarks = max_bookmarks

    # ---- queries ----
    def list(self) -> List[Bookmark]:
        return self.repo.load_all()

    def list_by_views(self) -> List[Bookmark]:
        return sort_by_views(self.repo.load_all())

    def get(self, video_id: str) -> Optional[Bookmark]:
        for b in self.repo.load_all():
            if b.id == video_id:
                return b
        return None

    def capacity_status(self) -> CapacityStatus:
        current = len(self.repo.load_all())
        return CapacityStatus(
            current=current,
            max=self.max_bookmarks,
            is_near_limit=current >= math.floor(self.max_bookmarks * WARNING_THRESHOLD),
            is_at_limit=current >= self.max_bookmarks,
        )

    # ---- mutations ----
    def add(self, video_id: str, description: str) -> Optional[Bookmark]:
        """
        Returns the new bookmark, or None if it could not be persisted.
        """
        video_id = (video_id or "").strip()
        description = (description or "").strip()
        if not video_id or not description:
            raise ValidationError("Video ID and description are required.")
        if DELIMITER in video_id or "\n" in video_id or "\r" in video_id:
            raise ValidationError("Video ID cannot contain semicolons or line breaks.")
        if DELIMITER in description:
            raise ValidationError("Description cannot contain semicolon (;) character.")
        if "\n" in description or "\r" in description:
            raise ValidationError("Description must be a single line.")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description cannot be longer than {MAX_DESCRIPTION_LENGTH} characters."
            )

        bookmarks = self.repo.load_all()
        if any(b.id == video_id for b in bookmarks):
            raise ValidationError("Bookmark already exists.")
        if len(bookmarks) >= self.max_bookmarks:
            raise CapacityError("Maximum bookmark limit reached.")

        bookmark = Bookmark(id=video_id, description=description, views=0)
        bookmarks.append(bookmark)
        if not self.repo.save_all(bookmarks):
            return None
        return bookmark

    def add_from_input(self, text: str, description: str) -> Optional[Bookmark]:
        video_id = extract_video_id(text)
        if video_id is None:
            raise ValidationError(
                "Invalid YouTube URL or ID. Enter a full URL or an 11-character video ID."
            )
        return self.add(video_id, description)

    def remove(self, video_id: str) -> bool:
        bookmarks = self.repo.load_all()
        kept = [b for b in bookmarks if b.id != video_id]
        if len(kept) == len(bookmarks):
            return False
        return self.repo.save_all(kept)

    def increment_views(self, video_id: str) -> bool:
        bookmarks = self.repo.load_all()
        for b in bookmarks:
            if b.id == video_id:
                b.views += 1
                return self.repo.save_all(bookmarks)
        return False

    # ---- CSV ----
    def export_csv(self) -> str:
        return dump_bookmarks(self.repo.load_all())

    def import_csv(self, text: str, mode: str = "merge") -> Optional[ImportResult]:
        """
        Returns None if the composed set could not be persisted.
        """
        if mode not in IMPORT_MODES:
            raise ValidationError(f"Unknown import mode: {mode!r}. Use merge/replace.")

        parsed = parse_bookmarks(text)

        # keyed by id; later rows overwrite earlier ones, insertion order kept
        merged: Dict[str, Bookmark] = {}
        if mode == "merge":
            for b in self.repo.load_all():
                merged[b.id] = b
        for b in parsed.bookmarks:
            merged[b.id] = b

        final = list(merged.values())
        if len(final) > self.max_bookmarks:
            raise CapacityError(
                f"Import would exceed maximum bookmark limit ({self.max_bookmarks})."
            )

        if not self.repo.save_all(final):
            logger.warning("Imported bookmarks could not be persisted")
            return None

        result = ImportResult(
            imported=len(parsed.bookmarks),
            skipped=parsed.skipped,
            total=len(final),
        )
        logger.info(
            "Imported %d bookmarks (%s), skipped %d, total %d",
            result.imported,
            mode,
            result.skipped,
            result.total,
        )
        return result

    def export_to_file(self, path: str) -> int:
        bookmarks = self.repo.load_all()
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(dump_bookmarks(bookmarks))
        logger.info("Exported %d bookmarks to %s", len(bookmarks), path)
        return len(bookmarks)

    def import_from_file(self, path: str, mode: str = "merge") -> Optional[ImportResult]:
        with open(path, "r", encoding="utf-8") as f:
            return self.import_csv(f.read(), mode=mode)
