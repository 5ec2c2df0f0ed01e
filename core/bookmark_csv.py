# -*- coding: utf-8 -*-
"""
Semicolon-delimited bookmark export format.

    IDVideo;Description;Views
    dQw4w9WgXcQ;Focus music;12

No quoting: descriptions are guaranteed not to contain the delimiter.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List

from domain.errors import FormatError
from domain.models import Bookmark

DELIMITER = ";"
HEADER_FIELDS = ("IDVideo", "Description", "Views")
CSV_HEADER = DELIMITER.join(HEADER_FIELDS)
MAX_DESCRIPTION_LENGTH = 200

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class ParsedCsv:
    bookmarks: List[Bookmark] = field(default_factory=list)
    skipped: int = 0


def sort_by_views(bookmarks: Iterable[Bookmark]) -> List[Bookmark]:
    # sorted() is stable, ties keep stored order
    return sorted(bookmarks, key=lambda b: b.views, reverse=True)


def dump_bookmarks(bookmarks: Iterable[Bookmark]) -> str:
    rows = [
        f"{b.id}{DELIMITER}{b.description}{DELIMITER}{b.views}"
        for b in sort_by_views(bookmarks)
    ]
    return CSV_HEADER + "\n" + "\n".join(rows)


def parse_views(raw: str) -> int:
    """Lenient: leading integer if any, otherwise 0. Never negative."""
    m = _LEADING_INT.match(raw or "")
    if not m:
        return 0
    return max(0, int(m.group(1)))


def parse_bookmarks(text: str) -> ParsedCsv:
    lines = (text or "").strip().split("\n")
    if len(lines) < 2:
        raise FormatError(
            "CSV file must contain at least a header and one data row."
        )

    header = tuple(h.strip() for h in lines[0].split(DELIMITER))
    if header != HEADER_FIELDS:
        raise FormatError(
            "Invalid CSV headers. Expected: " + ", ".join(HEADER_FIELDS)
        )

    parsed = ParsedCsv()
    for line in lines[1:]:
        columns = line.split(DELIMITER)
        if len(columns) < 3:
            parsed.skipped += 1
            continue

        video_id = columns[0].strip()
        description = columns[1].strip()
        if not video_id or not description:
            parsed.skipped += 1
            continue
        if DELIMITER in description or len(description) > MAX_DESCRIPTION_LENGTH:
            parsed.skipped += 1
            continue

        parsed.bookmarks.append(
            Bookmark(id=video_id, description=description, views=parse_views(columns[2]))
        )

    return parsed
