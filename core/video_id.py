# -*- coding: utf-8 -*-

import re
from typing import Optional

_URL_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")


def extract_video_id(text: str) -> Optional[str]:
    """
    Accepts a YouTube URL or a bare 11-char video id.
    Returns the id, or None if nothing usable was found.
    """
    text = (text or "").strip()
    if not text:
        return None

    m = _URL_RE.match(text)
    if m and len(m.group(2)) == 11:
        return m.group(2)

    if _ID_RE.match(text):
        return text
    return None
