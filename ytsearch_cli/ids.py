"""Video / playlist identifier extraction from ids or pasted URLs."""

from __future__ import annotations

import re

_VIDEO_URL_RE = re.compile(
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/shorts/)([A-Za-z0-9_-]+)"
)
_PLAYLIST_URL_RE = re.compile(r"[?&]list=([A-Za-z0-9_-]+)")
VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
PLAYLIST_ID_RE = re.compile(r"^[A-Za-z0-9_-]{2,}$")


def extract_video_id(text: str) -> str:
    text = text.strip()
    m = _VIDEO_URL_RE.search(text)
    return m.group(1) if m else text


def extract_playlist_id(text: str) -> str:
    text = text.strip()
    m = _PLAYLIST_URL_RE.search(text)
    return m.group(1) if m else text


def is_valid_video_input(text: str) -> bool:
    text = text.strip()
    if not text:
        return False
    return bool(_VIDEO_URL_RE.search(text)) or len(text) == 11


def is_valid_playlist_input(text: str) -> bool:
    text = text.strip()
    if not text:
        return False
    return bool(_PLAYLIST_URL_RE.search(text)) or len(text) > 10


__all__ = [
    "extract_video_id",
    "extract_playlist_id",
    "is_valid_video_input",
    "is_valid_playlist_input",
    "VIDEO_ID_RE",
    "PLAYLIST_ID_RE",
]
