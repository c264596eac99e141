from __future__ import annotations

from typing import Any, Dict, Optional

INVALID_QUERY = "INVALID_QUERY"
INVALID_OPTION = "INVALID_OPTION"
INVALID_VIDEO = "INVALID_VIDEO"
INVALID_PLAYLIST = "INVALID_PLAYLIST"
REQUEST_FAILED = "REQUEST_FAILED"
NO_MORE_PAGES = "NO_MORE_PAGES"


class YtSearchError(Exception):
    """Failure raised by the data client; carries a stable code for display."""

    def __init__(
        self, code: str, message: str, metadata: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.metadata = metadata

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


__all__ = [
    "YtSearchError",
    "INVALID_QUERY",
    "INVALID_OPTION",
    "INVALID_VIDEO",
    "INVALID_PLAYLIST",
    "REQUEST_FAILED",
    "NO_MORE_PAGES",
]
