"""Data client: the four calls the presentation layer makes, backed by yt-dlp.

yt-dlp does all of the network work and page parsing. This module only picks
the URL and options for each request and maps the returned info dicts onto the
records in ``models``.
"""

from __future__ import annotations

import base64
import math
from datetime import datetime, timezone
from functools import partial
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import yt_dlp
from yt_dlp.utils import DownloadError

from .config import SEARCH_TYPES, SORT_CHOICES
from .errors import (
    INVALID_OPTION,
    INVALID_PLAYLIST,
    INVALID_QUERY,
    INVALID_VIDEO,
    REQUEST_FAILED,
    YtSearchError,
)
from .ids import PLAYLIST_ID_RE, VIDEO_ID_RE
from .logging_utils import get_logger
from .models import (
    Author,
    ChannelInfo,
    ChannelResult,
    PlaylistInfo,
    PlaylistPage,
    PlaylistResult,
    PlaylistVideo,
    SearchResult,
    Thumbnail,
    VideoDetails,
    VideoResult,
)

SEARCH_URL = "https://www.youtube.com/results"
WATCH_URL = "https://www.youtube.com/watch?v={id}"
PLAYLIST_URL = "https://www.youtube.com/playlist?list={id}"
DEFAULT_TIMEOUT = 10
DEFAULT_PAGE_SIZE = 100

# Field numbers of YouTube's results-page filter ("sp") protobuf
_SORT_CODES = {"relevance": 0, "rating": 1, "upload_date": 2, "view_count": 3}
_TYPE_CODES = {"video": 1, "channel": 2, "playlist": 3}


# --- Display helpers ----------------------------------------------------------


def short_count(value: Optional[int]) -> str:
    """Abbreviate a counter the way YouTube does (1234 -> 1.2K)."""
    if value is None:
        return "N/A"
    n = float(value)
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if n >= threshold:
            text = f"{n / threshold:.1f}".rstrip("0").rstrip(".")
            return f"{text}{suffix}"
    return str(int(n))


def format_duration(seconds: Optional[float]) -> str:
    if not seconds:
        return "0:00"
    hours, rem = divmod(int(seconds), 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_date(upload_date: Optional[str]) -> Optional[str]:
    """yt-dlp's YYYYMMDD -> YYYY-MM-DD."""
    if not upload_date or len(upload_date) != 8 or not upload_date.isdigit():
        return None
    return f"{upload_date[:4]}-{upload_date[4:6]}-{upload_date[6:]}"


def _format_timestamp(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d")


def search_filter_param(kind: Optional[str], sort: str) -> str:
    """Encode sort order and result type into the ``sp`` query parameter."""
    raw = b""
    if _SORT_CODES[sort]:
        raw += bytes([0x08, _SORT_CODES[sort]])
    if kind:
        raw += bytes([0x12, 0x02, 0x10, _TYPE_CODES[kind]])
    return base64.b64encode(raw).decode("ascii") if raw else ""


def build_search_url(query: str, kind: Optional[str], sort: str) -> str:
    params = {"search_query": query}
    sp = search_filter_param(kind, sort)
    if sp:
        params["sp"] = sp
    return f"{SEARCH_URL}?{urlencode(params)}"


# --- yt-dlp plumbing ----------------------------------------------------------


def _clean_message(err: Exception) -> str:
    msg = str(err).strip()
    if msg.startswith("ERROR: "):
        msg = msg[len("ERROR: "):]
    return msg or err.__class__.__name__


def _extract(url: str, timeout: int = DEFAULT_TIMEOUT, **params: Any) -> Dict[str, Any]:
    log = get_logger()
    ydl_opts: dict[str, Any] = {
        "quiet": True,
        "no_warnings": True,
        "skip_download": True,
        "socket_timeout": timeout,
        "logger": log.getChild("yt_dlp"),
    }
    ydl_opts.update(params)
    log.debug("Extracting %s with %s", url, params)
    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:  # type: ignore[arg-type]
            info = ydl.extract_info(url, download=False)
    except DownloadError as e:
        raise YtSearchError(
            REQUEST_FAILED, _clean_message(e), {"url": url}
        ) from e
    if not info:
        raise YtSearchError(REQUEST_FAILED, "No data returned", {"url": url})
    return info


def _https(url: Optional[str]) -> str:
    if not url:
        return ""
    return "https:" + url if url.startswith("//") else url


def _best_thumbnail(info: Dict[str, Any]) -> Thumbnail:
    thumbs = [t for t in info.get("thumbnails") or [] if t.get("url")]
    if thumbs:
        # yt-dlp orders thumbnails from worst to best
        best = thumbs[-1]
        return Thumbnail(
            url=_https(best["url"]),
            width=int(best.get("width") or 0),
            height=int(best.get("height") or 0),
        )
    return Thumbnail(url=_https(info.get("thumbnail")))


def _is_artist(name: Optional[str]) -> bool:
    # Auto-generated music channels are named "<Artist> - Topic"
    return bool(name) and name.endswith(" - Topic")


def _author(info: Dict[str, Any]) -> Optional[Author]:
    name = info.get("channel") or info.get("uploader")
    if not name:
        return None
    return Author(
        name=name,
        url=info.get("channel_url") or info.get("uploader_url") or "",
        verified=bool(info.get("channel_is_verified")),
        is_artist=_is_artist(name),
    )


def _entry_kind(entry: Dict[str, Any]) -> Optional[str]:
    url = entry.get("url") or ""
    if entry.get("ie_key") == "Youtube" or "watch?v=" in url or "/shorts/" in url:
        return "video"
    if "list=" in url:
        return "playlist"
    if entry.get("ie_key") == "YoutubeTab":
        return "channel"
    return None


def _video_from_entry(entry: Dict[str, Any]) -> VideoResult:
    seconds = int(entry.get("duration") or 0)
    views = entry.get("view_count")
    thumb = _best_thumbnail(entry)
    if entry.get("live_status") == "is_live":
        duration = "LIVE"
    else:
        duration = format_duration(seconds)
    published = (
        _format_timestamp(entry.get("timestamp"))
        or format_date(entry.get("upload_date"))
        or "Unknown"
    )
    return VideoResult(
        id=entry["id"],
        title=entry.get("title") or entry["id"],
        image=thumb.url,
        thumbnail=thumb,
        view_count=int(views or 0),
        short_view_count=f"{short_count(views)} views" if views is not None else "N/A",
        duration=duration,
        seconds=seconds,
        author=_author(entry),
        watch_url=WATCH_URL.format(id=entry["id"]),
        published_at=published,
    )


def _channel_from_entry(entry: Dict[str, Any]) -> ChannelResult:
    title = entry.get("title") or entry.get("channel") or entry["id"]
    thumb = _best_thumbnail(entry)
    followers = entry.get("channel_follower_count")
    return ChannelResult(
        id=entry.get("channel_id") or entry["id"],
        title=title,
        image=thumb.url,
        thumbnail=thumb,
        description=entry.get("description") or "",
        subscriber_count=short_count(followers),
        url=entry.get("channel_url") or entry.get("url") or "",
        verified=bool(entry.get("channel_is_verified")),
        is_artist=_is_artist(title),
    )


def _playlist_from_entry(entry: Dict[str, Any]) -> PlaylistResult:
    thumb = _best_thumbnail(entry)
    return PlaylistResult(
        id=entry["id"],
        title=entry.get("title") or entry["id"],
        image=thumb.url,
        thumbnail=thumb,
        video_count=int(entry.get("playlist_count") or 0),
        author=_author(entry),
        url=PLAYLIST_URL.format(id=entry["id"]),
    )


_ENTRY_MAPPERS = {
    "video": _video_from_entry,
    "channel": _channel_from_entry,
    "playlist": _playlist_from_entry,
}


# --- Public API ---------------------------------------------------------------


def search_youtube(
    query: str,
    kind: Optional[str] = None,
    limit: int = 10,
    sort: str = "relevance",
    timeout: int = DEFAULT_TIMEOUT,
) -> List[SearchResult]:
    """Search videos, channels and/or playlists.

    ``kind`` restricts results to one type; ``None`` mixes all three.
    """
    if not query or not query.strip():
        raise YtSearchError(INVALID_QUERY, "Search query must not be empty")
    if kind is not None and kind not in SEARCH_TYPES:
        raise YtSearchError(
            INVALID_OPTION, f"Unknown result type: {kind}", {"option": "type", "value": kind}
        )
    if sort not in SORT_CHOICES:
        raise YtSearchError(
            INVALID_OPTION, f"Unknown sort: {sort}", {"option": "sort", "value": sort}
        )
    if limit < 1:
        raise YtSearchError(
            INVALID_OPTION, "Limit must be positive", {"option": "limit", "value": limit}
        )

    url = build_search_url(query.strip(), kind, sort)
    info = _extract(
        url,
        timeout=timeout,
        extract_flat="in_playlist",
        playlistend=limit,
        # Lets yt-dlp turn "3 days ago" into an approximate timestamp
        extractor_args={"youtubetab": {"approximate_date": [""]}},
    )
    results: List[SearchResult] = []
    for entry in info.get("entries") or []:
        if not entry or not entry.get("id"):
            continue
        entry_kind = _entry_kind(entry)
        if entry_kind is None or (kind and entry_kind != kind):
            continue
        results.append(_ENTRY_MAPPERS[entry_kind](entry))
        if len(results) >= limit:
            break
    get_logger().debug("Search %r returned %d result(s)", query, len(results))
    return results


def get_video_details(video_id: str, timeout: int = DEFAULT_TIMEOUT) -> VideoDetails:
    if not video_id or not VIDEO_ID_RE.match(video_id):
        raise YtSearchError(
            INVALID_VIDEO, f"Invalid video ID: {video_id!r}", {"videoId": video_id}
        )
    info = _extract(WATCH_URL.format(id=video_id), timeout=timeout)
    seconds = int(info.get("duration") or 0)
    likes = info.get("like_count")
    categories = info.get("categories") or []
    availability = info.get("availability")
    name = info.get("channel") or info.get("uploader") or "Unknown"
    channel = ChannelInfo(
        name=name,
        url=info.get("channel_url") or info.get("uploader_url") or "",
        verified=bool(info.get("channel_is_verified")),
        is_artist=_is_artist(name),
        subscribers=(
            short_count(info["channel_follower_count"])
            if info.get("channel_follower_count") is not None
            else None
        ),
    )
    return VideoDetails(
        id=info.get("id") or video_id,
        title=info.get("title") or video_id,
        description=info.get("description") or "",
        duration=info.get("duration_string") or format_duration(seconds),
        seconds=seconds,
        views=int(info.get("view_count") or 0),
        views_short=short_count(info.get("view_count")),
        likes=likes,
        likes_short=short_count(likes) if likes is not None else None,
        upload_date=format_date(info.get("upload_date")) or "Unknown",
        category=categories[0] if categories else None,
        # YouTube hides the like counter when ratings are disabled
        allow_ratings=likes is not None,
        is_live=info.get("live_status") == "is_live",
        is_private=availability == "private",
        is_unlisted=availability == "unlisted",
        watch_url=info.get("webpage_url") or WATCH_URL.format(id=video_id),
        thumbnail=_best_thumbnail(info),
        channel=channel,
        keywords=list(info.get("tags") or []),
    )


def _fetch_playlist_page(
    playlist_id: str, page: int, page_size: int, timeout: int
) -> PlaylistPage:
    start = (page - 1) * page_size + 1
    end = start + page_size - 1
    info = _extract(
        PLAYLIST_URL.format(id=playlist_id),
        timeout=timeout,
        extract_flat="in_playlist",
        playliststart=start,
        playlistend=end,
    )
    entries = [e for e in info.get("entries") or [] if e and e.get("id")]
    total = info.get("playlist_count")
    videos = [
        PlaylistVideo(
            index=int(e.get("playlist_index") or start + offset),
            id=e["id"],
            title=e.get("title") or e["id"],
            duration=format_duration(e.get("duration")),
            views=short_count(e["view_count"]) if e.get("view_count") is not None else None,
            watch_url=WATCH_URL.format(id=e["id"]),
            author=e.get("channel") or e.get("uploader"),
        )
        for offset, e in enumerate(entries)
    ]
    if total is not None:
        has_next = end < int(total)
    else:
        has_next = len(entries) >= page_size
    playlist = PlaylistInfo(
        id=info.get("id") or playlist_id,
        title=info.get("title") or playlist_id,
        description=info.get("description") or "",
        author=_author(info) or Author(name="Unknown"),
        video_count=int(total) if total is not None else None,
        views_count=short_count(info["view_count"]) if info.get("view_count") is not None else None,
        expected_pages=math.ceil(int(total) / page_size) if total else None,
        url=PLAYLIST_URL.format(id=playlist_id),
    )
    get_logger().debug(
        "Playlist %s page %d: %d video(s), next=%s", playlist_id, page, len(videos), has_next
    )
    return PlaylistPage(
        playlist=playlist,
        videos=videos,
        page=page,
        has_next_page=has_next,
        _fetch_next=partial(_fetch_playlist_page, playlist_id, page + 1, page_size, timeout),
    )


def get_playlist_items(
    playlist_id: str, page_size: int = DEFAULT_PAGE_SIZE, timeout: int = DEFAULT_TIMEOUT
) -> PlaylistPage:
    """First page of a playlist; continue with ``PlaylistPage.next_page()``."""
    if not playlist_id or not PLAYLIST_ID_RE.match(playlist_id):
        raise YtSearchError(
            INVALID_PLAYLIST,
            f"Invalid playlist ID: {playlist_id!r}",
            {"playlistId": playlist_id},
        )
    if page_size < 1:
        raise YtSearchError(
            INVALID_OPTION, "Page size must be positive", {"option": "page_size", "value": page_size}
        )
    return _fetch_playlist_page(playlist_id, 1, page_size, timeout)


__all__ = [
    "search_youtube",
    "get_video_details",
    "get_playlist_items",
    "build_search_url",
    "search_filter_param",
    "short_count",
    "format_duration",
    "format_date",
]
