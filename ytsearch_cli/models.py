from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from .errors import NO_MORE_PAGES, YtSearchError

# Read-only records handed to the formatters. Built by client.py from yt-dlp info dicts.


@dataclass
class Thumbnail:
    url: str = ""
    width: int = 0
    height: int = 0


@dataclass
class Author:
    name: str
    url: str = ""
    verified: bool = False
    is_artist: bool = False


@dataclass
class VideoResult:
    id: str
    title: str
    image: str
    thumbnail: Thumbnail
    view_count: int
    short_view_count: str
    duration: str
    seconds: int
    author: Optional[Author]
    watch_url: str
    published_at: str
    type: str = "video"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChannelResult:
    id: str
    title: str
    image: str
    thumbnail: Thumbnail
    description: str
    subscriber_count: str
    url: str
    verified: bool = False
    is_artist: bool = False
    type: str = "channel"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PlaylistResult:
    id: str
    title: str
    image: str
    thumbnail: Thumbnail
    video_count: int
    author: Optional[Author]
    url: str
    content_type: str = "playlist"
    type: str = "playlist"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


SearchResult = Union[VideoResult, ChannelResult, PlaylistResult]


@dataclass
class ChannelInfo:
    name: str
    url: str = ""
    verified: bool = False
    is_artist: bool = False
    subscribers: Optional[str] = None


@dataclass
class VideoDetails:
    id: str
    title: str
    description: str
    duration: str
    seconds: int
    views: int
    views_short: str
    likes: Optional[int]
    likes_short: Optional[str]
    upload_date: str
    category: Optional[str]
    allow_ratings: bool
    is_live: bool
    is_private: bool
    is_unlisted: bool
    watch_url: str
    thumbnail: Thumbnail
    channel: ChannelInfo
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def as_video_result(self) -> VideoResult:
        """Reshape details into a search record so the result tables can render it."""
        return VideoResult(
            id=self.id,
            title=self.title,
            image=self.thumbnail.url,
            thumbnail=self.thumbnail,
            view_count=self.views,
            short_view_count=self.views_short,
            duration=self.duration,
            seconds=self.seconds,
            author=Author(
                name=self.channel.name,
                url=self.channel.url,
                verified=self.channel.verified,
                is_artist=self.channel.is_artist,
            ),
            watch_url=self.watch_url,
            published_at=self.upload_date,
        )


@dataclass
class PlaylistVideo:
    index: int
    id: str
    title: str
    duration: str
    views: Optional[str]
    watch_url: str
    author: Optional[str] = None


@dataclass
class PlaylistInfo:
    id: str
    title: str
    description: str
    author: Author
    video_count: Optional[int]
    views_count: Optional[str]
    expected_pages: Optional[int]
    url: str


@dataclass
class PlaylistPage:
    """One page of playlist entries; next_page() fetches the following one."""

    playlist: PlaylistInfo
    videos: List[PlaylistVideo]
    page: int = 1
    has_next_page: bool = False
    _fetch_next: Optional[Callable[[], "PlaylistPage"]] = field(
        default=None, repr=False, compare=False
    )

    def next_page(self) -> "PlaylistPage":
        if not self.has_next_page or self._fetch_next is None:
            raise YtSearchError(
                NO_MORE_PAGES,
                "Playlist has no further pages",
                {"playlistId": self.playlist.id, "page": self.page},
            )
        return self._fetch_next()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playlist": asdict(self.playlist),
            "videos": [asdict(v) for v in self.videos],
            "page": self.page,
            "has_next_page": self.has_next_page,
        }


__all__ = [
    "Thumbnail",
    "Author",
    "VideoResult",
    "ChannelResult",
    "PlaylistResult",
    "SearchResult",
    "ChannelInfo",
    "VideoDetails",
    "PlaylistVideo",
    "PlaylistInfo",
    "PlaylistPage",
]
