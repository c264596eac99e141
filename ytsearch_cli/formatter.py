"""Rich renderables for search results, details, playlists and status boxes.

Every function returns a renderable rather than a string so the caller's
Console decides colour support and width. Values coming from YouTube are always
wrapped in ``Text`` so brackets in titles are never parsed as markup.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import pyfiglet
from rich import box
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .models import (
    Author,
    ChannelResult,
    PlaylistInfo,
    PlaylistPage,
    PlaylistResult,
    SearchResult,
    VideoDetails,
    VideoResult,
)

DEFAULT_WIDTHS = (13, 63)
DETAILED_WIDTHS = (16, 60)
INFO_WIDTHS = (18, 58)
DESCRIPTION_LIMIT = 200
GRAY = "bright_black"
BANNER_TEXT = "YTSearch CLI"


def truncate(value: str, limit: int) -> str:
    return value[:limit] + "..." if len(value) > limit else value


# --- building blocks ----------------------------------------------------------


def _kv_table(widths: Sequence[int]) -> Table:
    table = Table(show_header=False, box=box.SQUARE, show_lines=True)
    table.add_column(width=widths[0], overflow="fold")
    table.add_column(width=widths[1], overflow="fold")
    return table


def _label(name: str) -> Text:
    return Text(name, style="bold yellow")


def _link(url: Optional[str]) -> Text:
    if not url:
        return Text("N/A", style=GRAY)
    return Text(url, style=Style(color="blue", underline=True, link=url))


def _marked(value: str, style: str, verified: bool = False, artist: bool = False) -> Text:
    text = Text(value, style=style)
    if verified:
        text.append(" ✓", style="blue")
    if artist:
        text.append(" ♪", style="red")
    return text


def _author_name(author: Optional[Author]) -> str:
    return author.name if author and author.name else "Unknown"


def _boxed(message: str, style: str, color: str) -> RenderableType:
    panel = Panel(
        Text(message, style=style),
        box=box.ROUNDED,
        border_style=color,
        padding=1,
        expand=False,
    )
    return Padding(panel, (1, 1))


def create_header(title: str) -> RenderableType:
    panel = Panel(
        Text(title, style="bold cyan"),
        box=box.DOUBLE,
        border_style="cyan",
        padding=1,
        expand=False,
    )
    return Padding(panel, (1, 1))


def create_banner(width: int = 80) -> Text:
    """ASCII-art title shown above the brand line."""
    art = pyfiglet.Figlet(font="standard", width=width).renderText(BANNER_TEXT)
    return Text(art.rstrip("\n"), style="bold cyan", no_wrap=True, overflow="crop")


def create_brand() -> Text:
    return Text.assemble(("🎥 ", "cyan"), ("YouTube Search CLI", "magenta"))


def format_error(message: str) -> RenderableType:
    return _boxed(f"❌ Error: {message}", "bold red", "red")


def format_success(message: str) -> RenderableType:
    return _boxed(f"✅ {message}", "bold green", "green")


def format_warning(message: str) -> RenderableType:
    return _boxed(f"⚠️  {message}", "bold yellow", "yellow")


# --- default mode -------------------------------------------------------------


def format_video(video: VideoResult) -> Table:
    author = video.author
    table = _kv_table(DEFAULT_WIDTHS)
    table.add_row(_label("Title"), Text(video.title, style="white"))
    table.add_row(
        _label("Author"),
        _marked(_author_name(author), "cyan", verified=bool(author and author.verified)),
    )
    table.add_row(_label("Duration"), Text(video.duration, style="green"))
    table.add_row(_label("Views"), Text(video.short_view_count, style="magenta"))
    table.add_row(_label("Published"), Text(video.published_at, style=GRAY))
    table.add_row(_label("Watch URL"), _link(video.watch_url))
    return table


def format_channel(channel: ChannelResult) -> Table:
    table = _kv_table(DEFAULT_WIDTHS)
    table.add_row(
        _label("Channel"),
        _marked(channel.title, "white", channel.verified, channel.is_artist),
    )
    table.add_row(_label("Subscribers"), Text(channel.subscriber_count, style="magenta"))
    table.add_row(
        _label("Description"),
        Text(channel.description or "No description", style=GRAY),
    )
    table.add_row(_label("URL"), _link(channel.url))
    return table


def format_playlist(playlist: PlaylistResult) -> Table:
    author = playlist.author
    table = _kv_table(DEFAULT_WIDTHS)
    table.add_row(_label("Playlist"), Text(playlist.title, style="white"))
    table.add_row(
        _label("Author"),
        _marked(
            _author_name(author),
            "cyan",
            verified=bool(author and author.verified),
            artist=bool(author and author.is_artist),
        ),
    )
    table.add_row(_label("Videos"), Text(str(playlist.video_count), style="green"))
    table.add_row(_label("URL"), _link(playlist.url))
    return table


# --- detailed mode ------------------------------------------------------------


def _status(flag: bool, yes: str, no: str, yes_style: str = "blue") -> Text:
    return Text(yes, style=yes_style) if flag else Text(no, style=GRAY)


def format_video_detailed(video: VideoResult) -> Table:
    author = video.author
    table = _kv_table(DETAILED_WIDTHS)
    author_text = Text(_author_name(author), style="cyan")
    author_text.append(" (")
    author_text.append_text(
        _status(bool(author and author.verified), "✓ Verified", "Not Verified")
    )
    author_text.append(")")
    table.add_row(_label("Video Title"), Text(video.title, style="white"))
    table.add_row(_label("Video ID"), Text(video.id, style=GRAY))
    table.add_row(_label("Author"), author_text)
    table.add_row(_label("Author URL"), _link(author.url if author else None))
    table.add_row(
        _label("Duration"),
        Text.assemble((video.duration, "green"), " (", (f"{video.seconds}s", GRAY), ")"),
    )
    table.add_row(_label("Views (Raw)"), Text(f"{video.view_count:,}", style="magenta"))
    table.add_row(_label("Views (Short)"), Text(video.short_view_count, style="magenta"))
    table.add_row(_label("Published"), Text(video.published_at, style=GRAY))
    table.add_row(_label("Thumbnail"), _link(video.thumbnail.url))
    table.add_row(
        _label("Resolution"),
        Text(f"{video.thumbnail.width}x{video.thumbnail.height}", style="green"),
    )
    table.add_row(_label("Watch URL"), _link(video.watch_url))
    return table


def format_channel_detailed(channel: ChannelResult) -> Table:
    table = _kv_table(DETAILED_WIDTHS)
    table.add_row(_label("Channel Name"), Text(channel.title, style="white"))
    table.add_row(_label("Channel ID"), Text(channel.id, style=GRAY))
    table.add_row(_label("Verification"), _status(channel.verified, "✓ Verified", "Not Verified"))
    table.add_row(
        _label("Channel Type"),
        _status(channel.is_artist, "♪ Artist Channel", "Regular Channel", "red"),
    )
    table.add_row(_label("Subscribers"), Text(channel.subscriber_count, style="magenta"))
    table.add_row(
        _label("Description"),
        Text(channel.description or "No description available", style=GRAY),
    )
    table.add_row(_label("Avatar"), _link(channel.thumbnail.url))
    table.add_row(
        _label("Avatar Size"),
        Text(f"{channel.thumbnail.width}x{channel.thumbnail.height}", style="green"),
    )
    table.add_row(_label("Channel URL"), _link(channel.url))
    return table


def format_playlist_detailed(playlist: PlaylistResult) -> Table:
    author = playlist.author
    status = _status(bool(author and author.verified), "✓ Verified", "Not Verified")
    status.append(" • ")
    status.append_text(
        _status(bool(author and author.is_artist), "♪ Artist", "Regular User", "red")
    )
    table = _kv_table(DETAILED_WIDTHS)
    table.add_row(_label("Playlist Title"), Text(playlist.title, style="white"))
    table.add_row(_label("Playlist ID"), Text(playlist.id, style=GRAY))
    table.add_row(_label("Content Type"), Text(playlist.content_type, style="cyan"))
    table.add_row(_label("Video Count"), Text(str(playlist.video_count), style="green"))
    table.add_row(_label("Author"), Text(_author_name(author), style="cyan"))
    table.add_row(_label("Author Status"), status)
    table.add_row(_label("Author URL"), _link(author.url if author else None))
    table.add_row(_label("Thumbnail"), _link(playlist.thumbnail.url))
    table.add_row(
        _label("Thumb Size"),
        Text(f"{playlist.thumbnail.width}x{playlist.thumbnail.height}", style="green"),
    )
    table.add_row(_label("Playlist URL"), _link(playlist.url))
    return table


_FORMATTERS: Dict[str, Dict[str, Callable[[Any], Table]]] = {
    "default": {
        "video": format_video,
        "channel": format_channel,
        "playlist": format_playlist,
    },
    "detailed": {
        "video": format_video_detailed,
        "channel": format_channel_detailed,
        "playlist": format_playlist_detailed,
    },
}


# --- compact / online modes ---------------------------------------------------


def format_compact_results(results: List[SearchResult]) -> Table:
    table = Table(box=box.SQUARE, header_style="bold white")
    table.add_column("Type", no_wrap=True)
    table.add_column("Title", max_width=38, overflow="fold")
    table.add_column("Author", max_width=20, overflow="fold")
    table.add_column("Info", max_width=20, overflow="fold")

    for result in results:
        title = Text(truncate(result.title, 35), style="white")
        if isinstance(result, VideoResult):
            author = result.author
            table.add_row(
                Text("📹 VID", style="red"),
                title,
                _marked(
                    truncate(_author_name(author), 15),
                    "cyan",
                    verified=bool(author and author.verified),
                ),
                Text.assemble((result.duration, "green"), " ", (result.short_view_count, "magenta")),
            )
        elif isinstance(result, ChannelResult):
            table.add_row(
                Text("📺 CHAN", style="blue"),
                title,
                _marked("", "cyan", result.verified, result.is_artist),
                Text(result.subscriber_count, style="magenta"),
            )
        elif isinstance(result, PlaylistResult):
            table.add_row(
                Text("📋 PLAY", style="green"),
                title,
                Text(truncate(_author_name(result.author), 15), style="cyan"),
                Text(f"{result.video_count} videos", style="green"),
            )
    return table


def format_online_results(results: List[SearchResult]) -> Text:
    out = Text("\n")
    sep = (" • ", GRAY)
    for index, result in enumerate(results, start=1):
        out.append(f"{index}. ", style="bold cyan")
        out.append(result.title, style="white")
        out.append("\n")
        if isinstance(result, VideoResult):
            author = result.author
            out.append("   🎬 ", style=GRAY)
            out.append_text(
                _marked(_author_name(author), "cyan", verified=bool(author and author.verified))
            )
            out.append(*sep)
            out.append(result.duration, style="green")
            out.append(*sep)
            out.append(result.short_view_count, style="magenta")
            out.append("\n   📺 ", style=GRAY)
            out.append_text(_link(result.watch_url))
        elif isinstance(result, ChannelResult):
            out.append("   📺 ", style=GRAY)
            if result.verified:
                out.append("✓ ", style="blue")
            if result.is_artist:
                out.append("♪ ", style="red")
            out.append(result.subscriber_count, style="magenta")
            out.append(" subscribers\n   🔗 ")
            out.append_text(_link(result.url))
        elif isinstance(result, PlaylistResult):
            author = result.author
            out.append("   👤 ", style=GRAY)
            out.append_text(
                _marked(
                    _author_name(author),
                    "cyan",
                    verified=bool(author and author.verified),
                    artist=bool(author and author.is_artist),
                )
            )
            out.append(*sep)
            out.append(f"{result.video_count} videos", style="green")
            out.append("\n   📋 ", style=GRAY)
            out.append_text(_link(result.url))
        out.append("\n\n")
    return out


def format_results(results: List[SearchResult], mode: str = "default") -> RenderableType:
    if not results:
        return _boxed("No results found", "yellow", "yellow")
    if mode == "compact":
        return format_compact_results(results)
    if mode == "online":
        return format_online_results(results)

    formatters = _FORMATTERS.get(mode, _FORMATTERS["default"])
    parts: List[RenderableType] = []
    for index, result in enumerate(results, start=1):
        parts.append(Text(f"\n── Result {index} ──", style="bold cyan"))
        parts.append(formatters[result.type](result))
    return Group(*parts)


# --- details / playlists ------------------------------------------------------


def format_video_details(details: VideoDetails) -> Table:
    channel = details.channel
    title = Text(details.title, style="white")
    if details.is_live:
        title.append(" 🔴 LIVE", style="red")
    if details.is_private:
        title.append(" 🔒 PRIVATE", style="yellow")
    if details.is_unlisted:
        title.append(" 👁️ UNLISTED", style=GRAY)

    table = _kv_table(INFO_WIDTHS)
    table.add_row(_label("Title"), title)
    table.add_row(
        _label("Channel"),
        _marked(channel.name, "cyan", channel.verified, channel.is_artist),
    )
    table.add_row(_label("Subscribers"), Text(channel.subscribers or "N/A", style="magenta"))
    table.add_row(_label("Duration"), Text(details.duration, style="green"))
    table.add_row(_label("Views"), Text(details.views_short, style="magenta"))
    table.add_row(_label("Likes"), Text(details.likes_short or "N/A", style="red"))
    table.add_row(_label("Upload Date"), Text(details.upload_date, style=GRAY))
    table.add_row(_label("Category"), Text(details.category or "N/A", style="cyan"))
    table.add_row(
        _label("Ratings Allowed"),
        Text("Yes", style="green") if details.allow_ratings else Text("No", style="red"),
    )
    table.add_row(_label("Watch URL"), _link(details.watch_url))
    if details.description:
        table.add_row(
            _label("Description"),
            Text(truncate(details.description, DESCRIPTION_LIMIT), style=GRAY),
        )
    return table


def format_playlist_info(info: PlaylistInfo) -> Table:
    table = _kv_table(INFO_WIDTHS)
    table.add_row(
        _label("Author"),
        _marked(info.author.name, "cyan", info.author.verified, info.author.is_artist),
    )
    table.add_row(
        _label("Total Videos"),
        Text(str(info.video_count) if info.video_count is not None else "Unknown", style="green"),
    )
    table.add_row(_label("Total Views"), Text(info.views_count or "N/A", style="magenta"))
    table.add_row(
        _label("Expected Pages"),
        Text(str(info.expected_pages) if info.expected_pages else "Unknown", style="blue"),
    )
    if info.description:
        table.add_row(
            _label("Description"),
            Text(truncate(info.description, DESCRIPTION_LIMIT), style=GRAY),
        )
    return table


def format_page_heading(page_number: int) -> Text:
    return Text(f"\n── Page {page_number} ──", style="bold cyan")


def format_playlist_page(page: PlaylistPage) -> Table:
    table = Table(box=box.SQUARE, header_style="bold white")
    table.add_column("#", max_width=5, no_wrap=True)
    table.add_column("Title", max_width=45, overflow="fold")
    table.add_column("Duration", max_width=12, no_wrap=True)
    table.add_column("Views", max_width=12, no_wrap=True)
    for video in page.videos:
        table.add_row(
            Text(str(video.index), style="yellow"),
            Text(truncate(video.title, 40), style="white"),
            Text(video.duration, style="green"),
            Text(video.views or "N/A", style="magenta"),
        )
    return table


def _plain(data: Any) -> Any:
    if isinstance(data, (list, tuple)):
        return [_plain(item) for item in data]
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    return data


def to_json(data: Any) -> str:
    return json.dumps(_plain(data), indent=2, ensure_ascii=False, default=str)


__all__ = [
    "create_header",
    "create_banner",
    "create_brand",
    "format_video",
    "format_channel",
    "format_playlist",
    "format_video_detailed",
    "format_channel_detailed",
    "format_playlist_detailed",
    "format_compact_results",
    "format_online_results",
    "format_results",
    "format_video_details",
    "format_playlist_info",
    "format_page_heading",
    "format_playlist_page",
    "format_error",
    "format_success",
    "format_warning",
    "to_json",
    "truncate",
]
