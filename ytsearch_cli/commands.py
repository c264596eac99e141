"""Command implementations: one library call each, rendered with rich."""

from __future__ import annotations

import json
from typing import Callable, List, Optional

from rich.console import Console
from rich.prompt import Confirm

from . import client
from . import formatter as fmt
from .config import GlobalOptions
from .errors import INVALID_PLAYLIST, INVALID_VIDEO, YtSearchError
from .ids import extract_playlist_id, extract_video_id
from .logging_utils import get_logger
from .models import PlaylistPage, SearchResult

ERROR_HINTS = {
    INVALID_VIDEO: "Please provide a valid YouTube video ID (e.g., dQw4w9WgXcQ)",
    INVALID_PLAYLIST: (
        "Please provide a valid YouTube playlist ID "
        "(e.g., PL4QNnZJr8sRPEJPqe7jZnsLPTBu1E3nIY)"
    ),
}


def report_error(console: Console, exc: BaseException) -> None:
    """Print a library or unexpected failure as error (and hint) boxes."""
    log = get_logger()
    if isinstance(exc, YtSearchError):
        log.info("Request failed: %s", exc)
        console.print(fmt.format_error(f"{exc.code}: {exc.message}"))
        if exc.metadata:
            console.print(
                fmt.format_warning(
                    f"Additional info: {json.dumps(exc.metadata, default=str)}"
                )
            )
        hint = ERROR_HINTS.get(exc.code)
        if hint:
            console.print(fmt.format_warning(hint))
    else:
        log.debug("Unexpected failure", exc_info=exc)
        console.print(fmt.format_error(f"Unexpected error: {exc}"))


def render_search_results(
    console: Console,
    query: str,
    kind: Optional[str],
    results: List[SearchResult],
    mode: str,
) -> None:
    console.print(fmt.create_header(f'Search Results for "{query}"'))
    noun = f"{kind}(s)" if kind else "result(s)"
    console.print(fmt.format_success(f"Found {len(results)} {noun}"))
    if mode == "json":
        console.print_json(fmt.to_json(results))
    else:
        console.print(fmt.format_results(results, mode))
    if not results:
        console.print(fmt.format_warning("Try different keywords or check your spelling"))


def browse_playlist(
    console: Console, page: PlaylistPage, ask_next: Callable[[], bool]
) -> int:
    """Show pages until the playlist ends or ``ask_next`` declines; returns videos shown."""
    log = get_logger()
    shown = 0
    page_number = 1
    while True:
        console.print(fmt.format_page_heading(page_number))
        console.print(fmt.format_playlist_page(page))
        shown += len(page.videos)

        if not page.has_next_page:
            console.print(
                fmt.format_success(f"Displayed all {shown} videos from the playlist")
            )
            break
        if not ask_next():
            break

        try:
            with console.status("Loading next page..."):
                page = page.next_page()
        except Exception as e:
            log.warning("Loading page %d failed: %s", page_number + 1, e)
            console.print(fmt.format_error("Failed to load next page"))
            break
        page_number += 1
    return shown


def _confirm_next_page(console: Console) -> bool:
    try:
        return Confirm.ask("Load next page?", default=False, console=console)
    except (EOFError, KeyboardInterrupt):
        # Closed stdin or Ctrl+C ends browsing like answering no
        console.print()
        return False


def search_command(
    query: str,
    kind: Optional[str] = None,
    options: Optional[GlobalOptions] = None,
    console: Optional[Console] = None,
) -> int:
    console = console or Console()
    options = options or GlobalOptions()
    try:
        with console.status("Searching YouTube..."):
            results = client.search_youtube(
                query,
                kind=kind,
                limit=options.limit,
                sort=options.sort,
                timeout=options.timeout_seconds,
            )
    except Exception as e:
        report_error(console, e)
        return 1

    if options.json:
        console.print_json(fmt.to_json(results))
        return 0
    render_search_results(console, query, kind, results, options.mode)
    return 0


def details_command(
    video_id: str,
    options: Optional[GlobalOptions] = None,
    console: Optional[Console] = None,
) -> int:
    console = console or Console()
    options = options or GlobalOptions()
    try:
        with console.status("Fetching video details..."):
            details = client.get_video_details(
                extract_video_id(video_id), timeout=options.timeout_seconds
            )
    except Exception as e:
        report_error(console, e)
        return 1

    if options.json:
        console.print_json(fmt.to_json(details))
        return 0
    console.print(fmt.create_header(f"Video Details: {details.title}"))
    console.print(fmt.format_video_details(details))
    return 0


def playlist_command(
    playlist_id: str,
    options: Optional[GlobalOptions] = None,
    console: Optional[Console] = None,
) -> int:
    console = console or Console()
    options = options or GlobalOptions()
    try:
        with console.status("Fetching playlist..."):
            page = client.get_playlist_items(
                extract_playlist_id(playlist_id),
                page_size=options.page_size,
                timeout=options.timeout_seconds,
            )
    except Exception as e:
        report_error(console, e)
        return 1

    if options.json:
        console.print_json(fmt.to_json(page))
        return 0
    console.print(fmt.create_header(f"Playlist: {page.playlist.title}"))
    console.print(fmt.format_playlist_info(page.playlist))
    browse_playlist(
        console,
        page,
        lambda: _confirm_next_page(console),
    )
    return 0


__all__ = [
    "search_command",
    "details_command",
    "playlist_command",
    "browse_playlist",
    "render_search_results",
    "report_error",
]
