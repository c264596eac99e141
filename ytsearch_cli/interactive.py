"""Menu-driven interactive mode built on rich prompts."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.text import Text

from . import client
from . import formatter as fmt
from .commands import browse_playlist, render_search_results, report_error
from .config import MAX_LIMIT, MIN_LIMIT, AppConfig, default_config_path
from .ids import (
    extract_playlist_id,
    extract_video_id,
    is_valid_playlist_input,
    is_valid_video_input,
)
from .logging_utils import get_logger

Choice = Tuple[str, str]

MAIN_MENU: List[Choice] = [
    ("🎥 Search Videos", "video"),
    ("📺 Search Channels", "channel"),
    ("📋 Search Playlists", "playlist"),
    ("🔍 Get Video Details", "details"),
    ("📚 Browse Playlist Videos", "playlist-videos"),
    ("🌐 Search All Types", "search-all"),
    ("⚙️  Configure Settings", "settings"),
    ("❌ Exit", "exit"),
]

SEARCH_MODES: List[Choice] = [
    ("📊 Default - Full tables with all info", "default"),
    ("🗜️  Compact - Quick table overview", "compact"),
    ("🌐 Online - URLs and clickable links", "online"),
    ("📋 Detailed - Extended metadata", "detailed"),
    ("📄 JSON - Raw JSON output", "json"),
]

DETAIL_MODES: List[Choice] = [
    ("📊 Default - Standard details", "default"),
    ("📋 Detailed - Extended metadata", "detailed"),
    ("📄 JSON - Raw JSON output", "json"),
]

PLAYLIST_MODES: List[Choice] = [
    ("📊 Interactive - Browse with pagination", "interactive"),
    ("📄 JSON - Raw JSON output", "json"),
]

SORTS: List[Choice] = [
    ("🎯 Relevance", "relevance"),
    ("📅 Upload Date", "upload_date"),
    ("👀 View Count", "view_count"),
    ("⭐ Rating", "rating"),
]

SETTINGS_MENU: List[Choice] = [
    ("📊 Default Display Mode", "mode"),
    ("🔢 Default Result Limit", "limit"),
    ("📈 Default Sort Method", "sort"),
    ("🔙 Back to Main Menu", "back"),
]

PAGE_ACTIONS: List[Choice] = [
    ("➡️  Load next page", "next"),
    ("🏠 Return to main menu", "return"),
]

GOODBYE = "\n👋 Thanks for using YouTube Search CLI!"

Validator = Callable[[str], Union[bool, str]]


class InteractiveCLI:
    """Loop over a main menu until the user exits.

    Library failures are printed and control returns to the menu; Ctrl+C or
    end of input leaves the loop.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        console: Optional[Console] = None,
        config_path: Optional[Path] = None,
    ):
        self.config = config or AppConfig()
        self.console = console or Console()
        self.config_path = config_path or default_config_path()
        self._log = get_logger()

    # --- prompt primitives (overridable) ----------------------------------

    def _choose(self, message: str, choices: Sequence[Choice], default: Optional[str] = None) -> str:
        values = [value for _, value in choices]
        for number, (label, _) in enumerate(choices, start=1):
            self.console.print(Text(f"  {number}. {label}"))
        default_number = values.index(default) + 1 if default in values else 1
        answer = IntPrompt.ask(
            message,
            choices=[str(n) for n in range(1, len(values) + 1)],
            default=default_number,
            show_choices=False,
            console=self.console,
        )
        return values[int(answer) - 1]

    def _ask_text(self, message: str, validate: Validator) -> str:
        while True:
            answer = Prompt.ask(message, console=self.console)
            verdict = validate(answer)
            if verdict is True:
                return answer
            self.console.print(Text(str(verdict), style="red"))

    def _ask_int(self, message: str, default: int, low: int, high: int) -> int:
        while True:
            answer = IntPrompt.ask(message, default=default, console=self.console)
            if low <= answer <= high:
                return answer
            self.console.print(Text(f"Please enter a number between {low} and {high}", style="red"))

    def _confirm(self, message: str, default: bool) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    # --- main loop --------------------------------------------------------

    def _banner(self) -> None:
        self.console.clear()
        self.console.print(fmt.create_brand())

    def start(self) -> int:
        self._banner()
        self.console.print(Text("\n🚀 Welcome to Interactive YouTube Search CLI", style="cyan"))
        self.console.print(
            Text("Pick an option by number, Enter for the default, Ctrl+C to exit\n", style="bright_black")
        )
        while True:
            try:
                action = self._choose("What would you like to do?", MAIN_MENU)
                if action == "exit":
                    break
                self.handle_action(action)
                if not self._confirm("Would you like to perform another search?", default=True):
                    break
                self._banner()
            except (KeyboardInterrupt, EOFError):
                break
            except Exception as e:
                self._log.debug("Interactive action failed", exc_info=e)
                self.console.print(fmt.format_error(f"Interactive mode error: {e}"))
        self.console.print(Text(GOODBYE, style="green"))
        return 0

    def handle_action(self, action: str) -> None:
        if action in ("video", "channel", "playlist"):
            self.handle_search(action)
        elif action == "search-all":
            self.handle_search(None)
        elif action == "details":
            self.handle_video_details()
        elif action == "playlist-videos":
            self.handle_playlist_videos()
        elif action == "settings":
            self.handle_settings()

    # --- actions ----------------------------------------------------------

    def handle_search(self, kind: Optional[str]) -> None:
        suffix = f" for {kind}s" if kind else ""
        query = self._ask_text(
            f"Enter your search query{suffix}",
            lambda s: bool(s.strip()) or "Please enter a search query",
        ).strip()
        mode = self._choose("Select display mode", SEARCH_MODES, default=self.config.mode)
        limit = self._ask_int(
            f"Number of results ({MIN_LIMIT}-{MAX_LIMIT})", self.config.limit, MIN_LIMIT, MAX_LIMIT
        )
        sort = self._choose("Sort results by", SORTS, default=self.config.sort)

        try:
            with self.console.status("Searching YouTube..."):
                results = client.search_youtube(
                    query,
                    kind=kind,
                    limit=limit,
                    sort=sort,
                    timeout=self.config.timeout_seconds,
                )
        except Exception as e:
            report_error(self.console, e)
            return
        render_search_results(self.console, query, kind, results, mode)

    def handle_video_details(self) -> None:
        raw = self._ask_text(
            "Enter YouTube video ID or URL",
            lambda s: is_valid_video_input(s)
            or (
                "Please enter a video ID or URL"
                if not s.strip()
                else "Please enter a valid YouTube video ID or URL"
            ),
        )
        video_id = extract_video_id(raw)
        mode = self._choose("Display mode", DETAIL_MODES, default="default")

        try:
            with self.console.status("Fetching video details..."):
                details = client.get_video_details(
                    video_id, timeout=self.config.timeout_seconds
                )
        except Exception as e:
            report_error(self.console, e)
            return

        self.console.print(fmt.create_header(f"Video Details: {details.title}"))
        if mode == "json":
            self.console.print_json(fmt.to_json(details))
        elif mode == "detailed":
            self.console.print(fmt.format_video_detailed(details.as_video_result()))
        else:
            self.console.print(fmt.format_video(details.as_video_result()))

    def handle_playlist_videos(self) -> None:
        raw = self._ask_text(
            "Enter YouTube playlist ID or URL",
            lambda s: is_valid_playlist_input(s)
            or (
                "Please enter a playlist ID or URL"
                if not s.strip()
                else "Please enter a valid YouTube playlist ID or URL"
            ),
        )
        playlist_id = extract_playlist_id(raw)
        mode = self._choose("Display mode", PLAYLIST_MODES, default="interactive")

        try:
            with self.console.status("Fetching playlist..."):
                page = client.get_playlist_items(
                    playlist_id,
                    page_size=self.config.page_size,
                    timeout=self.config.timeout_seconds,
                )
        except Exception as e:
            report_error(self.console, e)
            return

        if mode == "json":
            self.console.print_json(fmt.to_json(page))
            return
        self.console.print(fmt.create_header(f"Playlist: {page.playlist.title}"))
        self.console.print(fmt.format_playlist_info(page.playlist))
        browse_playlist(
            self.console,
            page,
            lambda: self._choose("What would you like to do?", PAGE_ACTIONS) == "next",
        )

    def handle_settings(self) -> None:
        setting = self._choose("What would you like to configure?", SETTINGS_MENU)
        if setting == "back":
            return
        if setting == "mode":
            modes = [c for c in SEARCH_MODES if c[1] != "json"]
            self.config.mode = self._choose("Select default display mode", modes, default=self.config.mode)
            message = f"Default display mode set to: {self.config.mode}"
        elif setting == "limit":
            self.config.limit = self._ask_int(
                f"Default number of results ({MIN_LIMIT}-{MAX_LIMIT})",
                self.config.limit,
                MIN_LIMIT,
                MAX_LIMIT,
            )
            message = f"Default result limit set to: {self.config.limit}"
        else:
            self.config.sort = self._choose("Default sort method", SORTS, default=self.config.sort)
            message = f"Default sort method set to: {self.config.sort}"

        try:
            self.config.save(self.config_path)
            self._log.debug("Persisted config to %s", self.config_path)
        except OSError as e:
            self._log.warning("Could not persist config to %s: %s", self.config_path, e)
        self.console.print(fmt.format_success(message))


__all__ = ["InteractiveCLI", "MAIN_MENU"]
