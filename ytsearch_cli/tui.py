# tui.py

import logging
import threading
from logging import Handler, LogRecord
from typing import List, Optional, Tuple

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    RichLog,
    Select,
    Static,
    TabbedContent,
    TabPane,
)

from . import client
from .config import MAX_LIMIT, MIN_LIMIT, SORT_CHOICES, AppConfig, load_config
from .errors import YtSearchError
from .formatter import truncate
from .ids import extract_playlist_id
from .logging_utils import get_logger
from .models import (
    ChannelResult,
    PlaylistPage,
    PlaylistResult,
    PlaylistVideo,
    SearchResult,
    VideoResult,
)

TYPE_OPTIONS = [
    ("All types", "all"),
    ("Videos", "video"),
    ("Channels", "channel"),
    ("Playlists", "playlist"),
]
SORT_OPTIONS = [(s.replace("_", " ").title(), s) for s in SORT_CHOICES]


def parse_limit(raw: str, default: int) -> int:
    """Clamp the limit field to the accepted range; blank or junk -> default."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return max(MIN_LIMIT, min(MAX_LIMIT, value))


def result_row(result: SearchResult) -> Tuple[str, str, str, str, str]:
    if isinstance(result, VideoResult):
        author = result.author.name if result.author else "Unknown"
        info = f"{result.duration} • {result.short_view_count}"
        return ("Video", result.title, author, info, result.watch_url)
    if isinstance(result, ChannelResult):
        return ("Channel", result.title, "", f"{result.subscriber_count} subscribers", result.url)
    if isinstance(result, PlaylistResult):
        author = result.author.name if result.author else "Unknown"
        return ("Playlist", result.title, author, f"{result.video_count} videos", result.url)
    raise TypeError(f"Unsupported result: {type(result).__name__}")


def playlist_video_row(video: PlaylistVideo) -> Tuple[str, str, str, str]:
    return (str(video.index), truncate(video.title, 60), video.duration, video.views or "N/A")


def playlist_summary(page: PlaylistPage) -> str:
    info = page.playlist
    total = info.video_count if info.video_count is not None else "?"
    pages = info.expected_pages or "?"
    return f"{info.title} by {info.author.name} · {total} videos · page {page.page}/{pages}"


class TuiLogHandler(Handler):
    """A logging handler that sends records to the app's RichLog widget.

    Messages may carry Rich markup; user-supplied text must be escaped by
    the caller before logging.
    """

    def __init__(self, log_widget: RichLog, app: App):
        super().__init__()
        self._log_widget = log_widget
        self._app = app
        self._lock = threading.Lock()

    def emit(self, record: LogRecord):
        with self._lock:
            try:
                raw = record.getMessage()
                if record.levelno >= logging.ERROR:
                    line = f"[bold red]ERROR[/bold red] {raw}"
                elif record.levelno >= logging.WARNING:
                    line = f"[yellow]WARN[/yellow] {raw}"
                elif record.levelno >= logging.INFO:
                    line = raw
                else:
                    line = f"[dim]{raw}[/dim]"
                try:
                    self._app.call_from_thread(self._log_widget.write, line)
                except RuntimeError:
                    # Already on the app thread
                    self._log_widget.write(line)
            except Exception:
                self.handleError(record)


class TUIController:
    """Runs library calls off the UI thread and pushes results back to the app."""

    def __init__(self, app: "SearchApp"):
        self._app = app
        self._log = get_logger()
        self.page: Optional[PlaylistPage] = None
        self.busy = False
        self._thread: Optional[threading.Thread] = None

    def _start(self, target) -> None:
        # One library call at a time; repeated key presses are dropped
        if self.busy:
            self._log.warning("Still loading, please wait")
            return
        self.busy = True

        def worker():
            self._app.call_from_thread(self._app.set_busy, True)
            try:
                target()
            except YtSearchError as e:
                self._log.error(f"{e.code}: {escape(e.message)}")
            except Exception as e:
                self._log.error(f"Unexpected error: {escape(str(e))}")
            finally:
                self.busy = False
                self._app.call_from_thread(self._app.set_busy, False)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def run_search(self, query: str, kind: Optional[str], sort: str, limit: int) -> None:
        config = self._app.app_config

        def task():
            self._log.info(f"Searching for '{escape(query)}' (type={kind or 'all'}, sort={sort})")
            results = client.search_youtube(
                query, kind=kind, limit=limit, sort=sort, timeout=config.timeout_seconds
            )
            self._log.info(f"Found {len(results)} result(s)")
            self._app.call_from_thread(self._app.show_results, results)

        self._start(task)

    def run_playlist(self, playlist_id: str) -> None:
        config = self._app.app_config

        def task():
            self._log.info(f"Loading playlist {escape(playlist_id)}")
            page = client.get_playlist_items(
                playlist_id, page_size=config.page_size, timeout=config.timeout_seconds
            )
            self.page = page
            self._app.call_from_thread(self._app.show_page, page, False)

        self._start(task)

    def run_next_page(self) -> None:
        current = self.page
        if current is None or not current.has_next_page:
            self._log.warning("No further pages")
            return

        def task():
            page = current.next_page()
            self.page = page
            self._log.info(f"Loaded page {page.page}")
            self._app.call_from_thread(self._app.show_page, page, True)

        self._start(task)


class SearchApp(App):
    """A Textual UI for searching YouTube and paging through playlists."""

    CSS_PATH = "tui.css"
    TITLE = "YouTube Search"
    BINDINGS = [
        ("n", "next_page", "Next page"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[AppConfig] = None):
        super().__init__()
        self.app_config = config or load_config()
        self._controller = TUIController(self)
        self._saved_handlers: List[Handler] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main_layout"):
            with TabbedContent(initial="search_tab", id="main_tabs"):
                with TabPane("Search", id="search_tab"):
                    yield Static("Query:", classes="label")
                    with Horizontal(classes="input_container"):
                        yield Input(placeholder="lofi hip hop", id="query")
                        yield Button("Search", variant="primary", id="search")
                    with Horizontal(id="search_options"):
                        yield Select(TYPE_OPTIONS, value="all", allow_blank=False, id="kind")
                        yield Select(
                            SORT_OPTIONS, value=self.app_config.sort, allow_blank=False, id="sort"
                        )
                        yield Input(value=str(self.app_config.limit), type="integer", id="limit")
                    yield DataTable(id="results", cursor_type="row", zebra_stripes=True)

                with TabPane("Playlist", id="playlist_tab"):
                    yield Static("Playlist ID or URL:", classes="label")
                    with Horizontal(classes="input_container"):
                        yield Input(
                            placeholder="https://youtube.com/playlist?list=...", id="playlist_id"
                        )
                        yield Button("Load", variant="primary", id="load_playlist")
                        yield Button("Next Page", id="next_page", disabled=True)
                    yield Static("", id="playlist_info")
                    yield DataTable(id="playlist_videos", cursor_type="row", zebra_stripes=True)

        with Container(id="lower_section"):
            yield RichLog(id="log_view", markup=True, auto_scroll=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#results", DataTable).add_columns("Type", "Title", "Author", "Info", "URL")
        self.query_one("#playlist_videos", DataTable).add_columns("#", "Title", "Duration", "Views")

        log_widget = self.query_one(RichLog)
        root_logger = get_logger()
        # Route records into the log panel while the app runs
        self._saved_handlers = root_logger.handlers[:]
        for handler in self._saved_handlers:
            root_logger.removeHandler(handler)
        root_logger.addHandler(TuiLogHandler(log_widget, self))
        root_logger.setLevel(logging.INFO)
        root_logger.info("Ready. Enter a query or a playlist.")

    def on_unmount(self) -> None:
        root_logger = get_logger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        for handler in self._saved_handlers:
            root_logger.addHandler(handler)

    def set_busy(self, busy: bool) -> None:
        for button_id in ("search", "load_playlist"):
            self.query_one(f"#{button_id}", Button).disabled = busy
        page = self._controller.page
        self.query_one("#next_page", Button).disabled = busy or not (page and page.has_next_page)

    def show_results(self, results: List[SearchResult]) -> None:
        table = self.query_one("#results", DataTable)
        table.clear()
        for result in results:
            table.add_row(*(Text(cell) for cell in result_row(result)))

    def show_page(self, page: PlaylistPage, append: bool) -> None:
        table = self.query_one("#playlist_videos", DataTable)
        if not append:
            table.clear()
        for video in page.videos:
            table.add_row(*(Text(cell) for cell in playlist_video_row(video)))
        self.query_one("#playlist_info", Static).update(Text(playlist_summary(page)))
        self.query_one("#next_page", Button).disabled = not page.has_next_page

    def action_search(self) -> None:
        query = self.query_one("#query", Input).value.strip()
        if not query:
            get_logger().error("Please enter a search query")
            return
        kind = self.query_one("#kind", Select).value
        sort = self.query_one("#sort", Select).value
        limit = parse_limit(self.query_one("#limit", Input).value, self.app_config.limit)
        self._controller.run_search(
            query, None if kind == "all" else str(kind), str(sort), limit
        )

    def action_load_playlist(self) -> None:
        raw = self.query_one("#playlist_id", Input).value
        if not raw.strip():
            get_logger().error("Please enter a playlist ID or URL")
            return
        self._controller.run_playlist(extract_playlist_id(raw))

    def action_next_page(self) -> None:
        self._controller.run_next_page()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id
        if bid == "search":
            self.action_search()
        elif bid == "load_playlist":
            self.action_load_playlist()
        elif bid == "next_page":
            self.action_next_page()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id in ("query", "limit"):
            self.action_search()
        elif event.input.id == "playlist_id":
            self.action_load_playlist()
