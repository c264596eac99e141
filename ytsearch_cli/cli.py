"""Command-line interface orchestration."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console

from . import __version__
from . import formatter as fmt
from .commands import details_command, playlist_command, search_command
from .config import MODE_CHOICES, SORT_CHOICES, GlobalOptions, load_config
from .logging_utils import get_logger, set_verbose

SEARCH_COMMANDS = [
    ("video", "video", "search for YouTube videos"),
    ("channel", "channel", "search for YouTube channels"),
    ("playlist", "playlist", "search for YouTube playlists"),
    ("search", None, "search across all YouTube content types"),
]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive number")
    return number


def _add_global_options(p: argparse.ArgumentParser, suppress: bool) -> None:
    # Subcommand copies use SUPPRESS so a flag given before the subcommand survives
    unset = argparse.SUPPRESS if suppress else None
    off = argparse.SUPPRESS if suppress else False
    p.add_argument(
        "-l", "--limit", type=_positive_int, default=unset,
        help="limit number of results (default: from config, 10)",
    )
    p.add_argument(
        "-s", "--sort", choices=SORT_CHOICES, default=unset,
        help="sort by: relevance, upload_date, view_count, rating",
    )
    p.add_argument(
        "-j", "--json", action="store_true", default=off,
        help="output raw JSON instead of formatted display",
    )
    p.add_argument(
        "-m", "--mode", choices=MODE_CHOICES, default=unset,
        help="display mode for search results",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", default=off, help="debug logging on stderr"
    )


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = UsageParser(
        prog="ytsearch",
        description="A beautiful command-line interface for YouTube search",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_global_options(p, suppress=False)

    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, suppress=True)

    sub = p.add_subparsers(dest="command", metavar="<command>", parser_class=UsageParser)
    for name, kind, help_text in SEARCH_COMMANDS:
        sp = sub.add_parser(name, parents=[common], help=help_text, description=help_text)
        sp.add_argument("query", nargs="+", help="search terms")
        sp.set_defaults(kind=kind)

    sp = sub.add_parser(
        "details", parents=[common],
        help="get detailed information about a specific video",
    )
    sp.add_argument("video_id", metavar="videoId", help="video ID or watch URL")

    sp = sub.add_parser(
        "playlist-videos", parents=[common],
        help="get videos from a playlist with pagination",
    )
    sp.add_argument("playlist_id", metavar="playlistId", help="playlist ID or URL")
    sp.add_argument(
        "--page-size", type=_positive_int, default=None,
        help="videos fetched per page (default: from config, 100)",
    )

    sub.add_parser("interactive", parents=[common], help="menu-driven interactive mode")
    sub.add_parser("tui", parents=[common], help="full-screen search browser")
    return p


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    config = load_config()
    options = GlobalOptions.from_config(
        config,
        limit=args.limit,
        sort=args.sort,
        mode=args.mode,
        json=args.json,
        page_size=getattr(args, "page_size", None),
    )
    log = get_logger()
    log.debug("Command %s with %s", args.command, options)
    console = Console()

    if args.command == "interactive":
        from .interactive import InteractiveCLI

        return InteractiveCLI(config=config, console=console).start()
    if args.command == "tui":
        from .tui import SearchApp

        SearchApp(config).run()
        return 0

    # Keep stdout parseable when JSON was requested
    if not options.json:
        console.print(fmt.create_banner())
        console.print(fmt.create_brand())

    if args.command == "details":
        return details_command(args.video_id, options, console)
    if args.command == "playlist-videos":
        return playlist_command(args.playlist_id, options, console)
    return search_command(" ".join(args.query), args.kind, options, console)
