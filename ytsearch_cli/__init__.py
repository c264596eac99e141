"""YouTube search CLI package root.

Public surface kept intentionally small; internal modules may evolve.
"""

__version__ = "1.0.0"

from .client import get_playlist_items, get_video_details, search_youtube
from .config import AppConfig, GlobalOptions
from .errors import YtSearchError

__all__ = [
    "AppConfig",
    "GlobalOptions",
    "YtSearchError",
    "search_youtube",
    "get_video_details",
    "get_playlist_items",
]


def main():
    """Run the command-line interface."""
    import sys

    from .cli import run_cli

    sys.exit(run_cli())
