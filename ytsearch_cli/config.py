"""Configuration management for the search CLI."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .logging_utils import get_logger

SORT_CHOICES = ("relevance", "upload_date", "view_count", "rating")
MODE_CHOICES = ("default", "compact", "online", "detailed")
SEARCH_TYPES = ("video", "channel", "playlist")
MIN_LIMIT = 1
MAX_LIMIT = 50

CONFIG_ENV_VAR = "YTSEARCH_CONFIG"


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".config" / "ytsearch" / "config.json"


@dataclass
class AppConfig:
    limit: int = 10
    sort: str = "relevance"
    mode: str = "default"
    page_size: int = 100  # playlist entries fetched per page
    timeout_seconds: int = 10

    def __post_init__(self):
        if not MIN_LIMIT <= int(self.limit) <= MAX_LIMIT:
            raise ValueError(f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}")
        if self.sort not in SORT_CHOICES:
            raise ValueError(f"Unknown sort: {self.sort}")
        if self.mode not in MODE_CHOICES:
            raise ValueError(f"Unknown display mode: {self.mode}")
        if int(self.page_size) < 1:
            raise ValueError("page_size must be positive")
        self.limit = int(self.limit)
        self.page_size = int(self.page_size)

    def save(self, path: Path) -> None:
        """Saves the configuration to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def from_file(cls, path: Path) -> "AppConfig":
        """Loads configuration from a JSON file, ignoring unknown keys."""
        if not path.exists():
            return cls()
        with open(path, "r") as f:
            data = json.load(f)
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: Path | None = None) -> AppConfig:
    path = path or default_config_path()
    try:
        return AppConfig.from_file(path)
    except (OSError, ValueError, TypeError) as e:
        get_logger().warning("Ignoring config at %s: %s", path, e)
        return AppConfig()


@dataclass
class GlobalOptions:
    """Per-invocation options: persisted defaults plus command-line overrides."""

    limit: int = 10
    sort: str = "relevance"
    json: bool = False
    mode: str = "default"
    page_size: int = 100
    timeout_seconds: int = 10

    @classmethod
    def from_config(cls, config: AppConfig, **overrides) -> "GlobalOptions":
        values = {
            "limit": config.limit,
            "sort": config.sort,
            "mode": config.mode,
            "page_size": config.page_size,
            "timeout_seconds": config.timeout_seconds,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
