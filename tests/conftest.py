import io
import sys
from pathlib import Path
import pytest

# Ensure project root on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rich.console import Console  # noqa: E402

from tests.factories import FakeRegistry  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and pin the render width."""
    path = tmp_path / "config.json"
    monkeypatch.setenv("YTSEARCH_CONFIG", str(path))
    monkeypatch.setenv("COLUMNS", "120")
    return path


@pytest.fixture()
def fake_ydl(monkeypatch):
    registry = FakeRegistry()
    monkeypatch.setattr("ytsearch_cli.client.yt_dlp.YoutubeDL", registry)
    return registry


@pytest.fixture()
def render():
    def _render(renderable, width=120):
        console = Console(file=io.StringIO(), width=width, color_system=None)
        console.print(renderable)
        return console.file.getvalue()

    return _render


@pytest.fixture()
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture()
def run_cli(capsys):
    from ytsearch_cli.cli import run_cli as _run_cli

    def _run(args):
        try:
            code = _run_cli(args)
        except SystemExit as e:
            code = e.code
        out, err = capsys.readouterr()
        return code, out, err

    return _run
