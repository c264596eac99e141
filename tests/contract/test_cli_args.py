import pytest

from tests.factories import video_entry
from ytsearch_cli.cli import build_parser

# Contract: global flags parse before or after the subcommand; bad values exit 1 with usage on stderr


@pytest.mark.contract
@pytest.mark.parametrize(
    "argv",
    [
        ["-l", "3", "-s", "view_count", "video", "lofi", "beats"],
        ["video", "lofi", "beats", "--limit", "3", "--sort", "view_count"],
        ["--limit", "3", "video", "lofi", "beats", "-s", "view_count"],
    ],
)
def test_global_flags_either_side_of_command(argv):
    args = build_parser().parse_args(argv)
    assert args.command == "video"
    assert args.kind == "video"
    assert args.query == ["lofi", "beats"]
    assert args.limit == 3
    assert args.sort == "view_count"


@pytest.mark.contract
def test_defaults_left_unset_for_config():
    args = build_parser().parse_args(["search", "lofi"])
    assert args.kind is None
    assert args.limit is None
    assert args.sort is None
    assert args.mode is None
    assert args.json is False


@pytest.mark.contract
@pytest.mark.parametrize(
    "args",
    [
        ["video", "lofi", "--sort", "newest"],
        ["video", "lofi", "--limit", "0"],
        ["video", "lofi", "--limit", "many"],
        ["video"],
        ["details"],
        ["playlist-videos", "PL123456789", "--page-size", "0"],
        ["channel", "x", "--mode", "fancy"],
    ],
)
def test_invalid_usage_exits_1(run_cli, args):
    code, out, err = run_cli(args)
    assert code == 1
    assert "usage:" in err
    assert "error:" in err
    assert out == ""


@pytest.mark.contract
def test_no_command_prints_help_to_stderr(run_cli):
    code, out, err = run_cli([])
    assert code == 1
    assert "usage: ytsearch" in err
    assert "playlist-videos" in err
    assert out == ""


@pytest.mark.contract
def test_explicit_help_exits_0(run_cli):
    code, out, err = run_cli(["video", "--help"])
    assert code == 0
    assert "search terms" in out


@pytest.mark.contract
def test_version(run_cli):
    code, out, err = run_cli(["--version"])
    assert code == 0
    assert "1.0.0" in out


@pytest.mark.contract
def test_limit_and_sort_reach_yt_dlp(run_cli, fake_ydl):
    fake_ydl.add("results", {"entries": [video_entry()]})
    code, out, err = run_cli(["-l", "7", "video", "rick", "--sort", "upload_date"])
    assert code == 0
    url, opts = fake_ydl.calls[0]
    assert opts["playlistend"] == 7
    assert "search_query=rick" in url
    assert "sp=CAISAhAB" in url


@pytest.mark.contract
def test_config_defaults_apply(run_cli, fake_ydl, isolated_config):
    isolated_config.write_text('{"limit": 4, "mode": "compact"}')
    fake_ydl.add("results", {"entries": [video_entry()]})
    code, out, err = run_cli(["video", "rick"])
    assert code == 0
    assert fake_ydl.calls[0][1]["playlistend"] == 4
    assert "📹 VID" in out


@pytest.mark.contract
def test_page_size_reaches_yt_dlp(run_cli, fake_ydl):
    fake_ydl.add("playlist?list=", {"id": "PL123456789", "title": "Mix", "entries": []})
    code, out, err = run_cli(["playlist-videos", "PL123456789", "--page-size", "5", "--json"])
    assert code == 0
    opts = fake_ydl.calls[0][1]
    assert (opts["playliststart"], opts["playlistend"]) == (1, 5)
