import pytest
from yt_dlp.utils import DownloadError

from tests.factories import channel_entry, playlist_entry, video_entry, video_info
from ytsearch_cli.formatter import create_banner


@pytest.mark.integration
def test_video_search_human_output(run_cli, fake_ydl):
    fake_ydl.add("results", {"entries": [video_entry(), video_entry(vid="abcdefghijk", title="Second")]})
    code, out, err = run_cli(["video", "rick", "astley"])
    assert code == 0
    assert "YouTube Search CLI" in out
    widest = max(create_banner().plain.splitlines(), key=len).rstrip()
    assert widest in out
    assert 'Search Results for "rick astley"' in out
    assert "Found 2 video(s)" in out
    assert "── Result 2 ──" in out
    assert "Never Gonna Give You Up" in out
    assert "1.2M views" in out


@pytest.mark.integration
def test_mixed_search_online_mode(run_cli, fake_ydl):
    fake_ydl.add("results", {"entries": [video_entry(), channel_entry(), playlist_entry()]})
    code, out, err = run_cli(["search", "rick", "-m", "online"])
    assert code == 0
    assert "Found 3 result(s)" in out
    assert "4.2M subscribers" in out
    assert "42 videos" in out


@pytest.mark.integration
def test_search_without_results(run_cli, fake_ydl):
    fake_ydl.add("results", {"entries": []})
    code, out, err = run_cli(["channel", "qwertyuiop"])
    assert code == 0
    assert "No results found" in out
    assert "Try different keywords or check your spelling" in out


@pytest.mark.integration
def test_request_failure_exits_1(run_cli, fake_ydl):
    fake_ydl.add("results", DownloadError("ERROR: Unable to download API page"))
    code, out, err = run_cli(["video", "lofi"])
    assert code == 1
    assert "❌ Error: REQUEST_FAILED: Unable to download API page" in out
    assert "Additional info" in out


@pytest.mark.integration
def test_details_human_output(run_cli, fake_ydl):
    fake_ydl.add("watch?v=dQw4w9WgXcQ", video_info(availability="private"))
    code, out, err = run_cli(["details", "dQw4w9WgXcQ"])
    assert code == 0
    assert "Video Details: Never Gonna Give You Up" in out
    assert "🔒 PRIVATE" in out
    assert "2009-10-25" in out


@pytest.mark.integration
def test_invalid_video_shows_hint(run_cli, fake_ydl):
    code, out, err = run_cli(["details", "bad"])
    assert code == 1
    assert "INVALID_VIDEO" in out
    assert "Please provide a valid YouTube video ID" in out
    assert fake_ydl.calls == []
