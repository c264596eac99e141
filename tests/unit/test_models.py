import pytest

from tests.factories import make_details, make_page, make_playlist, make_video
from ytsearch_cli.errors import YtSearchError


def test_result_types():
    assert make_video().type == "video"
    playlist = make_playlist()
    assert playlist.type == "playlist"
    assert playlist.content_type == "playlist"


def test_details_as_video_result():
    video = make_details().as_video_result()
    assert video.type == "video"
    assert video.short_view_count == "1.5B"
    assert video.author.name == "Rick Astley"
    assert video.author.verified is True
    assert video.published_at == "2009-10-25"


def test_next_page_calls_fetcher():
    second = make_page(page=2)
    first = make_page(has_next=True, fetch_next=lambda: second)
    assert first.next_page() is second


def test_next_page_without_more_pages():
    page = make_page(page=3, has_next=False)
    with pytest.raises(YtSearchError) as exc:
        page.next_page()
    assert exc.value.code == "NO_MORE_PAGES"
    assert exc.value.metadata == {"playlistId": "PL123456789", "page": 3}
    assert str(exc.value) == "NO_MORE_PAGES: Playlist has no further pages"


def test_page_to_dict_excludes_fetcher():
    data = make_page(has_next=True, fetch_next=lambda: None).to_dict()
    assert set(data) == {"playlist", "videos", "page", "has_next_page"}
    assert data["videos"][0]["title"] == "Track 1"
