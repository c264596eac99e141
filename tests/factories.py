"""yt-dlp info dicts and record builders shared by the tests."""

from yt_dlp.utils import DownloadError

from ytsearch_cli.models import (
    Author,
    ChannelInfo,
    ChannelResult,
    PlaylistInfo,
    PlaylistPage,
    PlaylistResult,
    PlaylistVideo,
    Thumbnail,
    VideoDetails,
    VideoResult,
)


def video_entry(vid="dQw4w9WgXcQ", title="Never Gonna Give You Up", **extra):
    entry = {
        "_type": "url",
        "ie_key": "Youtube",
        "id": vid,
        "url": f"https://www.youtube.com/watch?v={vid}",
        "title": title,
        "duration": 213,
        "view_count": 1_234_567,
        "channel": "Rick Astley",
        "channel_url": "https://www.youtube.com/channel/UCuAXFkgsw1L7xaCfnd5JJOw",
        "channel_is_verified": True,
        "timestamp": 1256428800,  # 2009-10-25
        "thumbnails": [
            {"url": "https://i.ytimg.com/vi/x/default.jpg", "width": 120, "height": 90},
            {"url": "https://i.ytimg.com/vi/x/hq720.jpg", "width": 720, "height": 404},
        ],
    }
    entry.update(extra)
    return entry


def channel_entry(cid="UCuAXFkgsw1L7xaCfnd5JJOw", title="Rick Astley", **extra):
    entry = {
        "_type": "url",
        "ie_key": "YoutubeTab",
        "id": cid,
        "channel_id": cid,
        "url": f"https://www.youtube.com/channel/{cid}",
        "channel_url": f"https://www.youtube.com/channel/{cid}",
        "title": title,
        "channel": title,
        "channel_follower_count": 4_200_000,
        "description": "Official channel",
        "channel_is_verified": True,
        "thumbnails": [{"url": "//yt3.ggpht.com/avatar", "width": 88, "height": 88}],
    }
    entry.update(extra)
    return entry


def playlist_entry(pid="PLFgquLnL59alCl_2TQvOiD5Vgm1hCaGSI", title="Top Hits", **extra):
    entry = {
        "_type": "url",
        "ie_key": "YoutubeTab",
        "id": pid,
        "url": f"https://www.youtube.com/playlist?list={pid}",
        "title": title,
        "playlist_count": 42,
        "channel": "Music Lists",
        "thumbnails": [{"url": "https://i.ytimg.com/pl.jpg", "width": 480, "height": 270}],
    }
    entry.update(extra)
    return entry


def video_info(vid="dQw4w9WgXcQ", **extra):
    info = {
        "id": vid,
        "title": "Never Gonna Give You Up",
        "description": "The official video",
        "duration": 213,
        "duration_string": "3:33",
        "view_count": 1_500_000_000,
        "like_count": 17_000_000,
        "upload_date": "20091025",
        "categories": ["Music"],
        "availability": "public",
        "live_status": "not_live",
        "webpage_url": f"https://www.youtube.com/watch?v={vid}",
        "channel": "Rick Astley",
        "channel_url": "https://www.youtube.com/channel/UCuAXFkgsw1L7xaCfnd5JJOw",
        "channel_follower_count": 4_200_000,
        "channel_is_verified": True,
        "tags": ["rick", "astley"],
        "thumbnail": "https://i.ytimg.com/vi/x/maxresdefault.jpg",
    }
    info.update(extra)
    return info


def playlist_info(pid="PLFgquLnL59alCl_2TQvOiD5Vgm1hCaGSI", start=1, end=2, total=3):
    return {
        "id": pid,
        "title": "Top Hits",
        "description": "The best songs",
        "channel": "Music Lists",
        "channel_url": "https://www.youtube.com/@musiclists",
        "playlist_count": total,
        "view_count": 98_765,
        "entries": [
            {
                "id": f"vid{i:08d}",
                "title": f"Song {i}",
                "duration": 60 * i + 5,
                "view_count": 1000 * i,
                "playlist_index": i,
            }
            for i in range(start, min(end, total) + 1)
        ],
    }


class FakeYoutubeDL:
    """Stands in for yt_dlp.YoutubeDL; answers extract_info from registered routes."""

    def __init__(self, registry, opts):
        self._registry = registry
        self.opts = opts

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def extract_info(self, url, download=False):
        self._registry.calls.append((url, self.opts))
        for fragment, response in self._registry.routes:
            if fragment in url:
                if isinstance(response, BaseException):
                    raise response
                if callable(response):
                    return response(self.opts)
                return response
        raise DownloadError(f"ERROR: no route for {url}")


class FakeRegistry:
    def __init__(self):
        self.routes = []
        self.calls = []

    def add(self, fragment, response):
        self.routes.append((fragment, response))
        return self

    def __call__(self, opts):
        return FakeYoutubeDL(self, opts)


def make_video(title="Lofi Beats", vid="abcdefghijk", verified=False):
    thumb = Thumbnail(url="https://i.ytimg.com/t.jpg", width=320, height=180)
    return VideoResult(
        id=vid,
        title=title,
        image=thumb.url,
        thumbnail=thumb,
        view_count=1234,
        short_view_count="1.2K views",
        duration="4:05",
        seconds=245,
        author=Author(name="Chill Cow", url="https://yt/c", verified=verified),
        watch_url=f"https://www.youtube.com/watch?v={vid}",
        published_at="2024-01-02",
    )


def make_channel(title="Chill Cow", verified=True, is_artist=False, description="Beats"):
    thumb = Thumbnail(url="https://yt3/a.jpg", width=88, height=88)
    return ChannelResult(
        id="UC123",
        title=title,
        image=thumb.url,
        thumbnail=thumb,
        description=description,
        subscriber_count="12M",
        url="https://www.youtube.com/channel/UC123",
        verified=verified,
        is_artist=is_artist,
    )


def make_playlist(title="Study Mix", author="Chill Cow"):
    thumb = Thumbnail(url="https://i.ytimg.com/p.jpg", width=480, height=270)
    return PlaylistResult(
        id="PL123456789",
        title=title,
        image=thumb.url,
        thumbnail=thumb,
        video_count=25,
        author=Author(name=author) if author else None,
        url="https://www.youtube.com/playlist?list=PL123456789",
    )


def make_details(**overrides):
    values = dict(
        id="dQw4w9WgXcQ",
        title="Never Gonna Give You Up",
        description="The official video",
        duration="3:33",
        seconds=213,
        views=1_500_000_000,
        views_short="1.5B",
        likes=17_000_000,
        likes_short="17M",
        upload_date="2009-10-25",
        category="Music",
        allow_ratings=True,
        is_live=False,
        is_private=False,
        is_unlisted=False,
        watch_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        thumbnail=Thumbnail(url="https://i.ytimg.com/max.jpg", width=1280, height=720),
        channel=ChannelInfo(name="Rick Astley", url="https://yt/rick", verified=True, subscribers="4.2M"),
    )
    values.update(overrides)
    return VideoDetails(**values)


def make_page(page=1, count=2, has_next=False, fetch_next=None, title="Study Mix"):
    start = (page - 1) * count + 1
    videos = [
        PlaylistVideo(
            index=i,
            id=f"vid{i:08d}",
            title=f"Track {i}",
            duration="3:00",
            views="1K" if i % 2 else None,
            watch_url=f"https://www.youtube.com/watch?v=vid{i:08d}",
        )
        for i in range(start, start + count)
    ]
    info = PlaylistInfo(
        id="PL123456789",
        title=title,
        description="Songs to study to",
        author=Author(name="Chill Cow", verified=True),
        video_count=count * 2,
        views_count="9.9K",
        expected_pages=2,
        url="https://www.youtube.com/playlist?list=PL123456789",
    )
    return PlaylistPage(
        playlist=info, videos=videos, page=page, has_next_page=has_next, _fetch_next=fetch_next
    )
