"""
Test configuration and fixtures
"""
import pytest
from typing import Dict, List, Optional
from pstremio.models.media import MovieMedia
from pstremio.models.providers import (
    FileBasedStream,
    HlsBasedStream,
    ScraperMeta,
    SourceOutput,
    SourceStreams,
)
from pstremio.services.providers import NotFoundError, ProviderEngine


class FakeProviderEngine(ProviderEngine):
    """In-memory provider engine

    Source and embed results are keyed by scraper id; an exception value is
    raised instead of returned.
    """

    def __init__(
        self,
        scrapers: Optional[List[ScraperMeta]] = None,
        sources: Optional[Dict[str, object]] = None,
        embeds: Optional[Dict[str, object]] = None,
    ):
        self.scrapers = scrapers or []
        self.sources = sources or {}
        self.embeds = embeds or {}
        self.embed_calls: List[str] = []

    async def list_scrapers(self) -> List[ScraperMeta]:
        return self.scrapers

    async def run_source_scraper(self, source_id, media) -> SourceOutput:
        result = self.sources.get(source_id, NotFoundError(source_id))
        if isinstance(result, Exception):
            raise result
        return result

    async def run_embed_scraper(self, embed_id, url) -> SourceStreams:
        self.embed_calls.append(embed_id)
        result = self.embeds.get(embed_id, NotFoundError(embed_id))
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def sample_movie():
    """Resolved movie media"""
    return MovieMedia(
        title="Fight Club",
        releaseYear=1999,
        imdbId="tt0137523",
        tmdbId="550",
    )


@pytest.fixture
def file_stream():
    """File-based stream with two qualities and one caption"""
    return FileBasedStream(
        id="primary",
        flags=["cors-allowed"],
        captions=[
            {"id": "en-1", "url": "https://subs.example/en.vtt", "language": "en", "type": "vtt"},
        ],
        qualities={
            "720": {"type": "mp4", "url": "https://cdn.example/720.mp4"},
            "1080": {"type": "mp4", "url": "https://cdn.example/1080.mp4"},
        },
    )


@pytest.fixture
def hls_stream():
    """Playlist-based stream with headers"""
    return HlsBasedStream(
        id="hls",
        flags=[],
        playlist="https://cdn.example/hls/master.m3u8",
        headers={"Referer": "https://host.example/"},
        preferredHeaders={"Origin": "https://host.example"},
    )


@pytest.fixture
def master_playlist():
    """Master playlist with three renditions"""
    return "\n".join([
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        '#EXT-X-STREAM-INF:BANDWIDTH=800000,RESOLUTION=854x480,CODECS="avc1.4d401f,mp4a.40.2"',
        "480/index.m3u8",
        '#EXT-X-STREAM-INF:BANDWIDTH=2800000,RESOLUTION=1280x718,CODECS="avc1.4d401f,mp4a.40.2"',
        "720/index.m3u8",
        '#EXT-X-STREAM-INF:BANDWIDTH=5000000,RESOLUTION=1920x1080,CODECS="avc1.640028,mp4a.40.2"',
        "https://other.example/1080/index.m3u8",
        "",
    ])


@pytest.fixture
def media_playlist():
    """Single-rendition media playlist"""
    return "\n".join([
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        "#EXT-X-TARGETDURATION:10",
        "#EXT-X-MEDIA-SEQUENCE:0",
        "#EXTINF:10.0,",
        "segment0.ts",
        "#EXTINF:10.0,",
        "segment1.ts",
        "#EXT-X-ENDLIST",
        "",
    ])
