"""
Tests for stream normalization
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from pstremio.models.providers import FileBasedStream, HlsBasedStream, ScraperMeta
from pstremio.services.normalizer import StreamNormalizer
from pstremio.services.playlist import PlaylistExpander, PlaylistVariant

OVERRIDES = {"Origin": "https://pstream.mov", "Referer": "https://pstream.mov/"}


@pytest.fixture
def expander():
    expander = MagicMock(spec=PlaylistExpander)
    expander.expand = AsyncMock()
    return expander


@pytest.fixture
def normalizer(expander):
    return StreamNormalizer(expander, header_overrides=OVERRIDES)


@pytest.fixture
def embed_meta():
    return ScraperMeta(id="upcloud", name="UpCloud", type="embed")


class TestFileStreams:
    """Test file-based stream conversion"""
    
    @pytest.mark.asyncio
    async def test_one_descriptor_per_quality(self, normalizer, file_stream):
        """Each quality becomes its own descriptor sharing subtitles and headers"""
        descriptors = await normalizer.convert_stream(file_stream)
        
        assert len(descriptors) == 2
        assert [d.url for d in descriptors] == [
            "https://cdn.example/720.mp4",
            "https://cdn.example/1080.mp4",
        ]
        assert descriptors[0].description == "primary (720)"
        assert descriptors[1].description == "primary (1080)"
        for d in descriptors:
            assert [s.model_dump() for s in d.subtitles] == [
                {"id": "en-1", "url": "https://subs.example/en.vtt", "lang": "en"}
            ]
            assert d.behaviorHints.proxyHeaders == OVERRIDES
            assert d.behaviorHints.notWebReady is False
    
    @pytest.mark.asyncio
    async def test_embed_prefix_and_binge_group(self, normalizer, file_stream, embed_meta):
        """Embed name prefixes the description and joins the binge group"""
        descriptors = await normalizer.convert_stream(file_stream, embed_meta)
        
        assert descriptors[0].description == "UpCloud - primary (720)"
        assert descriptors[0].behaviorHints.bingeGroup == "pstremio-upcloud-primary-720"
        assert descriptors[1].behaviorHints.bingeGroup == "pstremio-upcloud-primary-1080"
    
    @pytest.mark.asyncio
    async def test_binge_group_without_embed(self, normalizer, file_stream):
        descriptors = await normalizer.convert_stream(file_stream)
        
        assert descriptors[0].behaviorHints.bingeGroup == "pstremio--primary-720"
    
    @pytest.mark.asyncio
    async def test_unknown_quality_is_labelled(self, normalizer):
        """An explicit unknown quality is kept in the label and binge group"""
        stream = FileBasedStream(
            id="s",
            flags=["cors-allowed"],
            qualities={
                "unknown": {"type": "mp4", "url": "https://cdn.example/a.mp4"},
                "720": {"type": "mp4", "url": "https://cdn.example/b.mp4"},
            },
        )
        
        descriptors = await normalizer.convert_stream(stream)
        
        assert [(d.description, d.behaviorHints.bingeGroup) for d in descriptors] == [
            ("s (unknown)", "pstremio--s-unknown"),
            ("s (720)", "pstremio--s-720"),
        ]


class TestFiltering:
    """Test flag-based filtering and hints"""
    
    @pytest.mark.asyncio
    async def test_ip_locked_streams_dropped(self, normalizer, expander, file_stream, hls_stream):
        """ip-locked streams yield nothing, whatever else they carry"""
        file_stream.flags.append("ip-locked")
        hls_stream.flags.append("ip-locked")
        
        assert await normalizer.convert_stream(file_stream) == []
        assert await normalizer.convert_stream(hls_stream) == []
        expander.expand.assert_not_called()
    
    @pytest.mark.asyncio
    async def test_not_web_ready_without_cors(self, normalizer, file_stream):
        file_stream.flags = []
        
        descriptors = await normalizer.convert_stream(file_stream)
        
        assert all(d.behaviorHints.notWebReady is True for d in descriptors)
    
    @pytest.mark.asyncio
    async def test_not_web_ready_with_headers(self, normalizer, file_stream):
        """Custom headers force notWebReady even when CORS is allowed"""
        file_stream.headers = {"Referer": "https://host.example/"}
        
        descriptors = await normalizer.convert_stream(file_stream)
        
        assert all(d.behaviorHints.notWebReady is True for d in descriptors)
    
    @pytest.mark.asyncio
    async def test_empty_headers_stay_web_ready(self, normalizer, file_stream):
        file_stream.headers = {}
        
        descriptors = await normalizer.convert_stream(file_stream)
        
        assert descriptors[0].behaviorHints.notWebReady is False


class TestHeaders:
    """Test header precedence"""
    
    @pytest.mark.asyncio
    async def test_preferred_headers_win(self, expander):
        normalizer = StreamNormalizer(expander, header_overrides={"Origin": "X"})
        stream = FileBasedStream(
            id="s",
            flags=["cors-allowed"],
            preferredHeaders={"Origin": "Y"},
            qualities={"720": {"url": "https://cdn.example/a.mp4"}},
        )
        
        descriptors = await normalizer.convert_stream(stream)
        
        assert descriptors[0].behaviorHints.proxyHeaders == {"Origin": "Y"}


class TestPlaylistStreams:
    """Test playlist-based stream conversion"""
    
    @pytest.mark.asyncio
    async def test_playlist_variants(self, normalizer, expander, hls_stream, embed_meta):
        """Playlists fan out into their variants, fetched with merged headers"""
        expander.expand.return_value = [
            PlaylistVariant(url="https://cdn.example/hls/480/index.m3u8", quality="480"),
            PlaylistVariant(url="https://cdn.example/hls/720/index.m3u8", quality="720"),
        ]
        
        descriptors = await normalizer.convert_stream(hls_stream, embed_meta)
        
        expected_headers = {
            "Origin": "https://host.example",
            "Referer": "https://host.example/",
        }
        expander.expand.assert_called_once_with(hls_stream.playlist, expected_headers)
        assert [d.description for d in descriptors] == [
            "UpCloud - hls (480)",
            "UpCloud - hls (720)",
        ]
        assert descriptors[0].behaviorHints.proxyHeaders == expected_headers
        assert descriptors[0].behaviorHints.notWebReady is True
    
    @pytest.mark.asyncio
    async def test_single_variant_playlist(self, normalizer, expander, hls_stream):
        expander.expand.return_value = [PlaylistVariant(url=hls_stream.playlist)]
        
        descriptors = await normalizer.convert_stream(hls_stream)
        
        assert len(descriptors) == 1
        assert descriptors[0].url == hls_stream.playlist
        assert descriptors[0].description == "hls"
        assert descriptors[0].behaviorHints.bingeGroup == "pstremio--hls-"
    
    @pytest.mark.asyncio
    async def test_playlist_failure_propagates(self, normalizer, expander, hls_stream):
        expander.expand.side_effect = RuntimeError("boom")
        
        with pytest.raises(RuntimeError):
            await normalizer.convert_stream(hls_stream)


@pytest.mark.asyncio
async def test_convert_streams_flattens_in_order(normalizer, expander, file_stream, hls_stream):
    """Streams keep scraper order, each stream keeps its own fan-out order"""
    expander.expand.return_value = [PlaylistVariant(url=hls_stream.playlist)]
    
    descriptors = await normalizer.convert_streams([hls_stream, file_stream])
    
    assert [d.url for d in descriptors] == [
        hls_stream.playlist,
        "https://cdn.example/720.mp4",
        "https://cdn.example/1080.mp4",
    ]


@pytest.mark.asyncio
async def test_unknown_variant_differs_from_undeclared(normalizer, expander, hls_stream):
    """A variant with an off-ladder height is not labelled like one with no height"""
    expander.expand.return_value = [
        PlaylistVariant(url="https://cdn.example/hls/1440/index.m3u8", quality="unknown"),
        PlaylistVariant(url="https://cdn.example/hls/audio/index.m3u8", quality=None),
    ]
    
    descriptors = await normalizer.convert_stream(hls_stream)
    
    assert [d.description for d in descriptors] == ["hls (unknown)", "hls"]
    assert [d.behaviorHints.bingeGroup for d in descriptors] == [
        "pstremio--hls-unknown",
        "pstremio--hls-",
    ]
