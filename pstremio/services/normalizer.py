"""
Stream Normalizer
Converts provider streams into Stremio stream descriptors
"""
import logging
from typing import Dict, List, Optional
from pstremio.core.config import settings
from pstremio.models.providers import (
    FLAG_CORS_ALLOWED,
    FLAG_IP_LOCKED,
    FileBasedStream,
    ProviderStream,
    ScraperMeta,
)
from pstremio.models.stremio import StreamBehaviorHints, StreamDescriptor, Subtitle
from pstremio.services.playlist import PlaylistExpander
from pstremio.utils.helpers import merge_headers

logger = logging.getLogger(__name__)


class StreamNormalizer:
    """Builds player-ready descriptors from scraper output"""

    def __init__(
        self,
        expander: PlaylistExpander,
        header_overrides: Optional[Dict[str, str]] = None,
    ):
        self.expander = expander
        self.header_overrides = (
            settings.HEADER_OVERRIDES if header_overrides is None else header_overrides
        )

    def stream_headers(self, stream: ProviderStream) -> Dict[str, str]:
        """Headers a client must send: overrides < stream headers < preferred headers"""
        return merge_headers(self.header_overrides, stream.headers, stream.preferredHeaders)

    def build_descriptor(
        self,
        stream: ProviderStream,
        url: str,
        quality: Optional[str] = None,
        embed: Optional[ScraperMeta] = None,
    ) -> StreamDescriptor:
        """
        Build the descriptor fields shared by file and playlist streams

        Args:
            stream: Provider stream the URL belongs to
            url: Playable URL
            quality: Quality label, if known
            embed: Metadata of the embed the stream came from
        """
        description = stream.id
        if embed:
            description = f"{embed.name} - {description}"
        if quality:
            description = f"{description} ({quality})"

        binge_group = "-".join([
            settings.BINGE_GROUP_PREFIX,
            embed.id if embed else "",
            stream.id,
            quality or "",
        ])

        not_web_ready = FLAG_CORS_ALLOWED not in stream.flags or bool(stream.headers)

        return StreamDescriptor(
            description=description,
            url=url,
            subtitles=[
                Subtitle(id=caption.id, url=caption.url, lang=caption.language)
                for caption in stream.captions
            ],
            behaviorHints=StreamBehaviorHints(
                notWebReady=not_web_ready,
                bingeGroup=binge_group,
                proxyHeaders=self.stream_headers(stream),
            ),
        )

    async def convert_stream(
        self,
        stream: ProviderStream,
        embed: Optional[ScraperMeta] = None,
    ) -> List[StreamDescriptor]:
        """Convert one provider stream. IP-locked streams yield nothing."""
        if FLAG_IP_LOCKED in stream.flags:
            logger.debug(f"Dropping ip-locked stream {stream.id}")
            return []

        if isinstance(stream, FileBasedStream):
            return [
                self.build_descriptor(stream, file.url, quality, embed)
                for quality, file in stream.qualities.items()
            ]

        variants = await self.expander.expand(stream.playlist, self.stream_headers(stream))
        return [
            self.build_descriptor(stream, variant.url, variant.quality, embed)
            for variant in variants
        ]

    async def convert_streams(
        self,
        streams: List[ProviderStream],
        embed: Optional[ScraperMeta] = None,
    ) -> List[StreamDescriptor]:
        """Convert streams in order and flatten the results"""
        descriptors: List[StreamDescriptor] = []
        for stream in streams:
            descriptors.extend(await self.convert_stream(stream, embed))
        return descriptors
