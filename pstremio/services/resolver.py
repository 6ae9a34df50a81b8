"""
Stream Resolver
Runs a source scraper for one media item and collects normalized streams
"""
import asyncio
import logging
from typing import List, Optional
from pstremio.models.media import Media
from pstremio.models.providers import EmbedReference, ScraperMeta, SourceStreams
from pstremio.models.stremio import StreamDescriptor
from pstremio.services.normalizer import StreamNormalizer
from pstremio.services.playlist import PlaylistExpander
from pstremio.services.providers import NotFoundError, ProviderEngine

logger = logging.getLogger(__name__)


class StreamResolver:
    """Resolves a media item into Stremio streams for one source"""

    def __init__(
        self,
        engine: ProviderEngine,
        normalizer: Optional[StreamNormalizer] = None,
    ):
        self.engine = engine
        self.normalizer = normalizer or StreamNormalizer(PlaylistExpander())

    async def close(self):
        await self.normalizer.expander.close()

    async def resolve(self, source_id: str, media: Media) -> List[StreamDescriptor]:
        """
        Resolve streams for a media item from one source

        Args:
            source_id: Source scraper id
            media: Resolved media descriptor

        Returns:
            Flattened stream descriptors, empty when the source has nothing

        Raises:
            Any scraper or playlist failure other than NotFoundError on the
            direct path
        """
        try:
            output = await self.engine.run_source_scraper(source_id, media)
        except NotFoundError:
            logger.debug(f"Source {source_id} has nothing for {media.title}")
            return []

        if isinstance(output, SourceStreams):
            return await self.normalizer.convert_streams(output.stream)

        results = await asyncio.gather(
            *(self._resolve_embed(embed) for embed in output.embeds)
        )
        streams = [descriptor for result in results for descriptor in result]
        logger.info(
            f"Source {source_id} returned {len(streams)} streams from {len(output.embeds)} embeds"
        )
        return streams

    async def _resolve_embed(self, embed: EmbedReference) -> List[StreamDescriptor]:
        """Scrape and convert one embed. Never raises."""
        try:
            output = await self.engine.run_embed_scraper(embed.embedId, embed.url)
            meta = await self.engine.get_metadata(embed.embedId)
            if meta is None:
                meta = ScraperMeta(id=embed.embedId, name=embed.embedId, type="embed")
            return await self.normalizer.convert_streams(output.stream, meta)
        except NotFoundError:
            return []
        except Exception as e:
            logger.error(f"Embed {embed.embedId} failed for {embed.url}: {e}", exc_info=True)
            return []
