"""
HLS Playlist Expander
Fetches a playlist and splits master playlists into their variants
"""
import aiohttp
import logging
import m3u8
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urljoin
from pstremio.utils.quality import Quality, classify_height

logger = logging.getLogger(__name__)


class PlaylistError(Exception):
    """Playlist could not be parsed"""


@dataclass
class PlaylistVariant:
    url: str
    quality: Optional[Quality] = None


class PlaylistExpander:
    """Resolves HLS playlist URLs into directly playable sub-streams"""

    def __init__(self):
        self.session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch_playlist(self, url: str, headers: Dict[str, str]) -> str:
        """Download playlist text. HTTP errors raise ClientResponseError."""
        session = await self.get_session()
        async with session.get(url, headers=headers, raise_for_status=True) as response:
            return await response.text()

    def parse_variants(self, url: str, content: str) -> List[PlaylistVariant]:
        """
        Parse playlist text into playable variants

        Args:
            url: Playlist URL, used as the base for relative variant URIs
            content: Playlist text

        Returns:
            One variant per master playlist entry, or the playlist itself
            when it is already a media playlist
        """
        if not content or not content.lstrip().startswith("#EXTM3U"):
            raise PlaylistError(f"Not an HLS playlist: {url}")

        try:
            playlist = m3u8.loads(content)
        except Exception as e:
            raise PlaylistError(f"Failed to parse playlist {url}: {e}") from e

        if not playlist.is_variant:
            return [PlaylistVariant(url=url)]

        variants = []
        for entry in playlist.playlists:
            resolution = entry.stream_info.resolution if entry.stream_info else None
            height = resolution[1] if resolution else None
            variants.append(
                PlaylistVariant(
                    url=urljoin(url, entry.uri),
                    quality=classify_height(height),
                )
            )

        logger.debug(f"Master playlist {url} expanded into {len(variants)} variants")
        return variants

    async def expand(self, url: str, headers: Dict[str, str]) -> List[PlaylistVariant]:
        """Fetch and expand a playlist. Fetch and parse failures propagate."""
        content = await self.fetch_playlist(url, headers)
        return self.parse_variants(url, content)
