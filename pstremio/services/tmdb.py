"""
TMDB API Client
Async client for The Movie Database API, resolving Stremio ids into media
"""
import aiohttp
import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Any
from pstremio.core.config import settings
from pstremio.models.media import EpisodeInfo, MovieMedia, SeasonInfo, ShowMedia

logger = logging.getLogger(__name__)


class MetadataError(Exception):
    """Media metadata could not be resolved"""


class InvalidMediaId(MetadataError):
    """Stremio id is malformed"""


class MediaNotFoundError(MetadataError):
    """TMDB has no entry for the id"""


@dataclass
class ParsedId:
    source: str  # "tmdb" or "imdb"
    id: str
    season: Optional[int] = None
    episode: Optional[int] = None


def parse_movie_id(stremio_id: str) -> ParsedId:
    """Parse "tt123" or "tmdb:123" """
    parts = stremio_id.split(":")
    if len(parts) == 2 and parts[0] == "tmdb" and parts[1]:
        return ParsedId(source="tmdb", id=parts[1])
    if len(parts) == 1 and parts[0]:
        return ParsedId(source="imdb", id=parts[0])
    raise InvalidMediaId(f"Invalid movie id: {stremio_id}")


def parse_show_id(stremio_id: str) -> ParsedId:
    """Parse "tt123:1:2" or "tmdb:123:1:2" """
    parts = stremio_id.split(":")
    try:
        if len(parts) == 4 and parts[0] == "tmdb":
            return ParsedId(source="tmdb", id=parts[1], season=int(parts[2]), episode=int(parts[3]))
        if len(parts) == 3 and parts[0] and parts[0] != "tmdb":
            return ParsedId(source="imdb", id=parts[0], season=int(parts[1]), episode=int(parts[2]))
    except ValueError:
        pass
    raise InvalidMediaId(f"Invalid series id: {stremio_id}")


def _year(date: Optional[str]) -> int:
    try:
        return int((date or "").split("-", 1)[0])
    except ValueError:
        return 0


class TMDBClient:
    """Async client for TMDB API"""

    BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: Optional[str] = None, access_token: Optional[str] = None):
        self.api_key = api_key or settings.TMDB_API_KEY
        self.access_token = access_token or settings.TMDB_ACCESS_TOKEN
        self.session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            headers = {}
            if self.access_token:
                headers["Authorization"] = f"Bearer {self.access_token}"
            self.session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=10)
            )
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    async def _request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Make API request to TMDB with light retry on server errors.
        Returns None when the entry does not exist or TMDB keeps failing.
        """
        if not self.api_key and not self.access_token:
            logger.error("TMDB credentials not configured")
            return None

        backoff = 0.1
        attempts = 2

        request_params: Dict[str, Any] = {"language": "en-US"}
        if self.api_key:
            request_params["api_key"] = self.api_key
        if params:
            request_params.update(params)

        for attempt in range(attempts):
            try:
                session = await self.get_session()
                url = f"{self.BASE_URL}{endpoint}"

                async with session.get(url, params=request_params) as response:
                    if response.status == 200:
                        return await response.json()
                    elif response.status == 404:
                        logger.debug("TMDB 404 for %s", endpoint)
                        return None
                    elif 500 <= response.status < 600 and attempt + 1 < attempts:
                        await asyncio.sleep(backoff * (attempt + 1))
                        continue
                    else:
                        logger.error("TMDB API error: %s for %s", response.status, endpoint)
                        return None

            except asyncio.TimeoutError:
                if attempt + 1 < attempts:
                    await asyncio.sleep(backoff * (attempt + 1))
                    continue
                logger.error(f"TMDB request timeout: {endpoint}")
                return None
            except aiohttp.ClientError as e:
                if attempt + 1 < attempts:
                    await asyncio.sleep(backoff * (attempt + 1))
                    continue
                logger.error(f"TMDB request error: {e}")
                return None
        return None

    async def _require(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self._request(endpoint, params)
        if not response:
            raise MediaNotFoundError(f"No TMDB data for {endpoint}")
        return response

    async def find_by_imdb_id(self, imdb_id: str, result_key: str) -> Dict[str, Any]:
        """
        Find TMDB entry by IMDB ID

        Args:
            imdb_id: IMDB ID (e.g., "tt1234567")
            result_key: "movie_results" or "tv_results"
        """
        response = await self._require(f"/find/{imdb_id}", {"external_source": "imdb_id"})
        results = response.get(result_key) or []
        if not results:
            raise MediaNotFoundError(f"IMDB id {imdb_id} not found on TMDB")
        return results[0]

    async def get_movie_info(self, stremio_id: str) -> MovieMedia:
        """Resolve a Stremio movie id into a MovieMedia"""
        parsed = parse_movie_id(stremio_id)
        if parsed.source == "tmdb":
            details = await self._require(f"/movie/{parsed.id}")
        else:
            details = await self.find_by_imdb_id(parsed.id, "movie_results")

        return MovieMedia(
            title=details.get("original_title") or details.get("title", ""),
            releaseYear=_year(details.get("release_date")),
            imdbId=parsed.id if parsed.source == "imdb" else None,
            tmdbId=str(details["id"]),
        )

    async def get_show_info(self, stremio_id: str) -> ShowMedia:
        """Resolve a Stremio series id into a ShowMedia for one episode"""
        parsed = parse_show_id(stremio_id)
        if parsed.source == "tmdb":
            details = await self._require(f"/tv/{parsed.id}")
        else:
            details = await self.find_by_imdb_id(parsed.id, "tv_results")

        tmdb_id = details["id"]
        season = await self._require(f"/tv/{tmdb_id}/season/{parsed.season}")
        episodes = season.get("episodes") or []
        if not 1 <= parsed.episode <= len(episodes):
            raise MediaNotFoundError(
                f"Episode {parsed.episode} not in season {parsed.season} of {tmdb_id}"
            )

        return ShowMedia(
            title=details.get("original_name") or details.get("name", ""),
            releaseYear=_year(details.get("first_air_date")),
            imdbId=parsed.id if parsed.source == "imdb" else None,
            tmdbId=str(tmdb_id),
            season=SeasonInfo(
                number=parsed.season,
                title=season.get("name"),
                tmdbId=str(season["id"]),
                episodeCount=len(episodes),
            ),
            episode=EpisodeInfo(
                number=parsed.episode,
                tmdbId=str(episodes[parsed.episode - 1]["id"]),
            ),
        )

    async def get_media_info(self, media_type: str, stremio_id: str):
        """Resolve a Stremio (type, id) pair"""
        if media_type == "movie":
            return await self.get_movie_info(stremio_id)
        return await self.get_show_info(stremio_id)
