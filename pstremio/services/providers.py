"""
Provider Engine Client
Async client for the scraping engine that turns media into streams
"""
import aiohttp
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from pydantic import TypeAdapter
from pstremio.core.config import settings
from pstremio.models.media import Media
from pstremio.models.providers import (
    ScraperMeta,
    SourceEmbeds,
    SourceOutput,
    SourceStreams,
)

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Scraper run failed"""


class NotFoundError(ProviderError):
    """Scraper has nothing for the requested media"""


class ProviderEngine(ABC):
    """Capability to resolve media into streams or embeds"""

    @abstractmethod
    async def list_scrapers(self) -> List[ScraperMeta]:
        ...

    @abstractmethod
    async def run_source_scraper(self, source_id: str, media: Media) -> SourceOutput:
        ...

    @abstractmethod
    async def run_embed_scraper(self, embed_id: str, url: str) -> SourceStreams:
        ...

    async def list_sources(self) -> List[ScraperMeta]:
        """Source scrapers, highest rank first"""
        sources = [s for s in await self.list_scrapers() if s.type in (None, "source")]
        return sorted(sources, key=lambda s: s.rank or 0, reverse=True)

    async def get_metadata(self, scraper_id: str) -> Optional[ScraperMeta]:
        for scraper in await self.list_scrapers():
            if scraper.id == scraper_id:
                return scraper
        return None


class HttpProviderEngine(ProviderEngine):
    """Provider engine reached over HTTP"""

    _metadata_adapter = TypeAdapter(List[ScraperMeta])

    def __init__(
        self,
        base_url: Optional[str] = None,
        header_overrides: Optional[Dict[str, str]] = None,
    ):
        self.base_url = (base_url or settings.PROVIDERS_API_URL).rstrip("/")
        self.header_overrides = (
            settings.HEADER_OVERRIDES if header_overrides is None else header_overrides
        )
        self.session: Optional[aiohttp.ClientSession] = None
        self._scrapers: Optional[List[ScraperMeta]] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a scrape request

        Raises:
            NotFoundError: the scraper found nothing (HTTP 404)
            ProviderError: any other non-2xx response
        """
        session = await self.get_session()
        url = f"{self.base_url}{endpoint}"
        async with session.post(url, json=payload) as response:
            if response.status == 404:
                raise NotFoundError(f"{payload.get('id')}: not found")
            if response.status != 200:
                body = await response.text()
                raise ProviderError(
                    f"{payload.get('id')}: provider engine returned {response.status}: {body[:200]}"
                )
            return await response.json()

    async def list_scrapers(self) -> List[ScraperMeta]:
        """Scraper registry, fetched once per engine"""
        if self._scrapers is None:
            session = await self.get_session()
            async with session.get(f"{self.base_url}/metadata", raise_for_status=True) as response:
                data = await response.json()
            self._scrapers = self._metadata_adapter.validate_python(data)
            logger.info(f"Loaded {len(self._scrapers)} scrapers from provider engine")
        return self._scrapers

    async def run_source_scraper(self, source_id: str, media: Media) -> SourceOutput:
        data = await self._post(
            "/scrape/source",
            {
                "id": source_id,
                "media": media.model_dump(exclude_none=True),
                "headers": self.header_overrides,
            },
        )
        if data.get("stream") is not None:
            return SourceStreams.model_validate(data)
        return SourceEmbeds.model_validate({"embeds": data.get("embeds") or []})

    async def run_embed_scraper(self, embed_id: str, url: str) -> SourceStreams:
        data = await self._post(
            "/scrape/embed",
            {"id": embed_id, "url": url, "headers": self.header_overrides},
        )
        return SourceStreams.model_validate({"stream": data.get("stream") or []})


_engine: Optional[HttpProviderEngine] = None


def get_provider_engine() -> HttpProviderEngine:
    """Get the process-wide provider engine client"""
    global _engine
    if _engine is None:
        _engine = HttpProviderEngine()
    return _engine
