"""
Manifest Endpoint
Returns the index manifest and one Stremio addon manifest per source
"""
import logging
from fastapi import APIRouter, Path, Response
from fastapi.responses import JSONResponse
from pstremio.core.config import settings
from pstremio.models.stremio import Manifest
from pstremio.services.providers import get_provider_engine
from pstremio.utils.helpers import stremio_type

logger = logging.getLogger(__name__)
router = APIRouter()


def source_not_found() -> JSONResponse:
    return JSONResponse({"error": "Source not found."}, status_code=400)


@router.get("/manifest.json")
async def get_index_manifest():
    """Placeholder manifest pointing users at the source picker"""
    manifest = Manifest(
        id=settings.ADDON_ID,
        version=settings.ADDON_VERSION,
        name=settings.ADDON_NAME,
        description="Pick a source to install its stream addon",
        behaviorHints={
            "configurable": True,
            "configurationRequired": True,
        },
    )
    return manifest.model_dump()


@router.get("/{source}/manifest.json")
async def get_source_manifest(
    response: Response,
    source: str = Path(..., description="Source scraper id"),
):
    """
    Return addon manifest for a single source
    
    The manifest declares the stream resource for the media types the
    source can scrape
    """
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    
    engine = get_provider_engine()
    meta = await engine.get_metadata(source)
    if meta is None:
        return source_not_found()
    
    types = [stremio_type(t) for t in meta.mediaTypes] if meta.mediaTypes else ["movie", "series"]
    
    manifest = Manifest(
        id=f"{settings.ADDON_ID}.{meta.id}",
        version=settings.ADDON_VERSION,
        name=f"{settings.ADDON_NAME} | {meta.name}",
        description=f"Streams from {meta.name}",
        resources=["stream"],
        types=list(dict.fromkeys(types)),
        idPrefixes=["tt", "tmdb:"],
        behaviorHints={
            "configurable": True,
            "configurationRequired": False,
        },
    )
    
    logger.info(f"Manifest generated for source {meta.id}")
    
    return manifest.model_dump()
