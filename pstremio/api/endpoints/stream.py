"""
Stream Endpoint
Resolves playable streams for a movie or episode from one source
"""
import logging
from fastapi import APIRouter, HTTPException, Path
from pstremio.api.endpoints.manifest import source_not_found
from pstremio.models.stremio import StreamResponse, StremioType
from pstremio.services.providers import get_provider_engine
from pstremio.services.resolver import StreamResolver
from pstremio.services.tmdb import InvalidMediaId, MediaNotFoundError, TMDBClient

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{source}/stream/{type}/{id}.json")
async def get_streams(
    source: str = Path(..., description="Source scraper id"),
    type: StremioType = Path(..., description="Content type: movie or series"),
    id: str = Path(..., description="Stremio id, e.g. tt0137523 or tt0903747:1:1"),
):
    """
    Return streams for a title
    
    Args:
        source: Source scraper id
        type: "movie" or "series"
        id: IMDB or "tmdb:" prefixed id, with ":season:episode" for series
    """
    engine = get_provider_engine()
    if await engine.get_metadata(source) is None:
        return source_not_found()
    
    tmdb = TMDBClient()
    try:
        media = await tmdb.get_media_info(type, id)
    except InvalidMediaId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MediaNotFoundError as e:
        logger.info(f"Media lookup failed for {type} {id}: {e}")
        raise HTTPException(status_code=404, detail="Media not found")
    finally:
        await tmdb.close()
    
    resolver = StreamResolver(engine)
    try:
        streams = await resolver.resolve(source, media)
    except Exception as e:
        logger.error(f"Error resolving streams from {source} for {id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to resolve streams")
    finally:
        await resolver.close()
    
    logger.info(f"Source {source} returned {len(streams)} streams for {type} {id}")
    
    return StreamResponse(streams=streams).model_dump()
