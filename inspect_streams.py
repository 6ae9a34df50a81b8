#!/usr/bin/env python3
"""
Inspect resolved streams for one source and title
Example usage: python inspect_streams.py showbox series tt0903747:1:1
"""
import asyncio
import json
import sys
from pstremio.services.providers import get_provider_engine
from pstremio.services.resolver import StreamResolver
from pstremio.services.tmdb import TMDBClient


async def inspect_streams(source: str, media_type: str, stremio_id: str):
    """Resolve and print streams the way the stream endpoint would"""
    
    engine = get_provider_engine()
    tmdb = TMDBClient()
    resolver = StreamResolver(engine)
    
    try:
        media = await tmdb.get_media_info(media_type, stremio_id)
        print("Media:")
        print(json.dumps(media.model_dump(exclude_none=True), indent=2))
        
        streams = await resolver.resolve(source, media)
        print(f"\nTotal streams: {len(streams)}")
        print("=" * 80)
        for i, stream in enumerate(streams, 1):
            hints = stream.behaviorHints
            print(f"{i}. {stream.description}")
            print(f"   url: {stream.url}")
            print(f"   subtitles: {len(stream.subtitles)}  notWebReady: {hints.notWebReady}")
            print(f"   bingeGroup: {hints.bingeGroup}")
            if hints.proxyHeaders:
                print(f"   proxyHeaders: {hints.proxyHeaders}")
    
    finally:
        await resolver.close()
        await tmdb.close()
        await engine.close()

if __name__ == "__main__":
    if len(sys.argv) != 4:
        print(__doc__.strip())
        sys.exit(1)
    asyncio.run(inspect_streams(*sys.argv[1:]))
