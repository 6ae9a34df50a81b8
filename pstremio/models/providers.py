"""
Provider Engine Models
Pydantic models for scraper output consumed by the resolver
"""
from pydantic import BaseModel, Field
from typing import Annotated, Dict, List, Literal, Optional, Union

# Known flag values; the engine may send others.
FLAG_CORS_ALLOWED = "cors-allowed"
FLAG_IP_LOCKED = "ip-locked"


class Caption(BaseModel):
    id: str
    url: str
    language: str
    type: Optional[str] = None


class StreamFile(BaseModel):
    type: Optional[str] = None
    url: str


class _StreamCommon(BaseModel):
    id: str
    flags: List[str] = Field(default_factory=list)
    captions: List[Caption] = Field(default_factory=list)
    headers: Optional[Dict[str, str]] = None
    preferredHeaders: Optional[Dict[str, str]] = None


class FileBasedStream(_StreamCommon):
    """Direct files keyed by quality label"""
    type: Literal["file"] = "file"
    qualities: Dict[str, StreamFile]


class HlsBasedStream(_StreamCommon):
    """A single HLS playlist, possibly a master playlist"""
    type: Literal["hls"] = "hls"
    playlist: str


ProviderStream = Annotated[
    Union[FileBasedStream, HlsBasedStream],
    Field(discriminator="type"),
]


class EmbedReference(BaseModel):
    embedId: str
    url: str


class ScraperMeta(BaseModel):
    """Display metadata for a source or embed scraper"""
    id: str
    name: str
    type: Optional[Literal["source", "embed"]] = None
    rank: Optional[int] = None
    mediaTypes: Optional[List[str]] = None


class SourceStreams(BaseModel):
    """Scrape result carrying playable streams directly"""
    stream: List[ProviderStream]


class SourceEmbeds(BaseModel):
    """Scrape result carrying embeds that must be scraped in turn"""
    embeds: List[EmbedReference]


SourceOutput = Union[SourceStreams, SourceEmbeds]
