"""
Stremio Protocol Models
Pydantic models for Stremio addon protocol
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Literal


class Manifest(BaseModel):
    """Stremio addon manifest"""
    id: str
    version: str
    name: str
    description: str
    
    resources: List[str] = Field(default_factory=list)
    types: List[str] = Field(default_factory=list)
    idPrefixes: List[str] = Field(default_factory=list)
    catalogs: List[dict] = Field(default_factory=list)
    
    behaviorHints: dict = Field(default_factory=dict)


class Subtitle(BaseModel):
    """Subtitle track attached to a stream"""
    id: str
    url: str
    lang: str


class StreamBehaviorHints(BaseModel):
    notWebReady: bool
    bingeGroup: str
    proxyHeaders: Dict[str, str] = Field(default_factory=dict)


class StreamDescriptor(BaseModel):
    """A single playable stream as returned to Stremio"""
    description: str
    url: str
    subtitles: List[Subtitle] = Field(default_factory=list)
    behaviorHints: StreamBehaviorHints


class StreamResponse(BaseModel):
    """Stream endpoint response"""
    streams: List[StreamDescriptor]


StremioType = Literal["movie", "series"]
