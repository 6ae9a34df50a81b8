"""
Media Models
Resolved media descriptors passed to the provider engine
"""
from pydantic import BaseModel
from typing import Literal, Optional, Union


class SeasonInfo(BaseModel):
    number: int
    title: Optional[str] = None
    tmdbId: str
    episodeCount: int


class EpisodeInfo(BaseModel):
    number: int
    tmdbId: str


class MovieMedia(BaseModel):
    """A movie, identified for scraping"""
    type: Literal["movie"] = "movie"
    title: str
    releaseYear: int
    imdbId: Optional[str] = None
    tmdbId: str


class ShowMedia(BaseModel):
    """A single episode of a show, identified for scraping"""
    type: Literal["show"] = "show"
    title: str
    releaseYear: int
    imdbId: Optional[str] = None
    tmdbId: str
    season: SeasonInfo
    episode: EpisodeInfo


Media = Union[MovieMedia, ShowMedia]
