"""Data models for video and image results."""

from typing import Optional

from .base import CamelModel


class VideoResult(CamelModel):
    title: str
    url: str
    thumbnail: str = ""
    duration: str = "N/A"
    source: str  # platform name: YouTube, Dailymotion, Archive.org, PeerTube
    published_at: str = "Unknown"
    views: Optional[str] = None
    description: Optional[str] = None


class ImageResult(CamelModel):
    id: str
    url: str
    thumbnail: str
    title: str
    source: str  # page the image is described on
    domain: str
    width: int
    height: int
    author: Optional[str] = None
    license: Optional[str] = None
