#!/usr/bin/env python
"""
Pydantic DTOs for the slim playlist document returned to the browser.

Absent upstream values are kept as None and serialized as JSON null, so
every key is always present in the response.
"""

from __future__ import annotations

from typing import List, Optional, Union
from pydantic import BaseModel, Field


class TrackEntryDTO(BaseModel):
    """One playlist entry, numbered from 1 in upstream order."""

    index: int = Field(ge=1)
    name: Optional[str] = None
    artist: Optional[str] = None
    duration_ms: Optional[Union[int, float]] = None
    preview_url: Optional[str] = None
    external_url: Optional[str] = None
    id: Optional[str] = None


class PlaylistDTO(BaseModel):
    """Projected playlist: scalar fields plus the ordered track entries."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    owner: Optional[str] = None
    image: Optional[str] = None
    tracks: List[TrackEntryDTO] = Field(default_factory=list)


__all__ = ["TrackEntryDTO", "PlaylistDTO"]
