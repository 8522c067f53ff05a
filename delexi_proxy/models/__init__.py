"""Upstream payload models and response DTOs."""

from .dto import PlaylistDTO, TrackEntryDTO
from .upstream import UpstreamPlaylist

__all__ = ["PlaylistDTO", "TrackEntryDTO", "UpstreamPlaylist"]
