"""Catalog domain services (playlist fetch and projection)."""

from .markets import resolve_market
from .outcomes import AuthFailure, FetchOutcome, FetchSuccess, InternalFailure, ResourceFailure
from .playlist_service import PlaylistService
from .projection import project_playlist

__all__ = [
    "PlaylistService",
    "project_playlist",
    "resolve_market",
    "FetchOutcome",
    "FetchSuccess",
    "AuthFailure",
    "ResourceFailure",
    "InternalFailure",
]
