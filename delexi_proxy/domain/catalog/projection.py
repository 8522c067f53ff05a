"""Projection of the full Spotify playlist document onto the slim browser shape."""

from __future__ import annotations

from typing import Any, List, Optional

from delexi_proxy.models.dto import PlaylistDTO, TrackEntryDTO
from delexi_proxy.models.upstream import Image, PlaylistItem, Track, UpstreamPlaylist


def _first_image_url(images: Optional[List[Optional[Image]]]) -> Optional[str]:
    if not images or images[0] is None:
        return None
    # Empty strings count as missing
    return images[0].url or None


def _join_artists(track: Optional[Track]) -> Optional[str]:
    if track is None or track.artists is None:
        return None
    return ", ".join((artist.name if artist and artist.name else "") for artist in track.artists)


def project_track(index: int, item: Optional[PlaylistItem]) -> TrackEntryDTO:
    track = item.track if item is not None else None
    if track is None:
        return TrackEntryDTO(index=index)
    return TrackEntryDTO(
        index=index,
        name=track.name,
        artist=_join_artists(track),
        duration_ms=track.duration_ms,
        preview_url=track.preview_url,
        external_url=track.external_urls.spotify if track.external_urls else None,
        id=track.id,
    )


def project_playlist(document: Any) -> PlaylistDTO:
    """Build the slim playlist from an upstream document.

    Accepts either a validated UpstreamPlaylist or any decoded JSON value.
    Missing owner, images, track list, track objects or nested fields become
    None (or an empty list) instead of raising.
    """
    playlist = document if isinstance(document, UpstreamPlaylist) else UpstreamPlaylist.model_validate(document)
    items = playlist.tracks.items if playlist.tracks and playlist.tracks.items else []
    return PlaylistDTO(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner=playlist.owner.display_name if playlist.owner else None,
        image=_first_image_url(playlist.images),
        tracks=[project_track(position, item) for position, item in enumerate(items, start=1)],
    )


__all__ = ["project_playlist", "project_track"]
