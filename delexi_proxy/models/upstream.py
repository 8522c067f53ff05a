#!/usr/bin/env python
"""
Lenient pydantic models for the Spotify playlist document.

Only the fields the proxy projects are modeled. Every field at every level
is optional, unknown keys are ignored, and a value of the wrong type
degrades to None (a non-object entry becomes an empty model), so any JSON
payload validates and projection never raises.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    # Numbers keep their text form
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def _list(value: Any) -> Optional[list]:
    return value if isinstance(value, list) else None


Text = Annotated[Optional[str], BeforeValidator(_text)]
Number = Annotated[Optional[Union[int, float]], BeforeValidator(_number)]


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _objects_only(cls, data: Any) -> Any:
        return data if isinstance(data, (dict, BaseModel)) else {}


class ExternalUrls(_Upstream):
    spotify: Text = None


class Image(_Upstream):
    url: Text = None


class Owner(_Upstream):
    display_name: Text = None


class Artist(_Upstream):
    name: Text = None


class Track(_Upstream):
    id: Text = None
    name: Text = None
    artists: Annotated[Optional[List[Optional[Artist]]], BeforeValidator(_list)] = None
    duration_ms: Number = None
    preview_url: Text = None
    external_urls: Optional[ExternalUrls] = None


class PlaylistItem(_Upstream):
    track: Optional[Track] = None


class TrackPage(_Upstream):
    items: Annotated[Optional[List[Optional[PlaylistItem]]], BeforeValidator(_list)] = None


class UpstreamPlaylist(_Upstream):
    id: Text = None
    name: Text = None
    description: Text = None
    owner: Optional[Owner] = None
    images: Annotated[Optional[List[Optional[Image]]], BeforeValidator(_list)] = None
    tracks: Optional[TrackPage] = None


__all__ = [
    "Artist",
    "ExternalUrls",
    "Image",
    "Owner",
    "PlaylistItem",
    "Track",
    "TrackPage",
    "UpstreamPlaylist",
]
