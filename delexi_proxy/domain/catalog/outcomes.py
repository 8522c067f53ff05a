"""Tagged results of a playlist fetch, mapped to an HTTP status only at the route."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from delexi_proxy.models.dto import PlaylistDTO

ResponsePair = Tuple[Dict[str, Any], int]


@dataclass(frozen=True)
class FetchSuccess:
    playlist: PlaylistDTO
    kind: str = "success"

    def to_response(self) -> ResponsePair:
        return self.playlist.model_dump(), 200


@dataclass(frozen=True)
class AuthFailure:
    """Token exchange failed; reported as an opaque 500."""

    error: Exception
    kind: str = "auth_error"

    def to_response(self) -> ResponsePair:
        return {"error": str(self.error)}, 500


@dataclass(frozen=True)
class ResourceFailure:
    """Upstream rejected the playlist request; status and body pass through untouched."""

    status: int
    body: str
    kind: str = "resource_error"

    def to_response(self) -> ResponsePair:
        return {"error": self.body}, self.status


@dataclass(frozen=True)
class InternalFailure:
    error: Exception
    kind: str = "internal_error"

    def to_response(self) -> ResponsePair:
        return {"error": str(self.error)}, 500


FetchOutcome = Union[FetchSuccess, AuthFailure, ResourceFailure, InternalFailure]


__all__ = [
    "FetchOutcome",
    "FetchSuccess",
    "AuthFailure",
    "ResourceFailure",
    "InternalFailure",
]
