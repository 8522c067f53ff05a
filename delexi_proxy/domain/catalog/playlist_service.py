"""Fetches Spotify playlists with the app token and projects them for the browser."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional
from urllib.parse import quote

import requests

from delexi_proxy.domain.catalog.markets import resolve_market
from delexi_proxy.domain.catalog.outcomes import (
    AuthFailure,
    FetchOutcome,
    FetchSuccess,
    InternalFailure,
    ResourceFailure,
)
from delexi_proxy.domain.catalog.projection import project_playlist
from delexi_proxy.domain.credentials import AppTokenCache
from delexi_proxy.errors import UpstreamAuthError, UpstreamResourceError
from delexi_proxy.models.upstream import UpstreamPlaylist
from delexi_proxy.observability.metrics import observe_upstream_latency, record_playlist_fetch

logger = logging.getLogger(__name__)


class PlaylistService:
    def __init__(
        self,
        token_cache: AppTokenCache,
        *,
        api_base_url: str = "https://api.spotify.com/v1",
        default_market: str = "FR",
        allowed_markets: Iterable[str] = ("FR", "US", "CA", "BR", "GB", "DE", "ES", "IT"),
        forward_market: bool = True,
        session=None,
        timeout: float = 10.0,
    ):
        self.token_cache = token_cache
        self._api_base_url = api_base_url.rstrip("/")
        self.default_market = default_market.upper()
        self.allowed_markets = frozenset(code.upper() for code in allowed_markets) | {self.default_market}
        self.forward_market = forward_market
        self._session = session or requests.Session()
        self._timeout = timeout

    def resolve_market(self, requested: Optional[str]) -> str:
        return resolve_market(requested, self.default_market, self.allowed_markets)

    def playlist_url(self, playlist_id: str) -> str:
        return f"{self._api_base_url}/playlists/{quote(playlist_id, safe='')}"

    def get_playlist_document(self, playlist_id: str, market: Optional[str] = None) -> UpstreamPlaylist:
        """Fetch the full upstream playlist document.

        Raises UpstreamAuthError if no token can be obtained and
        UpstreamResourceError if Spotify answers with a non-success status.
        """
        token = self.token_cache.acquire()
        params = {"market": self.resolve_market(market)} if self.forward_market else None
        started = time.monotonic()
        try:
            response = self._session.get(
                self.playlist_url(playlist_id),
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._timeout,
            )
        finally:
            observe_upstream_latency(time.monotonic() - started)
        if not response.ok:
            raise UpstreamResourceError(response.status_code, response.text)
        return UpstreamPlaylist.model_validate(response.json())

    def fetch_playlist(self, playlist_id: str, market: Optional[str] = None) -> FetchOutcome:
        """Fetch and project a playlist, returning a tagged outcome instead of raising."""
        try:
            document = self.get_playlist_document(playlist_id, market)
            outcome: FetchOutcome = FetchSuccess(project_playlist(document))
        except UpstreamAuthError as exc:
            logger.warning("Cannot fetch playlist %s without an app token: %s", playlist_id, exc)
            outcome = AuthFailure(exc)
        except UpstreamResourceError as exc:
            logger.warning("Spotify returned %s for playlist %s", exc.status, playlist_id)
            outcome = ResourceFailure(exc.status, exc.body)
        except Exception as exc:
            logger.exception("Unexpected error fetching playlist %s: %s", playlist_id, exc)
            outcome = InternalFailure(exc)
        record_playlist_fetch(outcome.kind)
        return outcome


__all__ = ["PlaylistService"]
