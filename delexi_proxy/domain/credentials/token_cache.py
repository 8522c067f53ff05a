"""Application access token cache (Spotify client-credentials flow)."""

from __future__ import annotations

import base64
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from delexi_proxy.errors import CredentialsMissingError, UpstreamAuthError
from delexi_proxy.observability.metrics import record_token_cache_hit, record_token_exchange

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = "https://accounts.spotify.com/api/token"


@dataclass
class CredentialRecord:
    """Current app token and the epoch second after which it must not be used."""

    token: Optional[str] = None
    expires_at: float = 0.0

    def is_valid(self, now: float) -> bool:
        return bool(self.token) and now < self.expires_at


def basic_auth_header(client_id: str, client_secret: str) -> str:
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class AppTokenCache:
    """Hands out a valid app token, exchanging client credentials when the cached one is stale.

    One instance is built at startup and shared by every request. Reads of a
    fresh token never touch the network or the lock; refreshes are serialized
    so concurrent callers reuse the token fetched by whoever got there first.
    A failed exchange leaves the record untouched so the next call retries.
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        *,
        token_url: str = DEFAULT_TOKEN_URL,
        session=None,
        timeout: float = 10.0,
        expiry_margin_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._session = session or requests.Session()
        self._timeout = timeout
        self._margin = expiry_margin_seconds
        self._clock = clock
        self._record = CredentialRecord()
        self._refresh_lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._record.token

    @property
    def expires_at(self) -> float:
        return self._record.expires_at

    def is_valid(self) -> bool:
        return self._record.is_valid(self._clock())

    def invalidate(self) -> None:
        self._record = CredentialRecord()

    def acquire(self) -> str:
        """Return a usable token, refreshing it first if it is missing or expired.

        Raises UpstreamAuthError when the exchange is rejected; network errors
        from requests propagate unchanged.
        """
        record = self._record
        if record.is_valid(self._clock()):
            record_token_cache_hit()
            return record.token  # type: ignore[return-value]

        with self._refresh_lock:
            # Another thread may have refreshed while we waited
            record = self._record
            if record.is_valid(self._clock()):
                record_token_cache_hit()
                return record.token  # type: ignore[return-value]
            return self._exchange()

    def _exchange(self) -> str:
        if not self._client_id or not self._client_secret:
            logger.error("Spotify client id/secret missing; cannot request an app token.")
            raise CredentialsMissingError()

        logger.debug("Requesting a new Spotify app token from %s", self._token_url)
        response = self._session.post(
            self._token_url,
            data={"grant_type": "client_credentials"},
            headers={
                "Authorization": basic_auth_header(self._client_id, self._client_secret),
                "Content-Type": "application/x-www-form-urlencoded",
            },
            timeout=self._timeout,
        )
        if not response.ok:
            body = response.text
            record_token_exchange(success=False)
            logger.warning("Spotify token request failed: %s %s", response.status_code, body)
            raise UpstreamAuthError(response.status_code, body)

        data = response.json()
        token = data["access_token"]
        expires_in = int(data["expires_in"])
        now = self._clock()
        self._record = CredentialRecord(token=token, expires_at=now + (expires_in - self._margin))
        record_token_exchange(success=True)
        logger.info("Spotify app token refreshed; valid for %ss", expires_in - self._margin)
        return token


__all__ = ["AppTokenCache", "CredentialRecord", "basic_auth_header", "DEFAULT_TOKEN_URL"]
