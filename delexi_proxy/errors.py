"""Errors raised while talking to the Spotify Web API."""

from __future__ import annotations

from typing import Optional


class ProxyError(Exception):
    """Base class for errors raised by the proxy itself."""


class UpstreamAuthError(ProxyError):
    """The client-credentials token exchange failed."""

    def __init__(self, status: Optional[int], body: str = "", message: Optional[str] = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"Token request failed: {status} {body}".rstrip())


class CredentialsMissingError(UpstreamAuthError):
    """Client id or secret is not configured, so no exchange can be attempted."""

    def __init__(self) -> None:
        super().__init__(None, message="Spotify client id/secret are not configured")


class UpstreamResourceError(ProxyError):
    """A resource request returned a non-success status; status and body are kept verbatim."""

    def __init__(self, status: int, body: str = "") -> None:
        self.status = status
        self.body = body
        super().__init__(f"Upstream request failed: {status} {body}".rstrip())


__all__ = [
    "ProxyError",
    "UpstreamAuthError",
    "CredentialsMissingError",
    "UpstreamResourceError",
]
