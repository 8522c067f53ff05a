#!/usr/bin/env python
"""
Centralized configuration schema for the proxy.

Merges defaults from config.Config with optional runtime overrides and
validates them into a single settings object shared by the services.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from config import Config


def _parse_markets(value: Optional[object]) -> List[str]:
    """Normalize market configuration into a unique ordered list of upper-case codes."""
    if value is None:
        tokens: List[str] = []
    elif isinstance(value, str):
        tokens = [token.strip() for token in value.split(",")]
    elif isinstance(value, (list, tuple, set, frozenset)):
        tokens = [str(token).strip() for token in value]
    else:
        tokens = [str(value).strip()]

    normalized: List[str] = []
    for token in tokens:
        if not token:
            continue
        code = token.upper()
        if code not in normalized:
            normalized.append(code)
    return normalized


def _parse_origins(value: Optional[object]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        tokens = value.split(",")
    else:
        tokens = [str(token) for token in value]
    origins = []
    for token in tokens:
        origin = token.strip().rstrip("/")
        # Wildcards would defeat the allow-list
        if origin and origin != "*" and origin not in origins:
            origins.append(origin)
    return origins


class ProxySettings(BaseModel):
    """Application-wide settings for the token cache and the playlist proxy."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None

    # Upstream
    token_url: str = "https://accounts.spotify.com/api/token"
    api_base_url: str = "https://api.spotify.com/v1"
    timeout_seconds: float = 10.0
    token_expiry_margin_seconds: int = 60

    # Markets
    default_market: str = "FR"
    allowed_markets: List[str] = Field(
        default_factory=lambda: ["FR", "US", "CA", "BR", "GB", "DE", "ES", "IT"]
    )
    forward_market: bool = True

    # HTTP surface
    cors_allowed_origins: List[str] = Field(default_factory=list)
    port: int = 5174

    @field_validator("default_market", mode="before")
    @classmethod
    def _normalize_default_market(cls, value: object) -> str:
        code = str(value or "").strip().upper()
        return code or "FR"

    @field_validator("allowed_markets", mode="before")
    @classmethod
    def _normalize_allowed_markets(cls, value: Optional[object]) -> List[str]:
        return _parse_markets(value)

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _normalize_origins(cls, value: Optional[object]) -> List[str]:
        return _parse_origins(value)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout_seconds", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> float:
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10.0
        return max(0.5, min(timeout, 120.0))

    @field_validator("token_expiry_margin_seconds", mode="before")
    @classmethod
    def _coerce_margin(cls, value: object) -> int:
        try:
            margin = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 60
        return max(0, margin)

    @model_validator(mode="after")
    def _default_market_is_supported(self) -> "ProxySettings":
        # The resolved market must always be a member of the supported set
        if self.default_market not in self.allowed_markets:
            self.allowed_markets.append(self.default_market)
        return self

    @property
    def has_credentials(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)


def load_proxy_settings(overrides: Optional[Dict[str, Any]] = None) -> ProxySettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIFY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIFY_CLIENT_SECRET,
        "token_url": Config.SPOTIFY_TOKEN_URL,
        "api_base_url": Config.SPOTIFY_API_BASE_URL,
        "timeout_seconds": Config.UPSTREAM_TIMEOUT_SECONDS,
        "token_expiry_margin_seconds": Config.TOKEN_EXPIRY_MARGIN_SECONDS,
        "default_market": Config.DEFAULT_MARKET,
        "allowed_markets": Config.ALLOWED_MARKETS,
        "forward_market": Config.FORWARD_MARKET,
        "cors_allowed_origins": Config.CORS_ALLOWED_ORIGINS,
        "port": Config.PORT,
    }
    if overrides:
        data.update(overrides)
    return ProxySettings.model_validate(data)


__all__ = [
    "ProxySettings",
    "load_proxy_settings",
]
