#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    # Spotify application credentials (client-credentials flow, no end user)
    SPOTIFY_CLIENT_ID = os.environ.get('SPOTIFY_CLIENT_ID')
    SPOTIFY_CLIENT_SECRET = os.environ.get('SPOTIFY_CLIENT_SECRET')

    # Upstream endpoints
    SPOTIFY_TOKEN_URL = os.getenv('SPOTIFY_TOKEN_URL', 'https://accounts.spotify.com/api/token')
    SPOTIFY_API_BASE_URL = os.getenv('SPOTIFY_API_BASE_URL', 'https://api.spotify.com/v1')
    UPSTREAM_TIMEOUT_SECONDS = _get_float('UPSTREAM_TIMEOUT_SECONDS', 10.0)
    # Tokens are retired this many seconds before Spotify says they expire
    TOKEN_EXPIRY_MARGIN_SECONDS = _get_int('TOKEN_EXPIRY_MARGIN_SECONDS', 60)

    # Markets (region codes)
    DEFAULT_MARKET = (os.getenv('DEFAULT_MARKET') or 'FR').strip().upper()
    ALLOWED_MARKETS = _get_csv_list('ALLOWED_MARKETS', 'FR,US,CA,BR,GB,DE,ES,IT')
    # Some deployments call the playlist endpoint without ?market=
    FORWARD_MARKET = _get_bool('FORWARD_MARKET', True)

    # Browser origins allowed to call /api/*
    CORS_ALLOWED_ORIGINS = _get_csv_list(
        'CORS_ALLOWED_ORIGINS',
        ','.join([
            'https://delexi-v1.vercel.app',
            'https://delexi-v1-ismas-projects-4db74a16.vercel.app',
            'https://delexi-v1-git-main-ismas-projects-4db74a16.vercel.app',
            'http://localhost:5173',
        ]),
    )

    # Runtime behavior
    PORT = _get_int('PORT', 5174)
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
    LOG_DIR = os.getenv('LOG_DIR', os.path.join(basedir, 'log'))
