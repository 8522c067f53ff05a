"""Route blueprints exposed via Flask."""

from .playlist import playlist_bp
from .health import health_bp

__all__ = [
    "playlist_bp",
    "health_bp",
]
