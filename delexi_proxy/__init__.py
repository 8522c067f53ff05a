"""Delexi playlist proxy: hides Spotify app credentials and slims playlist payloads."""

__version__ = "1.0.0"
