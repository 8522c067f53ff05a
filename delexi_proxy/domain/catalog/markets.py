"""Market (region code) resolution for upstream catalog requests."""

from __future__ import annotations

from typing import Iterable, Optional


def resolve_market(requested: Optional[str], default: str, supported: Iterable[str]) -> str:
    """Upper-case the requested market, falling back to the default when absent or unsupported.

    Never rejects a request: an unknown code silently becomes the default.
    """
    default_code = default.strip().upper()
    candidate = (requested or "").upper() or default_code
    if candidate not in {code.upper() for code in supported}:
        return default_code
    return candidate


__all__ = ["resolve_market"]
