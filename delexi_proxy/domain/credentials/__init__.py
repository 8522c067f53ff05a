"""Application credential domain (client-credentials token cache)."""

from .token_cache import AppTokenCache, CredentialRecord

__all__ = ["AppTokenCache", "CredentialRecord"]
