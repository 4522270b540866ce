"""
Verification module for Tasmee library.

Provides the verifier interface, the local and remote implementations, and
capability-based selection between them.
"""

from tasmee.config import TasmeeSettings, get_settings
from tasmee.verification.base import BaseVerifier
from tasmee.verification.local import LocalVerifier
from tasmee.verification.remote import RemoteVerifier


def create_verifier(settings: TasmeeSettings | None = None) -> BaseVerifier:
    """
    Pick the verifier to use for the given settings.

    A RemoteVerifier (falling back to a LocalVerifier) is returned when
    remote verification is enabled and an API key is configured; otherwise a
    LocalVerifier.
    """
    settings = settings or get_settings()
    local = LocalVerifier(threshold=settings.local_accept_threshold)
    if settings.remote_configured:
        return RemoteVerifier(fallback=local, settings=settings)
    return local


__all__ = [
    "BaseVerifier",
    "LocalVerifier",
    "RemoteVerifier",
    "create_verifier",
]
