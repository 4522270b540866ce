"""
Custom exceptions for Tasmee library.

All exceptions inherit from TasmeeError for easy catching of library-specific errors.
"""

from typing import Any


class TasmeeError(Exception):
    """Base exception for all Tasmee errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ConfigurationError(TasmeeError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting_name:
            ctx["setting"] = setting_name
        super().__init__(message, ctx)
        self.setting_name = setting_name


class VerseDataError(TasmeeError):
    """Raised when verse data violates its invariants (no words, empty clean text, ...)."""

    def __init__(
        self,
        message: str,
        verse_key: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if verse_key:
            ctx["verse_key"] = verse_key
        super().__init__(message, ctx)
        self.verse_key = verse_key


class ContentSourceError(TasmeeError):
    """Raised when the content source cannot provide verses for a page."""

    def __init__(
        self,
        message: str,
        page: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if page is not None:
            ctx["page"] = page
        super().__init__(message, ctx)
        self.page = page


class RemoteVerificationError(TasmeeError):
    """
    Raised when the remote verification service fails or answers garbage.

    RemoteVerifier catches this itself and falls back to local matching,
    so callers of the public API never see it.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message, ctx)
        self.status_code = status_code


class SessionNotOpenError(TasmeeError):
    """Raised when a session is used before a page has been opened."""

    def __init__(self, message: str = "No page is open. Call open() first.") -> None:
        super().__init__(message)
