"""
تسميع (Tasmee) — A Python library to verify Quran recitation word by word.

Usage:
    from tasmee import RecitationSession, InMemoryProgressStore, create_verifier
    from tasmee.data import StaticContentSource

    session = RecitationSession(create_verifier(), InMemoryProgressStore(), source)
    await session.open(surah, page=1)

    # Check what the user has recited so far
    result = await session.verify("بسم الله الرحمن")
    print(result.matched_word_ids, session.state.completed)
"""

from tasmee.config import TasmeeSettings, configure, get_settings, reset_settings
from tasmee.core import match_sequence, normalize_arabic, similarity
from tasmee.exceptions import (
    ConfigurationError,
    ContentSourceError,
    RemoteVerificationError,
    SessionNotOpenError,
    TasmeeError,
    VerseDataError,
)
from tasmee.models import (
    MatchResult,
    NavigationAction,
    RevealState,
    RevealStatus,
    Surah,
    Verse,
    Word,
)
from tasmee.progress import InMemoryProgressStore, ProgressStore
from tasmee.session import RecitationSession
from tasmee.verification import (
    BaseVerifier,
    LocalVerifier,
    RemoteVerifier,
    create_verifier,
)

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "Word",
    "Verse",
    "Surah",
    "MatchResult",
    "RevealState",
    "RevealStatus",
    "NavigationAction",
    # Core
    "normalize_arabic",
    "similarity",
    "match_sequence",
    # Verification
    "BaseVerifier",
    "LocalVerifier",
    "RemoteVerifier",
    "create_verifier",
    # Session
    "RecitationSession",
    "ProgressStore",
    "InMemoryProgressStore",
    # Config
    "TasmeeSettings",
    "get_settings",
    "configure",
    "reset_settings",
    # Exceptions
    "TasmeeError",
    "ConfigurationError",
    "VerseDataError",
    "ContentSourceError",
    "RemoteVerificationError",
    "SessionNotOpenError",
]
