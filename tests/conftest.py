"""Shared fixtures for the Tasmee test suite."""

import pytest

from tasmee.config import TasmeeSettings, reset_settings
from tasmee.data import build_verse
from tasmee.models import Surah


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from the environment and cached settings."""
    monkeypatch.delenv("TASMEE_GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("TASMEE_REMOTE_ENABLED", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return TasmeeSettings(debounce_seconds=0.01, remote_timeout_seconds=0.5)


@pytest.fixture
def basmala():
    """Al-Fatihah 1:1, word ids 1-4."""
    return build_verse(
        1,
        "1:1",
        "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
        [
            {"id": 1, "text": "بِسْمِ", "translation": "In (the) name"},
            {"id": 2, "text": "اللَّهِ", "translation": "(of) Allah"},
            {"id": 3, "text": "الرَّحْمَٰنِ", "translation": "the Most Gracious"},
            {"id": 4, "text": "الرَّحِيمِ", "translation": "the Most Merciful"},
        ],
    )


@pytest.fixture
def hamd():
    """Al-Fatihah 1:2, word ids 5-8."""
    return build_verse(
        2,
        "1:2",
        "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ",
        [
            {"id": 5, "text": "الْحَمْدُ"},
            {"id": 6, "text": "لِلَّهِ"},
            {"id": 7, "text": "رَبِّ"},
            {"id": 8, "text": "الْعَالَمِينَ"},
        ],
    )


@pytest.fixture
def iyyaka():
    """Al-Fatihah 1:5, word ids 20-23."""
    return build_verse(
        5,
        "1:5",
        "إِيَّاكَ نَعْبُدُ وَإِيَّاكَ نَسْتَعِينُ",
        [
            {"id": 20, "text": "إِيَّاكَ"},
            {"id": 21, "text": "نَعْبُدُ"},
            {"id": 22, "text": "وَإِيَّاكَ"},
            {"id": 23, "text": "نَسْتَعِينُ"},
        ],
    )


@pytest.fixture
def fatiha():
    return Surah(id=1, name="Al-Fatihah", first_page=1, last_page=1)
