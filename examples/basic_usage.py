"""
Basic usage example for Tasmee library.

This example demonstrates the core workflow:
1. Load the verses of a page
2. Verify recitation input word by word
3. Read reveal state and progress
"""

import asyncio

from tasmee import InMemoryProgressStore, RecitationSession, Surah, create_verifier, get_settings
from tasmee._logging import configure_logging
from tasmee.data import StaticContentSource, build_verse


AL_FATIHA = Surah(id=1, name="Al-Fatihah", first_page=1, last_page=1)

PAGE_1 = [
    build_verse(
        1,
        "1:1",
        "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
        [
            {"id": 1, "text": "بِسْمِ", "translation": "In (the) name"},
            {"id": 2, "text": "اللَّهِ", "translation": "(of) Allah"},
            {"id": 3, "text": "الرَّحْمَٰنِ", "translation": "the Most Gracious"},
            {"id": 4, "text": "الرَّحِيمِ", "translation": "the Most Merciful"},
        ],
    ),
    build_verse(
        2,
        "1:2",
        "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ",
        [
            {"id": 5, "text": "الْحَمْدُ", "translation": "All praises and thanks"},
            {"id": 6, "text": "لِلَّهِ", "translation": "(be) to Allah"},
            {"id": 7, "text": "رَبِّ", "translation": "the Lord"},
            {"id": 8, "text": "الْعَالَمِينَ", "translation": "of the universe"},
        ],
    ),
]


async def main():
    configure_logging(get_settings().log_level)
    progress = InMemoryProgressStore()
    source = StaticContentSource({1: PAGE_1})

    async with create_verifier() as verifier:
        async with RecitationSession(verifier, progress, source) as session:
            await session.open(AL_FATIHA, page=1)

            print(f"📖 Reciting {session.current_verse}")

            for attempt in ["بسم الله", "بسم الله الرحمان", "بسم الله الرحمن الرحيم"]:
                result = await session.verify(attempt)
                state = session.state
                status = "✅" if state.completed else "⏳"
                print(f"   {status} '{attempt}' -> {result} revealed={sorted(state.revealed_indices)}")

            print(f"\n📊 Progress: {progress.all()}")
            print(f"➡️  {session.next_verse().value}: {session.current_verse}")


if __name__ == "__main__":
    asyncio.run(main())
