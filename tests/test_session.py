"""Tests for the recitation session: verification flow, debounce and navigation."""

import asyncio

import pytest

from tasmee.data import StaticContentSource, build_verse
from tasmee.exceptions import ContentSourceError, SessionNotOpenError
from tasmee.models import MatchResult, NavigationAction, RevealStatus, Surah
from tasmee.progress import InMemoryProgressStore
from tasmee.session import RecitationSession
from tasmee.verification import BaseVerifier, LocalVerifier

FULL_BASMALA = "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ"


class RecordingProgressStore(InMemoryProgressStore):
    def __init__(self):
        super().__init__()
        self.calls = []

    def report_progress(self, surah_id, percent):
        self.calls.append((surah_id, percent))
        super().report_progress(surah_id, percent)


class CountingVerifier(LocalVerifier):
    def __init__(self):
        super().__init__(threshold=0.7)
        self.inputs = []

    async def verify(self, verse, raw_input):
        self.inputs.append(raw_input)
        return await super().verify(verse, raw_input)


class GatedVerifier(BaseVerifier):
    """Full match for whatever verse it is asked about, once released."""

    name = "gated"

    def __init__(self):
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def verify(self, verse, raw_input):
        self.started.set()
        await self.release.wait()
        return MatchResult(matched_word_ids=verse.word_ids, confidence=1.0)


def run(coro):
    return asyncio.run(coro)


def make_session(settings, verifier=None, progress=None, source=None):
    return RecitationSession(
        verifier or LocalVerifier(),
        progress if progress is not None else InMemoryProgressStore(),
        content_source=source,
        settings=settings,
    )


class TestOpen:
    def test_loads_from_source_and_filters_surah(self, settings, basmala, hamd, fatiha):
        other = build_verse(9, "2:1", "الم", [{"id": 100, "text": "الم"}])
        source = StaticContentSource({1: [basmala, hamd, other]})

        async def go():
            session = make_session(settings, source=source)
            await session.open(fatiha, page=1)
            return session

        session = run(go())

        assert [v.key for v in session.verses] == ["1:1", "1:2"]
        assert session.current_verse.key == "1:1"
        assert session.verse_index == 0
        assert session.state.status == RevealStatus.IN_PROGRESS

    def test_no_verses_for_surah(self, settings, basmala):
        baqara = Surah(id=2, first_page=2, last_page=49)

        async def go():
            await make_session(settings).open(baqara, page=1, verses=[basmala])

        with pytest.raises(ContentSourceError):
            run(go())

    def test_missing_page(self, settings, fatiha):
        source = StaticContentSource({})

        async def go():
            await make_session(settings, source=source).open(fatiha, page=1)

        with pytest.raises(ContentSourceError):
            run(go())

    def test_start_at_last_verse(self, settings, basmala, hamd, fatiha):
        async def go():
            session = make_session(settings)
            await session.open(fatiha, page=1, verses=[basmala, hamd], verse_index=-1)
            return session

        assert run(go()).current_verse.key == "1:2"

    def test_use_before_open(self, settings):
        session = make_session(settings)

        with pytest.raises(SessionNotOpenError):
            session.restart()
        with pytest.raises(SessionNotOpenError):
            run(session.verify("بسم"))


class TestVerify:
    def test_full_match_completes_and_reports(self, settings, basmala, hamd, fatiha):
        progress = RecordingProgressStore()

        async def go():
            session = make_session(settings, progress=progress)
            await session.open(fatiha, page=1, verses=[basmala, hamd])
            result = await session.verify(FULL_BASMALA)
            return session, result

        session, result = run(go())

        assert result.matched_word_ids == [1, 2, 3, 4]
        assert session.state.completed
        assert session.state.revealed_indices == {0, 1, 2, 3}
        assert progress.calls == [(1, 50)]

    def test_blank_input_is_a_noop(self, settings, basmala, fatiha):
        async def go():
            session = make_session(settings)
            await session.open(fatiha, page=1, verses=[basmala])
            generation = session.generation
            result = await session.verify("   ")
            return session, result, generation

        session, result, generation = run(go())

        assert result is None
        assert session.generation == generation
        assert session.state.revealed_indices == set()

    def test_reveal_accumulates(self, settings, basmala, fatiha):
        async def go():
            session = make_session(settings)
            await session.open(fatiha, page=1, verses=[basmala])
            await session.verify("بسم الله الرحمن")
            await session.verify("بسم")
            return session.state

        state = run(go())

        assert state.revealed_indices == {0, 1, 2}
        assert state.status == RevealStatus.IN_PROGRESS

    def test_progress_never_decreases(self, settings, basmala, hamd, fatiha):
        progress = RecordingProgressStore()

        async def go():
            session = make_session(settings, progress=progress)
            await session.open(fatiha, page=1, verses=[basmala, hamd])
            session.go_to_verse(1)
            await session.verify("الحمد لله رب العالمين")
            session.go_to_verse(0)
            await session.verify(FULL_BASMALA)

        run(go())

        assert progress.calls == [(1, 100)]
        assert progress.get_progress(1) == 100

    def test_new_request_supersedes_in_flight(self, settings, basmala, fatiha):
        verifier = GatedVerifier()

        async def go():
            session = make_session(settings, verifier=verifier)
            await session.open(fatiha, page=1, verses=[basmala])
            first = asyncio.ensure_future(session.verify("بسم"))
            await verifier.started.wait()
            second = asyncio.ensure_future(session.verify("بسم الله"))
            await asyncio.sleep(0)
            verifier.release.set()
            return await first, await second, session.state

        first, second, state = run(go())

        assert first is None
        assert second.matched_word_ids == [1, 2, 3, 4]
        assert state.completed

    def test_result_for_previous_verse_is_dropped(self, settings, basmala, hamd, fatiha):
        verifier = GatedVerifier()

        async def go():
            session = make_session(settings, verifier=verifier)
            await session.open(fatiha, page=1, verses=[basmala, hamd])
            pending = asyncio.ensure_future(session.verify("بسم الله"))
            await verifier.started.wait()
            session.next_verse()
            verifier.release.set()
            return await pending, session

        result, session = run(go())

        assert result is None
        assert session.current_verse.key == "1:2"
        assert session.state.revealed_indices == set()


class TestDebounce:
    def test_typed_input_verified_after_quiet_period(self, settings, basmala, fatiha):
        verifier = CountingVerifier()

        async def go():
            session = make_session(settings, verifier=verifier)
            await session.open(fatiha, page=1, verses=[basmala])
            session.update_input("بسم")
            session.update_input("بسم الله")
            assert session.has_pending_input
            await asyncio.sleep(0.1)
            return session.state

        state = run(go())

        assert verifier.inputs == ["بسم الله"]
        assert state.revealed_indices == {0, 1}

    def test_waits_until_listening_stops(self, settings, basmala, fatiha):
        verifier = CountingVerifier()

        async def go():
            session = make_session(settings, verifier=verifier)
            await session.open(fatiha, page=1, verses=[basmala])
            session.update_input("بسم الله", listening=True)
            await asyncio.sleep(0.05)
            before = list(verifier.inputs)
            session.set_listening(False)
            await asyncio.sleep(0.05)
            return before, session.state

        before, state = run(go())

        assert before == []
        assert verifier.inputs == ["بسم الله"]
        assert state.revealed_indices == {0, 1}

    def test_blank_input_not_verified(self, settings, basmala, fatiha):
        verifier = CountingVerifier()

        async def go():
            session = make_session(settings, verifier=verifier)
            await session.open(fatiha, page=1, verses=[basmala])
            session.update_input("   ")
            await asyncio.sleep(0.05)

        run(go())

        assert verifier.inputs == []

    def test_navigation_cancels_pending_input(self, settings, basmala, hamd, fatiha):
        verifier = CountingVerifier()

        async def go():
            session = make_session(settings, verifier=verifier)
            await session.open(fatiha, page=1, verses=[basmala, hamd])
            session.update_input("بسم الله")
            session.next_verse()
            await asyncio.sleep(0.05)
            return session

        session = run(go())

        assert verifier.inputs == []
        assert session.state.revealed_indices == set()
        assert session.input_text == ""

    def test_aclose_cancels_pending(self, settings, basmala, fatiha):
        verifier = CountingVerifier()

        async def go():
            async with make_session(settings, verifier=verifier) as session:
                await session.open(fatiha, page=1, verses=[basmala])
                session.update_input("بسم")
            await asyncio.sleep(0.05)
            return session

        session = run(go())

        assert verifier.inputs == []
        assert not session.has_pending_input


class TestRestartAndHint:
    def test_restart_clears_without_moving(self, settings, basmala, hamd, fatiha):
        async def go():
            session = make_session(settings)
            await session.open(fatiha, page=1, verses=[basmala, hamd])
            await session.verify(FULL_BASMALA)
            session.restart()
            return session

        session = run(go())

        assert session.verse_index == 0
        assert session.state.revealed_indices == set()
        assert session.state.status == RevealStatus.IN_PROGRESS

    def test_hint_reveals_next_word(self, settings, basmala, fatiha):
        async def go():
            session = make_session(settings)
            await session.open(fatiha, page=1, verses=[basmala])
            await session.verify("بسم")
            return session.hint(), session.state

        index, state = run(go())

        assert index == 1
        assert state.revealed_indices == {0, 1}

    def test_hint_can_complete_verse(self, settings, basmala, fatiha):
        progress = RecordingProgressStore()

        async def go():
            session = make_session(settings, progress=progress)
            await session.open(fatiha, page=1, verses=[basmala])
            hints = [session.hint() for _ in range(5)]
            return hints, session.state

        hints, state = run(go())

        assert hints == [0, 1, 2, 3, None]
        assert state.completed
        assert progress.calls == [(1, 100)]


class TestNavigation:
    def open_session(self, settings, surah, page, verses, index=0):
        async def go():
            session = make_session(settings)
            await session.open(surah, page=page, verses=verses, verse_index=index)
            return session

        return run(go())

    def test_verse_change_resets_state(self, settings, basmala, hamd, fatiha):
        async def go():
            session = make_session(settings)
            await session.open(fatiha, page=1, verses=[basmala, hamd])
            await session.verify(FULL_BASMALA)
            action = session.next_verse()
            after_next = session.state
            await session.verify("الحمد")
            back = session.previous_verse()
            return action, after_next, back, session.state

        action, after_next, back, state = run(go())

        assert action == NavigationAction.NEXT_VERSE
        assert after_next.revealed_indices == set()
        assert after_next.verse_key == "1:2"
        assert back == NavigationAction.PREVIOUS_VERSE
        assert state.revealed_indices == set()
        assert state.status == RevealStatus.IN_PROGRESS

    def test_next_page_within_surah(self, settings, basmala):
        surah = Surah(id=1, first_page=1, last_page=2)
        session = self.open_session(settings, surah, 1, [basmala])

        assert session.next_verse() == NavigationAction.NEXT_PAGE
        assert session.verse_index == 0

    def test_next_surah_after_last_page(self, settings, basmala, fatiha):
        session = self.open_session(settings, fatiha, 1, [basmala])
        assert session.next_verse() == NavigationAction.NEXT_SURAH

    def test_end_of_quran(self, settings):
        nas = Surah(id=114, first_page=604, last_page=604)
        verse = build_verse(6236, "114:6", "مِنَ الْجِنَّةِ وَالنَّاسِ", [
            {"id": 1, "text": "مِنَ"},
            {"id": 2, "text": "الْجِنَّةِ"},
            {"id": 3, "text": "وَالنَّاسِ"},
        ])
        session = self.open_session(settings, nas, 604, [verse])

        assert session.next_verse() == NavigationAction.END_OF_QURAN

    def test_previous_page_and_surah(self, settings, basmala):
        baqara = Surah(id=2, first_page=2, last_page=49)
        verse = build_verse(300, "2:40", "يَا بَنِي", [
            {"id": 1, "text": "يَا"},
            {"id": 2, "text": "بَنِي"},
        ])
        session = self.open_session(settings, baqara, 7, [verse])
        assert session.previous_verse() == NavigationAction.PREVIOUS_PAGE

        session = self.open_session(settings, baqara, 2, [verse])
        assert session.previous_verse() == NavigationAction.PREVIOUS_SURAH

    def test_start_of_quran(self, settings, basmala, fatiha):
        session = self.open_session(settings, fatiha, 1, [basmala])
        assert session.previous_verse() == NavigationAction.START_OF_QURAN

    def test_go_to_verse_out_of_range(self, settings, basmala, fatiha):
        session = self.open_session(settings, fatiha, 1, [basmala])
        with pytest.raises(IndexError):
            session.go_to_verse(3)
