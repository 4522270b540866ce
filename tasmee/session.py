"""
Recitation session for one surah page.

A session owns everything that lives only while a verse is active: the
reveal tracker, the latest input, the debounce timer, the in-flight
verification and a generation counter. Every verification request captures
the generation and the verse key; a result is applied only if both are still
current when it arrives, so superseded or cancelled requests can never
reveal words on the wrong verse.
"""

import asyncio

from tasmee._logging import (
    get_logger,
    log_error,
    log_stale_result,
    log_verse_completed,
)
from tasmee.config import TasmeeSettings, get_settings
from tasmee.core.tracker import RevealStateTracker
from tasmee.data.content import ContentSource
from tasmee.exceptions import ContentSourceError, SessionNotOpenError
from tasmee.models import MatchResult, NavigationAction, RevealState, Surah, Verse
from tasmee.progress import ProgressStore
from tasmee.verification.base import BaseVerifier

LAST_SURAH = 114

logger = get_logger(__name__)


class RecitationSession:
    """
    Drives verification of the verses of one surah on one page.

    Example:
        session = RecitationSession(LocalVerifier(), InMemoryProgressStore(), source)
        await session.open(surah, page=1)

        # Typed input: verified after a quiet period
        session.update_input("بسم الله الرحمن الرحيم")

        # Or verify immediately
        result = await session.verify("بسم الله")

    Must be used from within a running event loop.
    """

    def __init__(
        self,
        verifier: BaseVerifier,
        progress_store: ProgressStore,
        content_source: ContentSource | None = None,
        settings: TasmeeSettings | None = None,
    ):
        """
        Args:
            verifier: Strategy used to check input against the active verse
            progress_store: Receives per-surah progress when verses complete
            content_source: Where open() loads verses from when none are given
            settings: Settings instance to use
        """
        self._settings = settings or get_settings()
        self._verifier = verifier
        self._progress = progress_store
        self._source = content_source

        self._surah: Surah | None = None
        self._page: int | None = None
        self._verses: list[Verse] = []
        self._index = 0
        self._tracker: RevealStateTracker | None = None

        self._generation = 0
        self._reported: dict[int, int] = {}

        self._input_text = ""
        self._listening = False
        self._debounce_task: asyncio.Task | None = None
        self._verify_task: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def surah(self) -> Surah | None:
        return self._surah

    @property
    def page(self) -> int | None:
        return self._page

    @property
    def verses(self) -> list[Verse]:
        return list(self._verses)

    @property
    def verse_index(self) -> int:
        return self._index

    @property
    def current_verse(self) -> Verse | None:
        if self._tracker is None:
            return None
        return self._tracker.verse

    @property
    def state(self) -> RevealState:
        """Reveal state of the active verse."""
        return self._require_tracker().state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def is_verifying(self) -> bool:
        return self._verify_task is not None and not self._verify_task.done()

    @property
    def has_pending_input(self) -> bool:
        """Whether a debounce timer is waiting to fire."""
        return self._debounce_task is not None and not self._debounce_task.done()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def open(
        self,
        surah: Surah,
        page: int,
        verses: list[Verse] | None = None,
        verse_index: int = 0,
    ) -> None:
        """
        Make a page of a surah active.

        Args:
            surah: The surah being recited
            page: Mushaf page number
            verses: Verses of the page; loaded from the content source if omitted
            verse_index: Verse to start at; negative values count from the end

        Raises:
            ContentSourceError: If no verses of the surah are on the page
            VerseDataError: If the content source returned invalid verses
        """
        if verses is None:
            if self._source is None:
                raise ContentSourceError("No content source configured", page=page)
            verses = await self._source.get_verses_for_page(page)

        surah_verses = [v for v in verses if v.surah_id == surah.id]
        if not surah_verses:
            raise ContentSourceError(
                "No verses found for this page",
                page=page,
                context={"surah_id": surah.id},
            )

        if verse_index < 0:
            verse_index += len(surah_verses)
        if not 0 <= verse_index < len(surah_verses):
            raise IndexError(f"verse_index {verse_index} out of range for page {page}")

        self._cancel_pending()
        self._surah = surah
        self._page = page
        self._verses = surah_verses
        self._activate(verse_index)
        logger.debug(f"Opened surah {surah.id} page {page} ({len(surah_verses)} verses)")

    # ------------------------------------------------------------------
    # Input and verification
    # ------------------------------------------------------------------

    def update_input(self, text: str, listening: bool = False) -> None:
        """
        Record the latest transcript or typed text and restart the debounce timer.

        When the timer fires, verification runs only if the capture stream
        is not listening and the text is not blank.

        Args:
            text: Full current transcript or typed text
            listening: Whether speech capture is still active
        """
        self._require_tracker()
        self._input_text = text
        self._listening = listening
        self._restart_debounce()

    def set_listening(self, listening: bool) -> None:
        """Update the capture flag; restarts the debounce timer for the current text."""
        self.update_input(self._input_text, listening=listening)

    async def verify(self, text: str) -> MatchResult | None:
        """
        Verify input against the active verse right away.

        Supersedes any verification already in flight.

        Args:
            text: Input to verify

        Returns:
            The applied MatchResult, or None if the input was blank or the
            result was superseded before it arrived
        """
        if not text or not text.strip():
            return None

        task = self._start_verification(text)
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            return None
        return task.result()

    def restart(self) -> None:
        """Hide all words of the active verse again and clear the input."""
        tracker = self._require_tracker()
        self._cancel_pending()
        self._input_text = ""
        self._listening = False
        tracker.reset()

    def hint(self) -> int | None:
        """
        Reveal the next word of the active verse.

        Returns:
            Position of the revealed word, or None if all words are revealed
        """
        tracker = self._require_tracker()
        was_completed = tracker.completed
        index = tracker.reveal_next()
        if tracker.completed and not was_completed:
            self._report_completion()
        return index

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_to_verse(self, index: int) -> None:
        """Make another verse of the page active, with nothing revealed."""
        self._require_tracker()
        if not 0 <= index < len(self._verses):
            raise IndexError(f"verse index {index} out of range (0-{len(self._verses) - 1})")
        self._cancel_pending()
        self._activate(index)

    def next_verse(self) -> NavigationAction:
        """
        Advance to the next verse.

        Returns:
            NEXT_VERSE if the session moved; otherwise what the caller must
            load: NEXT_PAGE, NEXT_SURAH, or END_OF_QURAN
        """
        self._require_tracker()
        if self._index < len(self._verses) - 1:
            self.go_to_verse(self._index + 1)
            return NavigationAction.NEXT_VERSE

        self._cancel_pending()
        if self._page < self._surah.last_page:
            return NavigationAction.NEXT_PAGE
        if self._surah.id < LAST_SURAH:
            return NavigationAction.NEXT_SURAH
        return NavigationAction.END_OF_QURAN

    def previous_verse(self) -> NavigationAction:
        """
        Go back to the previous verse.

        Returns:
            PREVIOUS_VERSE if the session moved; otherwise PREVIOUS_PAGE,
            PREVIOUS_SURAH, or START_OF_QURAN
        """
        self._require_tracker()
        if self._index > 0:
            self.go_to_verse(self._index - 1)
            return NavigationAction.PREVIOUS_VERSE

        self._cancel_pending()
        if self._page > self._surah.first_page:
            return NavigationAction.PREVIOUS_PAGE
        if self._surah.id > 1:
            return NavigationAction.PREVIOUS_SURAH
        return NavigationAction.START_OF_QURAN

    async def aclose(self) -> None:
        """Cancel pending timers and verifications and wait for them to finish."""
        tasks = [t for t in (self._debounce_task, self._verify_task) if t is not None]
        self._cancel_pending()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "RecitationSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_tracker(self) -> RevealStateTracker:
        if self._tracker is None:
            raise SessionNotOpenError()
        return self._tracker

    def _activate(self, index: int) -> None:
        self._index = index
        self._tracker = RevealStateTracker(self._verses[index])
        self._input_text = ""
        self._listening = False

    def _cancel_pending(self) -> None:
        """Drop the debounce timer and any in-flight verification."""
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None
        if self._verify_task is not None:
            self._verify_task.cancel()
            self._verify_task = None
        self._generation += 1

    def _restart_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
        loop = asyncio.get_running_loop()
        self._debounce_task = loop.create_task(self._debounce())

    async def _debounce(self) -> None:
        await asyncio.sleep(self._settings.debounce_seconds)
        if self._listening or not self._input_text.strip():
            return
        self._start_verification(self._input_text)

    def _start_verification(self, text: str) -> asyncio.Task:
        verse = self._require_tracker().verse
        if self._verify_task is not None:
            self._verify_task.cancel()

        self._generation += 1
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run_verification(verse, text, self._generation))
        task.add_done_callback(self._on_verification_done)
        self._verify_task = task
        return task

    async def _run_verification(
        self, verse: Verse, text: str, generation: int
    ) -> MatchResult | None:
        result = await self._verifier.verify(verse, text)

        current = self.current_verse
        if generation != self._generation or current is None or current.key != verse.key:
            log_stale_result(verse.key, generation, self._generation)
            return None

        if self._tracker.apply(result):
            self._report_completion()
        return result

    def _on_verification_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_error(f"Verification failed: {exc!r}")

    def _report_completion(self) -> None:
        verse = self._tracker.verse
        surah_id = self._surah.id
        percent = round((self._index + 1) / len(self._verses) * 100)

        if percent > self._reported.get(surah_id, 0):
            self._reported[surah_id] = percent
            self._progress.report_progress(surah_id, percent)

        log_verse_completed(verse.key, surah_id, percent)
