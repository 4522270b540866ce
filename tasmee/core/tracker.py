"""
Reveal state tracking for the active verse.

The tracker accumulates the best coverage seen across verification passes:
word positions are only ever added, so a later noisy pass that matches
fewer words never hides words that were already confirmed.
"""

from tasmee.models import MatchResult, RevealState, RevealStatus, Verse


class RevealStateTracker:
    """
    State machine for one verse: InProgress -> Completed.

    Example:
        tracker = RevealStateTracker(verse)
        if tracker.apply(result):
            report_progress(...)
    """

    def __init__(self, verse: Verse):
        self._verse = verse
        self._state = RevealState(verse_key=verse.key, total_words=verse.word_count)

    @property
    def verse(self) -> Verse:
        return self._verse

    @property
    def state(self) -> RevealState:
        """A copy of the current state."""
        return self._state.model_copy(deep=True)

    @property
    def completed(self) -> bool:
        return self._state.completed

    def apply(self, result: MatchResult) -> bool:
        """
        Merge a verification result into the revealed positions.

        Ids that do not belong to the verse are ignored.

        Returns:
            True only on the call that transitions the verse to Completed
        """
        positions = {
            index
            for index in (self._verse.index_of(word_id) for word_id in result.matched_word_ids)
            if index is not None
        }
        self._state.revealed_indices |= positions
        return self._update_status()

    def reveal_next(self) -> int | None:
        """
        Reveal the next unrevealed word (a hint).

        Returns:
            The revealed position, or None if the verse is fully revealed
        """
        index = self._state.next_index
        if index is None:
            return None
        self._state.revealed_indices.add(index)
        self._update_status()
        return index

    def reset(self) -> None:
        """Forget all revealed words."""
        self._state = RevealState(verse_key=self._verse.key, total_words=self._verse.word_count)

    def _update_status(self) -> bool:
        if self._state.completed:
            return False
        if self._state.revealed_count >= self._state.total_words:
            self._state.status = RevealStatus.COMPLETED
            return True
        return False
