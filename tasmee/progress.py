"""
Progress reporting interface.

Progress is the highest percentage of a surah a user has completed. Durable
storage belongs to the application; the library only reports to a store it
is handed.
"""

from abc import ABC, abstractmethod


class ProgressStore(ABC):
    """
    Abstract store of per-surah progress.

    Implementations must keep max(existing, percent) so that progress never
    decreases.
    """

    @abstractmethod
    def report_progress(self, surah_id: int, percent: int) -> None:
        """Record that `percent` of the surah has been completed."""
        pass

    @abstractmethod
    def get_progress(self, surah_id: int) -> int:
        """Highest percentage recorded for the surah (0 if none)."""
        pass

    @abstractmethod
    def all(self) -> dict[int, int]:
        """Snapshot of every recorded surah's progress."""
        pass


class InMemoryProgressStore(ProgressStore):
    """ProgressStore kept in a dict, for tests and short-lived sessions."""

    def __init__(self, initial: dict[int, int] | None = None):
        self._progress: dict[int, int] = dict(initial or {})

    def report_progress(self, surah_id: int, percent: int) -> None:
        percent = max(0, min(100, int(percent)))
        self._progress[surah_id] = max(self._progress.get(surah_id, 0), percent)

    def get_progress(self, surah_id: int) -> int:
        return self._progress.get(surah_id, 0)

    def all(self) -> dict[int, int]:
        return dict(self._progress)
