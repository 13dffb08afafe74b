"""Undo/redo journal over whole-document snapshots.

The journal keeps two stacks of deep-copied section lists: ``history`` (past
states) and ``future`` (states undone and available for redo). Continuous
edits such as dragging a slider are coalesced by :class:`StyleEditCoalescer`
so a burst of edits to one entity produces a single history entry. The
coalescer reads time from an injectable clock, which keeps it deterministic
under test.

Example
-------
>>> journal = HistoryJournal(limit=2)
>>> journal.record(["a"])
>>> journal.record(["b"])
>>> journal.record(["c"])
>>> journal.history_depth
2
>>> journal.undo(["d"])
['c']
>>> journal.future_depth
1
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import logging
import time
import typing as typ

from pagebuilder._constants import COALESCE_WINDOW_SECONDS, HISTORY_LIMIT

logger = logging.getLogger(__name__)

Clock = cabc.Callable[[], float]
BurstKey = tuple[str, ...]

_T = typ.TypeVar("_T")


class StyleEditCoalescer:
    """Track edit bursts per entity so each burst records history once.

    The first edit for a key opens a burst and should be recorded. Every edit
    refreshes the burst; once ``window`` seconds pass without an edit, the next
    edit opens a new burst.
    """

    def __init__(self, window: float = COALESCE_WINDOW_SECONDS, *, clock: Clock | None = None) -> None:
        """Initialise the coalescer.

        Parameters
        ----------
        window : float, optional
            Quiet period in seconds that closes a burst.
        clock : Callable[[], float], optional
            Monotonic time source; defaults to :func:`time.monotonic`.
        """
        self.window = window
        self._clock = clock or time.monotonic
        self._last_edit: dict[BurstKey, float] = {}

    def should_record(self, key: BurstKey) -> bool:
        """Return True when an edit for ``key`` starts a new burst."""
        now = self._clock()
        last = self._last_edit.get(key)
        self._last_edit[key] = now
        return last is None or now - last > self.window

    def clear(self) -> None:
        """Forget every open burst."""
        self._last_edit.clear()

    @property
    def open_bursts(self) -> int:
        """Return the number of keys currently tracked."""
        return len(self._last_edit)


class HistoryJournal(typ.Generic[_T]):
    """Bounded undo/redo stacks of deep-copied document states."""

    def __init__(self, *, limit: int = HISTORY_LIMIT) -> None:
        self.limit = limit
        self.history: list[_T] = []
        self.future: list[_T] = []

    def record(self, state: _T) -> None:
        """Push a copy of ``state`` and drop any redo path."""
        self.history.append(copy.deepcopy(state))
        self.future.clear()
        overflow = len(self.history) - self.limit
        if overflow > 0:
            del self.history[:overflow]
            logger.debug("history capped at %d entries", self.limit)

    def undo(self, current: _T) -> _T | None:
        """Return the previous state, parking ``current`` on the redo stack."""
        if not self.history:
            return None
        previous = self.history.pop()
        self.future.append(copy.deepcopy(current))
        return previous

    def redo(self, current: _T) -> _T | None:
        """Return the next undone state, parking ``current`` on the undo stack."""
        if not self.future:
            return None
        following = self.future.pop()
        self.history.append(copy.deepcopy(current))
        return following

    def clear(self) -> None:
        """Drop both stacks."""
        self.history.clear()
        self.future.clear()

    @property
    def history_depth(self) -> int:
        return len(self.history)

    @property
    def future_depth(self) -> int:
        return len(self.future)


__all__ = ["BurstKey", "Clock", "HistoryJournal", "StyleEditCoalescer"]
