"""
Rank change tracking for "moved up / moved down" highlights.

Lives outside the pure engine: it remembers the previous standings of one
viewer, diffs each new evaluation against them, and keeps the resulting
deltas visible for a short hold window.
"""
from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Optional

from standings.core.config import settings
from standings.models.schemas import StandingEntry


class RankChangeTracker:
    """
    Usage:
        tracker = RankChangeTracker()                   # hold window from settings
        tracker.update(engine.compute_standings(...))   # first call: {}
        deltas = tracker.update(next_standings)         # {wallet: +2, ...}
        tracker.changes()                               # {} once the hold expires

    Delta = previous_rank - current_rank, so positive means moved up.
    """

    def __init__(
        self,
        hold_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.hold_seconds = settings.rank_change_hold_seconds if hold_seconds is None else hold_seconds
        self._clock = clock
        self._previous_ranks: Dict[str, int] = {}
        self._changes: Dict[str, int] = {}
        self._changed_at: Optional[float] = None
        self._primed = False

    def update(
        self,
        entries: Iterable[StandingEntry],
        now: Optional[float] = None,
        track: bool = True,
    ) -> Dict[str, int]:
        """
        Record a new evaluation and return the rank movements it caused.

        Pass track=False for pending contests: their positions are recorded
        but never reported as movement.
        """
        now = self._clock() if now is None else now
        current = {e.wallet_address: e.rank for e in entries}

        changes: Dict[str, int] = {}
        if self._primed and track:
            for wallet, rank in current.items():
                previous = self._previous_ranks.get(wallet)
                if previous is not None and previous != rank:
                    changes[wallet] = previous - rank

        self._previous_ranks = current
        self._primed = True
        self._changes = changes
        self._changed_at = now if changes else None
        return dict(changes)

    def changes(self, now: Optional[float] = None) -> Dict[str, int]:
        """Latest deltas, or {} once the hold window has passed."""
        if self._changed_at is None:
            return {}
        now = self._clock() if now is None else now
        if now - self._changed_at >= self.hold_seconds:
            self._changes = {}
            self._changed_at = None
            return {}
        return dict(self._changes)

    def reset(self) -> None:
        self._previous_ranks = {}
        self._changes = {}
        self._changed_at = None
        self._primed = False
