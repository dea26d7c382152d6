"""
Contest phase resolution.

The phase is never stored: it is recomputed from the contest's timestamps and
cancellation flag against a single caller-supplied "now".
"""
from __future__ import annotations

from datetime import datetime

from standings.models.schemas import ContestPhase


def resolve_phase(
    now: datetime,
    start_time: datetime,
    end_time: datetime,
    cancelled: bool = False,
) -> ContestPhase:
    """
    Map timestamps to a phase.

      cancelled               -> CANCELLED (timestamps ignored)
      now < start             -> PENDING
      start <= now < end      -> ACTIVE
      now >= end              -> COMPLETED
    """
    if cancelled:
        return ContestPhase.CANCELLED
    if now < start_time:
        return ContestPhase.PENDING
    if now < end_time:
        return ContestPhase.ACTIVE
    return ContestPhase.COMPLETED
