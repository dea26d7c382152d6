"""
Standings Sorter - deterministic total order of contest participants.

Two comparators, chosen by phase:
  * PENDING (no performance yet): humans first, then level, then experience.
  * ACTIVE / COMPLETED / CANCELLED: portfolio value, then performance.

Both end with the wallet address ascending, so the order is a pure function
of content and never depends on the order participants arrived in.
"""
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Tuple

from standings.models.schemas import ContestPhase, ParticipantSnapshot

logger = logging.getLogger(__name__)

ZERO = Decimal(0)

PerformanceKey = Tuple[Decimal, Decimal]


def parse_amount(value: Any) -> Decimal:
    """
    Parse a decimal amount sent by the data source.

    Missing, empty, non-numeric and non-finite values (NaN, Infinity) all
    parse to exactly 0. Never raises.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            return ZERO
        try:
            amount = Decimal(text)
        except InvalidOperation:
            logger.debug("Unparseable amount %r ranked as 0", value)
            return ZERO
    if not amount.is_finite():
        logger.debug("Non-finite amount %r ranked as 0", value)
        return ZERO
    return amount


def performance_key(participant: ParticipantSnapshot) -> PerformanceKey:
    """The (portfolio_value, performance_percentage) pair ties are detected on."""
    return (
        parse_amount(participant.portfolio_value),
        parse_amount(participant.performance_percentage),
    )


def _performance_sort_key(participant: ParticipantSnapshot) -> tuple:
    value, perf = performance_key(participant)
    # copy_negate is exact; unary minus would round to the context precision
    return (value.copy_negate(), perf.copy_negate(), participant.wallet_address)


def _pending_sort_key(participant: ParticipantSnapshot) -> tuple:
    level = participant.level_number
    return (
        participant.is_ai_agent,            # humans (False) first
        level is None,                      # absent level sorts lowest
        -(level or 0),
        -participant.experience_points,
        participant.wallet_address,
    )


def sort_participants(
    phase: ContestPhase,
    participants: Iterable[ParticipantSnapshot],
) -> List[ParticipantSnapshot]:
    """Return the same participants in ranked order for the given phase."""
    if phase is ContestPhase.PENDING:
        return sorted(participants, key=_pending_sort_key)
    # CANCELLED contests are never paid, but keep the performance order
    # so their final board is still deterministic.
    return sorted(participants, key=_performance_sort_key)
