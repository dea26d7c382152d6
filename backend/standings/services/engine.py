"""
Standings Engine - the one shared leaderboard computation.
Every leaderboard view consumes this instead of ranking on its own.

Pipeline (each stage pure):
  1. resolve_phase      timestamps + cancel flag -> ContestPhase
  2. sort_participants  phase-dependent deterministic total order
  3. group_ties         competition ranks, "T-<n>" for ties
  4. PrizeAllocator     pool x tiers -> payout per wallet (ACTIVE / COMPLETED only)
"""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from standings.core.config import settings
from standings.models.schemas import (
    ContestPhase,
    ContestSnapshot,
    ParticipantSnapshot,
    StandingEntry,
    StandingsSchema,
)
from standings.services.prize_allocator import (
    DEFAULT_PAYOUT_QUANTUM,
    PrizeAllocator,
    tiers_from_percentages,
    tiers_from_prize_structure,
)
from standings.services.standings_sorter import sort_participants
from standings.services.status_resolver import resolve_phase
from standings.services.tie_grouper import group_ties

logger = logging.getLogger(__name__)

ZERO = Decimal(0)

# Phases whose standings carry prize amounts
PAID_PHASES = (ContestPhase.ACTIVE, ContestPhase.COMPLETED)


class StandingsEngine:
    """
    Stateless: the same snapshot always produces the same standings,
    whatever order its participants arrive in.
    """

    def __init__(
        self,
        default_tiers: Optional[Sequence[Any]] = None,
        payout_quantum: Any = DEFAULT_PAYOUT_QUANTUM,
    ):
        self.default_tiers = list(default_tiers or [])
        self.payout_quantum = payout_quantum

    def resolve_tiers(self, contest: ContestSnapshot) -> List[Decimal]:
        """First tier shape the contest supplies, else the configured default."""
        if contest.prize_tiers is not None:
            return list(contest.prize_tiers)
        if contest.prize_structure is not None:
            return tiers_from_prize_structure(contest.prize_structure)
        if contest.prize_distribution is not None:
            return tiers_from_percentages(contest.prize_distribution)
        return list(self.default_tiers)

    def compute_standings(
        self,
        phase: ContestPhase,
        participants: Iterable[ParticipantSnapshot],
        prize_pool: Any = ZERO,
        tiers: Optional[Sequence[Any]] = None,
    ) -> List[StandingEntry]:
        """
        Rank participants and attach payouts; entries come back in rank order.

        The prize configuration is validated first, so a bad pool or tier list
        raises ConfigurationError even for phases that are never paid.
        """
        allocator = PrizeAllocator(
            prize_pool,
            self.default_tiers if tiers is None else tiers,
            quantum=self.payout_quantum,
        )

        ordered = sort_participants(phase, participants)
        groups = group_ties(ordered, phase)

        payouts: Dict[str, Decimal] = {}
        if phase in PAID_PHASES:
            payouts = allocator.allocate(groups)

        entries = [
            StandingEntry(
                wallet_address=member.wallet_address,
                nickname=member.nickname,
                rank=group.rank,
                display_rank=group.display_rank,
                prize_amount=payouts.get(member.wallet_address, ZERO),
            )
            for group in groups
            for member in group.members
        ]
        logger.debug(
            "%s standings: %d participants in %d groups, %d paid",
            phase.value, len(entries), len(groups), sum(1 for a in payouts.values() if a > 0),
        )
        return entries

    def evaluate(self, contest: ContestSnapshot, now: datetime) -> StandingsSchema:
        """Resolve the contest's phase at `now` and compute its standings."""
        phase = resolve_phase(now, contest.start_time, contest.end_time, contest.cancelled)
        tiers = self.resolve_tiers(contest)
        entries = self.compute_standings(phase, contest.participants, contest.prize_pool, tiers)
        return StandingsSchema(
            contest_id=contest.contest_id,
            phase=phase,
            phase_label=phase.display_label,
            prize_pool=contest.prize_pool,
            tiers=tiers,
            entries=entries,
        )


def compute_standings(
    phase: ContestPhase,
    participants: Iterable[ParticipantSnapshot],
    prize_pool: Any = ZERO,
    tiers: Optional[Sequence[Any]] = None,
) -> List[StandingEntry]:
    """Module-level shortcut onto the configured engine."""
    return standings_engine.compute_standings(phase, participants, prize_pool, tiers)


# Singleton engine with configured defaults
standings_engine = StandingsEngine(
    default_tiers=settings.default_prize_tiers,
    payout_quantum=settings.payout_quantum,
)
