"""
Tie Grouper - competition ranking over a sorted participant sequence.

Consecutive participants with an identical performance key form one group.
A group's rank is the 1-based position of its first member, so three players
tied for 1st are followed by the 4th ranked player.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from standings.models.schemas import ContestPhase, ParticipantSnapshot, TieGroup
from standings.services.standings_sorter import PerformanceKey, performance_key

logger = logging.getLogger(__name__)


def group_ties(
    ordered: Sequence[ParticipantSnapshot],
    phase: ContestPhase = ContestPhase.ACTIVE,
) -> List[TieGroup]:
    """
    Partition an already sorted sequence into tie groups.

    PENDING contests have no performance to tie on: every participant gets a
    plain rank equal to its position.
    """
    if not phase.is_performance_ranked:
        return [TieGroup(rank=i, members=(p,)) for i, p in enumerate(ordered, start=1)]

    groups: List[TieGroup] = []
    run: List[ParticipantSnapshot] = []
    run_key: Optional[PerformanceKey] = None
    run_start = 1

    for position, participant in enumerate(ordered, start=1):
        key = performance_key(participant)
        if run and key != run_key:
            groups.append(TieGroup(rank=run_start, members=tuple(run)))
            run = []
        if not run:
            run_start = position
            run_key = key
        run.append(participant)

    if run:
        groups.append(TieGroup(rank=run_start, members=tuple(run)))

    tied = sum(1 for g in groups if g.is_tied)
    if tied:
        logger.debug("%d tie group(s) among %d participants", tied, len(ordered))
    return groups
