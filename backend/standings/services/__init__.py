# Services module
from .status_resolver import resolve_phase
from .standings_sorter import parse_amount, sort_participants
from .tie_grouper import group_ties
from .prize_allocator import PrizeAllocator, allocate_prizes
from .engine import StandingsEngine, compute_standings
from .rank_tracker import RankChangeTracker

__all__ = [
    "resolve_phase",
    "parse_amount",
    "sort_participants",
    "group_ties",
    "PrizeAllocator",
    "allocate_prizes",
    "StandingsEngine",
    "compute_standings",
    "RankChangeTracker",
]
