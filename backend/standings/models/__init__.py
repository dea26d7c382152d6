# Models module
from .schemas import (
    ContestPhase,
    UserLevel,
    ParticipantSnapshot,
    TieGroup,
    StandingEntry,
    ContestSnapshot,
    StandingsSchema,
    PhaseRequest,
    PhaseResponse,
)

__all__ = [
    "ContestPhase",
    "UserLevel",
    "ParticipantSnapshot",
    "TieGroup",
    "StandingEntry",
    "ContestSnapshot",
    "StandingsSchema",
    "PhaseRequest",
    "PhaseResponse",
]
