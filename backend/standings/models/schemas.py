"""
Pydantic models and dataclasses for the Contest Standings engine.
Participant snapshots come in, ranked standings with payouts go out.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
from pydantic import BaseModel, Field, ConfigDict, field_serializer, field_validator


class ContestPhase(str, Enum):
    """Temporal phase of a contest, always derived from its timestamps."""
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def display_label(self) -> str:
        """Label used by the leaderboard views (upcoming / live / completed)."""
        return _PHASE_LABELS[self]

    @property
    def is_performance_ranked(self) -> bool:
        return self is not ContestPhase.PENDING


_PHASE_LABELS = {
    ContestPhase.PENDING: "upcoming",
    ContestPhase.ACTIVE: "live",
    ContestPhase.COMPLETED: "completed",
    ContestPhase.CANCELLED: "completed",
}


def _assume_utc(value: datetime) -> datetime:
    """Timestamps without an offset are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserLevel(BaseModel):
    """Progression level attached to a participant's profile."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    level_number: Optional[int] = None

    @field_validator("level_number", mode="before")
    @classmethod
    def _tolerant_level(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            # Unreadable level counts as no level
            return None


class ParticipantSnapshot(BaseModel):
    """
    One participant as captured by a single poll of the contest data source.

    Amount fields are kept as the raw text the data source sent; they are
    parsed (malformed -> 0) only when the participants are ranked.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    wallet_address: str
    nickname: Optional[str] = None
    portfolio_value: Optional[str] = None
    performance_percentage: Optional[str] = None
    experience_points: int = 0
    user_level: Optional[UserLevel] = None
    is_ai_agent: bool = False

    @field_validator("portfolio_value", "performance_percentage", mode="before")
    @classmethod
    def _keep_raw_amount(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        # Shapes that can never be a number rank as zero
        return None

    @field_validator("experience_points", mode="before")
    @classmethod
    def _default_experience(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return 0

    @field_validator("is_ai_agent", mode="before")
    @classmethod
    def _default_agent_flag(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def level_number(self) -> Optional[int]:
        """Level, or None when the profile has no readable level."""
        return self.user_level.level_number if self.user_level else None


@dataclass(frozen=True)
class TieGroup:
    """Maximal run of consecutively ranked participants sharing a ranking key."""
    rank: int                                   # 1-based position of the first member
    members: Tuple[ParticipantSnapshot, ...]

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_tied(self) -> bool:
        return self.size >= 2

    @property
    def display_rank(self) -> str:
        return f"T-{self.rank}" if self.is_tied else str(self.rank)

    @property
    def wallet_addresses(self) -> List[str]:
        return [m.wallet_address for m in self.members]


class StandingEntry(BaseModel):
    """
    Engine output: one per input participant.
    Consumed by the leaderboard views and by the payout system.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    wallet_address: str
    nickname: Optional[str] = None
    rank: int = Field(ge=1, description="Competition rank (ties share, next skips)")
    display_rank: str = Field(alias="displayRank", description='"<rank>" or "T-<rank>"')
    prize_amount: Decimal = Field(
        default=Decimal(0),
        ge=0,
        alias="prizeAmount",
        description="Prize pool share for this participant",
    )

    @field_serializer("prize_amount", when_used="json")
    def _plain_amount(self, value: Decimal) -> str:
        # Fixed-point on the wire: str(Decimal) switches to "1E-9" below 1e-6
        return format(value, "f")

    @property
    def is_tied(self) -> bool:
        return self.display_rank.startswith("T-")


class ContestSnapshot(BaseModel):
    """
    A contest and its participants as supplied by the contest data source.

    Prize tiers may arrive in one of three shapes; the first one present wins:
    `prize_tiers` (ordered fractions), `prize_structure` (position -> fraction)
    or `prize_distribution` (whole percentage points, e.g. [60, 30, 10]).
    """
    model_config = ConfigDict(extra="ignore")

    contest_id: Optional[Union[int, str]] = None
    start_time: datetime
    end_time: datetime
    cancelled: bool = False
    prize_pool: Decimal = Field(default=Decimal(0), description="Total prize pool amount")
    prize_tiers: Optional[List[Decimal]] = None
    prize_structure: Optional[Dict[str, Decimal]] = None
    prize_distribution: Optional[List[Decimal]] = None
    participants: List[ParticipantSnapshot] = []

    @field_validator("start_time", "end_time")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return _assume_utc(value)


class StandingsSchema(BaseModel):
    """Complete standings for one contest evaluation."""
    contest_id: Optional[Union[int, str]] = None
    phase: ContestPhase
    phase_label: str = Field(description="upcoming, live or completed")
    prize_pool: Decimal
    tiers: List[Decimal] = Field(default=[], description="Prize fractions actually applied")
    entries: List[StandingEntry]


class PhaseRequest(BaseModel):
    """Request body for the phase resolution endpoint."""
    start_time: datetime
    end_time: datetime
    cancelled: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return _assume_utc(value)


class PhaseResponse(BaseModel):
    """Resolved phase for a contest."""
    phase: ContestPhase
    phase_label: str
    evaluated_at: datetime
