"""
Prize Allocator - splits a contest's prize pool across ranked tie groups.

Each paid position owns one tier (a fraction of the pool), best first.
A tie group starting at position P with k members covers positions
P .. P+k-1; the tiers of the paid positions it covers are pooled and
divided by the FULL group size k:

    paid_slots = min(k, paid_positions - P + 1)
    amount     = pool * sum(tiers[P-1 : P-1+paid_slots]) / k

so a group straddling the paid boundary shares the paid slots it overlaps
with every member, including those who would otherwise have landed in an
unpaid position. Example, tiers [0.69, 0.20, 0.11], pool 100:

    4 tied for 1st   -> 100 * 1.00 / 4 = 25 each
    2 tied for 1st   -> 100 * 0.89 / 2 = 44.5 each, 3rd alone gets 11

Money is Decimal throughout. Per-participant amounts are truncated to the
payout quantum, so the total never exceeds pool * sum(tiers). Whatever is
not allocated (tiers summing below 1, truncation residue) stays unallocated.
"""
from __future__ import annotations

import logging
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from standings.errors import ConfigurationError
from standings.models.schemas import TieGroup

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
ONE = Decimal(1)
HUNDRED = Decimal(100)

# Nine decimal places: one lamport of SOL
DEFAULT_PAYOUT_QUANTUM = Decimal("0.000000001")

# Working precision for payout arithmetic, and the largest payout (in digits
# of the quantum) it can represent exactly.
PAYOUT_PRECISION = 100
MAX_PAYOUT_DIGITS = 90


def _to_decimal(value: Any, what: str) -> Decimal:
    """Strict conversion for configuration values."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{what} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ConfigurationError(f"{what} must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise ConfigurationError(f"{what} must be finite, got {value!r}")
    return amount


def _tidy(amount: Decimal) -> Decimal:
    """
    Drop trailing zeros left by quantizing. Whole amounts keep exponent 0
    (never "1E+2"); fixed-point rendering is left to StandingEntry's serializer.
    """
    if amount == amount.to_integral_value():
        return amount.quantize(ONE)
    return amount.normalize()


# ============================================================================
# Tier configuration helpers
# ============================================================================

def tiers_from_prize_structure(structure: Mapping[Any, Any]) -> List[Decimal]:
    """
    Ordered tiers from a position -> fraction mapping, e.g.
    {"1": 0.69, "2": 0.20, "3": 0.11}. Positions must run 1..N without gaps.
    """
    by_position: Dict[int, Decimal] = {}
    for key, value in structure.items():
        try:
            position = int(str(key).strip())
        except ValueError:
            raise ConfigurationError(f"Prize position {key!r} is not an integer") from None
        if position in by_position:
            raise ConfigurationError(f"Prize position {position} is defined twice")
        by_position[position] = _to_decimal(value, f"Prize tier for position {position}")

    expected = list(range(1, len(by_position) + 1))
    if sorted(by_position) != expected:
        raise ConfigurationError(
            f"Prize positions must run 1..{len(by_position)} without gaps, got {sorted(by_position)}"
        )
    return [by_position[p] for p in expected]


def tiers_from_percentages(points: Iterable[Any]) -> List[Decimal]:
    """Tiers from whole percentage points, e.g. [60, 30, 10] -> [0.6, 0.3, 0.1]."""
    return [_to_decimal(p, "Prize percentage") / HUNDRED for p in points]


# ============================================================================
# The Allocator
# ============================================================================

class PrizeAllocator:
    """
    Validated prize configuration.

    Construction rejects a negative pool, negative tiers, tiers summing
    above 1, and a pool too large to pay out at the quantum with
    ConfigurationError; allocate() itself never raises.
    """

    def __init__(
        self,
        pool_amount: Any,
        tiers: Sequence[Any],
        quantum: Any = DEFAULT_PAYOUT_QUANTUM,
    ):
        self.pool_amount = _to_decimal(pool_amount, "Prize pool")
        self.tiers: List[Decimal] = [
            _to_decimal(t, f"Prize tier {i}") for i, t in enumerate(tiers, start=1)
        ]
        self.quantum = _to_decimal(quantum, "Payout quantum")

        if self.pool_amount < 0:
            raise ConfigurationError(f"Prize pool must be non-negative, got {self.pool_amount}")
        for i, tier in enumerate(self.tiers, start=1):
            if tier < 0:
                raise ConfigurationError(f"Prize tier {i} must be non-negative, got {tier}")
        total = sum(self.tiers, ZERO)
        if total > ONE:
            raise ConfigurationError(f"Prize tiers sum to {total}, which exceeds 1")
        if self.quantum <= 0:
            raise ConfigurationError(f"Payout quantum must be positive, got {self.quantum}")
        # No payout exceeds the pool, so this bounds every quantized amount
        digits = self.pool_amount.adjusted() - self.quantum.as_tuple().exponent + 1
        if digits > MAX_PAYOUT_DIGITS:
            raise ConfigurationError(
                f"Prize pool {self.pool_amount} needs {digits} digits at quantum "
                f"{self.quantum}; at most {MAX_PAYOUT_DIGITS} are supported"
            )

    @property
    def paid_positions(self) -> int:
        return len(self.tiers)

    @property
    def allocatable_amount(self) -> Decimal:
        """Upper bound on the sum of all payouts."""
        with localcontext() as ctx:
            ctx.prec = PAYOUT_PRECISION
            return self.pool_amount * sum(self.tiers, ZERO)

    def _share(self, tiers: Sequence[Decimal], tied_count: int) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = PAYOUT_PRECISION
            ctx.rounding = ROUND_DOWN
            raw = self.pool_amount * sum(tiers, ZERO) / tied_count
            return _tidy(raw.quantize(self.quantum, rounding=ROUND_DOWN))

    def allocate(self, groups: Iterable[TieGroup]) -> Dict[str, Decimal]:
        """
        Payout per wallet address for groups given in rank order.
        Every member of every group gets an entry; unpaid members get 0.
        """
        payouts: Dict[str, Decimal] = {}
        position = 1

        for group in groups:
            tied_count = group.size
            amount = ZERO
            if position <= self.paid_positions:
                paid_slots = min(tied_count, self.paid_positions - position + 1)
                covered = self.tiers[position - 1:position - 1 + paid_slots]
                amount = self._share(covered, tied_count)
                logger.debug(
                    "Rank %s: %d tied over %d paid slot(s) %s -> %s each",
                    group.rank, tied_count, paid_slots, [str(t) for t in covered], amount,
                )
            for wallet in group.wallet_addresses:
                payouts[wallet] = amount
            position += tied_count

        return payouts


def allocate_prizes(
    groups: Iterable[TieGroup],
    pool_amount: Any,
    tiers: Sequence[Any],
    quantum: Any = DEFAULT_PAYOUT_QUANTUM,
) -> Dict[str, Decimal]:
    """One-shot helper: validate the configuration and allocate."""
    return PrizeAllocator(pool_amount, tiers, quantum=quantum).allocate(groups)
