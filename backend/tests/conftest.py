import sys
from pathlib import Path

BACKEND_ROOT = Path(__file__).resolve().parents[1]

if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from standings.models.schemas import ParticipantSnapshot  # noqa: E402

TIERS = ["0.69", "0.20", "0.11"]


def participant(wallet, value=None, perf=None, **extra):
    return ParticipantSnapshot(
        wallet_address=wallet,
        portfolio_value=value,
        performance_percentage=perf,
        **extra,
    )
