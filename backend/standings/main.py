"""
FastAPI Entrypoint for the Contest Standings service.
Computes leaderboard standings and prize splits from posted contest snapshots.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from standings.core.config import settings
from standings.core.logging import configure_logging
from standings.errors import ConfigurationError
from standings.models.schemas import (
    ContestSnapshot,
    PhaseRequest,
    PhaseResponse,
    StandingsSchema,
)
from standings.services.engine import standings_engine
from standings.services.status_resolver import resolve_phase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging()
    logger.info(
        "Standings service ready (default tiers %s)",
        [str(t) for t in settings.default_prize_tiers],
    )
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Contest Standings API",
    description="Tie-aware contest rankings and prize pool distribution",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "online",
        "service": "Contest Standings",
        "version": "1.0.0",
    }


@app.post("/api/v1/standings", response_model=StandingsSchema)
async def get_standings(contest: ContestSnapshot):
    """
    Rank a contest snapshot and split its prize pool.

    Returns participants in rank order with:
    - rank / displayRank ("T-<n>" when tied)
    - prizeAmount (0 for pending and cancelled contests)

    The phase is resolved against the server clock, read once per request.
    """
    try:
        standings = standings_engine.evaluate(contest, _utc_now())
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(
        "Contest %s: %s, %d participants",
        contest.contest_id, standings.phase.value, len(standings.entries),
    )
    return standings


@app.post("/api/v1/phase", response_model=PhaseResponse)
async def get_phase(request: PhaseRequest):
    """Resolve a contest's phase (pending, active, completed, cancelled)."""
    now = _utc_now()
    phase = resolve_phase(now, request.start_time, request.end_time, request.cancelled)
    return PhaseResponse(phase=phase, phase_label=phase.display_label, evaluated_at=now)


@app.get("/api/v1/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "default_prize_tiers": [str(t) for t in settings.default_prize_tiers],
        "payout_quantum": str(settings.payout_quantum),
    }
