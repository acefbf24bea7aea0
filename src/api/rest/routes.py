"""REST API routes for player analytics."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from analytics.compatibility import compute_compatibility_score
from analytics.report import build_player_analytics

from ...application.use_cases.analyze_player import (
    INVALID_REQUEST,
    NO_DATA,
    AnalyzePlayerRequest,
    AnalyzePlayerUseCase,
)
from ...domain.value_objects import RankTier
from ...infrastructure.adapters.riot_player_adapter import (
    RiotAnalyticsBuilderAdapter,
    RiotPlayerDataAdapter,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])

_STATUS_BY_CODE = {NO_DATA: 404, INVALID_REQUEST: 400}


class ComputeAnalyticsRequest(BaseModel):
    """Request body for computing analytics from raw match records."""

    model_config = ConfigDict(populate_by_name=True)

    puuid: str = Field(..., min_length=1, description="Player to analyze")
    matches: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Raw match-v5 records, most recent first",
    )
    mastery: List[Dict[str, Any]] = Field(default_factory=list)
    summoner: Dict[str, Any] = Field(default_factory=dict)
    rank_tier: Optional[RankTier] = Field(
        default=None,
        alias="rankTier",
        description="Tier used for rank-aware benchmarks",
    )
    champion_names: Optional[Dict[int, str]] = Field(
        default=None,
        alias="championNames",
        description="Champion id to name lookup for mastery entries",
    )


class PlayerProfile(BaseModel):
    """Stored player profile as used for duo matching."""

    model_config = ConfigDict(populate_by_name=True)

    rank_tier: Optional[str] = Field(default=None, alias="rankTier")
    rank_division: Optional[str] = Field(default=None, alias="rankDivision")
    roles: List[str] = Field(default_factory=list)
    schedule: List[str] = Field(default_factory=list)
    play_style: Optional[str] = Field(default=None, alias="playStyle")
    analytics: Optional[Dict[str, Any]] = None


class CompatibilityRequest(BaseModel):
    """Request body for duo compatibility scoring."""

    me: PlayerProfile
    other: PlayerProfile


def _http_error(status_code: int, code: str, message: str, details: Optional[dict] = None) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            }
        },
    )


@router.post("/analytics/compute")
async def compute_player_analytics(request: ComputeAnalyticsRequest):
    """Compute analytics from match records supplied by the caller.

    No Riot API access is needed. Matches the player is not part of are
    ignored; with none left the zeroed analytics structure is returned.
    """
    try:
        return build_player_analytics(
            request.matches,
            request.puuid,
            mastery=request.mastery,
            summoner=request.summoner,
            rank_tier=request.rank_tier.value if request.rank_tier else None,
            champion_names=request.champion_names,
        )
    except Exception as e:
        logger.error(f"Analytics computation failed for {request.puuid}: {e}")
        raise _http_error(500, "INTERNAL_ERROR", f"Error computing analytics: {str(e)}")


@router.get("/players/{puuid}/analytics")
async def get_player_analytics(
    puuid: str,
    rank_tier: Optional[RankTier] = Query(None, alias="rankTier"),
    count: Optional[int] = Query(None, ge=1, le=100, description="Number of recent matches"),
):
    """Fetch a player's recent matches from Riot and return the full report.

    Returns:
        Report with ``meta``, ``rank``, ``analytics`` and ``lp_progression``
    """
    use_case = AnalyzePlayerUseCase(RiotPlayerDataAdapter(), RiotAnalyticsBuilderAdapter())
    result = await use_case.execute(
        AnalyzePlayerRequest(
            puuid=puuid,
            count=count,
            rank_tier=rank_tier.value if rank_tier else None,
        )
    )

    if not result.success:
        code = result.error_code or "INTERNAL_ERROR"
        raise _http_error(
            _STATUS_BY_CODE.get(code, 500),
            code,
            result.error or "No data available for analysis",
            {"puuid": puuid},
        )
    return result.report


@router.post("/compatibility")
async def get_compatibility(request: CompatibilityRequest):
    """Score how well two players would duo together (0-100)."""
    try:
        result = compute_compatibility_score(
            request.me.model_dump(),
            request.other.model_dump(),
        )
        return result.to_dict()
    except Exception as e:
        logger.error(f"Compatibility scoring failed: {e}")
        raise _http_error(500, "INTERNAL_ERROR", f"Error computing compatibility: {str(e)}")
