"""Use case for analyzing a player's recent matches."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from functools import partial
from typing import Any, Dict

from ..ports.analytics_builder import AnalyticsBuilderPort
from ..ports.player_data import PlayerDataPort

logger = logging.getLogger(__name__)

# Riot fetches and aggregation are blocking; keep them off the event loop
_executor = ThreadPoolExecutor(max_workers=4)

NO_DATA = "NO_DATA"
INVALID_REQUEST = "INVALID_REQUEST"
INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class AnalyzePlayerRequest:
    """Request to analyze a player."""

    puuid: str
    count: int | None = None
    rank_tier: str | None = None


@dataclass
class AnalyzePlayerResult:
    """Result of a player analysis."""

    success: bool
    report: Dict[str, Any] | None = None
    error: str | None = None
    error_code: str | None = None
    metadata: Dict[str, Any] | None = None


class AnalyzePlayerUseCase:
    """Fetch a player's recent matches and turn them into a report.

    Failures never raise; they come back as a result with ``error_code`` set
    to one of NO_DATA, INVALID_REQUEST or INTERNAL_ERROR.
    """

    def __init__(
        self,
        player_data: PlayerDataPort,
        analytics_builder: AnalyticsBuilderPort,
    ):
        self._player_data = player_data
        self._analytics_builder = analytics_builder

    async def execute(self, request: AnalyzePlayerRequest) -> AnalyzePlayerResult:
        loop = asyncio.get_event_loop()

        try:
            fetch_func = partial(
                self._player_data.fetch_player_data,
                puuid=request.puuid,
                count=request.count,
            )
            data, meta = await loop.run_in_executor(_executor, fetch_func)

            if not data or not data.matches:
                return AnalyzePlayerResult(
                    success=False,
                    error=f"No recent matches found for player '{request.puuid}'.",
                    error_code=NO_DATA,
                )

            if not meta:
                return AnalyzePlayerResult(
                    success=False,
                    error="Failed to retrieve fetch metadata.",
                    error_code=INTERNAL_ERROR,
                )

            build_func = partial(
                self._analytics_builder.build_report,
                data,
                meta,
                request.rank_tier,
            )
            report = await loop.run_in_executor(_executor, build_func)

            games = ((report or {}).get("analytics") or {}).get("overview", {}).get("total_games", 0)
            if not games:
                return AnalyzePlayerResult(
                    success=False,
                    error=f"Player '{request.puuid}' does not appear in any fetched match.",
                    error_code=NO_DATA,
                )

            return AnalyzePlayerResult(
                success=True,
                report=report,
                metadata={**asdict(meta), "games_analyzed": games},
            )

        except ValueError as e:
            logger.error(f"Invalid analysis request for {request.puuid}: {e}")
            return AnalyzePlayerResult(success=False, error=str(e), error_code=INVALID_REQUEST)
        except Exception as e:
            logger.error(f"Analysis failed for {request.puuid}: {e}")
            return AnalyzePlayerResult(success=False, error=str(e), error_code=INTERNAL_ERROR)
