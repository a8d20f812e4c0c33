"""Creator leaderboard route."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from config import settings
from services.leaderboard import leaderboard_service
from utils.validation import LeaderboardParams

router = APIRouter()


@router.get("/leaderboard")
async def get_leaderboard(
    page: Optional[str] = Query(default=None),
    per_page: Optional[str] = Query(default=None),
    per_page_camel: Optional[str] = Query(default=None, alias="perPage"),
    stats_only: Optional[str] = Query(default=None, alias="statsOnly"),
):
    """Ranked page of creators, or eligibility stats when ``statsOnly=true``.

    Numeric params are parsed leniently: anything unparseable falls back to
    the default and values below 1 are clamped to 1.
    """
    params = LeaderboardParams.from_query(
        page=page,
        per_page=per_page or per_page_camel,
        stats_only=stats_only,
        default_page=settings.LEADERBOARD_DEFAULT_PAGE,
        default_per_page=settings.LEADERBOARD_DEFAULT_PER_PAGE,
    )
    result = await leaderboard_service.get_leaderboard(
        page=params.page,
        per_page=params.per_page,
        stats_only=params.stats_only,
    )
    return result.model_dump(by_alias=True)
