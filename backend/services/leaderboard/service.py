from __future__ import annotations

from typing import Optional, Union

from config import settings
from models import LeaderboardPage, StatsResult
from services.talent_client import TalentProtocolClient, talent_client
from utils.logger import leaderboard_logger as logger

from .query import build_profile_search_query
from .ranking import rank_profiles
from .stats import CreatorStatsAggregator, StatsPolicy


class LeaderboardService:
    """Public entry point for the creator leaderboard.

    Each call is self-contained: one provider request for a listing page, two
    for statistics, and nothing is cached between calls.
    """

    def __init__(
        self,
        client: Optional[TalentProtocolClient] = None,
        policy: Optional[StatsPolicy] = None,
        score_slug: Optional[str] = None,
    ):
        self.client = client or talent_client
        self.policy = policy or StatsPolicy.from_settings()
        self.score_slug = score_slug or settings.CREATOR_SCORE_SLUG
        self.stats = CreatorStatsAggregator(self.client, self.policy)

    async def get_leaderboard(
        self,
        page: int = 1,
        per_page: int = 25,
        stats_only: bool = False,
    ) -> Union[LeaderboardPage, StatsResult]:
        if stats_only:
            return await self.stats.get_stats()
        return await self.get_page(page=page, per_page=per_page)

    async def get_page(self, page: int = 1, per_page: int = 25) -> LeaderboardPage:
        """Rank one page of creators.

        Ranks restart at 1 on every page; they are not offset by the
        position of the page in the full leaderboard.
        """
        query = build_profile_search_query(
            self.policy.scorer,
            self.policy.listing_min_score,
            page=page,
            per_page=per_page,
        )
        result = await self.client.search_profiles(query)
        entries = rank_profiles(result.profiles, self.score_slug)

        total_creators = result.total or len(entries)
        logger.debug(
            "Ranked leaderboard page",
            page=query.page,
            per_page=query.per_page,
            entries=len(entries),
            total_creators=total_creators,
        )

        return LeaderboardPage(
            entries=entries,
            min_score=self.policy.reward_min_score,
            total_creators=total_creators,
        )


leaderboard_service = LeaderboardService()
