from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import Optional

from config import settings
from models import StatsResult
from services.talent_client import TalentProtocolClient
from utils.logger import leaderboard_logger as logger

from .query import build_profile_search_query


@dataclass(frozen=True)
class StatsPolicy:
    """Thresholds behind the creator statistics.

    Listing admits any score at or above ``listing_min_score`` while the bar
    reported to callers is ``reward_min_score``; the two are independent.
    """

    scorer: str = "Creator Score"
    listing_min_score: int = 1
    eligibility_min_score: int = 80
    reward_min_score: int = 100
    fallback_ratio: float = 0.3

    @classmethod
    def from_settings(cls) -> "StatsPolicy":
        return cls(
            scorer=settings.CREATOR_SCORER_NAME,
            listing_min_score=settings.LEADERBOARD_MIN_SCORE,
            eligibility_min_score=settings.ELIGIBILITY_MIN_SCORE,
            reward_min_score=settings.REWARD_QUALIFICATION_SCORE,
            fallback_ratio=settings.ELIGIBLE_FALLBACK_RATIO,
        )

    def estimate_eligible(self, total_creators: int) -> int:
        return int(math.floor(total_creators * self.fallback_ratio))


class CreatorStatsAggregator:
    """Counts the listed population and the reward-eligible part of it."""

    def __init__(self, client: TalentProtocolClient, policy: Optional[StatsPolicy] = None):
        self.client = client
        self.policy = policy or StatsPolicy.from_settings()

    async def _count_total(self) -> int:
        query = build_profile_search_query(
            self.policy.scorer,
            self.policy.listing_min_score,
            page=1,
            per_page=1,
        )
        page = await self.client.search_profiles(query)
        return page.total or 0

    async def _count_eligible(self) -> int:
        # Only the count matters here, so one record per page and no sort.
        query = build_profile_search_query(
            self.policy.scorer,
            self.policy.eligibility_min_score,
            page=1,
            per_page=1,
            include_sort=False,
        )
        page = await self.client.search_profiles(query)
        return page.total or 0

    async def get_stats(self) -> StatsResult:
        """Fetch both counts concurrently.

        A failed total aborts the request. A failed eligible count is
        replaced by ``fallback_ratio`` of the total.
        """
        self.client.require_api_key()

        total_result, eligible_result = await asyncio.gather(
            self._count_total(),
            self._count_eligible(),
            return_exceptions=True,
        )

        if isinstance(total_result, BaseException):
            raise total_result

        total_creators = total_result
        if isinstance(eligible_result, BaseException):
            if not isinstance(eligible_result, Exception):
                raise eligible_result
            eligible_creators = self.policy.estimate_eligible(total_creators)
            logger.warning(
                "Eligible creators count unavailable, using estimate",
                total_creators=total_creators,
                estimated_eligible=eligible_creators,
                fallback_ratio=self.policy.fallback_ratio,
                error=str(eligible_result),
                error_type=type(eligible_result).__name__,
            )
        else:
            eligible_creators = eligible_result

        return StatsResult(
            min_score=self.policy.reward_min_score,
            total_creators=total_creators,
            eligible_creators=eligible_creators,
        )
