"""Creator leaderboard package."""

from .service import leaderboard_service, LeaderboardService

__all__ = ["leaderboard_service", "LeaderboardService"]
