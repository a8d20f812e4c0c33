from .leaderboard import (
    ScoreEntry,
    RawProfile,
    ProviderPage,
    LeaderboardEntry,
    LeaderboardPage,
    StatsResult,
)

__all__ = [
    "ScoreEntry",
    "RawProfile",
    "ProviderPage",
    "LeaderboardEntry",
    "LeaderboardPage",
    "StatsResult",
]
