from .logger import setup_logging, get_logger, api_logger, talent_logger, leaderboard_logger
from .validation import (
    parse_int_param,
    parse_bool_flag,
    clamp_min,
    LeaderboardParams,
)

__all__ = [
    # Logger
    "setup_logging",
    "get_logger",
    "api_logger",
    "talent_logger",
    "leaderboard_logger",

    # Validation
    "parse_int_param",
    "parse_bool_flag",
    "clamp_min",
    "LeaderboardParams",
]
