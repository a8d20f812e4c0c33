from typing import Optional

from pydantic import BaseModel, Field


def parse_int_param(value: object, default: int) -> int:
    """Parse a loosely-typed query value, falling back to ``default``.

    Mirrors ``parseInt`` leniency for numeric strings ("3", " 10 ", "2.0")
    but never raises: anything unparseable yields the default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (TypeError, ValueError, OverflowError):
        return default


def parse_bool_flag(value: Optional[str]) -> bool:
    """Only the literal string ``"true"`` enables a flag."""
    return value == "true"


def clamp_min(value: int, minimum: int) -> int:
    """Clamp a value to a lower bound; no upper bound is enforced."""
    if value < minimum:
        return minimum
    return value


class LeaderboardParams(BaseModel):
    """Validated leaderboard request parameters"""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=25, ge=1)
    stats_only: bool = False

    @classmethod
    def from_query(
        cls,
        page: Optional[str],
        per_page: Optional[str],
        stats_only: Optional[str],
        default_page: int = 1,
        default_per_page: int = 25,
    ) -> "LeaderboardParams":
        """Build params from raw query strings, defaulting and clamping bad input."""
        return cls(
            page=clamp_min(parse_int_param(page, default_page), 1),
            per_page=clamp_min(parse_int_param(per_page, default_per_page), 1),
            stats_only=parse_bool_flag(stats_only),
        )
