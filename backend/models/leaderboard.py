from pydantic import BaseModel, Field, computed_field
from typing import Optional


def _to_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


class ScoreEntry(BaseModel):
    """One scoring dimension attached to a profile"""

    slug: str
    points: Optional[float] = None

    @classmethod
    def from_talent_response(cls, data: dict) -> "ScoreEntry":
        points = data.get("points")
        try:
            parsed = float(points) if points is not None else None
        except (TypeError, ValueError):
            parsed = None
        return cls(slug=_to_text(data.get("slug")), points=parsed)


class RawProfile(BaseModel):
    """Profile record as returned by the Talent advanced search API"""

    id: str
    display_name: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None
    scores: list[ScoreEntry] = []

    @classmethod
    def from_talent_response(cls, data: dict) -> "RawProfile":
        """Parse a profile, tolerating missing or malformed score lists"""
        raw_scores = data.get("scores")
        scores = []
        if isinstance(raw_scores, list):
            for item in raw_scores:
                if isinstance(item, dict):
                    scores.append(ScoreEntry.from_talent_response(item))

        return cls(
            id=_to_text(data.get("id")),
            display_name=_to_text(data.get("display_name")) or None,
            name=_to_text(data.get("name")) or None,
            image_url=_to_text(data.get("image_url")) or None,
            scores=scores,
        )

    @property
    def label(self) -> str:
        return self.display_name or self.name or "Unknown"


class ProviderPage(BaseModel):
    """One page of search results plus the provider-reported population"""

    profiles: list[RawProfile] = []
    total: Optional[int] = None

    @classmethod
    def from_talent_response(cls, data: dict) -> "ProviderPage":
        raw_profiles = data.get("profiles")
        profiles = []
        if isinstance(raw_profiles, list):
            profiles = [
                RawProfile.from_talent_response(p) for p in raw_profiles if isinstance(p, dict)
            ]

        total: Optional[int] = None
        pagination = data.get("pagination")
        if isinstance(pagination, dict):
            try:
                total = int(pagination.get("total"))
            except (TypeError, ValueError):
                total = None

        return cls(profiles=profiles, total=total)


class LeaderboardEntry(BaseModel):
    """A ranked leaderboard row"""

    id: str
    name: str
    avatar: Optional[str] = None
    score: int = Field(default=0, ge=0)
    rank: int = Field(ge=1)
    talent_protocol_id: str
    rewards: str = "-"  # Reward amounts are decided downstream

    class Config:
        frozen = True

    @computed_field
    @property
    def pfp(self) -> Optional[str]:
        """Avatar under the key existing leaderboard clients read."""
        return self.avatar


class StatsResult(BaseModel):
    """Aggregate eligibility counts"""

    min_score: int = Field(alias="minScore")
    total_creators: int = Field(alias="totalCreators")
    eligible_creators: int = Field(alias="eligibleCreators")

    class Config:
        populate_by_name = True
        frozen = True


class LeaderboardPage(BaseModel):
    """Listing response envelope"""

    entries: list[LeaderboardEntry] = []
    min_score: int = Field(alias="minScore")
    total_creators: int = Field(alias="totalCreators")

    class Config:
        populate_by_name = True
        frozen = True
