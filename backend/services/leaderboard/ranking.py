"""Score extraction and tie-aware ranking for a page of profiles."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from models import LeaderboardEntry, RawProfile


def _points_to_int(points: Optional[float]) -> int:
    if points is None:
        return 0
    try:
        value = int(points)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, value)


def extract_score(profile: RawProfile, slug: str) -> int:
    """Highest points among the profile's entries for ``slug``, or 0.

    Duplicate entries for the same slug are expected; taking the max keeps
    the result stable no matter how many copies the provider sends.
    """
    values = [_points_to_int(s.points) for s in profile.scores if s.slug == slug]
    if not values:
        return 0
    return max(values)


def assign_competition_ranks(scores: Sequence[int]) -> list[int]:
    """Standard competition ranks ("1224") for scores already sorted descending.

    Ties share the rank of the first member of their group and the next
    distinct score skips ahead by the group size: [90, 90, 80, 70] ranks as
    [1, 1, 3, 4]. Ranks only describe the sequence passed in, so a page
    ranked on its own always starts at 1.
    """
    ranks: list[int] = []
    last_score: Optional[int] = None
    group_rank = 0
    group_size = 0

    for score in scores:
        if ranks and score == last_score:
            group_size += 1
        else:
            group_rank = group_rank + group_size if ranks else 1
            group_size = 1
            last_score = score
        ranks.append(group_rank)

    return ranks


def rank_profiles(profiles: Iterable[RawProfile], slug: str) -> list[LeaderboardEntry]:
    """Score, sort and rank a page of profiles.

    The sort is stable, so tied profiles keep the provider's order (which the
    search query already tie-breaks by id).
    """
    scored = [(profile, extract_score(profile, slug)) for profile in profiles]
    scored.sort(key=lambda item: item[1], reverse=True)
    ranks = assign_competition_ranks([score for _, score in scored])

    return [
        LeaderboardEntry(
            id=profile.id,
            name=profile.label,
            avatar=profile.image_url,
            score=score,
            rank=rank,
            talent_protocol_id=profile.id,
        )
        for (profile, score), rank in zip(scored, ranks)
    ]
