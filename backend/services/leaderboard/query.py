"""Search parameters for a page of profiles above a score threshold."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from utils.validation import clamp_min


@dataclass(frozen=True)
class ProfileSearchQuery:
    """Filter, sort and pagination for one advanced-search call."""

    scorer: str
    min_score: int
    page: int
    per_page: int
    sort: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    @property
    def score_filter(self) -> dict[str, Any]:
        return {"min": self.min_score, "scorer": self.scorer}

    def to_params(self) -> dict[str, Any]:
        """Render the query-string form the search endpoint expects.

        ``query`` and ``sort`` travel as compact JSON objects; the sort list
        collapses into an ordered object keyed by field name, which keeps the
        score key ahead of the id tie-breaker.
        """
        params: dict[str, Any] = {
            "query": _compact_json({"score": self.score_filter}),
        }
        if self.sort:
            sort_obj: dict[str, Any] = {}
            for entry in self.sort:
                entry = dict(entry)
                key = entry.pop("field")
                sort_obj[key] = entry
            params["sort"] = _compact_json(sort_obj)
        params["page"] = self.page
        params["per_page"] = self.per_page
        return params


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def build_sort(scorer: str) -> tuple[dict[str, Any], ...]:
    # The id key breaks score ties so repeated calls page identically.
    return (
        {"field": "score", "order": "desc", "scorer": scorer},
        {"field": "id", "order": "desc"},
    )


def build_profile_search_query(
    scorer: str,
    min_score: int,
    page: int = 1,
    per_page: int = 25,
    include_sort: bool = True,
) -> ProfileSearchQuery:
    """Build the search for profiles scoring at least ``min_score`` on ``scorer``.

    Out-of-range pagination is clamped rather than rejected: ``page`` and
    ``per_page`` below 1 become 1 and a negative ``min_score`` becomes 0.
    """
    return ProfileSearchQuery(
        scorer=scorer,
        min_score=clamp_min(int(min_score), 0),
        page=clamp_min(int(page), 1),
        per_page=clamp_min(int(per_page), 1),
        sort=build_sort(scorer) if include_sort else (),
    )
