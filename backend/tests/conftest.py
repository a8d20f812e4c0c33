"""Shared fixtures for creator leaderboard tests."""

import sys
from pathlib import Path

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

import pytest

from models import ProviderPage, RawProfile
from services.leaderboard.stats import StatsPolicy
from services.talent_client import ConfigurationError, UpstreamError


def make_profile_payload(profile_id, points=None, slug="creator_score", **extra):
    """Raw Talent search profile; ``points`` may be a scalar or a list."""
    if points is None:
        scores = []
    elif isinstance(points, list):
        scores = [{"slug": slug, "points": p} for p in points]
    else:
        scores = [{"slug": slug, "points": points}]
    payload = {"id": profile_id, "display_name": f"Creator {profile_id}", "scores": scores}
    payload.update(extra)
    return payload


class FakeTalentClient:
    """In-memory stand-in for TalentProtocolClient.

    ``pages`` maps a query's min_score to either a payload dict or an
    exception instance to raise.
    """

    def __init__(self, pages=None, api_key="test-key"):
        self.pages = pages or {}
        self.api_key = api_key
        self.queries = []

    def require_api_key(self):
        if not self.api_key:
            raise ConfigurationError("Missing Talent API key")
        return self.api_key

    async def search_profiles(self, query):
        self.require_api_key()
        self.queries.append(query)
        outcome = self.pages.get(query.min_score)
        if outcome is None:
            raise UpstreamError(404, f"no fixture for min_score={query.min_score}")
        if isinstance(outcome, Exception):
            raise outcome
        return ProviderPage.from_talent_response(outcome)


# ---------------------------------------------------------------------------
# Raw API response fixtures (mimicking the advanced search payload)
# ---------------------------------------------------------------------------


@pytest.fixture
def raw_profile_with_duplicates():
    return {
        "id": "p-1",
        "display_name": "Alice",
        "image_url": "https://img.example/alice.png",
        "scores": [
            {"slug": "creator_score", "points": 50},
            {"slug": "creator_score", "points": 80},
            {"slug": "other", "points": 999},
        ],
    }


@pytest.fixture
def listing_payload():
    """A page whose profiles arrive out of score order with a tie."""
    return {
        "profiles": [
            make_profile_payload("d", 70),
            make_profile_payload("c", 90),
            make_profile_payload("b", 80),
            make_profile_payload("a", 90),
        ],
        "pagination": {"total": 1234},
    }


@pytest.fixture
def sample_profile(raw_profile_with_duplicates):
    return RawProfile.from_talent_response(raw_profile_with_duplicates)


@pytest.fixture
def default_policy():
    return StatsPolicy()


@pytest.fixture
def fake_client_factory():
    def _factory(pages=None, api_key="test-key"):
        return FakeTalentClient(pages=pages, api_key=api_key)

    return _factory
