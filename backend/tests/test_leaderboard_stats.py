import asyncio
import sys
from pathlib import Path

import httpx
import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from services.leaderboard import stats as stats_module  # noqa: E402
from services.leaderboard.stats import CreatorStatsAggregator, StatsPolicy  # noqa: E402
from services.talent_client import ConfigurationError, UpstreamError  # noqa: E402


def _total(n):
    return {"profiles": [], "pagination": {"total": n}}


@pytest.mark.asyncio
async def test_stats_reads_provider_totals(fake_client_factory):
    client = fake_client_factory({1: _total(1000), 80: _total(420)})

    result = await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert result.min_score == 100
    assert result.total_creators == 1000
    assert result.eligible_creators == 420


@pytest.mark.asyncio
async def test_stats_queries_use_single_record_pages(fake_client_factory):
    client = fake_client_factory({1: _total(10), 80: _total(3)})

    await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    by_min = {q.min_score: q for q in client.queries}
    assert set(by_min) == {1, 80}
    assert (by_min[1].page, by_min[1].per_page) == (1, 1)
    assert (by_min[80].page, by_min[80].per_page) == (1, 1)
    assert by_min[1].sort
    assert by_min[80].sort == ()
    assert all(q.scorer == "Creator Score" for q in client.queries)


@pytest.mark.asyncio
async def test_eligible_failure_falls_back_to_thirty_percent(fake_client_factory):
    client = fake_client_factory({1: _total(1000), 80: UpstreamError(503, "unavailable")})

    result = await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert result.eligible_creators == 300
    assert result.total_creators == 1000
    assert result.min_score == 100


@pytest.mark.asyncio
async def test_eligible_transport_error_also_falls_back(fake_client_factory):
    client = fake_client_factory(
        {1: _total(7), 80: httpx.ConnectError("connection refused")}
    )

    result = await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    # floor(7 * 0.3) == 2
    assert result.eligible_creators == 2


@pytest.mark.asyncio
async def test_eligible_fallback_is_logged(fake_client_factory, monkeypatch):
    warnings = []

    class _RecordingLogger:
        def warning(self, msg, **kwargs):
            warnings.append((msg, kwargs))

    monkeypatch.setattr(stats_module, "logger", _RecordingLogger())
    client = fake_client_factory({1: _total(1000), 80: UpstreamError(500, "boom")})

    await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert len(warnings) == 1
    msg, fields = warnings[0]
    assert "estimate" in msg
    assert fields["total_creators"] == 1000
    assert fields["estimated_eligible"] == 300


@pytest.mark.asyncio
async def test_total_failure_raises_and_returns_no_partial_result(fake_client_factory):
    client = fake_client_factory({1: UpstreamError(429, "rate limited"), 80: _total(5)})

    with pytest.raises(UpstreamError) as excinfo:
        await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert excinfo.value.status_code == 429
    assert excinfo.value.body == "rate limited"


@pytest.mark.asyncio
async def test_missing_api_key_fails_before_any_query(fake_client_factory):
    client = fake_client_factory({1: _total(1), 80: _total(1)}, api_key=None)

    with pytest.raises(ConfigurationError):
        await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert client.queries == []


@pytest.mark.asyncio
async def test_missing_pagination_total_counts_as_zero(fake_client_factory):
    client = fake_client_factory({1: {"profiles": []}, 80: {"profiles": []}})

    result = await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert result.total_creators == 0
    assert result.eligible_creators == 0


@pytest.mark.asyncio
async def test_queries_run_concurrently(fake_client_factory):
    started = []
    release = asyncio.Event()
    client = fake_client_factory({1: _total(10), 80: _total(4)})
    original = client.search_profiles

    async def _blocking_search(query):
        started.append(query.min_score)
        if len(started) == 2:
            release.set()
        await asyncio.wait_for(release.wait(), timeout=1.0)
        return await original(query)

    client.search_profiles = _blocking_search

    result = await CreatorStatsAggregator(client, StatsPolicy()).get_stats()

    assert sorted(started) == [1, 80]
    assert result.eligible_creators == 4


def test_policy_thresholds_are_independent():
    policy = StatsPolicy()
    assert policy.listing_min_score == 1
    assert policy.eligibility_min_score == 80
    assert policy.reward_min_score == 100
    assert policy.estimate_eligible(1000) == 300
    assert policy.estimate_eligible(0) == 0


@pytest.mark.asyncio
async def test_cancelling_stats_abandons_both_inflight_queries(fake_client_factory):
    client = fake_client_factory({1: _total(10), 80: _total(4)})
    started = []
    cancelled = []
    both_started = asyncio.Event()

    async def _hanging_search(query):
        started.append(query.min_score)
        if len(started) == 2:
            both_started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.append(query.min_score)
            raise

    client.search_profiles = _hanging_search

    task = asyncio.create_task(CreatorStatsAggregator(client, StatsPolicy()).get_stats())
    await asyncio.wait_for(both_started.wait(), timeout=1.0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert sorted(cancelled) == [1, 80]


def test_aggregator_defaults_to_configured_policy(fake_client_factory):
    aggregator = CreatorStatsAggregator(fake_client_factory())

    assert aggregator.policy == StatsPolicy.from_settings()
    assert aggregator.policy.eligibility_min_score == 80
