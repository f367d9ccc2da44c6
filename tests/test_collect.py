"""Tests for the mock data source."""

import asyncio

import pytest

from collect import MockDataSource, collect
from errors import DataSourceError, ValidationError
from process import aggregate_activity
from structs import PLATFORMS, DashboardData
from utils import current_date, parse_iso_timestamp


class TestMockDataSource:

    def test_problem_shapes(self, source) -> None:
        problems = asyncio.run(source.fetch_problems("leetcode"))
        assert len(problems) == 50
        assert {p.platform for p in problems} == {"leetcode"}
        assert problems[0].id == "leetcode-1"
        assert all(1 <= len(p.tags) <= 3 for p in problems)
        assert all(800 <= p.rating < 1800 for p in problems)

    def test_daily_activity_covers_trailing_days(self, source) -> None:
        activity = asyncio.run(source.fetch_daily_activity("codechef"))
        assert len(activity) == 30
        assert activity[0].date == current_date().isoformat()
        assert all(0 <= a.problemsSolved <= 4 for a in activity)

    def test_seed_makes_data_reproducible(self) -> None:
        first = asyncio.run(MockDataSource(seed=7, latency=0).fetch_tag_stats())
        second = asyncio.run(MockDataSource(seed=7, latency=0).fetch_tag_stats())
        assert first == second
        assert len(first) == 12

    def test_profile_uses_requested_username(self, source) -> None:
        profile = asyncio.run(source.fetch_user_profile("codeforces", "petr"))
        assert profile.username == "petr"
        assert profile.rating == 3779

    def test_fetch_dashboard(self, source) -> None:
        data = asyncio.run(source.fetch_dashboard())
        assert isinstance(data, DashboardData)
        assert [s.platform for s in data.platform_stats] == list(PLATFORMS)
        assert len(data.activities) == 90
        assert len(data.submissions) == 90
        points = aggregate_activity(data.activities, days=14)
        assert len(points) == 14

    def test_fetch_all_contests_keyed_by_platform(self, source) -> None:
        contests = asyncio.run(source.fetch_all_contests())
        assert set(contests) == set(PLATFORMS)
        for platform, records in contests.items():
            assert len(records) == 15
            for contest in records:
                assert contest.platform == platform
                assert contest.started_at < parse_iso_timestamp(contest.endDate)
                assert (contest.rank is not None) == contest.participated

    def test_unknown_platform_rejected(self, source) -> None:
        with pytest.raises(ValidationError):
            asyncio.run(source.fetch_problems("atcoder"))

    def test_failures_raise(self) -> None:
        failing = MockDataSource(seed=1, latency=0, failure_rate=1.0)
        with pytest.raises(DataSourceError) as excinfo:
            asyncio.run(failing.fetch_submissions("codeforces"))
        assert excinfo.value.platform == "codeforces"

    def test_invalid_settings_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MockDataSource(latency=-1)
        with pytest.raises(ValidationError):
            MockDataSource(failure_rate=2)

    def test_collect_prints_counts(self, source, capsys) -> None:
        asyncio.run(collect(source))
        out = capsys.readouterr().out
        assert "Found 90 submissions" in out
        assert "Found 150 problems" in out
